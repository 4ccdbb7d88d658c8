from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class BundleOffer(BaseModel):
    """
    "Pay group_price for every group_size units", e.g. "180 for 2".
    """
    model_config = ConfigDict(frozen=True)

    kind: Literal["bundle"] = "bundle"
    group_price: int = Field(ge=0)
    group_size: int = Field(ge=1)
    original: str = ""


class PercentOffer(BaseModel):
    """
    Flat percentage off the line total, e.g. "50% off".
    Values above 100 parse but are rejected when priced.
    """
    model_config = ConfigDict(frozen=True)

    kind: Literal["percent"] = "percent"
    percent: int = Field(ge=0)
    original: str = ""


class ComboOffer(BaseModel):
    """
    Every unit priced at unit_price regardless of quantity, e.g. "399 combo".
    """
    model_config = ConfigDict(frozen=True)

    kind: Literal["combo"] = "combo"
    unit_price: int = Field(ge=0)
    original: str = ""


class UnrecognizedOffer(BaseModel):
    """
    Offer text that matched no grammar rule; priced as "no offer".
    """
    model_config = ConfigDict(frozen=True)

    kind: Literal["unrecognized"] = "unrecognized"
    original: str = ""


ParsedOffer = Annotated[
    Union[BundleOffer, PercentOffer, ComboOffer, UnrecognizedOffer],
    Field(discriminator="kind"),
]


class PricingResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    original_total: float
    final_total: float
    savings: float
    units_in_best_tier: int
    units_at_full_price: int
    bundles_applied: int = 0
    effective_unit_price: float
    offer_applied: bool


class NudgeHint(BaseModel):
    model_config = ConfigDict(frozen=True)

    show: bool = False
    units_needed: int = 0
    potential_savings: float = 0
    message: str = ""


class CartLine(BaseModel):
    """
    One product/variant entry of a shopper's cart.
    """
    product_id: str
    variant: Optional[str] = None
    quantity: int
    unit_price: float
    offer: str = ""
    available_stock: Optional[int] = Field(
        default=None,
        description="Units in stock; when set, nudges never suggest more than this."
    )

    @property
    def key(self) -> str:
        return f"{self.product_id}:{self.variant}" if self.variant else self.product_id


class LineQuote(BaseModel):
    """
    Priced projection of a single CartLine.
    """
    product_id: str
    variant: Optional[str] = None
    quantity: int
    unit_price: float
    offer: str = ""
    pricing: PricingResult
    nudge: NudgeHint


class CartTotals(BaseModel):
    """
    Fold of all line quotes of a cart.
    """
    subtotal: float = 0
    total_savings: float = 0
    grand_total: float = 0
    offer_lines_count: int = 0
    lines: List[LineQuote] = Field(default_factory=list)


class InventoryOffer(BaseModel):
    """
    Catalog record carrying the authoritative price, offer text and stock.
    """
    id: str
    category: str
    item: str
    size: str = ""
    quantity: int = Field(default=0, ge=0)
    mrp: float = Field(ge=0)
    offer: str = ""


# Request / response bodies

class ParseRequest(BaseModel):
    offer: str


class QuoteRequest(BaseModel):
    quantity: int
    unit_price: float
    offer: str = ""
    available_stock: Optional[int] = None


class QuoteResponse(BaseModel):
    pricing: PricingResult
    nudge: NudgeHint
    description: str


class CartRequest(BaseModel):
    lines: List[CartLine]


class CheckoutLine(BaseModel):
    inventory_id: str
    quantity: int = Field(ge=0)


class CheckoutRequest(BaseModel):
    """
    Checkout re-pricing request: only identities and quantities are trusted.
    """
    lines: List[CheckoutLine]
    category: Optional[str] = None
