import logging
from decimal import ROUND_HALF_UP, Decimal

from .errors import InvalidPrecondition
from .parser import parse_offer
from .schemas import (
    BundleOffer,
    ComboOffer,
    ParsedOffer,
    PercentOffer,
    PricingResult,
    UnrecognizedOffer,
)

logger = logging.getLogger(__name__)


def check_preconditions(quantity: int, unit_price: float, offer: ParsedOffer) -> None:
    if quantity < 0:
        raise InvalidPrecondition(
            f"Quantity must not be negative, got {quantity}",
            {"quantity": quantity},
        )
    if unit_price < 0:
        raise InvalidPrecondition(
            f"Unit price must not be negative, got {unit_price}",
            {"unit_price": unit_price},
        )
    if isinstance(offer, PercentOffer) and offer.percent > 100:
        raise InvalidPrecondition(
            f"Offer '{offer.original}' takes more than 100% off",
            {"offer": offer.original, "percent": offer.percent},
        )


def round_half_up(amount: Decimal) -> Decimal:
    return amount.quantize(Decimal(1), rounding=ROUND_HALF_UP)


def _result(quantity, unit_price, final_total, in_tier, bundles=0) -> PricingResult:
    original_total = quantity * unit_price
    return PricingResult(
        original_total=original_total,
        final_total=final_total,
        savings=original_total - final_total,
        units_in_best_tier=in_tier,
        units_at_full_price=quantity - in_tier,
        bundles_applied=bundles,
        effective_unit_price=final_total / quantity if quantity > 0 else unit_price,
        offer_applied=in_tier > 0,
    )


def _full_price(quantity: int, unit_price: float) -> PricingResult:
    return _result(quantity, unit_price, quantity * unit_price, 0)


def _price_bundle(quantity: int, unit_price: float, offer: BundleOffer) -> PricingResult:
    if offer.group_price == 0:
        logger.debug(f"Bundle offer '{offer.original}' is priced at 0")
    if offer.group_price > offer.group_size * unit_price:
        # no bundle at all is the cheapest allocation
        logger.debug(f"Bundle offer '{offer.original}' costs more than {offer.group_size} units at {unit_price}")
        return _full_price(quantity, unit_price)

    bundles, remainder = divmod(quantity, offer.group_size)
    final_total = bundles * offer.group_price + remainder * unit_price
    return _result(quantity, unit_price, final_total, bundles * offer.group_size, bundles)


def _price_percent(quantity: int, unit_price: float, offer: PercentOffer) -> PricingResult:
    # Round the line total once, never per unit, and never above the undiscounted total
    original = Decimal(repr(quantity * unit_price))
    final_total = min(round_half_up(original * (100 - offer.percent) / 100), original)
    return _result(quantity, unit_price, float(final_total), quantity)


def _price_combo(quantity: int, unit_price: float, offer: ComboOffer) -> PricingResult:
    if offer.unit_price == 0:
        logger.debug(f"Combo offer '{offer.original}' is priced at 0")
    if offer.unit_price > unit_price:
        logger.debug(f"Combo offer '{offer.original}' is above the unit price {unit_price}")
        return _full_price(quantity, unit_price)
    return _result(quantity, unit_price, quantity * offer.unit_price, quantity)


def price_line(quantity: int, unit_price: float, offer: ParsedOffer) -> PricingResult:
    """
    Price `quantity` units at `unit_price` under a parsed offer.

    Bundles are applied greedily (as many whole groups as fit), which is the
    cheapest allocation whenever a group costs no more than its units at full
    price. A bundle or combo dearer than paying full price is not applied
    (offer_applied is False). Raises InvalidPrecondition for negative inputs
    or percent > 100.
    """
    check_preconditions(quantity, unit_price, offer)

    if quantity == 0 or isinstance(offer, UnrecognizedOffer):
        return _full_price(quantity, unit_price)
    if isinstance(offer, BundleOffer):
        return _price_bundle(quantity, unit_price, offer)
    if isinstance(offer, PercentOffer):
        return _price_percent(quantity, unit_price, offer)
    if isinstance(offer, ComboOffer):
        return _price_combo(quantity, unit_price, offer)
    raise TypeError(f"Unhandled offer kind: {offer!r}")


def price_offer_string(quantity: int, unit_price: float, offer_string: str) -> PricingResult:
    return price_line(quantity, unit_price, parse_offer(offer_string))
