from decimal import ROUND_HALF_UP, Decimal

from .parser import parse_offer
from .schemas import BundleOffer, ComboOffer, PercentOffer
from .settings import CURRENCY_SYMBOL


def _group_indian(digits: str) -> str:
    # Last three digits, then groups of two: 12,34,567
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


def format_price(amount: float) -> str:
    """
    Display an amount in rupees with Indian digit grouping and no paise,
    e.g. 123456 -> "₹1,23,456". Lossy: meant for display only.
    """
    whole = Decimal(repr(amount)).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    sign = "-" if whole < 0 else ""
    return f"{sign}{CURRENCY_SYMBOL}{_group_indian(str(abs(whole)))}"


def describe_offer(offer_string: str, unit_price: float) -> str:
    offer = parse_offer(offer_string)

    if isinstance(offer, BundleOffer):
        per_item = offer.group_price / offer.group_size
        savings = unit_price * offer.group_size - offer.group_price
        return (
            f"{format_price(per_item)}/each when you buy {offer.group_size} "
            f"(Save {format_price(savings)})"
        )
    if isinstance(offer, PercentOffer):
        return f"{offer.percent}% off on all quantities"
    if isinstance(offer, ComboOffer):
        return f"Special combo price: {format_price(offer.unit_price)}"
    return offer.original
