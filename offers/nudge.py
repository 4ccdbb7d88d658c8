from typing import Optional

from .calculator import check_preconditions, price_line
from .formatting import format_price
from .schemas import BundleOffer, NudgeHint, ParsedOffer

NO_NUDGE = NudgeHint()


def advise(
    quantity: int,
    unit_price: float,
    offer: ParsedOffer,
    available_stock: Optional[int] = None,
) -> NudgeHint:
    """
    Suggest how many more units complete the next bundle, and what that saves.

    Only bundle offers nudge. No hint is shown when the line already sits on a
    bundle boundary, when completing the bundle saves nothing, or when the
    extra units are not in stock.
    """
    check_preconditions(quantity, unit_price, offer)
    if not isinstance(offer, BundleOffer) or quantity == 0:
        return NO_NUDGE

    remainder = quantity % offer.group_size
    if remainder == 0:
        return NO_NUDGE
    units_needed = offer.group_size - remainder

    current = price_line(quantity, unit_price, offer).final_total
    upgraded = price_line(quantity + units_needed, unit_price, offer).final_total
    potential_savings = units_needed * unit_price - (upgraded - current)

    if potential_savings <= 0:
        return NO_NUDGE
    if available_stock is not None and quantity + units_needed > available_stock:
        return NO_NUDGE

    return NudgeHint(
        show=True,
        units_needed=units_needed,
        potential_savings=potential_savings,
        message=f"Add {units_needed} more to save {format_price(potential_savings)}!",
    )
