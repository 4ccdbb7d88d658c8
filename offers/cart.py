import logging
from typing import Dict, Iterable

from fastapi import APIRouter, HTTPException

from . import catalog
from .quote import quote_line
from .schemas import CartLine, CartRequest, CartTotals, CheckoutRequest

logger = logging.getLogger(__name__)

router = APIRouter()


def aggregate(lines: Iterable[CartLine]) -> CartTotals:
    """
    Price every line and fold the results into cart totals.

    Totals are accumulated field by field rather than derived from each
    other, so subtotal - grand_total may differ from total_savings only by
    float representation.
    """
    totals = CartTotals()
    for line in lines:
        quote = quote_line(line)
        totals.subtotal += quote.pricing.original_total
        totals.grand_total += quote.pricing.final_total
        totals.total_savings += quote.pricing.savings
        if quote.pricing.offer_applied:
            totals.offer_lines_count += 1
        totals.lines.append(quote)
    return totals


@router.post("/totals", response_model=CartTotals)
async def cart_totals(request: CartRequest) -> CartTotals:
    return aggregate(request.lines)


@router.post("/checkout", response_model=CartTotals)
def checkout(request: CheckoutRequest) -> CartTotals:
    """
    Re-price a cart from the catalog's own prices, offers and stock before an
    order is persisted. Client-side totals are never accepted.
    """
    records = {r.id: r for r in catalog.fetch_inventory_offers(request.category)}

    lines = []
    requested: Dict[str, int] = {}
    for item in request.lines:
        record = records.get(item.inventory_id)
        if record is None:
            raise HTTPException(404, f"Inventory item {item.inventory_id} not found")
        # stock covers every line of the same item together
        requested[record.id] = requested.get(record.id, 0) + item.quantity
        if requested[record.id] > record.quantity:
            raise HTTPException(409, f"Insufficient stock for {record.item} - {record.size}")
        lines.append(CartLine(
            product_id=record.id,
            variant=record.size or None,
            quantity=item.quantity,
            unit_price=record.mrp,
            offer=record.offer,
            available_stock=record.quantity,
        ))

    totals = aggregate(lines)
    logger.info(
        f"Checkout re-priced {len(lines)} lines: {totals.grand_total} "
        f"({totals.total_savings} saved on {totals.offer_lines_count} offer lines)"
    )
    return totals
