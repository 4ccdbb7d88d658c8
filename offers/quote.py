from fastapi import APIRouter

from .calculator import price_line
from .formatting import describe_offer
from .nudge import advise
from .parser import parse_offer
from .schemas import (
    CartLine,
    LineQuote,
    ParsedOffer,
    ParseRequest,
    QuoteRequest,
    QuoteResponse,
)

router = APIRouter()


def quote_line(line: CartLine) -> LineQuote:
    """Price one cart line and attach its nudge hint."""
    offer = parse_offer(line.offer)
    return LineQuote(
        product_id=line.product_id,
        variant=line.variant,
        quantity=line.quantity,
        unit_price=line.unit_price,
        offer=line.offer,
        pricing=price_line(line.quantity, line.unit_price, offer),
        nudge=advise(line.quantity, line.unit_price, offer, line.available_stock),
    )


@router.post("/parse", response_model=ParsedOffer)
async def parse(request: ParseRequest):
    return parse_offer(request.offer)


@router.post("/quote", response_model=QuoteResponse)
async def quote(request: QuoteRequest) -> QuoteResponse:
    offer = parse_offer(request.offer)
    return QuoteResponse(
        pricing=price_line(request.quantity, request.unit_price, offer),
        nudge=advise(request.quantity, request.unit_price, offer, request.available_stock),
        description=describe_offer(request.offer, request.unit_price),
    )
