import pytest

from offers.cart import aggregate
from offers.errors import InvalidPrecondition
from offers.quote import quote_line
from offers.schemas import CartLine


@pytest.fixture
def lines():
    return [
        CartLine(product_id="oud", variant="12ml", quantity=5, unit_price=100, offer="180 for 2"),
        CartLine(product_id="rose", variant="50ml", quantity=3, unit_price=200, offer="50% off"),
        CartLine(product_id="musk", quantity=2, unit_price=450),
    ]


def test_empty_cart():
    totals = aggregate([])
    assert totals.subtotal == totals.grand_total == totals.total_savings == 0
    assert totals.offer_lines_count == 0
    assert totals.lines == []


def test_totals_sum_line_by_line(lines):
    totals = aggregate(lines)
    assert totals.subtotal == 500 + 600 + 900
    assert totals.grand_total == 460 + 300 + 900
    assert totals.total_savings == 40 + 300
    assert totals.offer_lines_count == 2
    assert [q.product_id for q in totals.lines] == ["oud", "rose", "musk"]


def test_line_quote_carries_nudge():
    quote = quote_line(CartLine(product_id="oud", quantity=3, unit_price=100, offer="180 for 2"))
    assert quote.pricing.final_total == 280
    assert quote.nudge.show
    assert quote.nudge.units_needed == 1


def test_line_quote_respects_stock():
    line = CartLine(product_id="oud", quantity=3, unit_price=100, offer="180 for 2", available_stock=3)
    assert not quote_line(line).nudge.show


def test_many_lines_accumulate_without_drift():
    cart = [CartLine(product_id=f"p{i}", quantity=1, unit_price=0.1) for i in range(10)]
    totals = aggregate(cart)
    assert totals.subtotal == pytest.approx(1.0)
    assert totals.total_savings == 0


def test_bad_line_rejects_the_cart(lines):
    lines.append(CartLine(product_id="bad", quantity=1, unit_price=100, offer="150% off"))
    with pytest.raises(InvalidPrecondition):
        aggregate(lines)


def test_line_key():
    assert CartLine(product_id="oud", variant="12ml", quantity=1, unit_price=1).key == "oud:12ml"
    assert CartLine(product_id="oud", quantity=1, unit_price=1).key == "oud"
