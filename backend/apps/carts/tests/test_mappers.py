import types
from decimal import Decimal

from apps.carts.mappers import CartLineMapper, CartViewMapper, compute_total


def make_line(line_id, price, quantity):
    product = types.SimpleNamespace(
        id=f"p-{line_id}",
        name="Item",
        description="",
        category="first_aid",
        unit_price=Decimal(price),
        image_ref=None,
        available_for_sale=True,
        requires_prescription=False,
    )
    return types.SimpleNamespace(id=line_id, product=product, quantity=quantity)


def test_line_total_is_price_times_quantity():
    dto = CartLineMapper().to_dto(make_line("l1", "0.10", 3))
    assert dto.line_total == Decimal("0.30")
    assert dto.product.id == "p-l1"


def test_cart_view_carries_total_and_count():
    view = CartViewMapper().to_dto("u1", [make_line("l1", "9.99", 2), make_line("l2", "5", 1)])
    assert view.owner_id == "u1"
    assert view.total == Decimal("24.98")
    assert view.item_count == 2


def test_compute_total_empty():
    assert compute_total([]) == Decimal("0.00")
    assert str(compute_total([])) == "0.00"
