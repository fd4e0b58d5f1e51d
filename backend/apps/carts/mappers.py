from decimal import Decimal
from typing import Iterable, List, Optional

from apps.store.mappers import ProductMapper
from .dtos import CartLineDTO, CartViewDTO
from .models import CartLine

CENT = Decimal("0.01")


def compute_total(lines: Iterable[CartLineDTO]) -> Decimal:
    """Sum of line totals, quantized to cents. Empty carts total 0.00."""
    return sum((line.line_total for line in lines), Decimal("0.00")).quantize(CENT)


class CartLineMapper:
    def __init__(self, product_mapper: Optional[ProductMapper] = None) -> None:
        self.product_mapper = product_mapper or ProductMapper()

    def to_dto(self, line: CartLine) -> CartLineDTO:
        product = self.product_mapper.to_dto(line.product)
        quantity = int(line.quantity)
        return CartLineDTO(
            id=str(line.id),
            product=product,
            quantity=quantity,
            line_total=(product.unit_price * quantity).quantize(CENT),
        )

    def many_to_dto(self, lines: Iterable[CartLine]) -> List[CartLineDTO]:
        return [self.to_dto(line) for line in lines]


class CartViewMapper:
    def __init__(self, line_mapper: Optional[CartLineMapper] = None) -> None:
        self.line_mapper = line_mapper or CartLineMapper()

    def to_dto(self, owner_id: str, lines: Iterable[CartLine]) -> CartViewDTO:
        items = self.line_mapper.many_to_dto(lines)
        return CartViewDTO(owner_id=str(owner_id), lines=items, total=compute_total(items))
