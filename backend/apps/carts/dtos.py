from dataclasses import dataclass, field
from decimal import Decimal
from typing import List

from apps.store.dtos import ProductDTO


@dataclass(frozen=True)
class CartLineDTO:
    id: str
    product: ProductDTO
    quantity: int
    line_total: Decimal


@dataclass(frozen=True)
class CartViewDTO:
    owner_id: str
    lines: List[CartLineDTO] = field(default_factory=list)
    total: Decimal = Decimal("0.00")

    @property
    def item_count(self) -> int:
        return len(self.lines)
