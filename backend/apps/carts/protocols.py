from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Optional, Protocol

from .models import CartLine

if TYPE_CHECKING:
    from apps.carts.dtos import CartViewDTO
    from apps.store.models import Product


class CartLineRepositoryProtocol(Protocol):
    def list_for_owner(self, owner_id: str) -> Iterable[CartLine]:
        ...

    def increment(self, owner_id: str, product_id: str, by: int = 1) -> int:
        ...

    def set_quantity(self, owner_id: str, product_id: str, quantity: int) -> int:
        ...

    def delete_line(self, owner_id: str, product_id: str) -> int:
        ...


class ProductRepositoryProtocol(Protocol):
    def get(self, **filters) -> Optional["Product"]:
        ...


class CartViewMapperProtocol(Protocol):
    def to_dto(self, owner_id: str, lines: Iterable[CartLine]) -> "CartViewDTO":
        ...
