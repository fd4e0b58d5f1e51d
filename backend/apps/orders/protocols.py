from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, List, Optional, Protocol

from .models import MedicineOrder, Prescription

if TYPE_CHECKING:
    from apps.carts.dtos import CartLineDTO
    from apps.carts.models import CartLine


class OrderRepositoryProtocol(Protocol):
    def list_for_owner(self, owner_id: str) -> Iterable[MedicineOrder]:
        ...

    def create(self, **data) -> MedicineOrder:
        ...


class PrescriptionRepositoryProtocol(Protocol):
    def get(self, **filters) -> Optional[Prescription]:
        ...

    def list_for_owner(self, owner_id: str) -> Iterable[Prescription]:
        ...

    def create(self, **data) -> Prescription:
        ...


class CartLineSourceProtocol(Protocol):
    def list_for_owner(self, owner_id: str) -> Iterable["CartLine"]:
        ...

    def clear(self, owner_id: str) -> int:
        ...


class CartLineMapperProtocol(Protocol):
    def many_to_dto(self, lines: Iterable["CartLine"]) -> List["CartLineDTO"]:
        ...
