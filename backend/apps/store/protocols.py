from __future__ import annotations

from typing import Any, Iterable, Optional, Protocol

from .models import Product


class ProductRepositoryProtocol(Protocol):
    def get(self, **filters) -> Optional[Product]:
        ...

    def list_for_sale(self, category: Optional[str] = None) -> Iterable[Product]:
        ...


class CacheBackendProtocol(Protocol):
    def get(self, key: str) -> Any:
        ...

    def set(self, key: str, value: Any, timeout: Optional[int] = None) -> None:
        ...

    def delete_many(self, keys: Iterable[str]) -> None:
        ...
