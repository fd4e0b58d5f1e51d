from __future__ import annotations

from apps.store.mappers import ProductMapper
from apps.store.repositories import ProductRepository

from .mappers import CartLineMapper, CartViewMapper
from .repositories import CartLineRepository
from .services import CartService


def build_cart_service() -> CartService:
    line_mapper = CartLineMapper(ProductMapper())
    return CartService(
        lines=CartLineRepository(),
        products=ProductRepository(),
        view_mapper=CartViewMapper(line_mapper),
    )
