from __future__ import annotations

from apps.carts.mappers import CartLineMapper
from apps.carts.repositories import CartLineRepository
from apps.store.mappers import ProductMapper

from .repositories import OrderRepository, PrescriptionRepository
from .services import OrderService


def build_order_service() -> OrderService:
    return OrderService(
        orders=OrderRepository(),
        prescriptions=PrescriptionRepository(),
        cart_lines=CartLineRepository(),
        line_mapper=CartLineMapper(ProductMapper()),
    )
