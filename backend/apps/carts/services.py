from __future__ import annotations

from decimal import Decimal
from typing import Optional

from django.db import DatabaseError

from apps.api.exceptions import (
    InvalidRequestError,
    NotFoundError,
    PersistenceError,
    UnauthenticatedError,
)
from apps.common import get_logger
from .dtos import CartViewDTO
from .mappers import compute_total
from .protocols import (
    CartLineRepositoryProtocol,
    CartViewMapperProtocol,
    ProductRepositoryProtocol,
)

logger = get_logger(__name__).bind(component="carts", layer="service")


class CartService:
    """
    Owns the caller's cart lines. Every mutation returns nothing; callers
    re-read the cart with ``load`` to observe the new state.
    """

    def __init__(
        self,
        lines: CartLineRepositoryProtocol,
        products: ProductRepositoryProtocol,
        view_mapper: CartViewMapperProtocol,
    ):
        self.lines = lines
        self.products = products
        self.view_mapper = view_mapper
        self.logger = logger.bind(service="CartService")

    def _require_owner(self, owner_id: Optional[str], operation: str) -> str:
        if not owner_id:
            self.logger.warning("Cart operation without owner", operation=operation)
            raise UnauthenticatedError()
        return str(owner_id)

    def _persistence_failure(self, exc: DatabaseError, operation: str, **context):
        self.logger.error(
            "Cart store call failed", operation=operation, error=str(exc), **context
        )
        return PersistenceError(str(exc) or None)

    def load(self, owner_id: Optional[str]) -> CartViewDTO:
        owner = self._require_owner(owner_id, "load")
        try:
            lines = list(self.lines.list_for_owner(owner))
        except DatabaseError as exc:
            raise self._persistence_failure(exc, "load", owner_id=owner) from exc
        view = self.view_mapper.to_dto(owner, lines)
        self.logger.debug(
            "Loaded cart", owner_id=owner, item_count=view.item_count, total=str(view.total)
        )
        return view

    def add(self, owner_id: Optional[str], product_id: str) -> None:
        owner = self._require_owner(owner_id, "add")
        try:
            product = self.products.get(id=product_id)
            if product is None:
                self.logger.info("Add rejected: unknown product", owner_id=owner, product_id=product_id)
                raise NotFoundError("Product not found", details={"productId": str(product_id)})
            if not product.available_for_sale:
                self.logger.info("Add rejected: product not for sale", owner_id=owner, product_id=product_id)
                raise InvalidRequestError(
                    "Product is not available for sale",
                    details={"productId": str(product_id)},
                )
            written = self.lines.increment(owner, product_id, by=1)
        except DatabaseError as exc:
            raise self._persistence_failure(
                exc, "add", owner_id=owner, product_id=product_id
            ) from exc
        if not written:
            self.logger.warning(
                "Add wrote no line: product vanished", owner_id=owner, product_id=product_id
            )
            raise NotFoundError("Product not found", details={"productId": str(product_id)})
        self.logger.info("Added product to cart", owner_id=owner, product_id=product_id)

    def update_quantity(
        self, owner_id: Optional[str], product_id: str, quantity: int
    ) -> None:
        owner = self._require_owner(owner_id, "update_quantity")
        if quantity <= 0:
            self.logger.debug(
                "Non-positive quantity treated as removal",
                owner_id=owner,
                product_id=product_id,
                quantity=quantity,
            )
            self.remove(owner, product_id)
            return
        try:
            updated = self.lines.set_quantity(owner, product_id, quantity)
        except DatabaseError as exc:
            raise self._persistence_failure(
                exc, "update_quantity", owner_id=owner, product_id=product_id
            ) from exc
        if not updated:
            self.logger.info("Cart line not found", owner_id=owner, product_id=product_id)
            raise NotFoundError("Cart line not found", details={"productId": str(product_id)})
        self.logger.info(
            "Updated cart line quantity",
            owner_id=owner,
            product_id=product_id,
            quantity=quantity,
        )

    def remove(self, owner_id: Optional[str], product_id: str) -> None:
        owner = self._require_owner(owner_id, "remove")
        try:
            deleted = self.lines.delete_line(owner, product_id)
        except DatabaseError as exc:
            raise self._persistence_failure(
                exc, "remove", owner_id=owner, product_id=product_id
            ) from exc
        self.logger.info(
            "Removed cart line", owner_id=owner, product_id=product_id, deleted=deleted
        )

    @staticmethod
    def total(view: CartViewDTO) -> Decimal:
        return compute_total(view.lines)
