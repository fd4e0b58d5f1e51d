import uuid
from dataclasses import dataclass
from typing import Any, Dict

from django.conf import settings

from apps.api.exceptions import InvalidRequestError


def parse_product_id(raw: Any) -> str:
    if isinstance(raw, uuid.UUID):
        return str(raw)
    if not isinstance(raw, str) or not raw.strip():
        raise InvalidRequestError("productId is required", details={"productId": raw})
    try:
        return str(uuid.UUID(raw.strip()))
    except ValueError:
        raise InvalidRequestError(
            "productId must be a valid UUID", details={"productId": raw}
        ) from None


def parse_quantity(raw: Any) -> int:
    # bool is an int subclass; reject it explicitly.
    if isinstance(raw, bool):
        raise InvalidRequestError("quantity must be an integer", details={"quantity": raw})
    value = None
    if isinstance(raw, int):
        value = raw
    elif isinstance(raw, str):
        try:
            value = int(raw.strip())
        except ValueError:
            pass
    if value is None:
        raise InvalidRequestError("quantity must be an integer", details={"quantity": raw})
    limit = settings.CART_MAX_QUANTITY
    if value > limit:
        raise InvalidRequestError(
            f"quantity must be at most {limit}", details={"quantity": raw, "max": limit}
        )
    return value


@dataclass
class CartAddCommand:
    product_id: str

    @staticmethod
    def from_raw(payload: Dict[str, Any]) -> "CartAddCommand":
        if not isinstance(payload, dict):
            raise InvalidRequestError("Payload must be an object")
        pid = payload.get("productId") or payload.get("product_id")
        if pid is None:
            # nested product object fallback
            product = payload.get("product")
            if isinstance(product, dict):
                pid = product.get("id")
        return CartAddCommand(product_id=parse_product_id(pid))


@dataclass
class CartQuantityCommand:
    product_id: str
    quantity: int

    @staticmethod
    def from_raw(product_id: Any, payload: Dict[str, Any]) -> "CartQuantityCommand":
        if not isinstance(payload, dict):
            raise InvalidRequestError("Payload must be an object")
        if "quantity" not in payload:
            raise InvalidRequestError("quantity is required")
        return CartQuantityCommand(
            product_id=parse_product_id(product_id),
            quantity=parse_quantity(payload["quantity"]),
        )
