import json
from typing import Any, Dict, Optional

from django.conf import settings
from django.http import HttpRequest
from rest_framework.exceptions import AuthenticationFailed as DRFAuthenticationFailed
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import InvalidToken

from apps.api.utils import error_response
from apps.common import get_logger

logger = get_logger(__name__).bind(component="api", layer="validation")

_jwt_authenticator = JWTAuthentication()

# Views whose every method acts on the caller's own cart, orders or prescriptions.
OWNER_SCOPED_VIEWS = frozenset(
    {
        "CartView",
        "CartItemListView",
        "CartItemDetailView",
        "OrderListView",
        "PrescriptionListView",
    }
)


def _is_authenticated_user(request: HttpRequest) -> bool:
    user = getattr(request, "user", None)
    if user and getattr(user, "is_authenticated", False) and getattr(user, "id", None):
        return True

    # DRF attaches the authenticated user later in the request lifecycle. Since this
    # middleware runs earlier, attempt JWT authentication manually to support bearer tokens.
    meta = getattr(request, "META", {}) or {}
    if not meta.get("HTTP_AUTHORIZATION"):
        return False

    try:
        authenticated = _jwt_authenticator.authenticate(request)
    except (InvalidToken, DRFAuthenticationFailed) as exc:
        logger.warning("JWT authentication failed", detail=str(exc))
        return False

    if not authenticated:
        return False

    user, token = authenticated
    if not getattr(user, "is_authenticated", False) or not getattr(user, "id", None):
        return False

    request.user = user
    request.auth = token
    logger.debug("Authenticated user from bearer token", user_id=user.id)
    return True


def _extract_request_data(request: HttpRequest) -> Dict[str, Any]:
    data = getattr(request, "data", None)
    if data not in (None, {}):
        return data
    if request.content_type == "application/json":
        try:
            body = request.body.decode("utf-8") if hasattr(request, "body") else None
            return json.loads(body) if body else {}
        except (ValueError, AttributeError, UnicodeDecodeError):
            return {}
    if hasattr(request, "POST"):
        post = request.POST
        if hasattr(post, "dict"):
            return post.dict()
        return dict(post)
    return {}


def _coerce_integer(raw: Any) -> Optional[int]:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str):
        try:
            return int(raw.strip())
        except ValueError:
            return None
    return None


def _validate_cart_quantity(request: HttpRequest, view_name: str) -> Any:
    data = _extract_request_data(request)
    if not isinstance(data, dict) or "quantity" not in data:
        return None
    raw = data.get("quantity")
    value = _coerce_integer(raw)
    if value is None:
        logger.warning("Rejected non-integer cart quantity", view=view_name, raw_value=raw)
        return error_response(
            "VALIDATION_ERROR", "quantity must be an integer", {"quantity": raw}
        )
    limit = settings.CART_MAX_QUANTITY
    if value > limit:
        logger.warning("Rejected oversized cart quantity", view=view_name, limit=limit)
        return error_response(
            "VALIDATION_ERROR",
            f"quantity must be at most {limit}",
            {"quantity": raw, "max": limit},
        )
    return None


def resolve_owner_id(request: HttpRequest) -> Optional[str]:
    """Opaque owner identifier of the caller, or None for anonymous requests."""
    validated = getattr(request, "validated_user_id", None)
    if validated:
        return validated
    user = getattr(request, "user", None)
    if user and getattr(user, "is_authenticated", False) and getattr(user, "id", None):
        return str(user.id)
    return None


def validate_request_context(request: HttpRequest, view_class, view_kwargs) -> Any:
    """
    Performs request level validation for specific API views.
    Returns a DRF Response when validation fails; otherwise None and
    attaches validated data to the request instance.
    """
    view_name = getattr(view_class, "__name__", "")
    method = getattr(request, "method", None)

    if view_name not in OWNER_SCOPED_VIEWS:
        return None

    logger.debug("Running request context validation", view=view_name, method=method)
    if not _is_authenticated_user(request):
        logger.warning(
            "Owner-scoped access requires authentication", view=view_name, method=method
        )
        return error_response("UNAUTHORIZED", "Authentication required")
    request.validated_user_id = str(request.user.id)
    if view_name == "CartItemDetailView" and method in ("PUT", "PATCH"):
        response = _validate_cart_quantity(request, view_name)
        if response is not None:
            return response
    logger.debug(
        "Validated request owner",
        view=view_name,
        method=method,
        owner_id=request.validated_user_id,
        product_id=view_kwargs.get("product_id") if view_kwargs else None,
    )
    return None
