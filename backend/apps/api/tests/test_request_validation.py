import json
import types
import uuid

from django.contrib.auth.models import AnonymousUser
from rest_framework.test import APIRequestFactory

from apps.api.middleware import RequestValidationMiddleware
from apps.api.validation import (
    _extract_request_data,
    resolve_owner_id,
    validate_request_context,
)
from apps.assistant.views import SymptomAdviceView
from apps.carts.views import CartItemDetailView, CartItemListView, CartView
from apps.store.views import ProductListView

factory = APIRequestFactory()
OWNER = uuid.UUID("3d6f0a8e-1b2c-4d5e-8f90-a1b2c3d4e5f6")


def make_user(user_id=OWNER):
    return types.SimpleNamespace(id=user_id, is_authenticated=True)


def test_validate_request_sets_cart_owner_id():
    request = factory.get("/api/cart/")
    request.user = make_user()
    response = validate_request_context(request, CartView, {})
    assert response is None
    assert request.validated_user_id == str(OWNER)
    assert resolve_owner_id(request) == str(OWNER)


def test_anonymous_cart_request_is_unauthorized():
    request = factory.post("/api/cart/items/", {"productId": str(uuid.uuid4())}, format="json")
    request.user = AnonymousUser()
    response = validate_request_context(request, CartItemListView, {})
    assert response.status_code == 401
    assert response.data["error"]["code"] == "UNAUTHORIZED"
    assert not hasattr(request, "validated_user_id")


def test_invalid_bearer_token_is_unauthorized():
    request = factory.get("/api/cart/", HTTP_AUTHORIZATION="Bearer not-a-token")
    request.user = AnonymousUser()
    response = validate_request_context(request, CartView, {})
    assert response.status_code == 401


def test_public_views_are_not_validated():
    for view_cls in (ProductListView, SymptomAdviceView):
        request = factory.get("/")
        request.user = AnonymousUser()
        assert validate_request_context(request, view_cls, {}) is None


def test_cart_quantity_must_be_integer():
    request = factory.patch("/api/cart/items/x/", {"quantity": 1.5}, format="json")
    request.user = make_user()
    response = validate_request_context(request, CartItemDetailView, {"product_id": "x"})
    assert response.status_code == 400
    assert response.data["error"]["details"] == {"quantity": 1.5}


def test_cart_quantity_accepts_integers_and_zero():
    for value in (3, 0, -2, "4"):
        request = factory.put("/api/cart/items/x/", {"quantity": value}, format="json")
        request.user = make_user()
        assert validate_request_context(request, CartItemDetailView, {"product_id": "x"}) is None


def test_cart_delete_skips_quantity_check():
    request = factory.delete("/api/cart/items/x/")
    request.user = make_user()
    assert validate_request_context(request, CartItemDetailView, {"product_id": "x"}) is None


def test_resolve_owner_id_anonymous():
    request = factory.get("/api/cart/")
    request.user = AnonymousUser()
    assert resolve_owner_id(request) is None


def test_extract_request_data_reads_json_body():
    request = factory.post("/api/cart/items/", {"productId": "abc"}, format="json")
    assert _extract_request_data(request) == {"productId": "abc"}


def test_middleware_no_view_class_returns_none():
    middleware = RequestValidationMiddleware(lambda req: None)
    request = factory.get("/health/live")
    response = middleware.process_view(request, lambda req: req, [], {})
    assert response is None


def test_middleware_renders_blocking_response():
    middleware = RequestValidationMiddleware(lambda req: None)
    request = factory.get("/api/cart/")
    request.user = AnonymousUser()
    response = middleware.process_view(request, CartView.as_view(), [], {})
    assert response.status_code == 401
    payload = json.loads(response.content)
    assert payload["error"]["message"] == "Authentication required"


def test_cart_quantity_above_limit_rejected(settings):
    settings.CART_MAX_QUANTITY = 999
    request = factory.put("/api/cart/items/x/", {"quantity": 10**20}, format="json")
    request.user = make_user()
    response = validate_request_context(request, CartItemDetailView, {"product_id": "x"})
    assert response.status_code == 400
    assert response.data["error"]["message"] == "quantity must be at most 999"
