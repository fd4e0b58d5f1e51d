import types
import unittest
import uuid
from decimal import Decimal
from unittest.mock import Mock, patch

from rest_framework.test import APIRequestFactory, force_authenticate

from apps.api.exceptions import NotFoundError
from apps.api.validation import validate_request_context
from apps.carts.dtos import CartLineDTO, CartViewDTO
from apps.carts.views import CartItemDetailView, CartItemListView, CartView
from apps.store.dtos import ProductDTO

OWNER_ID = "3d6f0a8e-1b2c-4d5e-8f90-a1b2c3d4e5f6"
PRODUCT_ID = "7b0f2c1e-3f4a-4c4e-9f3e-2a1d5b6c7d8e"


def make_view(quantity=2):
    product = ProductDTO(
        id=PRODUCT_ID,
        name="Paracetamol",
        description="",
        category="pain_relief",
        unit_price=Decimal("9.99"),
        image_ref=None,
        available_for_sale=True,
        requires_prescription=False,
    )
    line_total = Decimal("9.99") * quantity
    return CartViewDTO(
        owner_id=OWNER_ID,
        lines=[CartLineDTO(id="l1", product=product, quantity=quantity, line_total=line_total)],
        total=line_total,
    )


class CartViewsUnitTests(unittest.TestCase):
    def setUp(self):
        self.factory = APIRequestFactory()
        self.user = types.SimpleNamespace(
            id=uuid.UUID(OWNER_ID), is_authenticated=True, is_staff=False
        )

    def dispatch(self, request, view_cls, **kwargs):
        pre_response = validate_request_context(request, view_cls, kwargs)
        if pre_response is not None:
            return pre_response
        view = view_cls.as_view()
        return view(request, **kwargs)

    def authenticate(self, request):
        request.user = self.user
        force_authenticate(request, user=self.user)

    def test_get_cart_returns_serialized_view(self):
        service_mock = Mock()
        service_mock.load.return_value = make_view()
        with patch.object(CartView, "service", service_mock):
            request = self.factory.get("/api/cart/")
            self.authenticate(request)
            response = self.dispatch(request, CartView)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["total"], "19.98")
        self.assertEqual(response.data["item_count"], 1)
        self.assertEqual(response.data["lines"][0]["line_total"], "19.98")
        service_mock.load.assert_called_once_with(OWNER_ID)

    def test_anonymous_cart_request_rejected(self):
        service_mock = Mock()
        with patch.object(CartView, "service", service_mock):
            request = self.factory.get("/api/cart/")
            response = self.dispatch(request, CartView)
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.data["error"]["code"], "UNAUTHORIZED")
        service_mock.load.assert_not_called()

    def test_add_item_then_reload(self):
        service_mock = Mock()
        service_mock.load.return_value = make_view(1)
        with patch.object(CartItemListView, "service", service_mock):
            request = self.factory.post(
                "/api/cart/items/", {"productId": PRODUCT_ID}, format="json"
            )
            self.authenticate(request)
            response = self.dispatch(request, CartItemListView)
        self.assertEqual(response.status_code, 200)
        service_mock.add.assert_called_once_with(OWNER_ID, PRODUCT_ID)
        service_mock.load.assert_called_once_with(OWNER_ID)

    def test_add_item_invalid_product_id(self):
        service_mock = Mock()
        with patch.object(CartItemListView, "service", service_mock):
            request = self.factory.post(
                "/api/cart/items/", {"productId": "abc"}, format="json"
            )
            self.authenticate(request)
            response = self.dispatch(request, CartItemListView)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["error"]["code"], "VALIDATION_ERROR")
        service_mock.add.assert_not_called()

    def test_add_unknown_product_is_404(self):
        service_mock = Mock()
        service_mock.add.side_effect = NotFoundError("Product not found")
        with patch.object(CartItemListView, "service", service_mock):
            request = self.factory.post(
                "/api/cart/items/", {"productId": PRODUCT_ID}, format="json"
            )
            self.authenticate(request)
            response = self.dispatch(request, CartItemListView)
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.data["error"]["message"], "Product not found")

    def test_update_quantity(self):
        service_mock = Mock()
        service_mock.load.return_value = make_view(4)
        with patch.object(CartItemDetailView, "service", service_mock):
            request = self.factory.patch(
                f"/api/cart/items/{PRODUCT_ID}/", {"quantity": 4}, format="json"
            )
            self.authenticate(request)
            response = self.dispatch(request, CartItemDetailView, product_id=PRODUCT_ID)
        self.assertEqual(response.status_code, 200)
        service_mock.update_quantity.assert_called_once_with(OWNER_ID, PRODUCT_ID, 4)

    def test_update_quantity_rejects_non_integer(self):
        service_mock = Mock()
        with patch.object(CartItemDetailView, "service", service_mock):
            request = self.factory.put(
                f"/api/cart/items/{PRODUCT_ID}/", {"quantity": "lots"}, format="json"
            )
            self.authenticate(request)
            response = self.dispatch(request, CartItemDetailView, product_id=PRODUCT_ID)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["error"]["details"], {"quantity": "lots"})
        service_mock.update_quantity.assert_not_called()

    def test_delete_item(self):
        service_mock = Mock()
        service_mock.load.return_value = CartViewDTO(owner_id=OWNER_ID)
        with patch.object(CartItemDetailView, "service", service_mock):
            request = self.factory.delete(f"/api/cart/items/{PRODUCT_ID}/")
            self.authenticate(request)
            response = self.dispatch(request, CartItemDetailView, product_id=PRODUCT_ID)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["total"], "0.00")
        self.assertEqual(response.data["lines"], [])
        service_mock.remove.assert_called_once_with(OWNER_ID, PRODUCT_ID)
