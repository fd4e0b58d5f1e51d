from django.urls import path

from .views import CartItemDetailView, CartItemListView, CartView

urlpatterns = [
    path("", CartView.as_view(), name="api-cart"),
    path("items/", CartItemListView.as_view(), name="api-cart-items"),
    path(
        "items/<str:product_id>/",
        CartItemDetailView.as_view(),
        name="api-cart-items-detail",
    ),
]
