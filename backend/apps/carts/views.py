from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.api.schemas import ErrorResponseSerializer
from apps.api.validation import resolve_owner_id
from apps.common import get_logger
from .commands import CartAddCommand, CartQuantityCommand, parse_product_id
from .container import build_cart_service
from .serializers import CartAddSerializer, CartQuantitySerializer, CartReadSerializer

logger = get_logger(__name__).bind(component="carts", layer="view")

ERROR_RESPONSES = {
    400: OpenApiResponse(response=ErrorResponseSerializer),
    401: OpenApiResponse(response=ErrorResponseSerializer),
    503: OpenApiResponse(response=ErrorResponseSerializer),
}


class CartMixin:
    def render_cart(self, owner_id):
        return Response(CartReadSerializer(self.service.load(owner_id)).data)


@extend_schema(tags=["Cart"])
class CartView(CartMixin, APIView):
    permission_classes = [IsAuthenticated]
    service = build_cart_service()
    log = logger.bind(view="CartView")

    @extend_schema(
        operation_id="cart_retrieve",
        summary="Get the caller's cart",
        description="Lines in creation order with line totals, the cart total and the line count.",
        responses={200: CartReadSerializer, **ERROR_RESPONSES},
    )
    def get(self, request):
        owner_id = resolve_owner_id(request)
        self.log.debug("Loading cart", owner_id=owner_id)
        return self.render_cart(owner_id)


@extend_schema(tags=["Cart"])
class CartItemListView(CartMixin, APIView):
    permission_classes = [IsAuthenticated]
    service = build_cart_service()
    log = logger.bind(view="CartItemListView")

    @extend_schema(
        operation_id="cart_items_add",
        summary="Add one unit of a product",
        description="Creates the line with quantity 1 or increments an existing line by 1.",
        request=CartAddSerializer,
        responses={
            200: CartReadSerializer,
            404: OpenApiResponse(response=ErrorResponseSerializer),
            **ERROR_RESPONSES,
        },
    )
    def post(self, request):
        owner_id = resolve_owner_id(request)
        cmd = CartAddCommand.from_raw(request.data)
        self.log.info("Adding product to cart", owner_id=owner_id, product_id=cmd.product_id)
        self.service.add(owner_id, cmd.product_id)
        return self.render_cart(owner_id)


@extend_schema(tags=["Cart"])
class CartItemDetailView(CartMixin, APIView):
    permission_classes = [IsAuthenticated]
    service = build_cart_service()
    log = logger.bind(view="CartItemDetailView")

    def _update(self, request, product_id):
        owner_id = resolve_owner_id(request)
        cmd = CartQuantityCommand.from_raw(product_id, request.data)
        self.log.info(
            "Updating cart line",
            owner_id=owner_id,
            product_id=cmd.product_id,
            quantity=cmd.quantity,
        )
        self.service.update_quantity(owner_id, cmd.product_id, cmd.quantity)
        return self.render_cart(owner_id)

    @extend_schema(
        operation_id="cart_items_update",
        summary="Set a line's quantity",
        description="Overwrites the quantity. Zero or a negative value removes the line.",
        parameters=[OpenApiParameter("product_id", str, OpenApiParameter.PATH)],
        request=CartQuantitySerializer,
        responses={
            200: CartReadSerializer,
            404: OpenApiResponse(response=ErrorResponseSerializer),
            **ERROR_RESPONSES,
        },
    )
    def put(self, request, product_id):
        return self._update(request, product_id)

    @extend_schema(
        operation_id="cart_items_partial_update",
        summary="Set a line's quantity",
        parameters=[OpenApiParameter("product_id", str, OpenApiParameter.PATH)],
        request=CartQuantitySerializer,
        responses={
            200: CartReadSerializer,
            404: OpenApiResponse(response=ErrorResponseSerializer),
            **ERROR_RESPONSES,
        },
    )
    def patch(self, request, product_id):
        return self._update(request, product_id)

    @extend_schema(
        operation_id="cart_items_remove",
        summary="Remove a line",
        description="Idempotent: removing a product that is not in the cart succeeds.",
        parameters=[OpenApiParameter("product_id", str, OpenApiParameter.PATH)],
        responses={200: CartReadSerializer, **ERROR_RESPONSES},
    )
    def delete(self, request, product_id):
        owner_id = resolve_owner_id(request)
        pid = parse_product_id(product_id)
        self.log.info("Removing cart line", owner_id=owner_id, product_id=pid)
        self.service.remove(owner_id, pid)
        return self.render_cart(owner_id)
