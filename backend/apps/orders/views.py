from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.api.schemas import ErrorResponseSerializer
from apps.api.validation import resolve_owner_id
from apps.common import get_logger
from .commands import OrderCreateCommand, PrescriptionCreateCommand
from .container import build_order_service
from .serializers import (
    OrderCreateSerializer,
    OrderReadSerializer,
    PrescriptionCreateSerializer,
    PrescriptionReadSerializer,
)

logger = get_logger(__name__).bind(component="orders", layer="view")

ERROR_RESPONSES = {
    400: OpenApiResponse(response=ErrorResponseSerializer),
    401: OpenApiResponse(response=ErrorResponseSerializer),
    503: OpenApiResponse(response=ErrorResponseSerializer),
}


@extend_schema(tags=["Orders"])
class OrderListView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_order_service()
    log = logger.bind(view="OrderListView")

    @extend_schema(
        operation_id="orders_list",
        summary="List the caller's orders",
        responses={200: OrderReadSerializer(many=True), **ERROR_RESPONSES},
    )
    def get(self, request):
        owner_id = resolve_owner_id(request)
        orders = self.service.list_orders(owner_id)
        return Response(OrderReadSerializer(orders, many=True).data)

    @extend_schema(
        operation_id="orders_create",
        summary="Place an order",
        description=(
            "Orders the cart contents and empties the cart, or records a free-text "
            "order when `medicines` is given. Products that require a prescription "
            "need a `prescriptionId` of the caller's."
        ),
        request=OrderCreateSerializer,
        responses={
            201: OrderReadSerializer,
            404: OpenApiResponse(response=ErrorResponseSerializer),
            **ERROR_RESPONSES,
        },
    )
    def post(self, request):
        owner_id = resolve_owner_id(request)
        cmd = OrderCreateCommand.from_raw(request.data)
        self.log.info("Placing order", owner_id=owner_id, manual=cmd.is_manual)
        order = self.service.place_order(owner_id, cmd)
        return Response(OrderReadSerializer(order).data, status=status.HTTP_201_CREATED)


@extend_schema(tags=["Orders"])
class PrescriptionListView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_order_service()
    log = logger.bind(view="PrescriptionListView")

    @extend_schema(
        operation_id="prescriptions_list",
        summary="List the caller's prescriptions",
        responses={200: PrescriptionReadSerializer(many=True), **ERROR_RESPONSES},
    )
    def get(self, request):
        owner_id = resolve_owner_id(request)
        prescriptions = self.service.list_prescriptions(owner_id)
        return Response(PrescriptionReadSerializer(prescriptions, many=True).data)

    @extend_schema(
        operation_id="prescriptions_create",
        summary="Record an uploaded prescription",
        description="Stores the document reference with status `pending`.",
        request=PrescriptionCreateSerializer,
        responses={201: PrescriptionReadSerializer, **ERROR_RESPONSES},
    )
    def post(self, request):
        owner_id = resolve_owner_id(request)
        cmd = PrescriptionCreateCommand.from_raw(request.data)
        self.log.info("Recording prescription", owner_id=owner_id)
        prescription = self.service.record_prescription(owner_id, cmd)
        return Response(
            PrescriptionReadSerializer(prescription).data, status=status.HTTP_201_CREATED
        )
