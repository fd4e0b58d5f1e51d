from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.api.schemas import ErrorResponseSerializer, paginated_response
from apps.api.utils import error_response
from apps.common import get_logger
from .container import build_product_service
from .models import ProductCategory
from .pagination import ProductListPagination
from .serializers import ProductReadSerializer

logger = get_logger(__name__).bind(component="store", layer="view")


@extend_schema(tags=["Store"])
class ProductListView(APIView):
    permission_classes = [AllowAny]
    service = build_product_service()
    pagination_class = ProductListPagination
    log = logger.bind(view="ProductListView")

    @extend_schema(
        operation_id="store_products_list",
        summary="List products for sale",
        description="Supports pagination via ?page and ?limit. Cached results may be served.",
        parameters=[
            OpenApiParameter(
                name="category",
                description="Filter by category",
                required=False,
                type=str,
                enum=list(ProductCategory.values),
            )
        ],
        responses={
            200: paginated_response(ProductReadSerializer),
            400: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def get(self, request):
        category = request.query_params.get("category") or None
        self.log.debug("Handling product list request", category=category)
        products = self.service.list_products(category)
        paginator = self.pagination_class()
        page = paginator.paginate_queryset(products, request, view=self)
        if page is None:
            return Response(ProductReadSerializer(products, many=True).data)
        return paginator.get_paginated_response(
            ProductReadSerializer(page, many=True).data
        )


@extend_schema(tags=["Store"])
class ProductDetailView(APIView):
    permission_classes = [AllowAny]
    service = build_product_service()
    log = logger.bind(view="ProductDetailView")

    @extend_schema(
        operation_id="store_products_retrieve",
        summary="Get product",
        parameters=[OpenApiParameter("product_id", str, OpenApiParameter.PATH)],
        responses={
            200: ProductReadSerializer,
            404: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def get(self, request, product_id):
        self.log.debug("Fetching product detail", product_id=product_id)
        dto = self.service.get_product(str(product_id))
        if not dto:
            return error_response(
                "NOT_FOUND", "Product not found", {"id": str(product_id)}
            )
        return Response(ProductReadSerializer(dto).data)
