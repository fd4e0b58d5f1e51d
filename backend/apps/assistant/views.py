from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.api.schemas import ErrorResponseSerializer
from apps.common import get_logger
from .commands import AdviceRequest
from .container import build_advice_service
from .serializers import AdviceRequestSerializer, AdviceResponseSerializer

logger = get_logger(__name__).bind(component="assistant", layer="view")


@extend_schema(tags=["Assistant"])
class SymptomAdviceView(APIView):
    permission_classes = [AllowAny]
    service = build_advice_service()
    log = logger.bind(view="SymptomAdviceView")

    @extend_schema(
        operation_id="assistant_advice",
        summary="Suggest home remedies for symptoms",
        description=(
            "Forwards a sanitized prompt to the generative text API. Nothing is stored. "
            "Errors carry only generic messages."
        ),
        request=AdviceRequestSerializer,
        responses={
            200: AdviceResponseSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
            502: OpenApiResponse(response=ErrorResponseSerializer),
            503: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def post(self, request):
        advice_request = AdviceRequest.from_raw(request.data)
        self.log.debug("Handling advice request")
        dto = self.service.get_advice(advice_request)
        return Response(AdviceResponseSerializer(dto).data)
