from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.api.schemas import error_responses
from apps.carts.stores import SessionCartStore
from apps.common import get_logger, session_ref
from .container import build_checkout_service
from .serializers import CaptureResultSerializer, PaymentIntentSerializer

logger = get_logger(__name__).bind(component="checkout", layer="view")


@extend_schema(tags=["Checkout"])
class PayView(APIView):
    permission_classes = [AllowAny]
    service = build_checkout_service()
    log = logger.bind(view="PayView")

    @extend_schema(
        operation_id="checkout_pay",
        summary="Open payment",
        description=(
            "Creates a PayPal order for the current cart subtotal. The cart is left as is; "
            "the returned ``order_id`` must be sent back to the capture endpoint once the "
            "shopper approves the payment."
        ),
        request=None,
        responses={201: PaymentIntentSerializer, **error_responses(400, 500)},
    )
    def post(self, request):
        intent = self.service.initiate_payment(SessionCartStore(request.session))
        self.log.info(
            "Payment intent created",
            order_id=intent.order_id,
            amount=intent.amount,
            session=session_ref(request.session.session_key),
        )
        return Response(PaymentIntentSerializer(intent).data, status=status.HTTP_201_CREATED)


@extend_schema(tags=["Checkout"])
class CaptureView(APIView):
    permission_classes = [AllowAny]
    service = build_checkout_service()
    log = logger.bind(view="CaptureView")

    @extend_schema(
        operation_id="checkout_capture",
        summary="Capture payment",
        description=(
            "Captures an approved PayPal order. The cart is not cleared here; call "
            "``POST /api/cart/clear/`` after a satisfactory capture."
        ),
        parameters=[OpenApiParameter("order_id", str, OpenApiParameter.PATH)],
        request=None,
        responses={200: CaptureResultSerializer, **error_responses(500)},
    )
    def post(self, request, order_id: str):
        result = self.service.capture_payment(order_id)
        self.log.info(
            "Payment captured",
            order_id=result.order_id,
            capture_id=result.capture_id,
            status=result.status,
        )
        return Response(CaptureResultSerializer(result).data)
