from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.api.schemas import error_responses
from apps.common import get_logger, session_ref
from .container import build_cart_service
from .serializers import AddToCartSerializer, CartReadSerializer, CartSummarySerializer
from .stores import SessionCartStore

logger = get_logger(__name__).bind(component="carts", layer="view")


@extend_schema(tags=["Cart"])
class CartView(APIView):
    permission_classes = [AllowAny]
    service = build_cart_service()
    log = logger.bind(view="CartView")

    @extend_schema(
        operation_id="cart_retrieve",
        summary="View cart",
        description="Line items of the session cart with badge count and subtotal.",
        responses={200: CartReadSerializer},
    )
    def get(self, request):
        cart = self.service.view_cart(SessionCartStore(request.session))
        return Response(CartReadSerializer(cart).data)

    @extend_schema(
        operation_id="cart_clear",
        summary="Clear cart",
        description="Empties the session cart. Clearing an empty cart is a no-op.",
        request=None,
        responses={200: CartReadSerializer, **error_responses(500)},
    )
    def delete(self, request):
        cart = self.service.clear_cart(SessionCartStore(request.session))
        self.log.info("Cart cleared via API", session=session_ref(request.session.session_key))
        return Response(CartReadSerializer(cart).data)


@extend_schema(tags=["Cart"])
class CartClearView(CartView):
    log = logger.bind(view="CartClearView")
    http_method_names = ["post", "options"]

    @extend_schema(
        operation_id="cart_clear_post",
        summary="Clear cart",
        description="Form-friendly alias of ``DELETE /api/cart/``.",
        request=None,
        responses={200: CartReadSerializer, **error_responses(500)},
    )
    def post(self, request):
        return self.delete(request)


@extend_schema(tags=["Cart"])
class CartItemsView(APIView):
    permission_classes = [AllowAny]
    service = build_cart_service()
    log = logger.bind(view="CartItemsView")

    @extend_schema(
        operation_id="cart_items_create",
        summary="Add product to cart",
        description=(
            "Adds ``quantity`` units of a catalog product. A product already in the cart "
            "has its quantity increased; otherwise a new line item snapshots the product's "
            "current name, price and image."
        ),
        request=AddToCartSerializer,
        responses={201: CartReadSerializer, **error_responses(400, 404, 500)},
    )
    def post(self, request):
        serializer = AddToCartSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        store = SessionCartStore(request.session)
        cart = self.service.add_to_cart(
            store,
            serializer.validated_data["product_id"],
            serializer.validated_data["quantity"],
        )
        self.log.info(
            "Product added to cart",
            product_id=serializer.validated_data["product_id"],
            session=session_ref(request.session.session_key),
            lines=len(cart.items),
        )
        return Response(CartReadSerializer(cart).data, status=status.HTTP_201_CREATED)


@extend_schema(tags=["Cart"])
class CartSummaryView(APIView):
    permission_classes = [AllowAny]
    service = build_cart_service()

    @extend_schema(
        operation_id="cart_summary",
        summary="Cart badge",
        description="Total units in the cart and the rounded subtotal.",
        responses={200: CartSummarySerializer},
    )
    def get(self, request):
        cart = self.service.view_cart(SessionCartStore(request.session))
        return Response(CartSummarySerializer(cart).data)
