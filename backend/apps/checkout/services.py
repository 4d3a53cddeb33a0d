from __future__ import annotations

from apps.carts.dtos import Cart
from apps.carts.operations import format_amount, subtotal
from apps.carts.protocols import CartStoreProtocol
from apps.carts.services import CartService
from apps.common import get_logger
from .dtos import CaptureResultDTO, OrderRequest, PaymentIntentDTO
from .errors import EmptyCartError
from .protocols import PaymentProviderProtocol

logger = get_logger(__name__).bind(component="checkout", layer="service")

DEFAULT_CURRENCY = "EUR"
DEFAULT_DESCRIPTION = "Compra en Mi Tienda"


class CheckoutService:
    """
    Pay, capture and clear are separate calls. The provider confirms payment
    out of band, so the cart stays untouched until the caller clears it.
    """

    def __init__(
        self,
        provider: PaymentProviderProtocol,
        carts: CartService,
        *,
        currency: str = DEFAULT_CURRENCY,
        description: str = DEFAULT_DESCRIPTION,
    ):
        self.provider = provider
        self.carts = carts
        self.currency = currency
        self.description = description
        self.logger = logger.bind(service="CheckoutService")

    def build_order_request(self, cart: Cart) -> OrderRequest:
        return OrderRequest(
            currency=self.currency,
            amount=format_amount(subtotal(cart)),
            description=self.description,
        )

    def initiate_payment(self, store: CartStoreProtocol) -> PaymentIntentDTO:
        cart = store.load()
        if cart.is_empty:
            self.logger.info("Checkout attempted with empty cart")
            raise EmptyCartError()
        request = self.build_order_request(cart)
        self.logger.debug(
            "Opening payment intent",
            amount=request.amount,
            currency=request.currency,
            lines=len(cart.items),
        )
        return self.provider.create_order(request)

    def capture_payment(self, order_id: str) -> CaptureResultDTO:
        self.logger.debug("Capturing payment", order_id=order_id)
        return self.provider.capture_order(order_id)

    def clear_cart(self, store: CartStoreProtocol) -> Cart:
        return self.carts.clear_cart(store)
