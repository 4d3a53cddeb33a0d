from typing import Optional

from apps.common.errors import DomainError


class EmptyCartError(DomainError):
    """Raised when checkout starts on a cart without line items."""

    code = "EMPTY_CART"
    default_message = "Cart is empty"


class PaymentProviderError(DomainError):
    """
    Any failure talking to the payment provider: transport errors, timeouts and
    non-2xx answers. ``message`` carries the provider's own explanation for the
    logs; clients only ever see ``default_message``.
    """

    code = "PAYMENT_PROVIDER_ERROR"
    default_message = "Payment could not be processed"

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        operation: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(
            message,
            details={"operation": operation, "providerStatus": status_code},
        )
        self.operation = operation
        self.status_code = status_code


__all__ = ["EmptyCartError", "PaymentProviderError"]
