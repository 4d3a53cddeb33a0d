from typing import Protocol

from .dtos import CaptureResultDTO, OrderRequest, PaymentIntentDTO


class PaymentProviderProtocol(Protocol):
    """Create/capture capability of an external payment processor."""

    def create_order(self, request: OrderRequest) -> PaymentIntentDTO:
        ...

    def capture_order(self, order_id: str) -> CaptureResultDTO:
        ...
