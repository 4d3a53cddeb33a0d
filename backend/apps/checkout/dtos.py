from dataclasses import dataclass


@dataclass(frozen=True)
class OrderRequest:
    """Single purchase unit order; ``amount`` is already a two-decimal string."""

    currency: str
    amount: str
    description: str
    intent: str = "CAPTURE"


@dataclass(frozen=True)
class PaymentIntentDTO:
    order_id: str
    currency_code: str
    amount: str
    status: str


@dataclass(frozen=True)
class CaptureResultDTO:
    order_id: str
    capture_id: str
    status: str
