from __future__ import annotations

from django.conf import settings

from apps.carts.container import build_cart_service

from .providers import PayPalClient
from .services import DEFAULT_CURRENCY, DEFAULT_DESCRIPTION, CheckoutService


def build_payment_provider() -> PayPalClient:
    return PayPalClient(
        client_id=getattr(settings, "PAYPAL_CLIENT_ID", ""),
        client_secret=getattr(settings, "PAYPAL_CLIENT_SECRET", ""),
        environment=getattr(settings, "PAYPAL_ENVIRONMENT", "sandbox"),
        timeout=getattr(settings, "PAYPAL_TIMEOUT", PayPalClient.DEFAULT_TIMEOUT),
    )


def build_checkout_service() -> CheckoutService:
    return CheckoutService(
        provider=build_payment_provider(),
        carts=build_cart_service(),
        currency=getattr(settings, "CHECKOUT_CURRENCY", DEFAULT_CURRENCY),
        description=getattr(settings, "CHECKOUT_DESCRIPTION", DEFAULT_DESCRIPTION),
    )
