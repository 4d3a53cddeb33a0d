"""
PayPal Orders v2 adapter.

Talks to the REST API directly with ``requests``: an OAuth2 client-credentials
token is fetched on demand and reused until shortly before it expires. No call
is retried; every failure becomes ``PaymentProviderError`` and the caller
decides whether to try again.
"""
from __future__ import annotations

import threading
import time
from typing import Any, Dict, Optional

import requests

from apps.common import get_logger
from .dtos import CaptureResultDTO, OrderRequest, PaymentIntentDTO
from .errors import PaymentProviderError

logger = get_logger(__name__).bind(component="checkout", layer="provider")

PAYPAL_BASE_URLS = {
    "sandbox": "https://api-m.sandbox.paypal.com",
    "live": "https://api-m.paypal.com",
}

# Refresh the token this many seconds before PayPal says it expires.
TOKEN_EXPIRY_MARGIN = 60


def base_url_for(environment: str) -> str:
    try:
        return PAYPAL_BASE_URLS[(environment or "sandbox").strip().lower()]
    except KeyError:
        raise ValueError(
            f"Unknown PayPal environment {environment!r}; expected one of {sorted(PAYPAL_BASE_URLS)}"
        ) from None


def _provider_message(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        message = body.get("message") or body.get("error_description") or body.get("name")
        if message:
            return str(message)
    return f"HTTP {response.status_code}"


class PayPalClient:
    DEFAULT_TIMEOUT = 10

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        *,
        environment: str = "sandbox",
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.client_id = client_id or ""
        self.client_secret = client_secret or ""
        self.environment = (environment or "sandbox").strip().lower()
        self.base_url = base_url_for(self.environment)
        self.timeout = timeout or self.DEFAULT_TIMEOUT
        self.session = session or requests.Session()
        self._token: Optional[str] = None
        self._token_expires_at = 0.0
        self._token_lock = threading.Lock()
        self.logger = logger.bind(provider="paypal", environment=self.environment)

    def create_order(self, request: OrderRequest) -> PaymentIntentDTO:
        payload = {
            "intent": request.intent,
            "purchase_units": [
                {
                    "amount": {"currency_code": request.currency, "value": request.amount},
                    "description": request.description,
                }
            ],
        }
        body = self._call("create_order", "POST", "/v2/checkout/orders", json=payload)
        order_id = body.get("id")
        if not order_id:
            raise PaymentProviderError("Order response carried no id", operation="create_order")
        self.logger.info(
            "PayPal order created",
            order_id=order_id,
            amount=request.amount,
            currency=request.currency,
        )
        return PaymentIntentDTO(
            order_id=str(order_id),
            currency_code=request.currency,
            amount=request.amount,
            status=str(body.get("status") or "CREATED"),
        )

    def capture_order(self, order_id: str) -> CaptureResultDTO:
        body = self._call(
            "capture_order",
            "POST",
            f"/v2/checkout/orders/{order_id}/capture",
            json={},
        )
        capture_id = self._capture_id(body) or body.get("id") or order_id
        self.logger.info(
            "PayPal order captured",
            order_id=order_id,
            capture_id=capture_id,
            status=body.get("status"),
        )
        return CaptureResultDTO(
            order_id=str(body.get("id") or order_id),
            capture_id=str(capture_id),
            status=str(body.get("status") or "COMPLETED"),
        )

    @staticmethod
    def _capture_id(body: Dict[str, Any]) -> Optional[str]:
        try:
            return body["purchase_units"][0]["payments"]["captures"][0]["id"]
        except (KeyError, IndexError, TypeError):
            return None

    def _access_token(self) -> str:
        with self._token_lock:
            if self._token and time.monotonic() < self._token_expires_at:
                return self._token
            if not self.client_id or not self.client_secret:
                raise PaymentProviderError(
                    "PayPal credentials are not configured", operation="authenticate"
                )
            try:
                response = self.session.post(
                    f"{self.base_url}/v1/oauth2/token",
                    data={"grant_type": "client_credentials"},
                    auth=(self.client_id, self.client_secret),
                    headers={"Accept": "application/json"},
                    timeout=self.timeout,
                )
            except requests.RequestException as exc:
                self.logger.error("PayPal token request failed", error=exc.__class__.__name__)
                raise PaymentProviderError(str(exc), operation="authenticate") from exc
            if response.status_code >= 400:
                message = _provider_message(response)
                self.logger.error(
                    "PayPal token request rejected", status=response.status_code, message=message
                )
                raise PaymentProviderError(
                    message, operation="authenticate", status_code=response.status_code
                )
            try:
                body = response.json()
                token = body["access_token"]
                expires_in = float(body.get("expires_in") or 0)
            except (ValueError, KeyError, TypeError, AttributeError) as exc:
                raise PaymentProviderError(
                    "PayPal token response was malformed", operation="authenticate"
                ) from exc
            self._token = token
            self._token_expires_at = time.monotonic() + max(expires_in - TOKEN_EXPIRY_MARGIN, 0)
            self.logger.debug("PayPal token refreshed", expires_in=expires_in)
            return self._token

    def _call(self, operation: str, method: str, path: str, **kwargs) -> Dict[str, Any]:
        token = self._access_token()
        headers = {
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        try:
            response = self.session.request(
                method,
                f"{self.base_url}{path}",
                headers=headers,
                timeout=self.timeout,
                **kwargs,
            )
        except requests.Timeout as exc:
            self.logger.error("PayPal call timed out", operation=operation, timeout=self.timeout)
            raise PaymentProviderError(
                f"PayPal did not answer within {self.timeout}s", operation=operation
            ) from exc
        except requests.RequestException as exc:
            self.logger.error("PayPal call failed", operation=operation, error=exc.__class__.__name__)
            raise PaymentProviderError(str(exc), operation=operation) from exc
        if response.status_code >= 400:
            message = _provider_message(response)
            self.logger.error(
                "PayPal rejected call",
                operation=operation,
                status=response.status_code,
                message=message,
            )
            if response.status_code == 401:
                # Token revoked or expired early; fetch a fresh one next time.
                self._token = None
            raise PaymentProviderError(
                message, operation=operation, status_code=response.status_code
            )
        try:
            body = response.json()
        except ValueError as exc:
            raise PaymentProviderError(
                "PayPal answered with a non-JSON body", operation=operation
            ) from exc
        if not isinstance(body, dict):
            raise PaymentProviderError("Unexpected PayPal response shape", operation=operation)
        return body
