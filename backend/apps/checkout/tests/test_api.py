from decimal import Decimal
from unittest.mock import patch

from django.urls import reverse
from rest_framework.test import APITestCase

from apps.carts.container import build_cart_service
from apps.catalog.models import Product
from apps.checkout.services import CheckoutService
from apps.checkout.views import CaptureView, PayView

from .fakes import FakePaymentProvider


class CheckoutApiTests(APITestCase):
    @classmethod
    def setUpTestData(cls):
        cls.p = Product.objects.create(name="P", price=Decimal("9.99"), image_url="/img/p.jpg")
        cls.q = Product.objects.create(name="Q", price=Decimal("5.00"), image_url="/img/q.jpg")

    def setUp(self):
        self.provider = FakePaymentProvider()
        service = CheckoutService(provider=self.provider, carts=build_cart_service())
        for view in (PayView, CaptureView):
            patcher = patch.object(view, "service", service)
            patcher.start()
            self.addCleanup(patcher.stop)

    def add(self, product, quantity):
        response = self.client.post(
            reverse("api-cart-items"),
            {"product_id": str(product.id), "quantity": str(quantity)},
        )
        self.assertEqual(response.status_code, 201)

    def test_pay_on_empty_cart(self):
        response = self.client.post(reverse("api-checkout-pay"))
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["error"]["code"], "EMPTY_CART")
        self.assertEqual(self.provider.created, [])

    def test_full_checkout_flow(self):
        self.add(self.p, 2)
        self.add(self.q, 1)

        pay = self.client.post(reverse("api-checkout-pay"))
        self.assertEqual(pay.status_code, 201)
        self.assertEqual(pay.data["amount"], "24.98")
        self.assertEqual(pay.data["currency"], "EUR")
        order_id = pay.data["order_id"]

        capture = self.client.post(
            reverse("api-checkout-capture", kwargs={"order_id": order_id})
        )
        self.assertEqual(capture.status_code, 200)
        self.assertEqual(capture.data["capture_id"], f"CAP-{order_id}")
        self.assertEqual(capture.data["status"], "COMPLETED")

        # Capture alone keeps the cart.
        cart = self.client.get(reverse("api-cart")).data
        self.assertEqual(cart["subtotal"], "24.98")

        self.assertEqual(self.client.post(reverse("api-cart-clear")).status_code, 200)
        self.assertEqual(self.client.post(reverse("api-cart-clear")).status_code, 200)
        self.assertEqual(self.client.get(reverse("api-cart")).data["items"], [])

    def test_provider_failure_returns_generic_500_and_keeps_cart(self):
        self.add(self.p, 1)
        self.provider.fail_create = True
        response = self.client.post(reverse("api-checkout-pay"))
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.data["error"]["code"], "PAYMENT_PROVIDER_ERROR")
        self.assertEqual(response.data["error"]["message"], "Payment could not be processed")
        self.assertEqual(self.client.get(reverse("api-cart")).data["quantity_total"], 1)

    def test_capture_failure_returns_500(self):
        self.provider.fail_capture = True
        response = self.client.post(
            reverse("api-checkout-capture", kwargs={"order_id": "ORDER-9"})
        )
        self.assertEqual(response.status_code, 500)
        self.assertNotIn("ORDER_NOT_APPROVED", str(response.data))

    def test_capture_route_rejects_odd_order_ids(self):
        response = self.client.post("/api/checkout/orders/bad%20id/capture/")
        self.assertEqual(response.status_code, 404)
