from decimal import Decimal
from urllib.parse import urlencode

from django.conf import settings
from django.urls import reverse
from rest_framework.test import APITestCase

from apps.carts.stores import CART_SESSION_KEY
from apps.catalog.models import Product


class CartApiTests(APITestCase):
    @classmethod
    def setUpTestData(cls):
        cls.shirt = Product.objects.create(
            name="Camiseta", price=Decimal("9.99"), image_url="/img/camiseta.jpg"
        )
        cls.mug = Product.objects.create(
            name="Taza", price=Decimal("5.00"), image_url="/img/taza.jpg"
        )
        cls.cap = Product.objects.create(
            name="Gorra", price=Decimal("10.00"), image_url="/img/gorra.jpg"
        )

    def add(self, product_id, quantity):
        return self.client.post(
            reverse("api-cart-items"),
            {"product_id": str(product_id), "quantity": str(quantity)},
            format="json",
        )

    def test_new_visitor_sees_empty_cart(self):
        response = self.client.get(reverse("api-cart"))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["items"], [])
        self.assertEqual(response.data["quantity_total"], 0)
        self.assertEqual(response.data["subtotal"], "0.00")

    def test_add_items_and_view_cart(self):
        first = self.add(self.shirt.id, 2)
        self.assertEqual(first.status_code, 201)
        self.assertIn(settings.SESSION_COOKIE_NAME, first.cookies)
        self.add(self.mug.id, 1)

        response = self.client.get(reverse("api-cart"))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["subtotal"], "24.98")
        self.assertEqual(response.data["quantity_total"], 3)
        self.assertEqual(
            [item["product_id"] for item in response.data["items"]],
            [str(self.shirt.id), str(self.mug.id)],
        )

    def test_adding_same_product_merges_line(self):
        self.add(self.cap.id, 1)
        response = self.add(self.cap.id, 3)
        self.assertEqual(response.status_code, 201)
        self.assertEqual(len(response.data["items"]), 1)
        self.assertEqual(response.data["items"][0]["quantity"], 4)
        self.assertEqual(response.data["subtotal"], "40.00")

    def test_price_snapshot_survives_catalog_change(self):
        self.add(self.shirt.id, 1)
        Product.objects.filter(pk=self.shirt.pk).update(price=Decimal("99.00"))
        response = self.client.get(reverse("api-cart"))
        self.assertEqual(response.data["items"][0]["unit_price"], "9.99")

    def test_unknown_product_is_404_and_cart_unchanged(self):
        self.add(self.shirt.id, 1)
        for product_id in ("999999", "not-an-id"):
            with self.subTest(product_id=product_id):
                response = self.add(product_id, 1)
                self.assertEqual(response.status_code, 404)
                self.assertEqual(response.data["error"]["code"], "NOT_FOUND")
        cart = self.client.get(reverse("api-cart")).data
        self.assertEqual(cart["quantity_total"], 1)

    def test_invalid_quantity_is_rejected(self):
        for quantity in ("abc", "0", "-3", "1.5", "", "1" * 5000):
            with self.subTest(quantity=quantity):
                response = self.add(self.shirt.id, quantity)
                self.assertEqual(response.status_code, 400)
                self.assertEqual(response.data["error"]["code"], "VALIDATION_ERROR")
        self.assertEqual(self.client.get(reverse("api-cart")).data["items"], [])

    def test_form_encoded_add(self):
        response = self.client.post(
            reverse("api-cart-items"),
            urlencode({"product_id": str(self.mug.id), "quantity": "2"}),
            content_type="application/x-www-form-urlencoded",
        )
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data["quantity_total"], 2)

    def test_summary_badge(self):
        self.add(self.shirt.id, 2)
        self.add(self.mug.id, 3)
        response = self.client.get(reverse("api-cart-summary"))
        self.assertEqual(response.data, {"quantity_total": 5, "subtotal": "34.98"})

    def test_clear_twice_is_same_as_once(self):
        self.add(self.shirt.id, 2)
        first = self.client.post(reverse("api-cart-clear"))
        second = self.client.delete(reverse("api-cart"))
        self.assertEqual(first.status_code, 200)
        self.assertEqual(second.status_code, 200)
        self.assertEqual(first.data, second.data)
        self.assertEqual(self.client.get(reverse("api-cart")).data["items"], [])

    def test_carts_are_isolated_between_sessions(self):
        self.add(self.shirt.id, 1)
        other = self.client_class()
        other.post(
            reverse("api-cart-items"),
            {"product_id": str(self.mug.id), "quantity": "5"},
            format="json",
        )
        mine = self.client.get(reverse("api-cart")).data
        theirs = other.get(reverse("api-cart")).data
        self.assertEqual(mine["quantity_total"], 1)
        self.assertEqual(theirs["quantity_total"], 5)

    def test_expired_session_reads_as_empty_cart(self):
        self.add(self.shirt.id, 1)
        self.client.session.flush()
        response = self.client.get(reverse("api-cart"))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["items"], [])

    def test_cart_is_stored_under_session_key(self):
        self.add(self.shirt.id, 2)
        stored = self.client.session[CART_SESSION_KEY]
        self.assertEqual(
            stored,
            [
                {
                    "product_id": str(self.shirt.id),
                    "name": "Camiseta",
                    "unit_price": "9.99",
                    "image_ref": "/img/camiseta.jpg",
                    "quantity": 2,
                }
            ],
        )
