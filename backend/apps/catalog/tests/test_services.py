import unittest
from decimal import Decimal

from apps.catalog.services import ProductService


class StubProduct:
    def __init__(self, product_id, name="Producto", price=Decimal("9.99")):
        self.id = product_id
        self.name = name
        self.price = price
        self.image_url = f"/img/{product_id}.jpg"
        self.description = ""
        self.created_at = None


class FakeProductRepository:
    def __init__(self, *products):
        self.products = {p.id: p for p in products}

    def list(self, **filters):
        return sorted(self.products.values(), key=lambda p: -p.id)

    def get(self, **filters):
        return self.products.get(filters.get("id"))

    def get_by_public_id(self, product_id):
        try:
            return self.products.get(int(str(product_id).strip()))
        except ValueError:
            return None


class ProductServiceTests(unittest.TestCase):
    def setUp(self):
        self.service = ProductService(
            FakeProductRepository(StubProduct(1, "A"), StubProduct(2, "B"))
        )

    def test_get_product(self):
        self.assertEqual(self.service.get_product(1).name, "A")
        self.assertIsNone(self.service.get_product(99))

    def test_find_product_accepts_opaque_ids(self):
        self.assertEqual(self.service.find_product("2").name, "B")
        self.assertEqual(self.service.find_product(" 1 ").price, "9.99")
        self.assertIsNone(self.service.find_product("abc"))
        self.assertIsNone(self.service.find_product("42"))
