from decimal import Decimal
from io import StringIO

from django.core.management import call_command
from django.test import TestCase

from apps.catalog.models import Product
from apps.common.management.commands.seed_catalog import PRODUCTS


class SeedCatalogCommandTests(TestCase):
    def test_seed_is_idempotent(self):
        call_command("seed_catalog", stdout=StringIO())
        call_command("seed_catalog", stdout=StringIO())
        self.assertEqual(Product.objects.count(), len(PRODUCTS))

    def test_seed_restores_edited_prices(self):
        call_command("seed_catalog", stdout=StringIO())
        name, price, _image, _desc = PRODUCTS[0]
        Product.objects.filter(name=name).update(price=Decimal("0.01"))
        out = StringIO()
        call_command("seed_catalog", stdout=out)
        self.assertEqual(Product.objects.get(name=name).price, price)
        self.assertIn(f"0 created, {len(PRODUCTS)} updated", out.getvalue())

    def test_reset_removes_unknown_products(self):
        Product.objects.create(name="Descatalogado", price=Decimal("3.00"), image_url="/x.jpg")
        call_command("seed_catalog", "--reset", stdout=StringIO())
        self.assertFalse(Product.objects.filter(name="Descatalogado").exists())
        self.assertEqual(Product.objects.count(), len(PRODUCTS))
