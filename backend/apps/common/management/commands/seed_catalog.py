from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction

from apps.catalog.models import Product
from apps.common import get_logger

logger = get_logger(__name__).bind(component="common", layer="command")

# (name, price, image_url, description)
PRODUCTS = [
    (
        "Camiseta básica de algodón",
        Decimal("9.99"),
        "/img/productos/camiseta-basica.jpg",
        "Camiseta de manga corta en algodón orgánico.",
    ),
    (
        "Taza de cerámica",
        Decimal("5.00"),
        "/img/productos/taza.jpg",
        "Taza de 350 ml apta para lavavajillas.",
    ),
    (
        "Sudadera con capucha",
        Decimal("34.90"),
        "/img/productos/sudadera.jpg",
        "Sudadera unisex con bolsillo canguro.",
    ),
    (
        "Gorra bordada",
        Decimal("14.50"),
        "/img/productos/gorra.jpg",
        "Gorra ajustable con logotipo bordado.",
    ),
    (
        "Bolsa de tela",
        Decimal("7.25"),
        "/img/productos/bolsa.jpg",
        "Bolsa reutilizable de algodón con asas largas.",
    ),
    (
        "Cuaderno A5",
        Decimal("4.75"),
        "/img/productos/cuaderno.jpg",
        "Cuaderno de 96 hojas con tapa dura.",
    ),
]


class Command(BaseCommand):
    help = "Seed the product catalog. Safe to run repeatedly: products are matched by name."

    def add_arguments(self, parser):
        parser.add_argument(
            "--reset", action="store_true", help="Delete every product before seeding"
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options["reset"]:
            deleted, _ = Product.objects.all().delete()
            self.stdout.write(f"Deleted {deleted} products.")

        created_count = 0
        updated_count = 0
        for name, price, image_url, description in PRODUCTS:
            _product, created = Product.objects.update_or_create(
                name=name,
                defaults={
                    "price": price,
                    "image_url": image_url,
                    "description": description,
                },
            )
            if created:
                created_count += 1
            else:
                updated_count += 1

        logger.info("Catalog seeded", created=created_count, updated=updated_count)
        self.stdout.write(
            self.style.SUCCESS(
                f"Catalog seeded: {created_count} created, {updated_count} updated."
            )
        )
