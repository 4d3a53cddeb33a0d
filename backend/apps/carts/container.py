from __future__ import annotations

from apps.catalog.container import build_product_service

from .mappers import CartLineItemMapper
from .services import CartService


def build_cart_service() -> CartService:
    return CartService(
        products=build_product_service(),
        line_mapper=CartLineItemMapper(),
    )
