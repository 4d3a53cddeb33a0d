from __future__ import annotations

from decimal import Decimal
from typing import Any, Optional

from apps.common import get_logger
from . import operations
from .commands import AddToCartCommand
from .dtos import Cart
from .errors import ProductNotFound
from .mappers import CartLineItemMapper
from .protocols import CartStoreProtocol, ProductLookupProtocol

logger = get_logger(__name__).bind(component="carts", layer="service")


class CartService:
    """
    Cart use cases over an injected store.

    Every mutation loads the current cart, derives a new ``Cart`` value and saves
    it before returning; a failed save propagates as ``SessionPersistError``.
    """

    def __init__(self, products: ProductLookupProtocol, line_mapper: Optional[CartLineItemMapper] = None):
        self.products = products
        self.line_mapper = line_mapper or CartLineItemMapper()
        self.logger = logger.bind(service="CartService")

    def add_to_cart(self, store: CartStoreProtocol, product_id: Any, quantity: Any) -> Cart:
        command = AddToCartCommand.from_raw(product_id, quantity)
        product = self.products.find_product(command.product_id)
        if product is None:
            self.logger.info("Add to cart for unknown product", product_id=command.product_id)
            raise ProductNotFound(command.product_id)
        cart = store.load()
        updated = operations.add_line_item(
            cart, self.line_mapper.from_product(product, command.quantity)
        )
        store.save(updated)
        self.logger.debug(
            "Cart item added",
            product_id=command.product_id,
            quantity=command.quantity,
            line_quantity=updated.find(command.product_id).quantity,
            lines=len(updated.items),
        )
        return updated

    def view_cart(self, store: CartStoreProtocol) -> Cart:
        return store.load()

    def clear_cart(self, store: CartStoreProtocol) -> Cart:
        cart = Cart()
        store.save(cart)
        self.logger.debug("Cart cleared")
        return cart

    @staticmethod
    def quantity_total(cart: Cart) -> int:
        return operations.quantity_total(cart)

    @staticmethod
    def subtotal(cart: Cart) -> Decimal:
        return operations.subtotal(cart)
