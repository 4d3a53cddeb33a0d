from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable, List, Optional

from apps.catalog.dtos import ProductDTO
from apps.common import get_logger
from .dtos import Cart, CartLineItem
from .operations import add_line_item

logger = get_logger(__name__).bind(component="carts", layer="mapper")


class CartLineItemMapper:
    @staticmethod
    def from_product(product: ProductDTO, quantity: int) -> CartLineItem:
        return CartLineItem(
            product_id=str(product.id),
            name=product.name,
            unit_price=Decimal(str(product.price)),
            image_ref=product.image_url,
            quantity=quantity,
        )

    @staticmethod
    def to_session(item: CartLineItem) -> Dict[str, Any]:
        return {
            "product_id": item.product_id,
            "name": item.name,
            "unit_price": format(item.unit_price, "f"),
            "image_ref": item.image_ref,
            "quantity": item.quantity,
        }

    @staticmethod
    def from_session(raw: Dict[str, Any]) -> Optional[CartLineItem]:
        try:
            item = CartLineItem(
                product_id=str(raw["product_id"]),
                name=str(raw["name"]),
                unit_price=Decimal(str(raw["unit_price"])),
                image_ref=str(raw.get("image_ref") or ""),
                quantity=int(raw["quantity"]),
            )
        except (KeyError, TypeError, ValueError, InvalidOperation) as exc:
            logger.warning("Dropping unreadable cart line", error=exc.__class__.__name__)
            return None
        if item.quantity <= 0 or not item.unit_price.is_finite() or item.unit_price < 0:
            logger.warning("Dropping out-of-range cart line", product_id=item.product_id)
            return None
        return item


class CartMapper:
    """Translates between ``Cart`` values and the JSON list kept in the session."""

    def __init__(self, line_mapper: Optional[CartLineItemMapper] = None) -> None:
        self.line_mapper = line_mapper or CartLineItemMapper()

    def to_session(self, cart: Cart) -> List[Dict[str, Any]]:
        return [self.line_mapper.to_session(item) for item in cart.items]

    def from_session(self, raw: Optional[Iterable[Any]]) -> Cart:
        cart = Cart()
        if not isinstance(raw, (list, tuple)):
            return cart
        for entry in raw:
            if not isinstance(entry, dict):
                continue
            item = self.line_mapper.from_session(entry)
            if item is not None:
                # Folding through the merge rule keeps one line per product.
                cart = add_line_item(cart, item)
        return cart
