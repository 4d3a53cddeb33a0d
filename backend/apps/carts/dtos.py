from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Tuple


@dataclass(frozen=True)
class CartLineItem:
    """Snapshot of a product at add time; later catalog price changes do not reach it."""

    product_id: str
    name: str
    unit_price: Decimal
    image_ref: str
    quantity: int

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class Cart:
    items: Tuple[CartLineItem, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.items

    def find(self, product_id: str) -> Optional[CartLineItem]:
        for item in self.items:
            if item.product_id == product_id:
                return item
        return None

