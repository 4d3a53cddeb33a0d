"""
Pure cart arithmetic.

Nothing here touches the session or the catalog: every function takes a ``Cart``
value and returns a new value or a number, so the merge and total rules can be
exercised without Django.
"""
from dataclasses import replace
from decimal import ROUND_HALF_UP, Decimal

from .dtos import Cart, CartLineItem

CENT = Decimal("0.01")


def add_line_item(cart: Cart, item: CartLineItem) -> Cart:
    """
    Merge ``item`` into ``cart``.

    An existing line for the same product keeps its snapshot and grows by
    ``item.quantity``; otherwise ``item`` is appended.
    """
    existing = cart.find(item.product_id)
    if existing is None:
        return Cart(items=cart.items + (item,))
    merged = replace(existing, quantity=existing.quantity + item.quantity)
    return Cart(
        items=tuple(merged if line is existing else line for line in cart.items)
    )


def quantity_total(cart: Cart) -> int:
    return sum(item.quantity for item in cart.items)


def subtotal(cart: Cart) -> Decimal:
    total = sum((item.line_total for item in cart.items), Decimal("0"))
    return total.quantize(CENT, rounding=ROUND_HALF_UP)


def format_amount(amount: Decimal) -> str:
    """Currency string with exactly two decimals, e.g. ``Decimal("24.980") -> "24.98"``."""
    return format(amount.quantize(CENT, rounding=ROUND_HALF_UP), "f")
