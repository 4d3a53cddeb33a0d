import re
from dataclasses import dataclass
from typing import Any

from .errors import InvalidQuantity

_BASE10_INT = re.compile(r"^[+-]?\d+$")


def parse_quantity(raw: Any) -> int:
    """
    Parse a requested quantity the way a form field arrives: a base-10 integer,
    optionally padded with whitespace. Booleans, floats with a fractional part,
    blanks and non-positive values are rejected with ``InvalidQuantity``.
    """
    if isinstance(raw, bool) or raw is None:
        raise InvalidQuantity(raw)
    if isinstance(raw, int):
        value = raw
    elif isinstance(raw, float):
        if not raw.is_integer():
            raise InvalidQuantity(raw)
        value = int(raw)
    else:
        text = str(raw).strip()
        if not _BASE10_INT.match(text):
            raise InvalidQuantity(raw)
        try:
            value = int(text)
        except ValueError:
            # Digit strings past the interpreter's int conversion limit.
            raise InvalidQuantity(raw) from None
    if value <= 0:
        raise InvalidQuantity(raw)
    return value


@dataclass
class AddToCartCommand:
    product_id: str
    quantity: int

    @staticmethod
    def from_raw(product_id: Any, quantity: Any) -> "AddToCartCommand":
        pid = "" if product_id is None else str(product_id).strip()
        return AddToCartCommand(product_id=pid, quantity=parse_quantity(quantity))
