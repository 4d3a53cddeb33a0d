from __future__ import annotations

from typing import Any, Optional, Protocol, TYPE_CHECKING

from .dtos import Cart

if TYPE_CHECKING:
    from apps.catalog.dtos import ProductDTO


class CartStoreProtocol(Protocol):
    """Persistence capability for one session's cart."""

    def load(self) -> Cart:
        ...

    def save(self, cart: Cart) -> None:
        ...


class ProductLookupProtocol(Protocol):
    def find_product(self, product_id: Any) -> Optional["ProductDTO"]:
        ...
