from __future__ import annotations

from typing import Iterable, Optional, Protocol, Union

from .models import Product


class ProductRepositoryProtocol(Protocol):
    def list(self, **filters) -> Iterable[Product]:
        ...

    def get(self, **filters) -> Optional[Product]:
        ...

    def get_by_public_id(self, product_id: Union[int, str, None]) -> Optional[Product]:
        ...
