from typing import Optional, Union

from apps.common.repository import ReadOnlyRepository
from .models import Product


class ProductRepository(ReadOnlyRepository[Product]):
    def __init__(self):
        super().__init__(Product)

    def list(self, **filters):  # type: ignore[override]
        """Products newest first, matching the storefront listing order."""
        return self.model.objects.filter(**filters).order_by("-created_at", "-id")

    def get_by_public_id(self, product_id: Union[int, str, None]) -> Optional[Product]:
        """
        Resolve an opaque identifier coming from a route or form.
        Anything that is not a positive integer cannot name a product.
        """
        try:
            pk = int(str(product_id).strip())
        except (TypeError, ValueError):
            return None
        if pk <= 0:
            return None
        return self.get(id=pk)
