from decimal import Decimal
from typing import Iterable, List

from .dtos import ProductDTO
from .models import Product

PRICE_QUANT = Decimal("0.01")


def _price_str(value) -> str:
    return str(Decimal(str(value)).quantize(PRICE_QUANT))


class ProductMapper:
    @staticmethod
    def to_dto(product: Product) -> ProductDTO:
        created_at = getattr(product, "created_at", None)
        return ProductDTO(
            id=product.id,
            name=product.name,
            price=_price_str(product.price),
            image_url=product.image_url,
            description=product.description or "",
            created_at=created_at.isoformat() if created_at else "",
        )

    @staticmethod
    def many_to_dto(products: Iterable[Product]) -> List[ProductDTO]:
        return [ProductMapper.to_dto(p) for p in products]
