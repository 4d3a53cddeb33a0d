from __future__ import annotations

from typing import Optional, Type, Union

from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response

from apps.common import get_logger
from .dtos import ProductDTO
from .mappers import ProductMapper
from .protocols import ProductRepositoryProtocol

logger = get_logger(__name__).bind(component="catalog", layer="service")


class ProductService:
    def __init__(self, products: ProductRepositoryProtocol):
        self.products = products
        self.logger = logger.bind(service="ProductService")

    def list_products_paginated(
        self,
        request,
        *,
        paginator_class: Optional[Type[PageNumberPagination]] = None,
        serializer_class=None,
        view=None,
    ):
        paginator = (paginator_class or PageNumberPagination)()
        queryset = self.products.list()
        page = paginator.paginate_queryset(queryset, request, view=view)
        data_source = page if page is not None else queryset
        dtos = ProductMapper.many_to_dto(data_source)
        if serializer_class is None:
            from .serializers import ProductReadSerializer  # Avoid circular import

            serializer_class = ProductReadSerializer
        serializer = serializer_class(dtos, many=True)
        if page is None:
            return Response(serializer.data)
        return paginator.get_paginated_response(serializer.data)

    def get_product(self, product_id: int) -> Optional[ProductDTO]:
        self.logger.debug("Fetching product", product_id=product_id)
        product = self.products.get(id=product_id)
        if not product:
            self.logger.info("Product not found", product_id=product_id)
        return ProductMapper.to_dto(product) if product else None

    def find_product(self, product_id: Union[int, str, None]) -> Optional[ProductDTO]:
        """Catalog lookup used by the cart; opaque ids that do not resolve yield None."""
        product = self.products.get_by_public_id(product_id)
        if not product:
            self.logger.debug("Catalog lookup missed", product_id=product_id)
            return None
        return ProductMapper.to_dto(product)
