from typing import Any

from apps.common.errors import DomainError


class ProductNotFound(DomainError):
    """Raised when an add-to-cart names a product the catalog does not know."""

    code = "NOT_FOUND"
    default_message = "Product not found"

    def __init__(self, product_id: Any):
        super().__init__(details={"productId": str(product_id)})
        self.product_id = product_id


class InvalidQuantity(DomainError):
    """Raised when a requested quantity is not a positive base-10 integer."""

    code = "VALIDATION_ERROR"
    default_message = "Quantity must be a positive integer"

    def __init__(self, raw_quantity: Any):
        super().__init__(details={"quantity": None if raw_quantity is None else str(raw_quantity)})
        self.raw_quantity = raw_quantity


class SessionPersistError(DomainError):
    """Raised when the session store rejects a cart write; the mutation did not survive."""

    code = "SESSION_PERSIST_ERROR"
    default_message = "Cart could not be saved"


__all__ = ["ProductNotFound", "InvalidQuantity", "SessionPersistError"]
