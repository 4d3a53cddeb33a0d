from typing import Any, Optional


class DomainError(Exception):
    """
    Base class for failures raised by the cart and checkout services.

    Subclasses pin a machine readable ``code`` and a default ``message``; the API
    layer turns them into the standard error envelope.
    """

    code = "DOMAIN_ERROR"
    default_message = "Request could not be completed"

    def __init__(self, message: Optional[str] = None, *, details: Optional[Any] = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


__all__ = ["DomainError"]
