from __future__ import annotations

from typing import Optional

from django.contrib.sessions.backends.base import SessionBase

from apps.common import get_logger, session_ref
from .dtos import Cart
from .errors import SessionPersistError
from .mappers import CartMapper

CART_SESSION_KEY = "cart"

logger = get_logger(__name__).bind(component="carts", layer="store")

_MISSING = object()


class SessionCartStore:
    """
    Keeps the cart inside the Django session under ``CART_SESSION_KEY``.

    ``save`` writes through to the session backend immediately, so a failing
    backend surfaces as ``SessionPersistError`` before the response is built.
    An expired or unknown session simply loads as an empty cart.
    """

    def __init__(self, session: SessionBase, mapper: Optional[CartMapper] = None):
        self.session = session
        self.mapper = mapper or CartMapper()

    @property
    def logger(self):
        # A new session only gets its key on the first save.
        return logger.bind(session=session_ref(self.session.session_key))

    def load(self) -> Cart:
        return self.mapper.from_session(self.session.get(CART_SESSION_KEY))

    def save(self, cart: Cart) -> None:
        previous = self.session.get(CART_SESSION_KEY, _MISSING)
        self.session[CART_SESSION_KEY] = self.mapper.to_session(cart)
        try:
            self.session.save()
        except Exception as exc:
            # Backends raise their own error types (DatabaseError, RedisError, UpdateError...).
            self._restore(previous)
            self.logger.warning(
                "Session write failed", error=exc.__class__.__name__, lines=len(cart.items)
            )
            raise SessionPersistError(str(exc) or None) from exc
        self.logger.debug("Cart persisted", lines=len(cart.items))

    def _restore(self, previous) -> None:
        if previous is _MISSING:
            self.session.pop(CART_SESSION_KEY, None)
        else:
            self.session[CART_SESSION_KEY] = previous
