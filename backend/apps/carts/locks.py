from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator, Optional
from weakref import WeakValueDictionary

from django.conf import settings
from django.core.cache import caches
from redis.exceptions import LockError

from apps.common import get_logger, session_ref

logger = get_logger(__name__).bind(component="carts", layer="lock")

LOCK_KEY_PREFIX = "cart-session-lock"


class SessionLockTimeout(Exception):
    """Another request on the same session held the lock for longer than we wait."""


class _LocalLock:
    def __init__(self) -> None:
        self._lock = threading.Lock()

    def acquire(self, wait: float) -> bool:
        return self._lock.acquire(timeout=wait)

    def release(self) -> None:
        self._lock.release()


class LocalLockRegistry:
    """
    Process-local lock per session key. Entries disappear once no request holds
    a reference, so the registry does not grow with the number of sessions seen.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: "WeakValueDictionary[str, _LocalLock]" = WeakValueDictionary()

    def lock_for(self, session_key: str) -> _LocalLock:
        with self._guard:
            lock = self._locks.get(session_key)
            if lock is None:
                lock = _LocalLock()
                self._locks[session_key] = lock
            return lock

    def __len__(self) -> int:
        return len(self._locks)


class _CacheLock:
    """Adapter over the redis lock exposed by django-redis ``cache.lock``."""

    def __init__(self, redis_lock) -> None:
        self._lock = redis_lock

    def acquire(self, wait: float) -> bool:
        return bool(self._lock.acquire(blocking=True, blocking_timeout=wait))

    def release(self) -> None:
        try:
            self._lock.release()
        except LockError:
            # The lock outlived its TTL and may already belong to another request.
            logger.warning("Session lock expired before release")


_local_registry = LocalLockRegistry()


class SessionLockManager:
    """Serializes work on one session; independent sessions never wait on each other."""

    def __init__(
        self,
        cache_alias: Optional[str] = None,
        wait_timeout: Optional[float] = None,
        lock_ttl: Optional[float] = None,
        registry: Optional[LocalLockRegistry] = None,
    ) -> None:
        self.cache_alias = cache_alias or getattr(settings, "SESSION_CACHE_ALIAS", "default")
        self.wait_timeout = float(
            wait_timeout
            if wait_timeout is not None
            else getattr(settings, "CART_SESSION_LOCK_TIMEOUT", 10)
        )
        self.lock_ttl = float(
            lock_ttl if lock_ttl is not None else getattr(settings, "CART_SESSION_LOCK_TTL", 30)
        )
        self.registry = registry or _local_registry

    def _lock_for(self, session_key: str):
        cache = caches[self.cache_alias]
        factory = getattr(cache, "lock", None)
        if callable(factory):
            return _CacheLock(
                factory(f"{LOCK_KEY_PREFIX}:{session_key}", timeout=self.lock_ttl)
            )
        return self.registry.lock_for(session_key)

    @contextmanager
    def hold(self, session_key: str) -> Iterator[None]:
        lock = self._lock_for(session_key)
        if not lock.acquire(self.wait_timeout):
            logger.warning(
                "Timed out waiting for session lock",
                session=session_ref(session_key),
                wait_timeout=self.wait_timeout,
            )
            raise SessionLockTimeout(session_key)
        try:
            yield
        finally:
            lock.release()
