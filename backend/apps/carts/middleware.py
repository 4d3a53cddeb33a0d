from typing import Optional

from django.conf import settings
from django.http import JsonResponse

from apps.common import get_logger
from .locks import SessionLockManager, SessionLockTimeout

logger = get_logger(__name__).bind(component="carts", layer="middleware")


class SessionSerializationMiddleware:
    """
    Runs requests that share a session cookie one at a time.

    Must sit above ``SessionMiddleware`` so the session is loaded, mutated and
    written back while the lock is held; otherwise a concurrent request could
    save a stale copy over a fresh cart. Requests without a cookie start a new
    session that no other request can know about, so they skip the lock.
    """

    def __init__(self, get_response, lock_manager: Optional[SessionLockManager] = None):
        self.get_response = get_response
        self.lock_manager = lock_manager or SessionLockManager()

    def __call__(self, request):
        session_key = request.COOKIES.get(settings.SESSION_COOKIE_NAME)
        if not session_key:
            return self.get_response(request)
        try:
            with self.lock_manager.hold(session_key):
                return self.get_response(request)
        except SessionLockTimeout:
            logger.warning(
                "Request rejected: session busy",
                method=request.method,
                path=request.path,
            )
            return JsonResponse(
                {
                    "error": {
                        "code": "SERVICE_UNAVAILABLE",
                        "message": "Another request for this session is still running",
                        "status": 503,
                    }
                },
                status=503,
                headers={"Retry-After": "1"},
            )
