import json
from contextlib import contextmanager
from unittest.mock import Mock

from django.conf import settings
from django.http import HttpResponse
from django.test import RequestFactory, SimpleTestCase

from apps.carts.locks import SessionLockTimeout
from apps.carts.middleware import SessionSerializationMiddleware


class RecordingLockManager:
    def __init__(self, fail=False):
        self.fail = fail
        self.events = []

    @contextmanager
    def hold(self, session_key):
        if self.fail:
            raise SessionLockTimeout(session_key)
        self.events.append(("acquire", session_key))
        try:
            yield
        finally:
            self.events.append(("release", session_key))


class SessionSerializationMiddlewareTests(SimpleTestCase):
    def setUp(self):
        self.factory = RequestFactory()

    def test_request_without_cookie_is_not_locked(self):
        locks = RecordingLockManager()
        get_response = Mock(return_value=HttpResponse("ok"))
        middleware = SessionSerializationMiddleware(get_response, lock_manager=locks)
        response = middleware(self.factory.get("/api/cart/"))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(locks.events, [])

    def test_request_with_cookie_runs_inside_lock(self):
        locks = RecordingLockManager()

        def get_response(request):
            locks.events.append(("view", None))
            return HttpResponse("ok")

        middleware = SessionSerializationMiddleware(get_response, lock_manager=locks)
        request = self.factory.get("/api/cart/")
        request.COOKIES[settings.SESSION_COOKIE_NAME] = "k" * 32
        middleware(request)
        self.assertEqual(
            locks.events,
            [("acquire", "k" * 32), ("view", None), ("release", "k" * 32)],
        )

    def test_busy_session_returns_503_envelope(self):
        get_response = Mock()
        middleware = SessionSerializationMiddleware(
            get_response, lock_manager=RecordingLockManager(fail=True)
        )
        request = self.factory.post("/api/cart/items/")
        request.COOKIES[settings.SESSION_COOKIE_NAME] = "busy-session"
        response = middleware(request)
        self.assertEqual(response.status_code, 503)
        self.assertEqual(response["Retry-After"], "1")
        payload = json.loads(response.content)
        self.assertEqual(payload["error"]["code"], "SERVICE_UNAVAILABLE")
        get_response.assert_not_called()
