import unittest
from decimal import Decimal

from apps.carts.dtos import Cart, CartLineItem
from apps.carts.errors import SessionPersistError
from apps.carts.stores import CART_SESSION_KEY, SessionCartStore


class FakeSession(dict):
    """Dict-backed stand-in for a Django session with a controllable ``save``."""

    def __init__(self, *args, fail_with=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.session_key = "abcdef0123456789"
        self.fail_with = fail_with
        self.saves = 0

    def save(self):
        if self.fail_with is not None:
            raise self.fail_with
        self.saves += 1


class KeylessSession(FakeSession):
    """A brand-new session: the backend assigns its key on the first save."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.session_key = None

    def save(self):
        super().save()
        self.session_key = self.session_key or "fedcba9876543210"


def sample_cart():
    return Cart(items=(CartLineItem("1", "A", Decimal("9.99"), "/a.jpg", 2),))


class SessionCartStoreTests(unittest.TestCase):
    def test_load_from_fresh_session_is_empty(self):
        store = SessionCartStore(FakeSession())
        self.assertTrue(store.load().is_empty)

    def test_save_writes_through(self):
        session = FakeSession()
        store = SessionCartStore(session)
        store.save(sample_cart())
        self.assertEqual(session.saves, 1)
        self.assertEqual(session[CART_SESSION_KEY][0]["unit_price"], "9.99")
        self.assertEqual(store.load(), sample_cart())

    def test_failed_save_raises_and_restores_previous_value(self):
        previous = [
            {"product_id": "9", "name": "Z", "unit_price": "1.00", "image_ref": "", "quantity": 1}
        ]
        session = FakeSession({CART_SESSION_KEY: previous}, fail_with=ConnectionError("redis down"))
        store = SessionCartStore(session)
        with self.assertRaises(SessionPersistError) as ctx:
            store.save(sample_cart())
        self.assertEqual(ctx.exception.code, "SESSION_PERSIST_ERROR")
        self.assertIsInstance(ctx.exception.__cause__, ConnectionError)
        self.assertEqual(session[CART_SESSION_KEY], previous)

    def test_failed_first_save_leaves_no_cart_key(self):
        session = FakeSession(fail_with=RuntimeError("boom"))
        with self.assertRaises(SessionPersistError):
            SessionCartStore(session).save(sample_cart())
        self.assertNotIn(CART_SESSION_KEY, session)

    def test_persist_log_carries_key_assigned_by_first_save(self):
        session = KeylessSession()
        store = SessionCartStore(session)
        with self.assertLogs("apps.carts.stores", level="DEBUG") as captured:
            store.save(sample_cart())
        self.assertIn("Cart persisted", captured.output[-1])
        self.assertIn("session=fedcba98", captured.output[-1])
