"""Tests for shop_api.core.ratelimit: the sliding window, login lockout and the per-minute API budget."""

from support import PASSWORD, ApiTestCase

import unittest
from unittest.mock import patch

from fastapi.testclient import TestClient

from shop_api.core.config import get_settings
from shop_api.core.ratelimit import RateLimiter, build_limiters
from shop_api.main import create_app


class TestRateLimiter(unittest.TestCase):
    def setUp(self) -> None:
        clock = patch("shop_api.core.ratelimit.time")
        self.clock = clock.start()
        self.addCleanup(clock.stop)
        self.clock.monotonic.return_value = 1000.0

    def test_blocks_after_max_attempts_until_window_passes(self) -> None:
        limiter = RateLimiter(max_attempts=3, window_seconds=60)
        for _ in range(3):
            self.assertIsNone(limiter.retry_after("10.0.0.1"))
            limiter.record("10.0.0.1")
        self.assertEqual(limiter.retry_after("10.0.0.1"), 61)

        self.clock.monotonic.return_value = 1030.0
        self.assertEqual(limiter.retry_after("10.0.0.1"), 31)

        self.clock.monotonic.return_value = 1061.0
        self.assertIsNone(limiter.retry_after("10.0.0.1"))

    def test_keys_are_independent(self) -> None:
        limiter = RateLimiter(max_attempts=1, window_seconds=60)
        limiter.record("10.0.0.1")
        self.assertIsNotNone(limiter.retry_after("10.0.0.1"))
        self.assertIsNone(limiter.retry_after("10.0.0.2"))

    def test_hit_counts_only_allowed_requests(self) -> None:
        limiter = RateLimiter(max_attempts=2, window_seconds=60)
        self.assertIsNone(limiter.hit("k"))
        self.assertIsNone(limiter.hit("k"))
        self.assertEqual(limiter.hit("k"), 61)
        self.clock.monotonic.return_value = 1061.0
        self.assertIsNone(limiter.hit("k"))

    def test_reset_and_clear(self) -> None:
        limiter = RateLimiter(max_attempts=1, window_seconds=60)
        limiter.record("a")
        limiter.record("b")
        limiter.reset("a")
        self.assertIsNone(limiter.retry_after("a"))
        self.assertIsNotNone(limiter.retry_after("b"))
        limiter.clear()
        self.assertIsNone(limiter.retry_after("b"))

    def test_disabled_settings_build_no_limiters(self) -> None:
        settings = get_settings().model_copy(update={"RATE_LIMIT_ENABLED": False})
        self.assertEqual(build_limiters(settings), (None, None))


class TestLoginLockout(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.register("a@x.com")

    def _login(self, password: str):
        return self.client.post("/api/auth/login", json={"email": "a@x.com", "password": password})

    def test_locked_out_after_five_failures_even_with_right_password(self) -> None:
        for _ in range(5):
            self.assertEqual(self._login("wrong-password").status_code, 401)
        response = self._login(PASSWORD)
        self.assertEqual(response.status_code, 429)
        self.assertEqual(response.json(), {"error": "Too many failed login attempts, try again later"})
        self.assertGreater(int(response.headers["retry-after"]), 0)

    def test_unknown_emails_count_as_failures(self) -> None:
        for i in range(5):
            response = self.client.post(
                "/api/auth/login", json={"email": f"nobody{i}@x.com", "password": PASSWORD}
            )
            self.assertEqual(response.status_code, 401)
        self.assertEqual(self._login(PASSWORD).status_code, 429)

    def test_successful_login_clears_failures(self) -> None:
        for _ in range(4):
            self._login("wrong-password")
        self.assertEqual(self._login(PASSWORD).status_code, 200)
        for _ in range(4):
            self.assertEqual(self._login("wrong-password").status_code, 401)

    def test_disabled_limits_never_lock_out(self) -> None:
        app = create_app(get_settings().model_copy(update={"RATE_LIMIT_ENABLED": False}))
        client = TestClient(app)
        self.addCleanup(client.close)
        for _ in range(8):
            response = client.post(
                "/api/auth/login", json={"email": "a@x.com", "password": "wrong-password"}
            )
            self.assertEqual(response.status_code, 401)


class TestApiBudget(ApiTestCase):
    def test_requests_over_budget_get_429(self) -> None:
        app = create_app(get_settings().model_copy(update={"RATE_LIMIT_PER_MINUTE": 3}))
        client = TestClient(app)
        self.addCleanup(client.close)
        for _ in range(3):
            self.assertEqual(client.get("/api").status_code, 200)
        response = client.get("/api")
        self.assertEqual(response.status_code, 429)
        self.assertEqual(response.json(), {"error": "Too many requests, try again later"})
        self.assertIn("retry-after", response.headers)
        self.assertEqual(response.headers["x-content-type-options"], "nosniff")

    def test_budget_applies_before_authentication(self) -> None:
        app = create_app(get_settings().model_copy(update={"RATE_LIMIT_PER_MINUTE": 1}))
        client = TestClient(app)
        self.addCleanup(client.close)
        self.assertEqual(client.get("/api/users/me").status_code, 401)
        self.assertEqual(client.get("/api/users/me").status_code, 429)


if __name__ == "__main__":
    unittest.main()
