"""Shared test setup: in-memory SQLite, a test signing secret, and an API test case base.

Import this module before anything from shop_api so the environment is in place
when settings are first loaded.
"""

import os
import unittest
from unittest.mock import patch

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "unit-test-secret-that-is-long-enough-0123456789"
os.environ["APP_ENV"] = "dev"
os.environ.pop("CORS_ORIGINS", None)

from fastapi.testclient import TestClient  # noqa: E402

from shop_api.core.database import SessionLocal, engine  # noqa: E402
from shop_api.main import app  # noqa: E402
from shop_api.models import Base, User  # noqa: E402
from shop_api.services.users import create_user  # noqa: E402

PASSWORD = "password123"


class ApiTestCase(unittest.TestCase):
    """Fresh schema, client and rate-limit state per test; bcrypt cost lowered to keep the suite fast."""

    def setUp(self) -> None:
        rounds = patch("shop_api.core.security.BCRYPT_ROUNDS", 4)
        rounds.start()
        self.addCleanup(rounds.stop)
        Base.metadata.create_all(engine)
        self.addCleanup(Base.metadata.drop_all, engine)
        for limiter in (app.state.api_limiter, app.state.login_limiter):
            if limiter is not None:
                limiter.clear()
        self.client = TestClient(app)
        self.addCleanup(self.client.close)

    def register(self, email: str, name: str = "Ann", password: str = PASSWORD):
        return self.client.post(
            "/api/auth/register",
            json={"email": email, "name": name, "password": password},
        )

    def login(self, email: str, password: str = PASSWORD) -> str:
        response = self.client.post(
            "/api/auth/login", json={"email": email, "password": password}
        )
        self.assertEqual(response.status_code, 200, response.text)
        return response.json()["token"]

    def create_account(self, email: str, role: str = "user", name: str = "Test User") -> int:
        """Insert a user directly (the only way to get an admin) and return its id."""
        db = SessionLocal()
        try:
            return create_user(db, email, name, PASSWORD, role=role).id
        finally:
            db.close()

    def fetch_user(self, user_id: int) -> User | None:
        db = SessionLocal()
        try:
            return db.get(User, user_id)
        finally:
            db.close()

    @staticmethod
    def bearer(token: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {token}"}
