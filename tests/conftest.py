"""
conftest.py -- Shared test fixtures for the InnovateHub backend

Each test gets its own SQLite file under tmp_path and an app built around a
Config pointing at it. Stripe is never called for real; payment tests patch
stripe.PaymentIntent.create.

Called by: all test files via pytest autodiscovery
Depends on: innovatehub.api.server (create_app), innovatehub.auth.security
"""

from typing import Any, Dict

import pytest
from fastapi.testclient import TestClient

from innovatehub.api.server import create_app
from innovatehub.auth.security import create_access_token
from innovatehub.config import Config
from innovatehub.db import connect, init_db
from innovatehub.documents import Collection

TEST_SECRET = "test-secret"


@pytest.fixture()
def cfg(tmp_path) -> Config:
    return Config(
        DB_DSN=str(tmp_path / "innovatehub-test.sqlite"),
        ACCESS_TOKEN_SECRET=TEST_SECRET,
        ACCESS_TOKEN_EXPIRE_MINUTES=60,
        BOOTSTRAP_ADMIN_EMAIL=None,
        STRIPE_SECRET_KEY="sk_test_dummy",
        PAYMENT_CURRENCY="usd",
        CORS_ALLOW_ORIGINS="*",
    )


@pytest.fixture()
def client(cfg: Config) -> TestClient:
    """TestClient with startup hooks run (schema created)."""
    with TestClient(create_app(cfg)) as c:
        yield c


@pytest.fixture()
def lenient_client(cfg: Config) -> TestClient:
    """TestClient that turns unhandled server errors into 500 responses."""
    with TestClient(create_app(cfg), raise_server_exceptions=False) as c:
        yield c


@pytest.fixture()
def db(cfg: Config):
    """An open connection on the test database (schema ensured)."""
    init_db(cfg.DB_DSN)
    with connect(cfg.DB_DSN) as conn:
        yield conn


# ── Helpers ──────────────────────────────────────────────────────────


def bearer(email: str, secret: str = TEST_SECRET, **extra: Any) -> Dict[str, str]:
    token = create_access_token({"email": email, **extra}, secret=secret)
    return {"Authorization": f"Bearer {token}"}


def seed(cfg: Config, collection: str, doc: Dict[str, Any]) -> str:
    """Insert a document directly and return its id."""
    init_db(cfg.DB_DSN)
    with connect(cfg.DB_DSN) as conn:
        return Collection(conn, collection).insert_one(doc).inserted_id


@pytest.fixture()
def admin_headers(cfg: Config) -> Dict[str, str]:
    seed(cfg, "users", {"email": "admin@example.com", "name": "Admin", "role": "admin"})
    return bearer("admin@example.com")


@pytest.fixture()
def user_headers(cfg: Config) -> Dict[str, str]:
    seed(cfg, "users", {"email": "user@example.com", "name": "User"})
    return bearer("user@example.com")
