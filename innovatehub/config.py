import os
from dataclasses import dataclass
from urllib.parse import quote_plus

from dotenv import load_dotenv

# Load a local .env file if present.
load_dotenv()


def _compose_dsn() -> str:
    """Pick the storage DSN from the environment.

    Order:
      - INNOVATEHUB_DATABASE_URL / DATABASE_URL (Postgres URL)
      - DB_USER + DB_PASS (+ DB_HOST, DB_NAME) -> Postgres URL
      - INNOVATEHUB_DB_PATH (SQLite file)
    """

    url = os.environ.get("INNOVATEHUB_DATABASE_URL") or os.environ.get("DATABASE_URL")
    if url:
        return url

    user = (os.environ.get("DB_USER") or "").strip()
    if user:
        password = os.environ.get("DB_PASS") or ""
        host = os.environ.get("DB_HOST", "localhost")
        name = os.environ.get("DB_NAME", "innovateHub")
        return f"postgresql://{quote_plus(user)}:{quote_plus(password)}@{host}/{name}"

    return os.environ.get("INNOVATEHUB_DB_PATH", "./innovatehub.sqlite")


@dataclass(frozen=True)
class Config:
    """Runtime configuration.

    Secrets come from environment variables or a .env file. Build one with
    load_config() at start-up and hand it to create_app().
    """

    # -----------------
    # Storage
    # -----------------
    DB_DSN: str = _compose_dsn()

    # -----------------
    # Auth (JWT)
    # -----------------
    # NOTE: dev default only. In production, set ACCESS_TOKEN_SECRET to a strong random value.
    ACCESS_TOKEN_SECRET: str = os.environ.get("ACCESS_TOKEN_SECRET", "dev_change_me")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = int(os.environ.get("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))

    # Seed the first admin when the users collection is empty (unset = disabled).
    BOOTSTRAP_ADMIN_EMAIL: str | None = (os.environ.get("BOOTSTRAP_ADMIN_EMAIL") or "").strip() or None

    # -----------------
    # Payments (Stripe)
    # -----------------
    STRIPE_SECRET_KEY: str | None = os.environ.get("STRIPE_SECRET_KEY")
    PAYMENT_CURRENCY: str = os.environ.get("PAYMENT_CURRENCY", "usd")

    # -----------------
    # HTTP
    # -----------------
    API_HOST: str = os.environ.get("API_HOST", "0.0.0.0")
    PORT: int = int(os.environ.get("PORT", "5000"))

    # Comma-separated; "*" allows any origin.
    CORS_ALLOW_ORIGINS: str = os.environ.get("CORS_ALLOW_ORIGINS", "*")


def load_config() -> Config:
    return Config()
