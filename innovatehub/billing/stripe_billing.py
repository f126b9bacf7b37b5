from __future__ import annotations

from decimal import Decimal
from typing import Any

from innovatehub.config import Config


def _debug(msg: str) -> None:
    print(f"[billing] {msg}")


def _get_stripe(cfg: Config):
    try:
        import stripe  # type: ignore
    except ImportError as e:
        raise RuntimeError(
            "Payments need the 'stripe' package. Install stripe and try again."
        ) from e

    if not cfg.STRIPE_SECRET_KEY:
        raise RuntimeError("stripe_secret_key_missing")

    stripe.api_key = cfg.STRIPE_SECRET_KEY
    return stripe


def price_to_minor_units(price: Any) -> int:
    """Price in major units -> integer minor units, truncated toward zero.

    Goes through the decimal string form so 19.99 -> 1999 (not 1998).
    Nothing is range-checked; non-numeric input raises from Decimal.
    """
    return int(Decimal(str(price)) * 100)


def create_payment_intent(cfg: Config, *, price: Any) -> str:
    """Create a card-only PaymentIntent and return its client secret."""
    stripe = _get_stripe(cfg)
    amount = price_to_minor_units(price)

    intent = stripe.PaymentIntent.create(
        amount=amount,
        currency=cfg.PAYMENT_CURRENCY,
        payment_method_types=["card"],
    )
    _debug(f"payment intent created: amount={amount} currency={cfg.PAYMENT_CURRENCY}")
    return intent["client_secret"]
