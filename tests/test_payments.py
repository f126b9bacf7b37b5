"""
tests/test_payments.py -- Tests for POST /create-payment-intent and billing/stripe_billing.py

Stripe is patched; nothing leaves the process.
"""

from decimal import InvalidOperation
from unittest.mock import patch

import pytest

from innovatehub.billing.stripe_billing import create_payment_intent, price_to_minor_units
from innovatehub.config import Config


@pytest.mark.parametrize(
    "price, expected",
    [
        (19.99, 1999),
        (10, 1000),
        ("5.5", 550),
        (0.015, 1),
        (0, 0),
        (-3.25, -325),
    ],
)
def test_price_to_minor_units(price, expected):
    assert price_to_minor_units(price) == expected


def test_non_numeric_price_raises():
    with pytest.raises(InvalidOperation):
        price_to_minor_units("free")


def test_endpoint_sends_minor_units_card_only(client):
    with patch("stripe.PaymentIntent.create", return_value={"client_secret": "pi_123_secret_abc"}) as create:
        resp = client.post("/create-payment-intent", json={"price": 19.99})

    assert resp.status_code == 200
    assert resp.json() == {"clientSecret": "pi_123_secret_abc"}
    create.assert_called_once_with(amount=1999, currency="usd", payment_method_types=["card"])


def test_endpoint_forwards_negative_price(client):
    with patch("stripe.PaymentIntent.create", return_value={"client_secret": "x"}) as create:
        client.post("/create-payment-intent", json={"price": -1})
    assert create.call_args.kwargs["amount"] == -100


def test_missing_stripe_key_is_501(cfg):
    from fastapi.testclient import TestClient

    from innovatehub.api.server import create_app

    no_key = Config(DB_DSN=cfg.DB_DSN, ACCESS_TOKEN_SECRET="s", STRIPE_SECRET_KEY=None)
    with TestClient(create_app(no_key)) as c:
        resp = c.post("/create-payment-intent", json={"price": 5})
    assert resp.status_code == 501
    assert resp.json()["detail"] == "stripe_secret_key_missing"


def test_processor_error_is_500(client):
    with patch("stripe.PaymentIntent.create", side_effect=Exception("card_declined")):
        resp = client.post("/create-payment-intent", json={"price": 5})
    assert resp.status_code == 500
    assert "billing_error" in resp.json()["detail"]


def test_currency_comes_from_config(cfg):
    eur = Config(DB_DSN=cfg.DB_DSN, STRIPE_SECRET_KEY="sk_test", PAYMENT_CURRENCY="eur")
    with patch("stripe.PaymentIntent.create", return_value={"client_secret": "s"}) as create:
        assert create_payment_intent(eur, price=1) == "s"
    assert create.call_args.kwargs["currency"] == "eur"
