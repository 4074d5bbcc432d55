"""
Tests for the store checkout, payment webhooks and /api/stripe/config.
"""

import hashlib
import hmac
import json
import time
from types import SimpleNamespace

import pytest
import stripe

from nomad.payments import service
from nomad.payments.schemas import parse_cart
from nomad.payments.service import build_line_items, stripe_environment
from nomad.shared.config import Settings


WEBHOOK_SECRET = "whsec_test_secret"

STRIPE_SETTINGS = Settings(
    stripe_secret_key="sk_test_1234567890",
    stripe_publishable_key="pk_test_1234567890",
    stripe_webhook_secret=WEBHOOK_SECRET,
    base_url="https://nomad.example",
)

CART = [
    {"id": 1, "name": "Travel adapter", "price": 24.99, "quantity": 2},
    {"id": "sku-2", "name": "Packing cubes", "price": 19.5, "description": "Set of 4"},
]


def _sign(payload: str, secret: str = WEBHOOK_SECRET, timestamp: int = None) -> str:
    timestamp = timestamp or int(time.time())
    signature = hmac.new(
        secret.encode("utf-8"), f"{timestamp}.{payload}".encode("utf-8"), hashlib.sha256
    ).hexdigest()
    return f"t={timestamp},v1={signature}"


def _event(event_type="checkout.session.completed"):
    return json.dumps(
        {
            "id": "evt_1",
            "object": "event",
            "type": event_type,
            "data": {"object": {"id": "cs_123", "object": "checkout.session", "amount_total": 6448}},
        }
    )


@pytest.fixture
def recorded(monkeypatch):
    """Replace the completed-checkout handler with a recorder."""
    calls = []
    monkeypatch.setitem(service.EVENT_HANDLERS, "checkout.session.completed", calls.append)
    return calls


# ============================================================================
# TestCart
# ============================================================================


class TestCart:
    """Tests for parse_cart and build_line_items."""

    def test_parse(self):
        items = parse_cart(CART)

        assert [i.id for i in items] == ["1", "sku-2"]
        assert items[0].quantity == 2
        assert items[1].quantity == 1
        assert items[1].description == "Set of 4"

    @pytest.mark.parametrize(
        "items, message",
        [
            (None, "Items array is required"),
            ({"name": "x"}, "Items array is required"),
            ([], "Cart cannot be empty"),
            ([{"name": "Adapter"}], "Invalid item structure"),
            ([{"price": 10}], "Invalid item structure"),
            ([{"name": "Adapter", "price": "10"}], "Invalid item structure"),
            ([{"name": "Adapter", "price": 0}], "Invalid item structure"),
            ([{"name": "Adapter", "price": True}], "Invalid item structure"),
        ],
    )
    def test_invalid(self, items, message):
        with pytest.raises(ValueError, match=message):
            parse_cart(items)

    def test_line_items_in_cents(self):
        line_items = build_line_items(parse_cart(CART))

        assert line_items[0]["price_data"]["unit_amount"] == 2499
        assert line_items[0]["price_data"]["currency"] == "usd"
        assert line_items[0]["quantity"] == 2
        assert line_items[1]["price_data"]["unit_amount"] == 1950
        assert line_items[1]["price_data"]["product_data"]["name"] == "Packing cubes"


# ============================================================================
# TestCheckoutEndpoint
# ============================================================================


class TestCheckoutEndpoint:
    """Tests for POST /api/stripe/checkout."""

    def test_creates_session(self, app_client, monkeypatch):
        captured = {}

        def _create(**kwargs):
            captured.update(kwargs)
            return SimpleNamespace(id="cs_test_123")

        monkeypatch.setattr(stripe.checkout.Session, "create", _create)

        response = app_client(STRIPE_SETTINGS).post("/api/stripe/checkout", json={"items": CART})

        assert response.status_code == 200
        assert response.json() == {"sessionId": "cs_test_123"}
        assert captured["api_key"] == "sk_test_1234567890"
        assert captured["mode"] == "payment"
        assert captured["success_url"] == (
            "https://nomad.example/success?session_id={CHECKOUT_SESSION_ID}"
        )
        assert captured["cancel_url"] == "https://nomad.example/"
        assert captured["metadata"] == {"order_type": "nomad_store"}
        assert "GB" in captured["shipping_address_collection"]["allowed_countries"]

    @pytest.mark.parametrize("body", [{}, {"items": []}, {"items": [{"name": "x"}]}])
    def test_invalid_cart_is_400(self, app_client, body):
        response = app_client(STRIPE_SETTINGS).post("/api/stripe/checkout", json=body)

        assert response.status_code == 400

    def test_missing_secret_key_is_500(self, app_client):
        response = app_client(Settings()).post("/api/stripe/checkout", json={"items": CART})

        assert response.status_code == 500
        assert response.json()["detail"] == "Payment provider is not configured"

    def test_provider_error_status_is_passed_through(self, app_client, monkeypatch):
        def _create(**kwargs):
            raise stripe.InvalidRequestError("No such price", "line_items", http_status=400)

        monkeypatch.setattr(stripe.checkout.Session, "create", _create)

        response = app_client(STRIPE_SETTINGS).post("/api/stripe/checkout", json={"items": CART})

        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "Payment processing error"

    def test_unexpected_error_is_500(self, app_client, monkeypatch):
        def _create(**kwargs):
            raise RuntimeError("socket closed")

        monkeypatch.setattr(stripe.checkout.Session, "create", _create)

        response = app_client(STRIPE_SETTINGS).post("/api/stripe/checkout", json={"items": CART})

        assert response.status_code == 500
        assert response.json()["detail"]["details"] == "socket closed"


# ============================================================================
# TestWebhookEndpoint
# ============================================================================


class TestWebhookEndpoint:
    """Tests for POST /api/stripe/webhook."""

    def test_valid_event_is_dispatched(self, app_client, recorded):
        payload = _event()

        response = app_client(STRIPE_SETTINGS).post(
            "/api/stripe/webhook",
            content=payload,
            headers={"stripe-signature": _sign(payload), "Content-Type": "application/json"},
        )

        assert response.status_code == 200
        assert response.json() == {"received": True}
        assert len(recorded) == 1
        assert recorded[0]["id"] == "cs_123"

    def test_unhandled_event_type_is_acknowledged(self, app_client, recorded):
        payload = _event("customer.created")

        response = app_client(STRIPE_SETTINGS).post(
            "/api/stripe/webhook", content=payload, headers={"stripe-signature": _sign(payload)}
        )

        assert response.status_code == 200
        assert recorded == []

    def test_bad_signature_is_400(self, app_client, recorded):
        payload = _event()

        response = app_client(STRIPE_SETTINGS).post(
            "/api/stripe/webhook",
            content=payload,
            headers={"stripe-signature": _sign(payload, secret="whsec_wrong")},
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid signature"
        assert recorded == []

    def test_missing_signature_is_400(self, app_client, recorded):
        response = app_client(STRIPE_SETTINGS).post("/api/stripe/webhook", content=_event())

        assert response.status_code == 400
        assert recorded == []

    def test_missing_webhook_secret_is_400(self, app_client, recorded):
        payload = _event()

        response = app_client(Settings()).post(
            "/api/stripe/webhook", content=payload, headers={"stripe-signature": _sign(payload)}
        )

        assert response.status_code == 400
        assert recorded == []

    def test_handler_error_is_500(self, app_client, monkeypatch):
        def _explode(session):
            raise RuntimeError("db down")

        monkeypatch.setitem(service.EVENT_HANDLERS, "checkout.session.completed", _explode)
        payload = _event()

        response = app_client(STRIPE_SETTINGS).post(
            "/api/stripe/webhook", content=payload, headers={"stripe-signature": _sign(payload)}
        )

        assert response.status_code == 500


# ============================================================================
# TestConfigEndpoint
# ============================================================================


class TestConfigEndpoint:
    """Tests for GET /api/stripe/config."""

    def test_reports_prefixes(self, app_client):
        response = app_client(STRIPE_SETTINGS).get("/api/stripe/config")

        assert response.status_code == 200
        assert response.json()["environment"] == {
            "hasSecretKey": True,
            "hasPublishableKey": True,
            "hasWebhookSecret": True,
            "secretKeyPrefix": "sk_test",
            "publishableKeyPrefix": "pk_test",
        }

    def test_not_set(self):
        environment = stripe_environment(Settings())

        assert environment["hasSecretKey"] is False
        assert environment["secretKeyPrefix"] == "not_set"
        assert environment["publishableKeyPrefix"] == "not_set"

    @pytest.mark.parametrize(
        "path, method",
        [("/api/stripe/checkout", "POST"), ("/api/stripe/webhook", "POST"), ("/api/stripe/config", "GET")],
    )
    def test_options_cors(self, app_client, path, method):
        response = app_client(Settings()).options(path)

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"
        assert method in response.headers["access-control-allow-methods"]
