"""
Stripe checkout and webhook handling.

The secret key is passed per call from Settings instead of being set on
the stripe module at import time. Webhook events are only logged; order
state is not persisted.
"""

import logging
from typing import Any, Callable, Dict, List, Mapping

import stripe

from nomad.payments.schemas import CartItem
from nomad.shared.config import Settings


logger = logging.getLogger(__name__)

SHIPPING_COUNTRIES = [
    "US", "CA", "GB", "AU", "DE", "FR", "IT", "ES",
    "NL", "BE", "CH", "AT", "SE", "DK", "NO", "FI",
]


class PaymentConfigurationError(Exception):
    """Raised when a payment operation needs a credential that is not set."""


def build_line_items(items: List[CartItem], currency: str = "usd") -> List[Dict[str, Any]]:
    """Convert cart items to checkout line items priced in cents."""
    return [
        {
            "price_data": {
                "currency": currency,
                "product_data": {
                    "name": item.name,
                    "description": item.description,
                    "images": [],
                },
                "unit_amount": round(item.price * 100),
            },
            "quantity": item.quantity,
        }
        for item in items
    ]


def create_checkout_session(items: List[CartItem], settings: Settings) -> str:
    """
    Create a hosted checkout session for the cart.

    Returns:
        The checkout session id

    Raises:
        PaymentConfigurationError: If no secret key is configured
        stripe.StripeError: If the provider rejects the request
    """
    if not settings.stripe_secret_key:
        raise PaymentConfigurationError("STRIPE_SECRET_KEY is not set")

    line_items = build_line_items(items)
    logger.info(f"[payments=checkout] Creating session | line_items={len(line_items)}")

    session = stripe.checkout.Session.create(
        api_key=settings.stripe_secret_key,
        payment_method_types=["card"],
        line_items=line_items,
        mode="payment",
        success_url=f"{settings.base_url}/success?session_id={{CHECKOUT_SESSION_ID}}",
        cancel_url=f"{settings.base_url}/",
        shipping_address_collection={"allowed_countries": SHIPPING_COUNTRIES},
        metadata={"order_type": "nomad_store"},
    )

    logger.info(f"[payments=checkout] Session created | session={session.id}")
    return session.id


def construct_event(payload: bytes, signature: str, settings: Settings) -> Any:
    """
    Verify the webhook signature and parse the event.

    Raises:
        PaymentConfigurationError: If no webhook secret is configured
        ValueError: If the payload is not valid JSON
        stripe.SignatureVerificationError: If the signature does not match
    """
    if not settings.stripe_webhook_secret:
        raise PaymentConfigurationError("STRIPE_WEBHOOK_SECRET is not set")
    return stripe.Webhook.construct_event(payload, signature, settings.stripe_webhook_secret)


def handle_successful_payment(session: Mapping[str, Any]) -> None:
    customer = session.get("customer_details") or {}
    logger.info(
        f"[payments=webhook] Processing successful payment | session={session.get('id')}, "
        f"email={customer.get('email')}, payment_status={session.get('payment_status')}, "
        f"amount_total={session.get('amount_total')}"
    )


def _log_payment_intent(label: str) -> Callable[[Mapping[str, Any]], None]:
    def handler(intent: Mapping[str, Any]) -> None:
        logger.info(f"[payments=webhook] {label} | payment_intent={intent.get('id')}")

    return handler


EVENT_HANDLERS: Dict[str, Callable[[Mapping[str, Any]], None]] = {
    "checkout.session.completed": handle_successful_payment,
    "payment_intent.succeeded": _log_payment_intent("Payment intent succeeded"),
    "payment_intent.payment_failed": _log_payment_intent("Payment failed"),
}


def dispatch_event(event: Mapping[str, Any]) -> None:
    """Route a verified event to its handler; unknown types are logged."""
    event_type = event["type"]
    handler = EVENT_HANDLERS.get(event_type)
    if handler is None:
        logger.info(f"[payments=webhook] Unhandled event type: {event_type}")
        return
    handler(event["data"]["object"])


def stripe_environment(settings: Settings) -> Dict[str, Any]:
    """Which payment credentials are configured, with 7-char prefixes only."""

    def prefix(value: Any) -> str:
        return value[:7] if value else "not_set"

    return {
        "hasSecretKey": bool(settings.stripe_secret_key),
        "hasPublishableKey": bool(settings.stripe_publishable_key),
        "hasWebhookSecret": bool(settings.stripe_webhook_secret),
        "secretKeyPrefix": prefix(settings.stripe_secret_key),
        "publishableKeyPrefix": prefix(settings.stripe_publishable_key),
    }
