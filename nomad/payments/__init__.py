"""
Store payments.

Hosted checkout sessions and signature-verified webhooks via Stripe.
"""

from nomad.payments.service import (
    PaymentConfigurationError,
    construct_event,
    create_checkout_session,
    dispatch_event,
)

__all__ = [
    "PaymentConfigurationError",
    "construct_event",
    "create_checkout_session",
    "dispatch_event",
]
