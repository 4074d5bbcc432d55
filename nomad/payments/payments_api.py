"""
FastAPI endpoints for the store checkout and payment webhooks.
"""

import logging
from typing import Optional

import stripe
from fastapi import APIRouter, Depends, Header, HTTPException, Request, Response, status

from nomad.payments.schemas import (
    CheckoutRequest,
    CheckoutResponse,
    StripeConfigResponse,
    parse_cart,
)
from nomad.payments.service import (
    PaymentConfigurationError,
    construct_event,
    create_checkout_session,
    dispatch_event,
    stripe_environment,
)
from nomad.shared.config import Settings, get_settings
from nomad.shared.cors import cors_preflight


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/stripe", tags=["payments"])


@router.post("/checkout", response_model=CheckoutResponse)
def checkout(
    request: CheckoutRequest, settings: Settings = Depends(get_settings)
) -> CheckoutResponse:
    """Create a hosted checkout session for the cart."""
    try:
        items = parse_cart(request.items)
    except ValueError as e:
        logger.error(f"[api=checkout] Invalid cart: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    try:
        session_id = create_checkout_session(items, settings)
    except PaymentConfigurationError as e:
        logger.error(f"[api=checkout] {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Payment provider is not configured",
        )
    except stripe.StripeError as e:
        logger.error(
            f"[api=checkout] Stripe error | code={e.code}, status={e.http_status}, message={e}"
        )
        raise HTTPException(
            status_code=e.http_status or status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Payment processing error", "details": str(e)},
        )
    except Exception as e:
        logger.exception(f"[api=checkout] Checkout failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Error creating checkout session", "details": str(e)},
        )

    return CheckoutResponse(sessionId=session_id)


@router.post("/webhook")
async def webhook(
    request: Request,
    stripe_signature: Optional[str] = Header(default=None, alias="stripe-signature"),
    settings: Settings = Depends(get_settings),
):
    """Verify and dispatch a payment provider event."""
    payload = await request.body()

    if not stripe_signature:
        logger.error("[api=webhook] Missing signature header")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid signature")

    try:
        event = construct_event(payload, stripe_signature, settings)
    except (ValueError, stripe.SignatureVerificationError, PaymentConfigurationError) as e:
        logger.error(f"[api=webhook] Webhook signature verification failed: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid signature")

    try:
        dispatch_event(event)
    except Exception as e:
        logger.exception(f"[api=webhook] Webhook processing error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Webhook processing failed",
        )

    return {"received": True}


@router.get("/config", response_model=StripeConfigResponse)
async def stripe_config(settings: Settings = Depends(get_settings)) -> StripeConfigResponse:
    """Report which payment credentials are present without exposing them."""
    return StripeConfigResponse(environment=stripe_environment(settings))


@router.options("/checkout")
@router.options("/webhook")
async def payment_post_options() -> Response:
    return cors_preflight("POST, OPTIONS")


@router.options("/config")
async def payment_config_options() -> Response:
    return cors_preflight("GET, OPTIONS")
