"""
Lifetime-plan purchase via Stripe Checkout.

The webhook is the only place that upgrades a user.
"""
from __future__ import annotations

import json
import logging
from typing import Dict

import stripe

from core import database as store
from core.config import Config
from core.errors import InvalidInput, TrackerError

log = logging.getLogger("billing")


def create_checkout_session(config: Config, user: Dict) -> str:
    """Start a one-time payment for the lifetime plan and return the hosted checkout URL."""
    if not (config.stripe_secret_key and config.stripe_price_id_lifetime):
        raise RuntimeError("Stripe not configured. Set STRIPE_SECRET_KEY and STRIPE_PRICE_ID_LIFETIME.")

    client = stripe.StripeClient(config.stripe_secret_key)
    session = client.checkout.sessions.create(
        params={
            "mode": "payment",
            "line_items": [{"price": config.stripe_price_id_lifetime, "quantity": 1}],
            "customer_email": user["email"],
            "success_url": f"{config.app_url}/app?upgraded=true",
            "cancel_url": f"{config.app_url}/app?cancelled=true",
            "metadata": {"user_id": str(user["id"])},
        }
    )
    if not session.url:
        raise RuntimeError("Failed to create checkout session")
    return session.url


def construct_event(config: Config, payload: bytes, signature: str | None):
    """
    Verify the Stripe-Signature header and parse the event.

    Without a webhook secret the body is trusted as-is, which is only allowed
    outside production.
    """
    if not signature:
        raise InvalidInput("stripe-signature", "Missing stripe-signature header")

    if config.stripe_webhook_secret:
        try:
            return stripe.Webhook.construct_event(payload, signature, config.stripe_webhook_secret)
        except (ValueError, stripe.SignatureVerificationError) as exc:
            log.warning("Webhook signature verification failed", extra={"error": str(exc)})
            raise TrackerError("Webhook signature verification failed") from exc

    if config.is_production:
        raise TrackerError("Webhook secret not configured")
    try:
        return json.loads(payload)
    except ValueError as exc:
        raise TrackerError("Webhook payload is not valid JSON") from exc


def handle_billing_event(event: Dict) -> None:
    event_type = event.get("type")
    if event_type != "checkout.session.completed":
        log.info("Unhandled event type", extra={"event_type": event_type})
        return

    session = event["data"]["object"]
    metadata = session.get("metadata") or {}
    user_id = metadata.get("user_id")
    if not user_id:
        raise InvalidInput("metadata.user_id", "Missing user_id in metadata")

    if session.get("payment_status") != "paid":
        log.info("Checkout completed without payment", extra={"user_id": user_id})
        return

    try:
        user_id = int(user_id)
    except (TypeError, ValueError):
        raise InvalidInput("metadata.user_id", "must be an integer id")

    store.upgrade_user_to_paid_lifetime(user_id)
    log.info("User upgraded to PAID_LIFETIME", extra={"user_id": user_id})


__all__ = ["create_checkout_session", "construct_event", "handle_billing_event"]
