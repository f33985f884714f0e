"""Stripe integration service for payment processing.

Wraps the Stripe Python SDK. Prices arrive in major units and are sent to
Stripe in minor units (cents).
"""

import logging

import stripe

from courthub.core.config import settings
from courthub.core.errors import GatewayError

logger = logging.getLogger(__name__)


def _configure() -> None:
    """Set the Stripe API key from settings."""
    stripe.api_key = settings.stripe_secret_key


def to_minor_units(amount: float) -> int:
    return int(round(amount * 100))


def create_payment_intent(total_price: float) -> str:
    """Create a PaymentIntent for a booking total and return its client secret.

    Upstream failures are raised as GatewayError; nothing is retried.
    """
    _configure()

    try:
        intent = stripe.PaymentIntent.create(
            amount=to_minor_units(total_price),
            currency=settings.payment_currency,
            payment_method_types=["card"],
        )
    except stripe.StripeError as exc:
        logger.error("Stripe PaymentIntent creation failed: %s", exc)
        raise GatewayError(getattr(exc, "user_message", None) or "Payment gateway error") from exc

    return intent.client_secret
