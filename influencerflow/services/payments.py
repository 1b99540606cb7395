from __future__ import annotations

import logging
import random
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Optional

import stripe
from sqlalchemy.orm import Session

from influencerflow.config import settings
from influencerflow.db.models import Payment, PerformanceReport
from influencerflow.db.repositories.payments import PaymentsRepository
from influencerflow.domain import lifecycle

logger = logging.getLogger(__name__)


class PaymentProcessorError(RuntimeError):
    pass


class PaymentProcessorNotConfigured(PaymentProcessorError):
    pass


def to_minor_units(amount: Decimal) -> int:
    return int((Decimal(amount) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def create_payment_intent(*, amount: Decimal, metadata: Dict[str, str]) -> Dict[str, Any]:
    """Open a Stripe PaymentIntent and return its id and client secret."""
    if not settings.STRIPE_SECRET_KEY:
        raise PaymentProcessorNotConfigured("Stripe is not configured.")
    stripe.api_key = settings.STRIPE_SECRET_KEY

    try:
        intent = stripe.PaymentIntent.create(
            amount=to_minor_units(amount),
            currency=settings.PAYMENT_CURRENCY,
            metadata=metadata,
            automatic_payment_methods={"enabled": True},
        )
    except stripe.StripeError as exc:
        logger.exception("Stripe payment intent creation failed", extra={"metadata": metadata})
        raise PaymentProcessorError("Payment processor request failed.") from exc

    logger.info(
        "Created payment intent",
        extra={"payment_intent_id": intent.id, "metadata": metadata},
    )
    return {"id": intent.id, "client_secret": intent.client_secret}


def construct_webhook_event(payload: bytes, signature: str) -> Dict[str, Any]:
    if not settings.STRIPE_WEBHOOK_SECRET:
        raise PaymentProcessorNotConfigured("Stripe webhook secret is not configured.")
    event = stripe.Webhook.construct_event(payload, signature, settings.STRIPE_WEBHOOK_SECRET)
    return event.to_dict()


def settle_payment(session: Session, payment: Payment, rng: Optional[random.Random] = None) -> PerformanceReport:
    """Mark a payment paid and synthesize the contract's performance report."""
    report = PaymentsRepository(session).mark_paid(
        payment,
        paid_at=lifecycle.utcnow(),
        metrics=lifecycle.synthesize_report_metrics(rng),
    )
    logger.info(
        "Payment marked paid",
        extra={"payment_id": payment.id, "contract_id": payment.contract_id, "report_id": report.id},
    )
    return report
