from __future__ import annotations

import logging
from typing import Optional

import stripe
from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from influencerflow.config import settings
from influencerflow.db.deps import get_session
from influencerflow.db.enums import PaymentStatusEnum
from influencerflow.db.models import Payment
from influencerflow.db.repositories.payments import PaymentsRepository
from influencerflow.services import payments as payment_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/stripe", tags=["stripe"])

HANDLED_EVENTS = {"payment_intent.succeeded", "payment_intent.payment_failed"}


def _resolve_payment(intent: dict, session: Session) -> Optional[Payment]:
    repo = PaymentsRepository(session)
    intent_id = intent.get("id")
    payment = repo.get_by_processor_reference(intent_id) if intent_id else None
    if payment:
        return payment
    metadata = intent.get("metadata") or {}
    payment_id = metadata.get("payment_id")
    if not payment_id:
        return None
    try:
        return repo.get(int(payment_id))
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid payment_id in metadata.",
        ) from exc


@router.post("/webhook")
async def stripe_webhook(
    request: Request,
    session: Session = Depends(get_session),
):
    if not settings.STRIPE_WEBHOOK_SECRET:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Stripe webhook secret is not configured.",
        )

    signature = request.headers.get("stripe-signature")
    if not signature:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing Stripe signature header.")

    payload = await request.body()
    try:
        event = payment_service.construct_webhook_event(payload, signature)
    except (stripe.SignatureVerificationError, ValueError) as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid Stripe signature.") from exc

    event_type = event.get("type")
    if event_type not in HANDLED_EVENTS:
        logger.debug("Ignoring Stripe event", extra={"event_type": event_type})
        return {"received": True}

    data = event.get("data") or {}
    intent = data.get("object")
    if not intent:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing payment intent payload.")

    payment = _resolve_payment(intent, session)
    if not payment:
        logger.warning(
            "Stripe event for unknown payment",
            extra={"event_type": event_type, "payment_intent_id": intent.get("id")},
        )
        return {"received": True}

    if payment.status == PaymentStatusEnum.paid:
        logger.info("Payment already paid; skipping event", extra={"payment_id": payment.id, "event_type": event_type})
        return {"received": True}

    if event_type == "payment_intent.succeeded":
        payment_service.settle_payment(session, payment)
    else:
        PaymentsRepository(session).mark_failed(payment)
        logger.info("Payment marked failed", extra={"payment_id": payment.id})
    return {"received": True}
