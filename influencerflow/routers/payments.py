import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from influencerflow.auth.dependencies import Party, get_party, require_brand
from influencerflow.db.deps import get_session
from influencerflow.db.enums import PaymentStatusEnum
from influencerflow.db.models import Brand, Payment
from influencerflow.db.repositories.payments import PaymentsRepository
from influencerflow.schemas.payments import (
    PaymentIntentOut,
    PaymentOut,
    PaymentSettledOut,
    PaymentSummaryOut,
)
from influencerflow.schemas.reports import PerformanceReportOut
from influencerflow.services import payments as payment_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/payments", tags=["payments"])


def _brand_payment(brand: Brand, payment_id: int, session: Session) -> Payment:
    payment = PaymentsRepository(session).get_for_brand(brand_id=brand.id, payment_id=payment_id)
    if not payment:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Payment not found")
    return payment


@router.get("", response_model=list[PaymentOut])
def list_payments(
    status_filter: Optional[PaymentStatusEnum] = Query(default=None, alias="status"),
    party: Party = Depends(get_party),
    session: Session = Depends(get_session),
):
    repo = PaymentsRepository(session)
    if party.is_brand:
        payments = repo.list_for_brand(party.brand.id, status=status_filter)
    else:
        payments = repo.list_for_creator(party.creator.id, status=status_filter)
    return [PaymentOut.model_validate(payment) for payment in payments]


@router.patch("/{payment_id}/mark-paid", response_model=PaymentSettledOut)
def mark_payment_paid(
    payment_id: int,
    brand: Brand = Depends(require_brand),
    session: Session = Depends(get_session),
):
    payment = _brand_payment(brand, payment_id, session)
    report = payment_service.settle_payment(session, payment)
    return PaymentSettledOut(
        payment=PaymentSummaryOut.model_validate(payment),
        report=PerformanceReportOut.model_validate(report),
    )


@router.post("/{payment_id}/intent", response_model=PaymentIntentOut)
def create_payment_intent(
    payment_id: int,
    brand: Brand = Depends(require_brand),
    session: Session = Depends(get_session),
):
    payment = _brand_payment(brand, payment_id, session)
    if payment.status == PaymentStatusEnum.paid:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Payment is already paid.")

    try:
        intent = payment_service.create_payment_intent(
            amount=payment.amount,
            metadata={"payment_id": str(payment.id), "brand_id": str(brand.id)},
        )
    except payment_service.PaymentProcessorNotConfigured as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Stripe is not configured.",
        ) from exc
    except payment_service.PaymentProcessorError as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Payment processor request failed.",
        ) from exc

    PaymentsRepository(session).set_processor_reference(payment, intent["id"])
    return PaymentIntentOut(client_secret=intent["client_secret"], payment_intent_id=intent["id"])
