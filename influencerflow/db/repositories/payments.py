from datetime import datetime
from typing import List, Optional

from sqlalchemy import select

from influencerflow.db.enums import PaymentStatusEnum
from influencerflow.db.models import Campaign, Contract, Offer, Payment, PerformanceReport
from influencerflow.db.repositories.base import Repository


class PaymentsRepository(Repository):
    def list_for_creator(
        self,
        creator_id: int,
        status: Optional[PaymentStatusEnum] = None,
    ) -> List[Payment]:
        stmt = (
            select(Payment)
            .join(Contract, Payment.contract_id == Contract.id)
            .join(Offer, Contract.offer_id == Offer.id)
            .where(Offer.creator_id == creator_id)
        )
        if status:
            stmt = stmt.where(Payment.status == status)
        stmt = stmt.order_by(Payment.created_at.desc(), Payment.id.desc())
        return list(self.session.scalars(stmt).all())

    def list_for_brand(
        self,
        brand_id: int,
        status: Optional[PaymentStatusEnum] = None,
    ) -> List[Payment]:
        stmt = (
            select(Payment)
            .join(Contract, Payment.contract_id == Contract.id)
            .join(Offer, Contract.offer_id == Offer.id)
            .join(Campaign, Offer.campaign_id == Campaign.id)
            .where(Campaign.brand_id == brand_id)
        )
        if status:
            stmt = stmt.where(Payment.status == status)
        stmt = stmt.order_by(Payment.created_at.desc(), Payment.id.desc())
        return list(self.session.scalars(stmt).all())

    def get(self, payment_id: int) -> Optional[Payment]:
        return self.session.get(Payment, payment_id)

    def get_for_brand(self, brand_id: int, payment_id: int) -> Optional[Payment]:
        stmt = (
            select(Payment)
            .join(Contract, Payment.contract_id == Contract.id)
            .join(Offer, Contract.offer_id == Offer.id)
            .join(Campaign, Offer.campaign_id == Campaign.id)
            .where(Payment.id == payment_id, Campaign.brand_id == brand_id)
        )
        return self.session.scalars(stmt).first()

    def get_by_processor_reference(self, reference: str) -> Optional[Payment]:
        stmt = select(Payment).where(Payment.processor_reference == reference)
        return self.session.scalars(stmt).first()

    def set_processor_reference(self, payment: Payment, reference: str) -> Payment:
        return self.apply(payment, processor_reference=reference)

    def mark_paid(self, payment: Payment, paid_at: datetime, metrics: dict) -> PerformanceReport:
        """Settle the payment and attach a performance report to its contract."""
        payment.status = PaymentStatusEnum.paid
        payment.paid_at = paid_at
        report = PerformanceReport(contract_id=payment.contract_id, **metrics)
        self.session.add(report)
        self.session.commit()
        self.session.refresh(payment)
        self.session.refresh(report)
        return report

    def mark_failed(self, payment: Payment) -> Payment:
        return self.apply(payment, status=PaymentStatusEnum.failed)
