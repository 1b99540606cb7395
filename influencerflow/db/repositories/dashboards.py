from datetime import datetime
from decimal import Decimal
from typing import Dict, Optional

from sqlalchemy import func, select

from influencerflow.db.enums import CampaignStatusEnum, OfferStatusEnum, PaymentStatusEnum
from influencerflow.db.models import Campaign, Contract, Offer, Payment, PerformanceReport
from influencerflow.db.repositories.base import Repository

_CENTS = Decimal("0.01")


def _decimal(value) -> Decimal:
    if value is None:
        return Decimal("0.00")
    return Decimal(str(value)).quantize(_CENTS)


class DashboardsRepository(Repository):
    """Aggregate queries behind the creator and brand dashboards."""

    def _creator_payments(self, creator_id: int):
        return (
            select(Payment)
            .join(Contract, Payment.contract_id == Contract.id)
            .join(Offer, Contract.offer_id == Offer.id)
            .where(Offer.creator_id == creator_id)
            .subquery()
        )

    def _brand_payments(self, brand_id: int):
        return (
            select(Payment)
            .join(Contract, Payment.contract_id == Contract.id)
            .join(Offer, Contract.offer_id == Offer.id)
            .join(Campaign, Offer.campaign_id == Campaign.id)
            .where(Campaign.brand_id == brand_id)
            .subquery()
        )

    def _offer_counts(self, *criteria) -> Dict[str, int]:
        stmt = select(Offer.status, func.count(Offer.id)).where(*criteria).group_by(Offer.status)
        counts = {status.value: 0 for status in OfferStatusEnum}
        for status, count in self.session.execute(stmt).all():
            counts[getattr(status, "value", status)] = count
        return counts

    def _payment_totals(self, payments, since: Optional[datetime] = None) -> dict:
        paid = payments.c.status == PaymentStatusEnum.paid
        pending = payments.c.status == PaymentStatusEnum.pending
        stmt = select(
            func.sum(payments.c.amount).filter(paid),
            func.count(payments.c.id).filter(paid),
            func.sum(payments.c.amount).filter(pending),
        )
        total_paid, paid_count, total_pending = self.session.execute(stmt).one()
        totals = {
            "paid": _decimal(total_paid),
            "paid_count": paid_count or 0,
            "pending": _decimal(total_pending),
        }
        if since is not None:
            stmt = select(func.sum(payments.c.amount)).where(paid, payments.c.paid_at >= since)
            totals["paid_since"] = _decimal(self.session.scalar(stmt))
        return totals

    def creator_summary(self, creator_id: int, month_start: datetime) -> dict:
        offers = self._offer_counts(Offer.creator_id == creator_id)
        contract_count = self.session.scalar(
            select(func.count(Contract.id))
            .join(Offer, Contract.offer_id == Offer.id)
            .where(Offer.creator_id == creator_id)
        )
        totals = self._payment_totals(self._creator_payments(creator_id), since=month_start)
        total_reach = self.session.scalar(
            select(func.sum(PerformanceReport.reach))
            .join(Contract, PerformanceReport.contract_id == Contract.id)
            .join(Offer, Contract.offer_id == Offer.id)
            .where(Offer.creator_id == creator_id)
        )
        average = (
            (totals["paid"] / totals["paid_count"]).quantize(_CENTS)
            if totals["paid_count"]
            else Decimal("0.00")
        )
        return {
            "pending_offers": offers[OfferStatusEnum.pending.value],
            "active_deals": offers[OfferStatusEnum.accepted.value],
            "contracts": contract_count or 0,
            "total_earned": totals["paid"],
            "earned_this_month": totals["paid_since"],
            "pending_amount": totals["pending"],
            "average_per_payment": average,
            "total_reach": total_reach or 0,
        }

    def brand_summary(self, brand_id: int) -> dict:
        campaign_stmt = (
            select(Campaign.status, func.count(Campaign.id))
            .where(Campaign.brand_id == brand_id)
            .group_by(Campaign.status)
        )
        campaigns = {status.value: 0 for status in CampaignStatusEnum}
        for status, count in self.session.execute(campaign_stmt).all():
            campaigns[getattr(status, "value", status)] = count

        offers = self._offer_counts(
            Offer.campaign_id.in_(select(Campaign.id).where(Campaign.brand_id == brand_id))
        )
        totals = self._payment_totals(self._brand_payments(brand_id))
        reach, engagement, avg_roi = self.session.execute(
            select(
                func.sum(PerformanceReport.reach),
                func.sum(PerformanceReport.engagement),
                func.avg(PerformanceReport.roi),
            )
            .join(Contract, PerformanceReport.contract_id == Contract.id)
            .join(Offer, Contract.offer_id == Offer.id)
            .join(Campaign, Offer.campaign_id == Campaign.id)
            .where(Campaign.brand_id == brand_id)
        ).one()
        return {
            "campaigns": campaigns,
            "offers": offers,
            "total_spend": totals["paid"],
            "outstanding_amount": totals["pending"],
            "total_reach": reach or 0,
            "total_engagement": engagement or 0,
            "average_roi": _decimal(avg_roi) if avg_roi is not None else None,
        }
