"""Offer, contract and payment lifecycle rules.

These helpers take plain values so they can be used from the ORM models,
the repositories and the routers alike. None of them touch the database.
"""
from __future__ import annotations

import random
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Optional

SIGNATURE_FULLY_EXECUTED = "Fully Executed"
SIGNATURE_PENDING_BRAND = "Pending Brand Signature"
SIGNATURE_PENDING_CREATOR = "Pending Creator Signature"
SIGNATURE_PENDING_BOTH = "Pending Signatures"

PAYMENT_LABEL_PAID = "Paid"
PAYMENT_LABEL_FAILED = "Failed"
PAYMENT_LABEL_OVERDUE = "Overdue"
PAYMENT_LABEL_DUE_SOON = "Due Soon"
PAYMENT_LABEL_PENDING = "Pending"

# Inclusive lower bound and width of each synthesized metric.
_REPORT_INT_RANGES = {
    "reach": (100_000, 50_000),
    "impressions": (150_000, 75_000),
    "engagement": (5_000, 5_000),
    "clicks": (500, 1_000),
}
_REPORT_DECIMAL_RANGES = {
    "engagement_rate": (3, 3),
    "roi": (2, 3),
}


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """SQLite hands back naive datetimes; treat them as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def payment_due_date(created_at: Optional[datetime] = None, *, due_days: int = 7) -> datetime:
    base = as_utc(created_at) if created_at else utcnow()
    return base + timedelta(days=due_days)


def is_fully_executed(brand_signed: Optional[bool], creator_signed: Optional[bool]) -> bool:
    return bool(brand_signed) and bool(creator_signed)


def signature_status(brand_signed: Optional[bool], creator_signed: Optional[bool]) -> str:
    if is_fully_executed(brand_signed, creator_signed):
        return SIGNATURE_FULLY_EXECUTED
    if creator_signed:
        return SIGNATURE_PENDING_BRAND
    if brand_signed:
        return SIGNATURE_PENDING_CREATOR
    return SIGNATURE_PENDING_BOTH


def payment_status_label(
    status: str,
    due_date: Optional[datetime],
    *,
    now: Optional[datetime] = None,
    due_soon_days: int = 3,
) -> str:
    """Display label for a payment row.

    Pending payments are labelled by how their due date compares to ``now``:
    past due is "Overdue", due within ``due_soon_days`` is "Due Soon".
    """
    status_value = getattr(status, "value", status)
    if status_value == "paid":
        return PAYMENT_LABEL_PAID
    if status_value == "failed":
        return PAYMENT_LABEL_FAILED
    if due_date is None:
        return PAYMENT_LABEL_PENDING
    current = as_utc(now) if now else utcnow()
    due = as_utc(due_date)
    if due < current:
        return PAYMENT_LABEL_OVERDUE
    if due - current < timedelta(days=due_soon_days):
        return PAYMENT_LABEL_DUE_SOON
    return PAYMENT_LABEL_PENDING


def synthesize_report_metrics(rng: Optional[random.Random] = None) -> dict:
    """Placeholder analytics for a paid contract.

    No analytics source is wired in; the numbers are drawn uniformly from
    fixed ranges so dashboards have something plausible to show.
    """
    rng = rng or random.Random()
    metrics: dict = {}
    for name, (low, width) in _REPORT_INT_RANGES.items():
        metrics[name] = low + rng.randrange(width)
    for name, (low, width) in _REPORT_DECIMAL_RANGES.items():
        metrics[name] = Decimal(str(round(low + rng.random() * width, 2))).quantize(Decimal("0.01"))
    return metrics


def resolve_final_amount(
    offer_status: str,
    amount: Decimal,
    counter_amount: Optional[Decimal],
) -> Decimal:
    """Amount a contract is written for when the caller does not name one."""
    status_value = getattr(offer_status, "value", offer_status)
    if status_value == "countered" and counter_amount is not None:
        return counter_amount
    return amount
