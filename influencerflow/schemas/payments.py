from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict

from influencerflow.db.enums import PaymentStatusEnum
from influencerflow.schemas.contracts import ContractOut
from influencerflow.schemas.reports import PerformanceReportOut


class PaymentSummaryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    contract_id: int
    amount: Decimal
    status: PaymentStatusEnum
    status_label: str
    due_date: Optional[datetime] = None
    paid_at: Optional[datetime] = None
    processor_reference: Optional[str] = None
    created_at: datetime


class PaymentOut(PaymentSummaryOut):
    contract: ContractOut


class PaymentIntentOut(BaseModel):
    client_secret: str
    payment_intent_id: str


class PaymentSettledOut(BaseModel):
    payment: PaymentSummaryOut
    report: PerformanceReportOut
