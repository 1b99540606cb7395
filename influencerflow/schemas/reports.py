from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict


class PerformanceReportOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    contract_id: int
    reach: int
    impressions: int
    engagement: int
    clicks: int
    engagement_rate: Optional[Decimal] = None
    roi: Optional[Decimal] = None
    generated_at: datetime


class CreatorDashboardOut(BaseModel):
    pending_offers: int
    active_deals: int
    contracts: int
    total_earned: Decimal
    earned_this_month: Decimal
    pending_amount: Decimal
    average_per_payment: Decimal
    total_reach: int


class BrandDashboardOut(BaseModel):
    campaigns: Dict[str, int]
    offers: Dict[str, int]
    total_spend: Decimal
    outstanding_amount: Decimal
    total_reach: int
    total_engagement: int
    average_roi: Optional[Decimal] = None
