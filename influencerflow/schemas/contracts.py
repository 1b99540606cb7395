from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from influencerflow.schemas.offers import OfferOut


class ContractCreate(BaseModel):
    offer_id: int
    final_amount: Optional[Decimal] = Field(default=None, gt=0, decimal_places=2)
    terms: Optional[str] = None
    pdf_url: Optional[str] = None


class ContractSummaryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    offer_id: int
    final_amount: Decimal
    terms: str
    creator_signed: bool
    brand_signed: bool
    creator_signed_at: Optional[datetime] = None
    brand_signed_at: Optional[datetime] = None
    pdf_url: Optional[str] = None
    created_at: datetime
    fully_executed: bool
    signature_status: str


class ContractOut(ContractSummaryOut):
    offer: OfferOut
