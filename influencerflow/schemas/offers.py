from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from influencerflow.db.enums import OfferStatusEnum
from influencerflow.schemas.campaigns import CampaignWithBrandOut
from influencerflow.schemas.creators import CreatorOut


class OfferCreate(BaseModel):
    campaign_id: int
    creator_id: int
    amount: Decimal = Field(gt=0, decimal_places=2)
    message: Optional[str] = None


class OfferBulkCreate(BaseModel):
    campaign_id: int
    creator_ids: List[int] = Field(min_length=1)
    amount: Decimal = Field(gt=0, decimal_places=2)
    message: Optional[str] = None


class OfferUpdate(BaseModel):
    status: Optional[OfferStatusEnum] = None
    amount: Optional[Decimal] = Field(default=None, gt=0, decimal_places=2)
    message: Optional[str] = None
    counter_amount: Optional[Decimal] = Field(default=None, gt=0, decimal_places=2)
    counter_message: Optional[str] = None


class OfferOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    campaign_id: int
    creator_id: int
    amount: Decimal
    message: Optional[str] = None
    status: OfferStatusEnum
    counter_amount: Optional[Decimal] = None
    counter_message: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    creator: CreatorOut
    campaign: CampaignWithBrandOut
