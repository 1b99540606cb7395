from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from influencerflow.db.enums import CampaignStatusEnum
from influencerflow.schemas.brands import BrandOut


class CampaignCreate(BaseModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    objective: str = Field(min_length=1)
    budget: Decimal = Field(gt=0, decimal_places=2)
    status: CampaignStatusEnum = CampaignStatusEnum.draft


class CampaignUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    objective: Optional[str] = Field(default=None, min_length=1)
    budget: Optional[Decimal] = Field(default=None, gt=0, decimal_places=2)
    status: Optional[CampaignStatusEnum] = None


class CampaignOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    brand_id: int
    name: str
    description: Optional[str] = None
    objective: str
    budget: Decimal
    status: CampaignStatusEnum
    created_at: datetime
    updated_at: datetime


class CampaignWithBrandOut(CampaignOut):
    brand: BrandOut
