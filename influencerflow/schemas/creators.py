from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CreatorOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    username: str
    display_name: str
    bio: Optional[str] = None
    niche: str
    followers_count: int
    engagement_rate: Optional[Decimal] = None
    average_rate: Optional[Decimal] = None
    location: Optional[str] = None
    profile_image_url: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    is_active: bool
    created_at: datetime


class CreatorUpdate(BaseModel):
    display_name: Optional[str] = Field(default=None, min_length=1)
    bio: Optional[str] = None
    niche: Optional[str] = Field(default=None, min_length=1)
    followers_count: Optional[int] = Field(default=None, ge=0)
    engagement_rate: Optional[Decimal] = Field(default=None, ge=0, le=100, decimal_places=2)
    average_rate: Optional[Decimal] = Field(default=None, ge=0, decimal_places=2)
    location: Optional[str] = None
    profile_image_url: Optional[str] = None
    tags: Optional[List[str]] = None
    is_active: Optional[bool] = None
