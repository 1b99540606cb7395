from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from influencerflow.db.enums import UserRoleEnum
from influencerflow.schemas.brands import BrandOut
from influencerflow.schemas.creators import CreatorOut


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    external_id: str
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None
    role: Optional[UserRoleEnum] = None
    created_at: datetime


class CurrentUserOut(UserOut):
    creator: Optional[CreatorOut] = None
    brand: Optional[BrandOut] = None


class RoleSelect(BaseModel):
    # Plain string so an unknown role is a 400 rather than a validation error.
    role: str
