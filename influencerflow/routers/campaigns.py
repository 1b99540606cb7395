import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from influencerflow.auth.dependencies import require_brand
from influencerflow.db.deps import get_session
from influencerflow.db.enums import CampaignStatusEnum
from influencerflow.db.models import Brand
from influencerflow.db.repositories.campaigns import CampaignsRepository
from influencerflow.schemas.campaigns import CampaignCreate, CampaignOut, CampaignUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/campaigns", tags=["campaigns"])


@router.get("", response_model=list[CampaignOut])
def list_campaigns(
    status_filter: Optional[CampaignStatusEnum] = Query(default=None, alias="status"),
    brand: Brand = Depends(require_brand),
    session: Session = Depends(get_session),
):
    campaigns = CampaignsRepository(session).list(brand_id=brand.id, status=status_filter)
    return [CampaignOut.model_validate(campaign) for campaign in campaigns]


@router.post("", response_model=CampaignOut, status_code=status.HTTP_201_CREATED)
def create_campaign(
    payload: CampaignCreate,
    brand: Brand = Depends(require_brand),
    session: Session = Depends(get_session),
):
    campaign = CampaignsRepository(session).create(brand_id=brand.id, **payload.model_dump())
    logger.info("Created campaign", extra={"campaign_id": campaign.id, "brand_id": brand.id})
    return CampaignOut.model_validate(campaign)


@router.get("/{campaign_id}", response_model=CampaignOut)
def get_campaign(
    campaign_id: int,
    brand: Brand = Depends(require_brand),
    session: Session = Depends(get_session),
):
    campaign = CampaignsRepository(session).get(brand_id=brand.id, campaign_id=campaign_id)
    if not campaign:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Campaign not found")
    return CampaignOut.model_validate(campaign)


@router.patch("/{campaign_id}", response_model=CampaignOut)
def update_campaign(
    campaign_id: int,
    payload: CampaignUpdate,
    brand: Brand = Depends(require_brand),
    session: Session = Depends(get_session),
):
    fields = payload.model_dump(exclude_unset=True, exclude_none=True)
    repo = CampaignsRepository(session)
    if fields:
        campaign = repo.update(brand_id=brand.id, campaign_id=campaign_id, **fields)
    else:
        campaign = repo.get(brand_id=brand.id, campaign_id=campaign_id)
    if not campaign:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Campaign not found")
    return CampaignOut.model_validate(campaign)
