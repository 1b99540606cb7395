import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from influencerflow.auth.dependencies import Party, get_party, require_brand
from influencerflow.db.deps import get_session
from influencerflow.db.enums import OfferStatusEnum
from influencerflow.db.models import Brand
from influencerflow.db.repositories.campaigns import CampaignsRepository
from influencerflow.db.repositories.creators import CreatorsRepository
from influencerflow.db.repositories.offers import OffersRepository
from influencerflow.schemas.offers import OfferBulkCreate, OfferCreate, OfferOut, OfferUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/offers", tags=["offers"])


def _owned_campaign(brand: Brand, campaign_id: int, session: Session):
    campaign = CampaignsRepository(session).get(brand_id=brand.id, campaign_id=campaign_id)
    if not campaign:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Campaign not found")
    return campaign


@router.get("", response_model=list[OfferOut])
def list_offers(
    status_filter: Optional[OfferStatusEnum] = Query(default=None, alias="status"),
    campaign_id: Optional[int] = None,
    party: Party = Depends(get_party),
    session: Session = Depends(get_session),
):
    repo = OffersRepository(session)
    if party.is_brand:
        offers = repo.list_for_brand(party.brand.id, status=status_filter, campaign_id=campaign_id)
    else:
        offers = repo.list_for_creator(party.creator.id, status=status_filter)
    return [OfferOut.model_validate(offer) for offer in offers]


@router.post("", response_model=OfferOut, status_code=status.HTTP_201_CREATED)
def create_offer(
    payload: OfferCreate,
    brand: Brand = Depends(require_brand),
    session: Session = Depends(get_session),
):
    campaign = _owned_campaign(brand, payload.campaign_id, session)
    if not CreatorsRepository(session).get(payload.creator_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Creator not found")

    offer = OffersRepository(session).create(
        campaign_id=campaign.id,
        creator_id=payload.creator_id,
        amount=payload.amount,
        message=payload.message,
    )
    logger.info(
        "Sent offer",
        extra={"offer_id": offer.id, "campaign_id": campaign.id, "creator_id": payload.creator_id},
    )
    return OfferOut.model_validate(offer)


@router.post("/bulk", response_model=list[OfferOut], status_code=status.HTTP_201_CREATED)
def create_offers_bulk(
    payload: OfferBulkCreate,
    brand: Brand = Depends(require_brand),
    session: Session = Depends(get_session),
):
    campaign = _owned_campaign(brand, payload.campaign_id, session)
    creator_ids = list(dict.fromkeys(payload.creator_ids))
    found = {creator.id for creator in CreatorsRepository(session).get_many(creator_ids)}
    missing = [creator_id for creator_id in creator_ids if creator_id not in found]
    if missing:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Creators not found: {', '.join(str(creator_id) for creator_id in missing)}",
        )

    offers = OffersRepository(session).create_many(
        campaign_id=campaign.id,
        creator_ids=creator_ids,
        amount=payload.amount,
        message=payload.message,
    )
    logger.info("Sent offers", extra={"campaign_id": campaign.id, "count": len(offers)})
    return [OfferOut.model_validate(offer) for offer in offers]


@router.patch("/{offer_id}", response_model=OfferOut)
def update_offer(
    offer_id: int,
    payload: OfferUpdate,
    party: Party = Depends(get_party),
    session: Session = Depends(get_session),
):
    repo = OffersRepository(session)
    offer = repo.get(offer_id)
    if not offer:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Offer not found")
    if not party.owns_offer(offer):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not a party to this offer")

    fields = payload.model_dump(exclude_unset=True, exclude_none=True)
    if payload.status == OfferStatusEnum.countered and payload.counter_amount is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="counter_amount is required when countering an offer.",
        )
    if not fields:
        return OfferOut.model_validate(offer)

    previous_status = offer.status
    offer = repo.update(offer, **fields)
    if payload.status is not None:
        logger.info(
            "Offer status changed",
            extra={
                "offer_id": offer.id,
                "from_status": previous_status.value,
                "to_status": offer.status.value,
                "role": party.role.value,
            },
        )
    return OfferOut.model_validate(offer)
