from typing import Iterable, List, Optional

from sqlalchemy import select

from influencerflow.db.enums import OfferStatusEnum
from influencerflow.db.models import Campaign, Offer
from influencerflow.db.repositories.base import Repository


class OffersRepository(Repository):
    def list_for_creator(
        self,
        creator_id: int,
        status: Optional[OfferStatusEnum] = None,
    ) -> List[Offer]:
        stmt = select(Offer).where(Offer.creator_id == creator_id)
        if status:
            stmt = stmt.where(Offer.status == status)
        stmt = stmt.order_by(Offer.created_at.desc(), Offer.id.desc())
        return list(self.session.scalars(stmt).all())

    def list_for_brand(
        self,
        brand_id: int,
        status: Optional[OfferStatusEnum] = None,
        campaign_id: Optional[int] = None,
    ) -> List[Offer]:
        stmt = select(Offer).join(Campaign, Offer.campaign_id == Campaign.id).where(
            Campaign.brand_id == brand_id
        )
        if status:
            stmt = stmt.where(Offer.status == status)
        if campaign_id:
            stmt = stmt.where(Offer.campaign_id == campaign_id)
        stmt = stmt.order_by(Offer.created_at.desc(), Offer.id.desc())
        return list(self.session.scalars(stmt).all())

    def get(self, offer_id: int) -> Optional[Offer]:
        return self.session.get(Offer, offer_id)

    def create(self, campaign_id: int, creator_id: int, amount, message: Optional[str] = None) -> Offer:
        offer = Offer(campaign_id=campaign_id, creator_id=creator_id, amount=amount, message=message)
        return self.save(offer)

    def create_many(
        self,
        campaign_id: int,
        creator_ids: Iterable[int],
        amount,
        message: Optional[str] = None,
    ) -> List[Offer]:
        offers = [
            Offer(campaign_id=campaign_id, creator_id=creator_id, amount=amount, message=message)
            for creator_id in creator_ids
        ]
        self.session.add_all(offers)
        self.session.commit()
        for offer in offers:
            self.session.refresh(offer)
        return offers

    def update(self, offer: Offer, **fields) -> Offer:
        return self.apply(offer, **fields)
