from typing import List, Optional

from sqlalchemy import select

from influencerflow.db.enums import CampaignStatusEnum
from influencerflow.db.models import Campaign
from influencerflow.db.repositories.base import Repository


class CampaignsRepository(Repository):
    def list(
        self,
        brand_id: int,
        status: Optional[CampaignStatusEnum] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> List[Campaign]:
        stmt = select(Campaign).where(Campaign.brand_id == brand_id)
        if status:
            stmt = stmt.where(Campaign.status == status)
        stmt = stmt.order_by(Campaign.created_at.desc(), Campaign.id.desc()).limit(limit).offset(offset)
        return list(self.session.scalars(stmt).all())

    def get(self, brand_id: int, campaign_id: int) -> Optional[Campaign]:
        stmt = select(Campaign).where(Campaign.brand_id == brand_id, Campaign.id == campaign_id)
        return self.session.scalars(stmt).first()

    def create(self, brand_id: int, name: str, objective: str, budget, **fields) -> Campaign:
        campaign = Campaign(brand_id=brand_id, name=name, objective=objective, budget=budget, **fields)
        return self.save(campaign)

    def update(self, brand_id: int, campaign_id: int, **fields) -> Optional[Campaign]:
        campaign = self.get(brand_id, campaign_id)
        if not campaign:
            return None
        return self.apply(campaign, **fields)
