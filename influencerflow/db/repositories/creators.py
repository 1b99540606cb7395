import re
from typing import List, Optional

from sqlalchemy import func, select

from influencerflow.db.models import Creator
from influencerflow.db.repositories.base import Repository

_USERNAME_SAFE = re.compile(r"[^a-z0-9_]+")


class CreatorsRepository(Repository):
    def search(
        self,
        niche: Optional[str] = None,
        min_followers: Optional[int] = None,
        max_followers: Optional[int] = None,
        location: Optional[str] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> List[Creator]:
        stmt = select(Creator).where(Creator.is_active.is_(True))
        if niche:
            stmt = stmt.where(func.lower(Creator.niche) == niche.lower())
        if min_followers is not None:
            stmt = stmt.where(Creator.followers_count >= min_followers)
        if max_followers is not None:
            stmt = stmt.where(Creator.followers_count <= max_followers)
        if location:
            stmt = stmt.where(func.lower(Creator.location).contains(location.lower(), autoescape=True))
        stmt = stmt.order_by(Creator.followers_count.desc(), Creator.id).limit(limit).offset(offset)
        return list(self.session.scalars(stmt).all())

    def get(self, creator_id: int) -> Optional[Creator]:
        return self.session.get(Creator, creator_id)

    def get_by_user_id(self, user_id: int) -> Optional[Creator]:
        stmt = select(Creator).where(Creator.user_id == user_id)
        return self.session.scalars(stmt).first()

    def get_by_username(self, username: str) -> Optional[Creator]:
        stmt = select(Creator).where(Creator.username == username)
        return self.session.scalars(stmt).first()

    def get_many(self, creator_ids: List[int]) -> List[Creator]:
        if not creator_ids:
            return []
        stmt = select(Creator).where(Creator.id.in_(creator_ids))
        return list(self.session.scalars(stmt).all())

    def available_username(self, seed: str) -> str:
        base = _USERNAME_SAFE.sub("_", (seed or "").strip().lower()).strip("_") or "creator"
        candidate = base
        suffix = 1
        while self.get_by_username(candidate):
            suffix += 1
            candidate = f"{base}{suffix}"
        return candidate

    def create(self, user_id: int, username: str, display_name: str, niche: str, **fields) -> Creator:
        creator = Creator(
            user_id=user_id,
            username=username,
            display_name=display_name,
            niche=niche,
            **fields,
        )
        return self.save(creator)

    def update(self, creator_id: int, **fields) -> Optional[Creator]:
        creator = self.get(creator_id)
        if not creator:
            return None
        return self.apply(creator, **fields)
