from typing import Optional

from sqlalchemy import select

from influencerflow.db.models import Brand
from influencerflow.db.repositories.base import Repository


class BrandsRepository(Repository):
    def get(self, brand_id: int) -> Optional[Brand]:
        return self.session.get(Brand, brand_id)

    def get_by_user_id(self, user_id: int) -> Optional[Brand]:
        stmt = select(Brand).where(Brand.user_id == user_id)
        return self.session.scalars(stmt).first()

    def create(self, user_id: int, company_name: str, **fields) -> Brand:
        return self.save(Brand(user_id=user_id, company_name=company_name, **fields))

    def update(self, brand_id: int, **fields) -> Optional[Brand]:
        brand = self.get(brand_id)
        if not brand:
            return None
        return self.apply(brand, **fields)
