from typing import List

from sqlalchemy import select

from influencerflow.db.models import PerformanceReport
from influencerflow.db.repositories.base import Repository


class ReportsRepository(Repository):
    def list_for_contract(self, contract_id: int) -> List[PerformanceReport]:
        stmt = (
            select(PerformanceReport)
            .where(PerformanceReport.contract_id == contract_id)
            .order_by(PerformanceReport.generated_at.desc(), PerformanceReport.id.desc())
        )
        return list(self.session.scalars(stmt).all())
