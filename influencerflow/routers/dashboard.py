from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from influencerflow.auth.dependencies import require_brand, require_creator
from influencerflow.db.deps import get_session
from influencerflow.db.models import Brand, Creator
from influencerflow.db.repositories.dashboards import DashboardsRepository
from influencerflow.domain import lifecycle
from influencerflow.schemas.reports import BrandDashboardOut, CreatorDashboardOut

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/creator", response_model=CreatorDashboardOut)
def creator_dashboard(
    creator: Creator = Depends(require_creator),
    session: Session = Depends(get_session),
):
    now = lifecycle.utcnow()
    month_start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    summary = DashboardsRepository(session).creator_summary(creator.id, month_start=month_start)
    return CreatorDashboardOut(**summary)


@router.get("/brand", response_model=BrandDashboardOut)
def brand_dashboard(
    brand: Brand = Depends(require_brand),
    session: Session = Depends(get_session),
):
    summary = DashboardsRepository(session).brand_summary(brand.id)
    return BrandDashboardOut(**summary)
