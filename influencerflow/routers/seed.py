import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from influencerflow.config import settings
from influencerflow.db.deps import get_session
from influencerflow.services.seed import seed_demo_data

logger = logging.getLogger(__name__)

router = APIRouter(tags=["seed"])


@router.post("/seed")
def seed(session: Session = Depends(get_session)) -> dict:
    if not settings.ENABLE_DEMO_SEED:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Demo seeding is disabled.")
    created = seed_demo_data(session)
    return {"ok": True, "created": created}
