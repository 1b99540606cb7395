from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from influencerflow.auth.dependencies import require_creator
from influencerflow.db.deps import get_session
from influencerflow.db.models import Creator
from influencerflow.db.repositories.creators import CreatorsRepository
from influencerflow.schemas.creators import CreatorOut, CreatorUpdate

router = APIRouter(prefix="/creators", tags=["creators"])


@router.get("", response_model=list[CreatorOut])
def search_creators(
    niche: Optional[str] = None,
    min_followers: Optional[int] = Query(default=None, alias="minFollowers", ge=0),
    max_followers: Optional[int] = Query(default=None, alias="maxFollowers", ge=0),
    location: Optional[str] = None,
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    session: Session = Depends(get_session),
):
    creators = CreatorsRepository(session).search(
        niche=niche,
        min_followers=min_followers,
        max_followers=max_followers,
        location=location,
        limit=limit,
        offset=offset,
    )
    return [CreatorOut.model_validate(creator) for creator in creators]


@router.get("/me", response_model=CreatorOut)
def get_my_creator_profile(creator: Creator = Depends(require_creator)):
    return CreatorOut.model_validate(creator)


@router.patch("/me", response_model=CreatorOut)
def update_my_creator_profile(
    payload: CreatorUpdate,
    creator: Creator = Depends(require_creator),
    session: Session = Depends(get_session),
):
    fields = payload.model_dump(exclude_unset=True, exclude_none=True)
    if not fields:
        return CreatorOut.model_validate(creator)
    updated = CreatorsRepository(session).update(creator.id, **fields)
    return CreatorOut.model_validate(updated)


@router.get("/{creator_id}", response_model=CreatorOut)
def get_creator(creator_id: int, session: Session = Depends(get_session)):
    creator = CreatorsRepository(session).get(creator_id)
    if not creator:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Creator not found")
    return CreatorOut.model_validate(creator)
