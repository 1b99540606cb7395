from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from influencerflow.auth.dependencies import require_brand
from influencerflow.db.deps import get_session
from influencerflow.db.models import Brand
from influencerflow.db.repositories.brands import BrandsRepository
from influencerflow.schemas.brands import BrandOut, BrandUpdate

router = APIRouter(prefix="/brands", tags=["brands"])


@router.get("/me", response_model=BrandOut)
def get_my_brand(brand: Brand = Depends(require_brand)):
    return BrandOut.model_validate(brand)


@router.patch("/me", response_model=BrandOut)
def update_my_brand(
    payload: BrandUpdate,
    brand: Brand = Depends(require_brand),
    session: Session = Depends(get_session),
):
    fields = payload.model_dump(exclude_unset=True, exclude_none=True)
    if not fields:
        return BrandOut.model_validate(brand)
    updated = BrandsRepository(session).update(brand.id, **fields)
    return BrandOut.model_validate(updated)
