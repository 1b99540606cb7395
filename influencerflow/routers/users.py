import logging
from decimal import Decimal

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from influencerflow.auth.dependencies import AuthContext, get_current_user, load_user
from influencerflow.db.deps import get_session
from influencerflow.db.enums import UserRoleEnum
from influencerflow.db.models import User
from influencerflow.db.repositories.brands import BrandsRepository
from influencerflow.db.repositories.creators import CreatorsRepository
from influencerflow.db.repositories.users import UsersRepository
from influencerflow.schemas.users import CurrentUserOut, RoleSelect

logger = logging.getLogger(__name__)

router = APIRouter(tags=["users"])


def _ensure_default_profile(user: User, session: Session) -> None:
    if user.role == UserRoleEnum.brand:
        brands_repo = BrandsRepository(session)
        if not brands_repo.get_by_user_id(user.id):
            brands_repo.create(
                user_id=user.id,
                company_name=user.first_name or "My Company",
                industry="Technology",
                description="A growing company looking for influencer partnerships",
            )
            logger.info("Created default brand profile", extra={"user_id": user.id})
        return

    creators_repo = CreatorsRepository(session)
    if creators_repo.get_by_user_id(user.id):
        return
    display_name = " ".join(part for part in (user.first_name, user.last_name) if part) or "New Creator"
    creators_repo.create(
        user_id=user.id,
        username=creators_repo.available_username(user.first_name or "creator"),
        display_name=display_name,
        bio="Content creator passionate about engaging with audiences",
        niche="Lifestyle",
        followers_count=10000,
        engagement_rate=Decimal("3.50"),
        average_rate=Decimal("500.00"),
        location="United States",
        profile_image_url=user.profile_image_url,
        tags=[],
    )
    logger.info("Created default creator profile", extra={"user_id": user.id})


@router.get("/auth/user", response_model=CurrentUserOut)
def get_auth_user(
    auth: AuthContext = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    user = load_user(auth, session)
    return CurrentUserOut.model_validate(user)


@router.post("/users/role", response_model=CurrentUserOut)
def select_role(
    payload: RoleSelect,
    auth: AuthContext = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    try:
        role = UserRoleEnum(payload.role)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Role must be 'brand' or 'creator'.",
        ) from exc

    user = load_user(auth, session)
    if user.role is not None and user.role != role:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Role is already set to '{user.role.value}'.",
        )
    if user.role is None:
        user = UsersRepository(session).set_role(user, role)
        logger.info("User selected role", extra={"user_id": user.id, "role": role.value})

    _ensure_default_profile(user, session)
    session.refresh(user)
    return CurrentUserOut.model_validate(user)
