from dataclasses import dataclass
import logging
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from influencerflow.auth.clerk import verify_clerk_token
from influencerflow.db.deps import get_session
from influencerflow.db.enums import UserRoleEnum
from influencerflow.db.models import Brand, Creator, Offer, User
from influencerflow.db.repositories.brands import BrandsRepository
from influencerflow.db.repositories.creators import CreatorsRepository
from influencerflow.db.repositories.users import UsersRepository


bearer_scheme = HTTPBearer(auto_error=False)
logger = logging.getLogger("auth.deps")


@dataclass
class AuthContext:
    user_id: int
    external_id: str
    role: Optional[UserRoleEnum] = None


def _claims_profile(claims: dict) -> dict:
    return {
        "email": claims.get("email") or claims.get("email_address"),
        "first_name": claims.get("given_name") or claims.get("first_name"),
        "last_name": claims.get("family_name") or claims.get("last_name"),
        "profile_image_url": claims.get("picture") or claims.get("image_url"),
    }


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    session: Session = Depends(get_session),
) -> AuthContext:
    if credentials is None or not credentials.credentials:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing bearer token")

    claims = verify_clerk_token(credentials.credentials)
    external_id = claims.get("sub")
    if not external_id:
        logger.warning("Token without subject", extra={"claims_keys": list(claims.keys())})
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token claims")

    users_repo = UsersRepository(session)
    user = users_repo.get_by_external_id(external_id)
    if not user:
        profile = _claims_profile(claims)
        if profile["email"] and users_repo.get_by_email(profile["email"]):
            # email already claimed by another identity; keep the new user reachable
            profile["email"] = None
        logger.info("Creating user from session token", extra={"sub": external_id})
        user = users_repo.create(external_id=external_id, **profile)
    else:
        logger.debug("Resolved user from session token", extra={"sub": external_id, "user_id": user.id})

    return AuthContext(user_id=user.id, external_id=user.external_id, role=user.role)


def load_user(auth: AuthContext, session: Session) -> User:
    user = UsersRepository(session).get(auth.user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unknown user")
    return user


def require_brand(
    auth: AuthContext = Depends(get_current_user),
    session: Session = Depends(get_session),
) -> Brand:
    brand = BrandsRepository(session).get_by_user_id(auth.user_id)
    if not brand:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only brands can perform this action",
        )
    return brand


def require_creator(
    auth: AuthContext = Depends(get_current_user),
    session: Session = Depends(get_session),
) -> Creator:
    creator = CreatorsRepository(session).get_by_user_id(auth.user_id)
    if not creator:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only creators can perform this action",
        )
    return creator


@dataclass
class Party:
    """The caller's side in an offer: their role and matching profile row."""

    role: UserRoleEnum
    brand: Optional[Brand] = None
    creator: Optional[Creator] = None

    @property
    def is_brand(self) -> bool:
        return self.role == UserRoleEnum.brand

    def owns_offer(self, offer: Offer) -> bool:
        if self.is_brand:
            return offer.campaign.brand_id == self.brand.id
        return offer.creator_id == self.creator.id


def get_party(
    auth: AuthContext = Depends(get_current_user),
    session: Session = Depends(get_session),
) -> Party:
    user = load_user(auth, session)
    if user.role == UserRoleEnum.brand:
        brand = BrandsRepository(session).get_by_user_id(user.id)
        if brand:
            return Party(role=user.role, brand=brand)
    elif user.role == UserRoleEnum.creator:
        creator = CreatorsRepository(session).get_by_user_id(user.id)
        if creator:
            return Party(role=user.role, creator=creator)
    raise HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail="Choose a role and complete your profile first",
    )
