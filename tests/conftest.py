import os
import sys
import tempfile
from decimal import Decimal
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT_DIR))

_TEST_DB = Path(tempfile.gettempdir()) / f"influencerflow-test-{os.getpid()}.db"
os.environ.setdefault("DATABASE_URL", f"sqlite:///{_TEST_DB}")
os.environ.setdefault("CLERK_JWKS_URL", "https://clerk.test/.well-known/jwks.json")
os.environ.setdefault("CLERK_JWT_ISSUER", "https://clerk.test")
os.environ.setdefault("ENABLE_DEMO_SEED", "false")

import pytest  # noqa: E402
from fastapi import HTTPException, status  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from influencerflow.auth.dependencies import AuthContext, get_current_user  # noqa: E402
from influencerflow.db import models  # noqa: E402,F401
from influencerflow.db.base import Base, SessionLocal, engine  # noqa: E402
from influencerflow.db.deps import get_session  # noqa: E402
from influencerflow.db.enums import UserRoleEnum  # noqa: E402
from influencerflow.db.repositories.brands import BrandsRepository  # noqa: E402
from influencerflow.db.repositories.creators import CreatorsRepository  # noqa: E402
from influencerflow.db.repositories.users import UsersRepository  # noqa: E402
from influencerflow.main import app  # noqa: E402


@pytest.fixture()
def db_session():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


class AuthState:
    """Who the overridden get_current_user dependency resolves to."""

    def __init__(self) -> None:
        self.context: AuthContext | None = None

    def login(self, user) -> AuthContext:
        self.context = AuthContext(user_id=user.id, external_id=user.external_id, role=user.role)
        return self.context

    def logout(self) -> None:
        self.context = None


@pytest.fixture()
def auth_state() -> AuthState:
    return AuthState()


@pytest.fixture()
def override_dependencies(db_session, auth_state):
    def get_session_override():
        try:
            yield db_session
        finally:
            pass

    def get_user_override():
        if auth_state.context is None:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing bearer token")
        return auth_state.context

    app.dependency_overrides[get_session] = get_session_override
    app.dependency_overrides[get_current_user] = get_user_override
    try:
        yield
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def api_client(override_dependencies):
    with TestClient(app) as client:
        yield client


@pytest.fixture()
def make_user(db_session):
    counter = {"n": 0}

    def _make_user(role: UserRoleEnum | None = None, first_name: str = "Test", **fields):
        counter["n"] += 1
        return UsersRepository(db_session).create(
            external_id=f"user_test_{counter['n']}",
            email=f"user{counter['n']}@example.test",
            first_name=first_name,
            last_name="User",
            role=role,
            **fields,
        )

    return _make_user


@pytest.fixture()
def make_brand(db_session, make_user):
    def _make_brand(company_name: str = "Acme Outdoors"):
        user = make_user(role=UserRoleEnum.brand, first_name=company_name.split()[0])
        brand = BrandsRepository(db_session).create(
            user_id=user.id,
            company_name=company_name,
            industry="Outdoor",
        )
        return user, brand

    return _make_brand


@pytest.fixture()
def make_creator(db_session, make_user):
    def _make_creator(username: str = "jo_hikes", **profile):
        user = make_user(role=UserRoleEnum.creator, first_name=username.split("_")[0].title())
        defaults = {
            "display_name": username.replace("_", " ").title(),
            "niche": "Travel",
            "followers_count": 50000,
            "engagement_rate": Decimal("4.50"),
            "average_rate": Decimal("800.00"),
            "location": "Denver, CO",
            "tags": ["outdoors"],
        }
        defaults.update(profile)
        creator = CreatorsRepository(db_session).create(user_id=user.id, username=username, **defaults)
        return user, creator

    return _make_creator


@pytest.fixture()
def deal(api_client, auth_state, make_brand, make_creator):
    """A brand with a campaign and a pending offer to one creator."""
    brand_user, brand = make_brand()
    creator_user, creator = make_creator()

    auth_state.login(brand_user)
    campaign = api_client.post(
        "/campaigns",
        json={"name": "Summer Trails", "objective": "Awareness", "budget": "5000"},
    ).json()
    offer = api_client.post(
        "/offers",
        json={
            "campaign_id": campaign["id"],
            "creator_id": creator.id,
            "amount": "750",
            "message": "Two reels and a story",
        },
    ).json()
    return {
        "brand_user": brand_user,
        "brand": brand,
        "creator_user": creator_user,
        "creator": creator,
        "campaign": campaign,
        "offer": offer,
    }
