"""Demo data for local development and product walkthroughs."""
from __future__ import annotations

import logging
from decimal import Decimal

from sqlalchemy.orm import Session

from influencerflow.db.enums import UserRoleEnum
from influencerflow.db.repositories.brands import BrandsRepository
from influencerflow.db.repositories.creators import CreatorsRepository
from influencerflow.db.repositories.users import UsersRepository

logger = logging.getLogger(__name__)

_AVATAR = "https://images.unsplash.com/{photo}?w=150&h=150&fit=crop&crop=face"

DEMO_CREATORS = [
    {
        "user": {"external_id": "demo_creator_sarah", "email": "sarah@example.com", "first_name": "Sarah", "last_name": "Johnson"},
        "profile": {
            "username": "sarah_lifestyle",
            "display_name": "Sarah Johnson",
            "bio": "Lifestyle content creator sharing daily inspiration and wellness tips",
            "niche": "Lifestyle",
            "followers_count": 85000,
            "engagement_rate": Decimal("4.20"),
            "average_rate": Decimal("1200.00"),
            "location": "Los Angeles, CA",
            "profile_image_url": _AVATAR.format(photo="photo-1494790108755-2616b612b5bc"),
            "tags": ["lifestyle", "wellness", "fashion", "travel"],
        },
    },
    {
        "user": {"external_id": "demo_creator_mike", "email": "mike@example.com", "first_name": "Mike", "last_name": "Chen"},
        "profile": {
            "username": "mike_fitness",
            "display_name": "Mike Chen",
            "bio": "Fitness coach helping people achieve their health goals",
            "niche": "Fitness",
            "followers_count": 120000,
            "engagement_rate": Decimal("5.80"),
            "average_rate": Decimal("2000.00"),
            "location": "New York, NY",
            "profile_image_url": _AVATAR.format(photo="photo-1507003211169-0a1dd7228f2d"),
            "tags": ["fitness", "health", "workout", "nutrition"],
        },
    },
    {
        "user": {"external_id": "demo_creator_emma", "email": "emma@example.com", "first_name": "Emma", "last_name": "Rodriguez"},
        "profile": {
            "username": "emma_foodie",
            "display_name": "Emma Rodriguez",
            "bio": "Food blogger showcasing delicious recipes and restaurant reviews",
            "niche": "Food",
            "followers_count": 95000,
            "engagement_rate": Decimal("6.10"),
            "average_rate": Decimal("1500.00"),
            "location": "Miami, FL",
            "profile_image_url": _AVATAR.format(photo="photo-1438761681033-6461ffad8d80"),
            "tags": ["food", "recipes", "restaurants", "cooking"],
        },
    },
    {
        "user": {"external_id": "demo_creator_alex", "email": "alex@example.com", "first_name": "Alex", "last_name": "Thompson"},
        "profile": {
            "username": "alex_tech",
            "display_name": "Alex Thompson",
            "bio": "Tech reviewer covering the latest gadgets and innovations",
            "niche": "Technology",
            "followers_count": 200000,
            "engagement_rate": Decimal("3.90"),
            "average_rate": Decimal("3500.00"),
            "location": "San Francisco, CA",
            "profile_image_url": _AVATAR.format(photo="photo-1472099645785-5658abf4ff4e"),
            "tags": ["technology", "gadgets", "reviews", "innovation"],
        },
    },
    {
        "user": {"external_id": "demo_creator_maya", "email": "maya@example.com", "first_name": "Maya", "last_name": "Patel"},
        "profile": {
            "username": "maya_travel",
            "display_name": "Maya Patel",
            "bio": "Travel enthusiast sharing adventures from around the globe",
            "niche": "Travel",
            "followers_count": 150000,
            "engagement_rate": Decimal("4.70"),
            "average_rate": Decimal("2500.00"),
            "location": "Austin, TX",
            "profile_image_url": _AVATAR.format(photo="photo-1489424731084-a5d8b219a5bb"),
            "tags": ["travel", "adventure", "culture", "photography"],
        },
    },
]

DEMO_BRAND = {
    "user": {"external_id": "demo_brand_nike", "email": "brand@nike.com", "first_name": "Brand", "last_name": "Manager"},
    "profile": {
        "company_name": "Nike",
        "industry": "Sportswear",
        "description": "Global leader in athletic footwear and apparel",
        "website": "https://nike.com",
        "logo_url": "https://logos-world.net/wp-content/uploads/2020/04/Nike-Logo.png",
    },
}


def _ensure_user(users_repo: UsersRepository, user_fields: dict, role: UserRoleEnum, counts: dict):
    user = users_repo.get_by_external_id(user_fields["external_id"])
    if user:
        return user
    fields = dict(user_fields)
    if users_repo.get_by_email(fields["email"]):
        fields["email"] = None
    counts["users"] += 1
    return users_repo.create(role=role, **fields)


def seed_demo_data(session: Session) -> dict:
    """Create the demo creators and brand that do not exist yet.

    Safe to run repeatedly; rows are matched on the user's external id and
    the returned counts only include rows created by this call.
    """
    users_repo = UsersRepository(session)
    creators_repo = CreatorsRepository(session)
    brands_repo = BrandsRepository(session)
    counts = {"users": 0, "creators": 0, "brands": 0}

    for entry in DEMO_CREATORS:
        user = _ensure_user(users_repo, entry["user"], UserRoleEnum.creator, counts)
        if creators_repo.get_by_user_id(user.id):
            continue
        profile = dict(entry["profile"])
        profile["username"] = creators_repo.available_username(profile["username"])
        creators_repo.create(user_id=user.id, **profile)
        counts["creators"] += 1

    user = _ensure_user(users_repo, DEMO_BRAND["user"], UserRoleEnum.brand, counts)
    if not brands_repo.get_by_user_id(user.id):
        brands_repo.create(user_id=user.id, **DEMO_BRAND["profile"])
        counts["brands"] += 1

    logger.info("Seeded demo data", extra={"created": counts})
    return counts
