from enum import Enum


class UserRoleEnum(str, Enum):
    brand = "brand"
    creator = "creator"


class CampaignStatusEnum(str, Enum):
    draft = "draft"
    active = "active"
    completed = "completed"
    cancelled = "cancelled"


class OfferStatusEnum(str, Enum):
    pending = "pending"
    accepted = "accepted"
    rejected = "rejected"
    countered = "countered"


class PaymentStatusEnum(str, Enum):
    pending = "pending"
    paid = "paid"
    failed = "failed"
