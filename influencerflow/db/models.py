from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

import sqlalchemy as sa
from sqlalchemy import (
    Boolean,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from influencerflow.config import settings
from influencerflow.db.base import Base
from influencerflow.db.enums import (
    CampaignStatusEnum,
    OfferStatusEnum,
    PaymentStatusEnum,
    UserRoleEnum,
)
from influencerflow.domain import lifecycle


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    external_id: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    email: Mapped[Optional[str]] = mapped_column(String(320), unique=True, nullable=True)
    first_name: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    last_name: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    profile_image_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    role: Mapped[Optional[UserRoleEnum]] = mapped_column(
        Enum(UserRoleEnum, name="user_role"), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    creator: Mapped[Optional["Creator"]] = relationship(back_populates="user", uselist=False)
    brand: Mapped[Optional["Brand"]] = relationship(back_populates="user", uselist=False)


class Creator(Base):
    __tablename__ = "creators"
    __table_args__ = (sa.Index("idx_creators_niche_followers", "niche", "followers_count"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False
    )
    username: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    display_name: Mapped[str] = mapped_column(Text, nullable=False)
    bio: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    niche: Mapped[str] = mapped_column(String(100), nullable=False)
    followers_count: Mapped[int] = mapped_column(Integer, nullable=False, server_default="0")
    engagement_rate: Mapped[Optional[Decimal]] = mapped_column(Numeric(5, 2), nullable=True)
    average_rate: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2), nullable=True)
    location: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    profile_image_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    tags: Mapped[list[str]] = mapped_column(sa.JSON, nullable=False, default=list)
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=sa.true()
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    user: Mapped[User] = relationship(back_populates="creator")


class Brand(Base):
    __tablename__ = "brands"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False
    )
    company_name: Mapped[str] = mapped_column(Text, nullable=False)
    industry: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    website: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    logo_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    user: Mapped[User] = relationship(back_populates="brand")
    campaigns: Mapped[list["Campaign"]] = relationship(back_populates="brand")


class Campaign(Base):
    __tablename__ = "campaigns"
    __table_args__ = (sa.Index("idx_campaigns_brand_status", "brand_id", "status"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    brand_id: Mapped[int] = mapped_column(ForeignKey("brands.id", ondelete="CASCADE"), nullable=False)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    objective: Mapped[str] = mapped_column(Text, nullable=False)
    budget: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    status: Mapped[CampaignStatusEnum] = mapped_column(
        Enum(CampaignStatusEnum, name="campaign_status"),
        nullable=False,
        default=CampaignStatusEnum.draft,
        server_default=CampaignStatusEnum.draft.value,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    brand: Mapped[Brand] = relationship(back_populates="campaigns")
    offers: Mapped[list["Offer"]] = relationship(back_populates="campaign")


class Offer(Base):
    __tablename__ = "offers"
    __table_args__ = (
        sa.Index("idx_offers_campaign", "campaign_id"),
        sa.Index("idx_offers_creator_status", "creator_id", "status"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    campaign_id: Mapped[int] = mapped_column(
        ForeignKey("campaigns.id", ondelete="CASCADE"), nullable=False
    )
    creator_id: Mapped[int] = mapped_column(
        ForeignKey("creators.id", ondelete="CASCADE"), nullable=False
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    message: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    status: Mapped[OfferStatusEnum] = mapped_column(
        Enum(OfferStatusEnum, name="offer_status"),
        nullable=False,
        default=OfferStatusEnum.pending,
        server_default=OfferStatusEnum.pending.value,
    )
    counter_amount: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2), nullable=True)
    counter_message: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    campaign: Mapped[Campaign] = relationship(back_populates="offers")
    creator: Mapped[Creator] = relationship()
    contracts: Mapped[list["Contract"]] = relationship(back_populates="offer")


class Contract(Base):
    __tablename__ = "contracts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    offer_id: Mapped[int] = mapped_column(ForeignKey("offers.id", ondelete="CASCADE"), nullable=False)
    final_amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    terms: Mapped[str] = mapped_column(Text, nullable=False)
    creator_signed: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=sa.false()
    )
    brand_signed: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=sa.false()
    )
    creator_signed_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    brand_signed_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    pdf_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    offer: Mapped[Offer] = relationship(back_populates="contracts")
    payments: Mapped[list["Payment"]] = relationship(back_populates="contract")

    @property
    def fully_executed(self) -> bool:
        return lifecycle.is_fully_executed(self.brand_signed, self.creator_signed)

    @property
    def signature_status(self) -> str:
        return lifecycle.signature_status(self.brand_signed, self.creator_signed)


class Payment(Base):
    __tablename__ = "payments"
    __table_args__ = (sa.Index("idx_payments_contract", "contract_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    contract_id: Mapped[int] = mapped_column(
        ForeignKey("contracts.id", ondelete="CASCADE"), nullable=False
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    status: Mapped[PaymentStatusEnum] = mapped_column(
        Enum(PaymentStatusEnum, name="payment_status"),
        nullable=False,
        default=PaymentStatusEnum.pending,
        server_default=PaymentStatusEnum.pending.value,
    )
    due_date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    paid_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    processor_reference: Mapped[Optional[str]] = mapped_column(String(255), unique=True, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    contract: Mapped[Contract] = relationship(back_populates="payments")

    @property
    def status_label(self) -> str:
        return lifecycle.payment_status_label(
            self.status,
            self.due_date,
            due_soon_days=settings.PAYMENT_DUE_SOON_DAYS,
        )


class PerformanceReport(Base):
    __tablename__ = "performance_reports"
    __table_args__ = (sa.Index("idx_performance_reports_contract", "contract_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    contract_id: Mapped[int] = mapped_column(
        ForeignKey("contracts.id", ondelete="CASCADE"), nullable=False
    )
    reach: Mapped[int] = mapped_column(Integer, nullable=False, server_default="0")
    impressions: Mapped[int] = mapped_column(Integer, nullable=False, server_default="0")
    engagement: Mapped[int] = mapped_column(Integer, nullable=False, server_default="0")
    clicks: Mapped[int] = mapped_column(Integer, nullable=False, server_default="0")
    engagement_rate: Mapped[Optional[Decimal]] = mapped_column(Numeric(5, 2), nullable=True)
    roi: Mapped[Optional[Decimal]] = mapped_column(Numeric(5, 2), nullable=True)
    generated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
