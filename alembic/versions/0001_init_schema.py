"""Initial schema"""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0001_init_schema"
down_revision = None
branch_labels = None
depends_on = None

user_role_enum = sa.Enum("brand", "creator", name="user_role")
campaign_status_enum = sa.Enum("draft", "active", "completed", "cancelled", name="campaign_status")
offer_status_enum = sa.Enum("pending", "accepted", "rejected", "countered", name="offer_status")
payment_status_enum = sa.Enum("pending", "paid", "failed", name="payment_status")


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
    )


def _updated_at() -> sa.Column:
    return sa.Column(
        "updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
    )


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("external_id", sa.String(255), nullable=False, unique=True),
        sa.Column("email", sa.String(320), nullable=True, unique=True),
        sa.Column("first_name", sa.Text(), nullable=True),
        sa.Column("last_name", sa.Text(), nullable=True),
        sa.Column("profile_image_url", sa.Text(), nullable=True),
        sa.Column("role", user_role_enum, nullable=True),
        _created_at(),
        _updated_at(),
    )

    op.create_table(
        "creators",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True
        ),
        sa.Column("username", sa.String(100), nullable=False, unique=True),
        sa.Column("display_name", sa.Text(), nullable=False),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("niche", sa.String(100), nullable=False),
        sa.Column("followers_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("engagement_rate", sa.Numeric(5, 2), nullable=True),
        sa.Column("average_rate", sa.Numeric(10, 2), nullable=True),
        sa.Column("location", sa.Text(), nullable=True),
        sa.Column("profile_image_url", sa.Text(), nullable=True),
        sa.Column("tags", sa.JSON(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        _created_at(),
    )
    op.create_index("idx_creators_niche_followers", "creators", ["niche", "followers_count"])

    op.create_table(
        "brands",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True
        ),
        sa.Column("company_name", sa.Text(), nullable=False),
        sa.Column("industry", sa.Text(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("website", sa.Text(), nullable=True),
        sa.Column("logo_url", sa.Text(), nullable=True),
        _created_at(),
    )

    op.create_table(
        "campaigns",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("brand_id", sa.Integer(), sa.ForeignKey("brands.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("objective", sa.Text(), nullable=False),
        sa.Column("budget", sa.Numeric(10, 2), nullable=False),
        sa.Column("status", campaign_status_enum, nullable=False, server_default="draft"),
        _created_at(),
        _updated_at(),
    )
    op.create_index("idx_campaigns_brand_status", "campaigns", ["brand_id", "status"])

    op.create_table(
        "offers",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "campaign_id", sa.Integer(), sa.ForeignKey("campaigns.id", ondelete="CASCADE"), nullable=False
        ),
        sa.Column(
            "creator_id", sa.Integer(), sa.ForeignKey("creators.id", ondelete="CASCADE"), nullable=False
        ),
        sa.Column("amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("message", sa.Text(), nullable=True),
        sa.Column("status", offer_status_enum, nullable=False, server_default="pending"),
        sa.Column("counter_amount", sa.Numeric(10, 2), nullable=True),
        sa.Column("counter_message", sa.Text(), nullable=True),
        _created_at(),
        _updated_at(),
    )
    op.create_index("idx_offers_campaign", "offers", ["campaign_id"])
    op.create_index("idx_offers_creator_status", "offers", ["creator_id", "status"])

    op.create_table(
        "contracts",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("offer_id", sa.Integer(), sa.ForeignKey("offers.id", ondelete="CASCADE"), nullable=False),
        sa.Column("final_amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("terms", sa.Text(), nullable=False),
        sa.Column("creator_signed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("brand_signed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("creator_signed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("brand_signed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("pdf_url", sa.Text(), nullable=True),
        _created_at(),
    )

    op.create_table(
        "payments",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "contract_id", sa.Integer(), sa.ForeignKey("contracts.id", ondelete="CASCADE"), nullable=False
        ),
        sa.Column("amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("status", payment_status_enum, nullable=False, server_default="pending"),
        sa.Column("due_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("paid_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("processor_reference", sa.String(255), nullable=True, unique=True),
        _created_at(),
    )
    op.create_index("idx_payments_contract", "payments", ["contract_id"])

    op.create_table(
        "performance_reports",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "contract_id", sa.Integer(), sa.ForeignKey("contracts.id", ondelete="CASCADE"), nullable=False
        ),
        sa.Column("reach", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("impressions", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("engagement", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("clicks", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("engagement_rate", sa.Numeric(5, 2), nullable=True),
        sa.Column("roi", sa.Numeric(5, 2), nullable=True),
        sa.Column(
            "generated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
    )
    op.create_index("idx_performance_reports_contract", "performance_reports", ["contract_id"])


def downgrade() -> None:
    op.drop_index("idx_performance_reports_contract", table_name="performance_reports")
    op.drop_table("performance_reports")
    op.drop_index("idx_payments_contract", table_name="payments")
    op.drop_table("payments")
    op.drop_table("contracts")
    op.drop_index("idx_offers_creator_status", table_name="offers")
    op.drop_index("idx_offers_campaign", table_name="offers")
    op.drop_table("offers")
    op.drop_index("idx_campaigns_brand_status", table_name="campaigns")
    op.drop_table("campaigns")
    op.drop_table("brands")
    op.drop_index("idx_creators_niche_followers", table_name="creators")
    op.drop_table("creators")
    op.drop_table("users")

    bind = op.get_bind()
    for enum_type in (payment_status_enum, offer_status_enum, campaign_status_enum, user_role_enum):
        enum_type.drop(bind, checkfirst=True)
