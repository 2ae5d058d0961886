"""Initial schema: users, wardrobes, link tables, activity log, billing, taxonomy.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps(updated: bool = True) -> list[sa.Column]:
    columns = [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]
    if updated:
        columns.append(
            sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        )
    return columns


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("phone_number", sa.String(20), nullable=True),
        sa.Column("gender", sa.String(30), nullable=True),
        sa.Column("date_of_birth", sa.Date, nullable=True),
        sa.Column("colour_tone", sa.String(255), nullable=True),
        sa.Column("undertone", sa.String(255), nullable=True),
        sa.Column("body_type", sa.String(50), nullable=True),
        sa.Column("height_range", sa.String(50), nullable=True),
        sa.Column("weight_range", sa.String(50), nullable=True),
        sa.Column("top_size", sa.String(20), nullable=True),
        sa.Column("bottom_size", sa.String(20), nullable=True),
        sa.Column("intent", sa.Text, nullable=True),
        sa.Column("lifestyle", sa.String(100), nullable=True),
        sa.Column("negative_pref", sa.Text, nullable=True),
        sa.Column("credit_balance", sa.Integer, nullable=False, server_default="0"),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default="true"),
        *_timestamps(),
    )
    # One ACTIVE account per email; soft-deleted rows keep theirs
    op.create_index(
        "uq_users_active_email", "users", ["email"], unique=True,
        postgresql_where=sa.text("is_active"),
    )

    op.create_table(
        "wardrobes",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", UUID(as_uuid=True), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("position", sa.Integer, nullable=False, server_default="0"),
        sa.Column("intent", sa.Text, nullable=True),
        sa.Column("lifestyle", sa.String(100), nullable=True),
        sa.Column("negative_pref", sa.Text, nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_wardrobes_user_id", "wardrobes", ["user_id"])

    for table, column, constraint in (
        ("wardrobe_dresses", "dress_id", "uq_wardrobe_dress"),
        ("wardrobe_outfits", "outfit_id", "uq_wardrobe_outfit"),
    ):
        op.create_table(
            table,
            sa.Column("id", UUID(as_uuid=True), primary_key=True),
            sa.Column("wardrobe_id", UUID(as_uuid=True), sa.ForeignKey("wardrobes.id", ondelete="CASCADE"), nullable=False),
            sa.Column(column, sa.String(64), nullable=False),
            *_timestamps(updated=False),
            sa.UniqueConstraint("wardrobe_id", column, name=constraint),
        )
        op.create_index(f"ix_{table}_{column}", table, [column])

    op.create_table(
        "user_actions_log",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", UUID(as_uuid=True), nullable=True),
        sa.Column("action_type", sa.String(100), nullable=False),
        sa.Column("source_feature", sa.String(100), nullable=True),
        sa.Column("target_entity_type", sa.String(100), nullable=True),
        sa.Column("target_entity_id", sa.String(64), nullable=True),
        sa.Column("status", sa.String(50), nullable=False),
        sa.Column("metadata", sa.JSON, nullable=True),
        sa.Column("ip_address", sa.String(64), nullable=True),
        *_timestamps(updated=False),
    )
    op.create_index("ix_user_actions_log_user_id", "user_actions_log", ["user_id"])

    op.create_table(
        "products",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default="true"),
        *_timestamps(),
    )

    op.create_table(
        "plans",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("product_id", UUID(as_uuid=True), sa.ForeignKey("products.id"), nullable=False),
        sa.Column("razorpay_plan_id", sa.String(255), nullable=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("type", sa.String(20), nullable=False),
        sa.Column("price", sa.Numeric(10, 2), nullable=False),
        sa.Column("currency", sa.String(10), nullable=False),
        sa.Column("billing_interval", sa.String(20), nullable=True),
        sa.Column("interval_count", sa.Integer, nullable=True),
        sa.Column("credits_granted", sa.Integer, nullable=True),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default="true"),
        *_timestamps(),
    )

    op.create_table(
        "subscriptions",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", UUID(as_uuid=True), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("plan_id", UUID(as_uuid=True), sa.ForeignKey("plans.id"), nullable=False),
        sa.Column("razorpay_subscription_id", sa.String(255), nullable=False),
        sa.Column("status", sa.String(50), nullable=False),
        sa.Column("current_period_start", sa.DateTime(timezone=True), nullable=True),
        sa.Column("current_period_end", sa.DateTime(timezone=True), nullable=True),
        sa.Column("trial_ends_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("cancelled_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("ended_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_subscriptions_user_id", "subscriptions", ["user_id"])

    op.create_table(
        "payments",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", UUID(as_uuid=True), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("plan_id", UUID(as_uuid=True), sa.ForeignKey("plans.id"), nullable=True),
        sa.Column("subscription_id", UUID(as_uuid=True), nullable=True),
        sa.Column("razorpay_order_id", sa.String(255), nullable=False, unique=True),
        sa.Column("razorpay_payment_id", sa.String(255), nullable=True),
        sa.Column("razorpay_signature", sa.String(255), nullable=True),
        sa.Column("amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("currency", sa.String(10), nullable=False),
        sa.Column("status", sa.String(50), nullable=False, server_default="created"),
        *_timestamps(),
    )
    op.create_index("ix_payments_user_id", "payments", ["user_id"])

    op.create_table(
        "credit_transactions",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", UUID(as_uuid=True), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("transaction_type", sa.String(20), nullable=False),
        sa.Column("amount", sa.Integer, nullable=False),
        # Unique: a payment is credited at most once
        sa.Column("related_payment_id", UUID(as_uuid=True), sa.ForeignKey("payments.id"), nullable=True, unique=True),
        sa.Column("related_feature_code", sa.String(50), nullable=True),
        sa.Column("description", sa.Text, nullable=True),
        *_timestamps(updated=False),
    )
    op.create_index("ix_credit_transactions_user_id", "credit_transactions", ["user_id"])

    op.create_table(
        "dress_categories",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False, unique=True),
        sa.Column("description", sa.Text, nullable=True),
        *_timestamps(updated=False),
    )

    op.create_table(
        "dress_sub_categories",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("category_id", UUID(as_uuid=True), sa.ForeignKey("dress_categories.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.UniqueConstraint("category_id", "name", name="uq_sub_category_name"),
    )

    op.create_table(
        "colour_families",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False, unique=True),
        sa.Column("hex_value", sa.String(7), nullable=True),
    )

    op.create_table(
        "function_occasions",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False, unique=True),
    )


def downgrade() -> None:
    for table in (
        "function_occasions", "colour_families", "dress_sub_categories",
        "dress_categories", "credit_transactions", "payments", "subscriptions",
        "plans", "products", "user_actions_log", "wardrobe_outfits",
        "wardrobe_dresses", "wardrobes",
    ):
        op.drop_table(table)
    op.drop_index("uq_users_active_email", table_name="users")
    op.drop_table("users")
