"""Add the features catalogue and tie credit spends to it.

Revision ID: 002_features
Revises: 001_initial
Create Date: 2026-10-20

Features price paid capabilities in credits; credit_transactions.related_feature_code
now references features.feature_code.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID


revision: str = "002_features"
down_revision: Union[str, None] = "001_initial"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "features",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("feature_code", sa.String(50), nullable=False, unique=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("credit_cost", sa.Integer, nullable=False, server_default="1"),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default="true"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_foreign_key(
        "fk_credit_transactions_feature_code",
        "credit_transactions", "features",
        ["related_feature_code"], ["feature_code"],
    )


def downgrade() -> None:
    op.drop_constraint(
        "fk_credit_transactions_feature_code", "credit_transactions",
        type_="foreignkey",
    )
    op.drop_table("features")
