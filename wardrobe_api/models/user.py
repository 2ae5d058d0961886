"""User ORM: account, profile and credit balance.

Invariants:
    - At most one *active* row per email (partial unique index on email WHERE is_active)
    - password_hash is a bcrypt hash, never plaintext
    - Soft delete flips is_active; the row and its wardrobes stay

Design Decisions:
    - Partial index instead of a plain unique column: a soft-deleted email can sign up again
    - credit_balance denormalized on the user: the credit ledger is the audit trail,
      the balance is what reads need
"""

import uuid
from datetime import date, datetime, timezone

from sqlalchemy import Boolean, Date, DateTime, Index, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from wardrobe_api.db.base import Base


class User(Base):
    __tablename__ = "users"
    __table_args__ = (
        Index(
            "uq_users_active_email", "email", unique=True,
            postgresql_where=text("is_active"),
            sqlite_where=text("is_active"),
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone_number: Mapped[str | None] = mapped_column(String(20), nullable=True)
    gender: Mapped[str | None] = mapped_column(String(30), nullable=True)
    date_of_birth: Mapped[date | None] = mapped_column(Date, nullable=True)
    colour_tone: Mapped[str | None] = mapped_column(String(255), nullable=True)
    undertone: Mapped[str | None] = mapped_column(String(255), nullable=True)
    body_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    height_range: Mapped[str | None] = mapped_column(String(50), nullable=True)
    weight_range: Mapped[str | None] = mapped_column(String(50), nullable=True)
    top_size: Mapped[str | None] = mapped_column(String(20), nullable=True)
    bottom_size: Mapped[str | None] = mapped_column(String(20), nullable=True)
    intent: Mapped[str | None] = mapped_column(Text, nullable=True)
    lifestyle: Mapped[str | None] = mapped_column(String(100), nullable=True)
    negative_pref: Mapped[str | None] = mapped_column(Text, nullable=True)
    credit_balance: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
