"""Dress Category ORM: top-level categories with nested sub-categories.

Invariants:
    - Category names are unique
    - Sub-categories belong to exactly one category and go with it on delete

Design Decisions:
    - selectin relationship: categories are always returned with their
      sub-categories, so load them in one extra query instead of N
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from wardrobe_api.db.base import Base


class Category(Base):
    __tablename__ = "dress_categories"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    sub_categories: Mapped[list["SubCategory"]] = relationship(
        "SubCategory", back_populates="category",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="SubCategory.name",
    )


class SubCategory(Base):
    __tablename__ = "dress_sub_categories"
    __table_args__ = (
        UniqueConstraint("category_id", "name", name="uq_sub_category_name"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    category_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("dress_categories.id", ondelete="CASCADE"),
        nullable=False,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    category: Mapped["Category"] = relationship(
        "Category", back_populates="sub_categories",
    )
