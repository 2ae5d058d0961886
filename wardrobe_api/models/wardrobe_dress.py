"""WardrobeDress ORM: link row between a wardrobe and a dress document.

Invariants:
    - (wardrobe_id, dress_id) is unique
    - dress_id has no FK: the dress lives in the document store
    - wardrobe_id has ON DELETE CASCADE
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from wardrobe_api.db.base import Base


class WardrobeDress(Base):
    __tablename__ = "wardrobe_dresses"
    __table_args__ = (
        UniqueConstraint("wardrobe_id", "dress_id", name="uq_wardrobe_dress"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    wardrobe_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("wardrobes.id", ondelete="CASCADE"),
        nullable=False,
    )
    document_id: Mapped[str] = mapped_column(
        "dress_id", String(64), nullable=False, index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
