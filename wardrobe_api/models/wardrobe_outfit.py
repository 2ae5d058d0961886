"""WardrobeOutfit ORM: link row between a wardrobe and an outfit document.

Invariants:
    - (wardrobe_id, outfit_id) is unique
    - outfit_id has no FK: the outfit lives in the document store
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from wardrobe_api.db.base import Base


class WardrobeOutfit(Base):
    __tablename__ = "wardrobe_outfits"
    __table_args__ = (
        UniqueConstraint("wardrobe_id", "outfit_id", name="uq_wardrobe_outfit"),
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
        "outfit_id", String(64), nullable=False, index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
