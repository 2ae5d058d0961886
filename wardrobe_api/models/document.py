"""StoredDocument ORM: schema-free JSON documents in the document store.

Invariants:
    - Lives on DocumentBase: never joined with or migrated alongside relational tables
    - id is an opaque string (uuid4 hex), not a UUID column
    - collection partitions the table ("dress", "outfit")
    - body holds the user-supplied fields only; id, owner and timestamps are columns

Design Decisions:
    - JSON column instead of per-field columns: dresses and outfits carry nested,
      evolving structures (color_palette, dress_components, media_assets)
    - body is reassigned on update, never mutated in place, so the ORM sees the change
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Index, JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from wardrobe_api.db.base import DocumentBase


def new_document_id() -> str:
    return uuid.uuid4().hex


class StoredDocument(DocumentBase):
    __tablename__ = "documents"
    __table_args__ = (
        Index("ix_documents_collection_owner", "collection", "owner_id"),
    )

    id: Mapped[str] = mapped_column(
        String(32), primary_key=True, default=new_document_id,
    )
    collection: Mapped[str] = mapped_column(String(20), nullable=False)
    owner_id: Mapped[str] = mapped_column(String(36), nullable=False)
    body: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    def to_dict(self) -> dict:
        """Flatten into the document shape clients see."""
        return {
            **self.body,
            "id": self.id,
            "user_id": self.owner_id,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }
