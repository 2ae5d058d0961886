"""ActivityLog ORM: append-only audit trail of user actions.

Invariants:
    - Rows are never updated
    - user_id is nullable (onboarding can fail before a user row exists)
    - target_entity_id has no FK; it may point at a document-store id

Design Decisions:
    - Logging table, not enforcement: no business logic reads it back
    - The column is named "metadata" but the attribute is `details`, since
      Declarative reserves `metadata`
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, JSON, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from wardrobe_api.db.base import Base


class ActivityLog(Base):
    __tablename__ = "user_actions_log"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    user_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), nullable=True, index=True,
    )
    action_type: Mapped[str] = mapped_column(String(100), nullable=False)
    source_feature: Mapped[str | None] = mapped_column(
        String(100), nullable=True,
    )
    target_entity_type: Mapped[str | None] = mapped_column(
        String(100), nullable=True,
    )
    target_entity_id: Mapped[str | None] = mapped_column(
        String(64), nullable=True,
    )
    status: Mapped[str] = mapped_column(String(50), nullable=False)
    details: Mapped[dict | None] = mapped_column("metadata", JSON, nullable=True)
    ip_address: Mapped[str | None] = mapped_column(String(64), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
