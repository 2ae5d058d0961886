"""ColourFamily ORM: named colour groups with a representative hex value."""

import uuid

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from wardrobe_api.db.base import Base


class ColourFamily(Base):
    __tablename__ = "colour_families"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    hex_value: Mapped[str | None] = mapped_column(String(7), nullable=True)
