"""FunctionOccasion ORM: occasions a dress or outfit can be worn to."""

import uuid

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from wardrobe_api.db.base import Base


class FunctionOccasion(Base):
    __tablename__ = "function_occasions"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
