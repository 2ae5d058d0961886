"""Activity Log Schemas: manual entries and the log view."""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import AliasChoices, Field

from wardrobe_api.schemas.common import CreateModel, ORMResponse


class ActivityLogCreate(CreateModel):
    user_id: UUID | None = None
    action_type: str = Field(min_length=1, max_length=100)
    source_feature: str | None = Field(None, max_length=100)
    target_entity_type: str | None = Field(None, max_length=100)
    target_entity_id: str | None = Field(None, max_length=64)
    status: Literal["SUCCESS", "PARTIAL_SUCCESS", "FAILURE"]
    metadata: dict | None = None


class ActivityLogResponse(ORMResponse):
    id: UUID
    user_id: UUID | None = None
    action_type: str
    source_feature: str | None = None
    target_entity_type: str | None = None
    target_entity_id: str | None = None
    status: str
    metadata: dict | None = Field(
        None, validation_alias=AliasChoices("details", "metadata"),
    )
    ip_address: str | None = None
    created_at: datetime
