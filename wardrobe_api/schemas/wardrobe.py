"""Wardrobe Schemas: create/update/reorder payloads and the wardrobe view.

Invariants:
    - name is stripped and non-empty
    - A reorder lists each wardrobe id at most once
"""

from datetime import datetime
from uuid import UUID

from pydantic import Field, field_validator

from wardrobe_api.schemas.common import (
    CreateModel, ORMResponse, UpdateModel, strip_required,
)


class WardrobeCreate(CreateModel):
    user_id: UUID
    name: str = Field(min_length=1, max_length=255)
    intent: str | None = None
    lifestyle: str | None = Field(None, max_length=100)
    negative_pref: str | None = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return strip_required(v)


class WardrobeUpdate(UpdateModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    intent: str | None = None
    lifestyle: str | None = Field(None, max_length=100)
    negative_pref: str | None = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str | None) -> str:
        if v is None:
            raise ValueError("name cannot be null")
        return strip_required(v)


class WardrobeReorder(CreateModel):
    user_id: UUID
    wardrobe_ids: list[UUID] = Field(min_length=1)

    @field_validator("wardrobe_ids")
    @classmethod
    def unique_ids(cls, v: list[UUID]) -> list[UUID]:
        if len(set(v)) != len(v):
            raise ValueError("wardrobe_ids must not repeat")
        return v


class WardrobeResponse(ORMResponse):
    id: UUID
    user_id: UUID
    name: str
    position: int
    intent: str | None = None
    lifestyle: str | None = None
    negative_pref: str | None = None
    created_at: datetime
    updated_at: datetime
