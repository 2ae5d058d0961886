"""Taxonomy Schemas: categories, sub-categories, colour families, occasions."""

from uuid import UUID

from pydantic import Field, field_validator

from wardrobe_api.schemas.common import (
    CreateModel, ORMResponse, UpdateModel, strip_required,
)
from wardrobe_api.schemas.document import HEX_COLOR


class NamedCreate(CreateModel):
    name: str = Field(min_length=1, max_length=100)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return strip_required(v)


class CategoryCreate(NamedCreate):
    description: str | None = None


class CategoryUpdate(UpdateModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    description: str | None = None


class SubCategoryResponse(ORMResponse):
    id: UUID
    category_id: UUID
    name: str
    description: str | None = None


class CategoryResponse(ORMResponse):
    id: UUID
    name: str
    description: str | None = None
    sub_categories: list[SubCategoryResponse] = Field(default_factory=list)


class ColourFamilyCreate(NamedCreate):
    hex_value: str | None = Field(None, pattern=HEX_COLOR)


class ColourFamilyUpdate(UpdateModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    hex_value: str | None = Field(None, pattern=HEX_COLOR)


class ColourFamilyResponse(ORMResponse):
    id: UUID
    name: str
    hex_value: str | None = None


class OccasionCreate(NamedCreate):
    pass


class OccasionUpdate(UpdateModel):
    name: str | None = Field(None, min_length=1, max_length=100)


class OccasionResponse(ORMResponse):
    id: UUID
    name: str
