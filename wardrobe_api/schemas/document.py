"""Dress & Outfit Schemas: payloads for documents stored in the document store.

Invariants:
    - Create payloads name the owner (user_id) and optionally one extra wardrobe
    - Outfit payloads have no in_wardrobe flag: outfits always land in "Your Outfits"
    - dress_components keep their order and are not checked against existing dresses
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from wardrobe_api.schemas.common import CreateModel, UpdateModel, strip_required

HEX_COLOR = r"^#[0-9A-Fa-f]{6}$"


class ColorSwatch(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str | None = None
    hex: str = Field(pattern=HEX_COLOR)
    coverage: float | None = Field(None, ge=0, le=100)


class MediaAssets(BaseModel):
    model_config = ConfigDict(extra="forbid")
    image_urls: list[str] = Field(default_factory=list)
    video_url: str | None = None


class UserContext(BaseModel):
    model_config = ConfigDict(extra="forbid")
    personal_rating: int | None = Field(None, ge=1, le=5)
    notes: str | None = None


class DressFields(CreateModel):
    """Dress attributes as stored; shared by dress create and onboarding."""
    name: str = Field(min_length=1, max_length=255)
    description: str | None = None
    brand: str | None = Field(None, max_length=255)
    size: str | None = Field(None, max_length=50)
    dress_type_id: UUID | None = None
    category_id: UUID | None = None
    category_name: str | None = None
    sub_category_id: UUID | None = None
    sub_category_name: str | None = None
    style_tags: list[str] = Field(default_factory=list)
    material: str | None = None
    pattern: str | None = None
    color_palette: list[ColorSwatch] = Field(default_factory=list)
    dominant_color_hex: str | None = Field(None, pattern=HEX_COLOR)
    season_suitability: list[str] = Field(default_factory=list)
    occasion_suitability: list[str] = Field(default_factory=list)
    user_context: UserContext | None = None
    is_favorite: bool = False
    media_assets: MediaAssets | None = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return strip_required(v)

    def document(self) -> dict:
        return self.model_dump(
            mode="json", exclude_none=True, exclude={"user_id", "wardrobe_id"},
        )


class DressCreate(DressFields):
    user_id: UUID
    wardrobe_id: UUID | None = None


class DressUpdate(UpdateModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    brand: str | None = Field(None, max_length=255)
    size: str | None = Field(None, max_length=50)
    dress_type_id: UUID | None = None
    category_id: UUID | None = None
    category_name: str | None = None
    sub_category_id: UUID | None = None
    sub_category_name: str | None = None
    style_tags: list[str] | None = None
    material: str | None = None
    pattern: str | None = None
    color_palette: list[ColorSwatch] | None = None
    dominant_color_hex: str | None = Field(None, pattern=HEX_COLOR)
    season_suitability: list[str] | None = None
    occasion_suitability: list[str] | None = None
    user_context: UserContext | None = None
    is_favorite: bool | None = None
    media_assets: MediaAssets | None = None


class DressComponent(BaseModel):
    model_config = ConfigDict(extra="forbid")
    dress_id: str = Field(min_length=1)
    category_id: UUID | None = None
    sub_category_id: UUID | None = None


class OutfitCreate(CreateModel):
    user_id: UUID
    wardrobe_id: UUID | None = None
    name: str = Field(min_length=1, max_length=255)
    description: str | None = None
    occasion: str | None = None
    season: str | None = None
    style_tags: list[str] = Field(default_factory=list)
    dress_components: list[DressComponent] = Field(default_factory=list)
    is_favorite: bool = False
    media_assets: MediaAssets | None = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return strip_required(v)

    def document(self) -> dict:
        return self.model_dump(
            mode="json", exclude_none=True, exclude={"user_id", "wardrobe_id"},
        )


class OutfitUpdate(UpdateModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    occasion: str | None = None
    season: str | None = None
    style_tags: list[str] | None = None
    dress_components: list[DressComponent] | None = None
    is_favorite: bool | None = None
    media_assets: MediaAssets | None = None


class WardrobeLinkRequest(CreateModel):
    wardrobe_id: UUID
