"""Onboarding Schemas: full onboarding and onboarding-update payloads."""

from uuid import UUID

from pydantic import Field, field_validator, model_validator

from wardrobe_api.schemas.common import CreateModel
from wardrobe_api.schemas.document import DressFields
from wardrobe_api.schemas.user import (
    EMAIL_PATTERN, PreferenceFields, ProfileFields, check_password_bytes,
    normalize_email,
)
from wardrobe_api.schemas.wardrobe import WardrobeUpdate


class OnboardingUserDetails(CreateModel, ProfileFields):
    email: str = Field(max_length=255, pattern=EMAIL_PATTERN)
    password: str = Field(min_length=6, max_length=72)
    name: str = Field(min_length=1, max_length=255)

    @field_validator("email", mode="before")
    @classmethod
    def lower_email(cls, v):
        return normalize_email(v) if isinstance(v, str) else v

    @field_validator("password")
    @classmethod
    def password_bytes(cls, v: str) -> str:
        return check_password_bytes(v)


class OnboardingPreferences(CreateModel, PreferenceFields):
    pass


class CompleteOnboardingRequest(CreateModel):
    user_details: OnboardingUserDetails
    user_preferences: OnboardingPreferences | None = None
    dresses: list[DressFields] = Field(default_factory=list)


class OnboardingProfileUpdate(CreateModel, ProfileFields, PreferenceFields):
    pass


class UpdateOnboardingRequest(CreateModel):
    user_id: UUID
    wardrobe_id: UUID
    user_details: OnboardingProfileUpdate | None = None
    wardrobe_details: WardrobeUpdate | None = None
    dresses: list[DressFields] = Field(default_factory=list)

    @model_validator(mode="after")
    def require_some_change(self):
        if not (self.user_details or self.wardrobe_details or self.dresses):
            raise ValueError(
                "provide at least one of user_details, wardrobe_details, dresses",
            )
        return self
