"""User Schemas: signup credentials, profile updates and the public user view.

Invariants:
    - Emails are stripped and lowercased before they reach storage
    - Passwords are 6-72 characters and at most 72 bytes (bcrypt input limit)
    - password_hash never appears in a response
"""

from datetime import date, datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from wardrobe_api.schemas.common import CreateModel, ORMResponse, UpdateModel

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"

Gender = Literal["male", "female", "other", "prefer_not_to_say"]


def normalize_email(v: str) -> str:
    return v.strip().lower()


def check_password_bytes(v: str) -> str:
    if len(v.encode("utf-8")) > 72:
        raise ValueError("password must be at most 72 bytes")
    return v


class ProfileFields(BaseModel):
    """Profile attributes shared by onboarding and user updates."""
    name: str | None = Field(None, max_length=255)
    phone_number: str | None = Field(None, max_length=20)
    gender: Gender | None = None
    date_of_birth: date | None = None
    colour_tone: str | None = Field(None, max_length=255)
    undertone: str | None = Field(None, max_length=255)
    body_type: str | None = Field(None, max_length=50)
    height_range: str | None = Field(None, max_length=50)
    weight_range: str | None = Field(None, max_length=50)
    top_size: str | None = Field(None, max_length=20)
    bottom_size: str | None = Field(None, max_length=20)


class SignupRequest(CreateModel):
    email: str = Field(max_length=255, pattern=EMAIL_PATTERN)
    password: str = Field(min_length=6, max_length=72)
    name: str | None = Field(None, max_length=255)

    @field_validator("email", mode="before")
    @classmethod
    def lower_email(cls, v):
        return normalize_email(v) if isinstance(v, str) else v

    @field_validator("password")
    @classmethod
    def password_bytes(cls, v: str) -> str:
        return check_password_bytes(v)


class PreferenceFields(BaseModel):
    intent: str | None = None
    lifestyle: str | None = Field(None, max_length=100)
    negative_pref: str | None = None


class UserUpdate(UpdateModel, ProfileFields, PreferenceFields):
    email: str | None = Field(None, max_length=255, pattern=EMAIL_PATTERN)
    password: str | None = Field(None, min_length=6, max_length=72)

    @field_validator("email", mode="before")
    @classmethod
    def lower_email(cls, v):
        return normalize_email(v) if isinstance(v, str) else v

    @field_validator("email", "password")
    @classmethod
    def not_null(cls, v: str | None) -> str:
        if v is None:
            raise ValueError("cannot be null")
        return v

    @field_validator("password")
    @classmethod
    def password_bytes(cls, v: str) -> str:
        return check_password_bytes(v)

    def changes(self) -> dict:
        # date_of_birth stays a date object for the Date column
        return self.model_dump(exclude_unset=True)


class UserResponse(ORMResponse):
    id: UUID
    email: str
    name: str | None = None
    phone_number: str | None = None
    gender: str | None = None
    date_of_birth: date | None = None
    colour_tone: str | None = None
    undertone: str | None = None
    body_type: str | None = None
    height_range: str | None = None
    weight_range: str | None = None
    top_size: str | None = None
    bottom_size: str | None = None
    intent: str | None = None
    lifestyle: str | None = None
    negative_pref: str | None = None
    credit_balance: int
    is_active: bool
    created_at: datetime
    updated_at: datetime
