"""Shared schema building blocks: strict create models and non-empty updates."""

from pydantic import BaseModel, ConfigDict, model_validator


class CreateModel(BaseModel):
    """Create payloads reject unknown fields."""
    model_config = ConfigDict(extra="forbid")


class UpdateModel(BaseModel):
    """Partial update: unknown fields rejected, at least one field required."""
    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def require_one_field(self):
        if not self.model_fields_set:
            raise ValueError("at least one field must be provided")
        return self

    def changes(self) -> dict:
        return self.model_dump(mode="json", exclude_unset=True)


class ORMResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)


def strip_required(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("cannot be empty or whitespace")
    return v
