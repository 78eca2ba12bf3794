"""Tag schemas for API request/response."""

import re
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from src.kanban.schemas.common import strip_required

COLOR_PATTERN = re.compile(r"^#[0-9A-Fa-f]{6}$")


def _validate_color(v: str) -> str:
    v = v.strip()
    if not COLOR_PATTERN.match(v):
        raise ValueError("Tag color must be a hex value like #1A2B3C")
    return v


class TagCreate(BaseModel):
    name: str = Field(min_length=1, max_length=50)
    color: str

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return strip_required(v, "Tag name")

    @field_validator("color")
    @classmethod
    def validate_color(cls, v: str) -> str:
        return _validate_color(v)


class TagUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=50)
    color: str | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return strip_required(v, "Tag name")

    @field_validator("color")
    @classmethod
    def validate_color(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return _validate_color(v)


class TagRead(BaseModel):
    id: UUID
    project_id: UUID
    name: str
    color: str
    created_at: datetime

    model_config = {"from_attributes": True}
