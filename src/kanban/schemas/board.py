"""Board, column and card schemas for API request/response."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from src.kanban.schemas.common import strip_optional, strip_required


class ReorderRequest(BaseModel):
    """Place a sibling right after ``before_id`` and/or right before ``after_id``.

    Anchor rules (at least one, no self reference, distinct) are enforced by
    the service so that they map to the same error as any other caller.
    """

    before_id: UUID | None = None
    after_id: UUID | None = None


class BoardCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return strip_required(v, "Board name")


class BoardUpdate(BoardCreate):
    pass


class BoardRead(BaseModel):
    id: UUID
    project_id: UUID
    name: str
    position: int
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None

    model_config = {"from_attributes": True}


class ColumnCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return strip_required(v, "Column name")


class ColumnUpdate(ColumnCreate):
    pass


class ColumnRead(BaseModel):
    id: UUID
    board_id: UUID
    name: str
    position: int
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None

    model_config = {"from_attributes": True}


class CardCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=8000)
    planned_duration_hours: Decimal | None = Field(default=None, ge=0, max_digits=7, decimal_places=2)

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        return strip_required(v, "Card title")

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str | None) -> str | None:
        return strip_optional(v)


class CardUpdate(CardCreate):
    """Full content replacement, guarded by the version it was based on."""

    version: int = Field(ge=1)


class CardMoveRequest(BaseModel):
    """Move a card into ``column_id`` at zero-based ``index`` (clamped)."""

    column_id: UUID
    index: int = Field(default=0, ge=0)


class CardRead(BaseModel):
    id: UUID
    column_id: UUID
    title: str
    description: str | None
    planned_duration_hours: Decimal | None
    position: int
    version: int
    created_by: UUID | None
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None

    model_config = {"from_attributes": True}


class SubtaskCreate(BaseModel):
    description: str = Field(min_length=1, max_length=500)

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str) -> str:
        return strip_required(v, "Subtask description")


class SubtaskUpdate(BaseModel):
    """Partial update; omitted fields are left as they are."""

    description: str | None = Field(default=None, min_length=1, max_length=500)
    completed: bool | None = None

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return strip_required(v, "Subtask description")


class SubtaskRead(BaseModel):
    id: UUID
    card_id: UUID
    description: str
    completed: bool
    position: int
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None

    model_config = {"from_attributes": True}


class SubtaskCounts(BaseModel):
    completed: int
    total: int
