"""Notification model - per-recipient inbox entries."""

from datetime import datetime
from uuid import UUID, uuid7

from sqlmodel import Field, SQLModel

from src.kanban.models.base import utc_now


class Notification(SQLModel, table=True):
    __tablename__ = "notifications"

    id: UUID = Field(default_factory=uuid7, primary_key=True)
    user_id: UUID = Field(index=True)
    type: str = Field(max_length=50)
    title: str = Field(max_length=200)
    message: str = Field(max_length=2000)
    entity_type: str | None = Field(default=None, max_length=50)
    entity_id: UUID | None = Field(default=None)
    is_read: bool = Field(default=False)
    created_by: UUID | None = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now, index=True)
