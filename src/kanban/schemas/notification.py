"""Notification schemas for API responses."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel


class NotificationRead(BaseModel):
    id: UUID
    type: str
    title: str
    message: str
    entity_type: str | None
    entity_id: UUID | None
    is_read: bool
    created_by: UUID | None
    created_at: datetime

    model_config = {"from_attributes": True}
