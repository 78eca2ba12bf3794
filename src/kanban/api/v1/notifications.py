"""Notification inbox endpoints for the calling actor."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query, status
from pydantic import BaseModel

from src.kanban.api.dependencies import CurrentActor, NotificationServiceDep
from src.kanban.schemas import NotificationRead, PaginatedResponse

router = APIRouter(prefix="/notifications", tags=["notifications"])


class MarkAllReadResponse(BaseModel):
    updated: int


class UnreadCountResponse(BaseModel):
    unread: int


@router.get(
    "",
    response_model=PaginatedResponse[NotificationRead],
    summary="List notifications",
    description="The caller's notifications, newest first, with cursor-based pagination.",
)
async def list_notifications(
    service: NotificationServiceDep,
    actor_id: CurrentActor,
    cursor: Annotated[str | None, Query(description="Cursor for pagination")] = None,
    limit: Annotated[int, Query(ge=1, le=50, description="Max items to return")] = 20,
) -> PaginatedResponse[NotificationRead]:
    items, next_cursor, has_more = await service.list_for_user(actor_id, cursor, limit)
    return PaginatedResponse(
        items=[NotificationRead.model_validate(n) for n in items],
        next_cursor=next_cursor,
        has_more=has_more,
    )


@router.get(
    "/unread-count",
    response_model=UnreadCountResponse,
    summary="Count unread notifications",
)
async def unread_count(
    service: NotificationServiceDep,
    actor_id: CurrentActor,
) -> UnreadCountResponse:
    count = await service.unread_count(actor_id)
    return UnreadCountResponse(unread=count)


@router.post(
    "/read-all",
    response_model=MarkAllReadResponse,
    summary="Mark all notifications read",
)
async def mark_all_read(
    service: NotificationServiceDep,
    actor_id: CurrentActor,
) -> MarkAllReadResponse:
    count = await service.mark_all_read(actor_id)
    return MarkAllReadResponse(updated=count)


@router.post(
    "/{notification_id}/read",
    response_model=NotificationRead,
    summary="Mark notification read",
    responses={404: {"description": "Notification not found"}},
)
async def mark_read(
    notification_id: UUID,
    service: NotificationServiceDep,
    actor_id: CurrentActor,
) -> NotificationRead:
    notification = await service.mark_read(notification_id, actor_id)
    return NotificationRead.model_validate(notification)


@router.delete(
    "/{notification_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete notification",
    responses={404: {"description": "Notification not found"}},
)
async def delete_notification(
    notification_id: UUID,
    service: NotificationServiceDep,
    actor_id: CurrentActor,
) -> None:
    await service.delete(notification_id, actor_id)
