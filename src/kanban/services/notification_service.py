"""Per-recipient notification inbox."""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.kanban.core.exceptions import NotFoundError, ValidationFailedError
from src.kanban.core.logging import get_logger
from src.kanban.models import Notification, NotificationType
from src.kanban.repositories import NotificationRepository

logger = get_logger(__name__)

MAX_PAGE_SIZE = 50


class NotificationService:
    """Notifications belong to their recipient; no project role is involved."""

    def __init__(self, notification_repo: NotificationRepository, session: AsyncSession):
        self.notification_repo = notification_repo
        self.session = session

    def add(
        self,
        user_id: UUID,
        type: NotificationType,
        title: str,
        message: str,
        entity_type: str | None = None,
        entity_id: UUID | None = None,
        created_by: UUID | None = None,
    ) -> Notification:
        """Queue a notification in the caller's transaction (no commit)."""
        title = title.strip()
        message = message.strip()
        if not title:
            raise ValidationFailedError("Notification title is required")
        if not message:
            raise ValidationFailedError("Notification message is required")

        notification = Notification(
            user_id=user_id,
            type=type.value,
            title=title,
            message=message,
            entity_type=entity_type.strip() if entity_type and entity_type.strip() else None,
            entity_id=entity_id,
            created_by=created_by,
        )
        self.notification_repo.add(notification)
        return notification

    async def list_for_user(
        self, user_id: UUID, cursor: str | None, limit: int
    ) -> tuple[list[Notification], str | None, bool]:
        """List the user's notifications newest first with cursor-based pagination."""
        limit = max(1, min(limit, MAX_PAGE_SIZE))
        return await self.notification_repo.list_for_user(user_id, cursor, limit)

    async def mark_read(self, notification_id: UUID, user_id: UUID) -> Notification:
        """Mark one of the user's notifications as read.

        Another user's notification is reported as not found.
        """
        try:
            notification = await self.notification_repo.get_by_id(notification_id)
            if notification is None or notification.user_id != user_id:
                raise NotFoundError(f"Notification {notification_id} not found")

            notification.is_read = True
            await self.session.commit()
            return notification
        except Exception:
            await self.session.rollback()
            raise

    async def mark_all_read(self, user_id: UUID) -> int:
        """Mark every unread notification of the user as read; returns the count."""
        try:
            count = await self.notification_repo.mark_all_read(user_id)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Notifications marked read", user_id=str(user_id), count=count)
        return count

    async def unread_count(self, user_id: UUID) -> int:
        return await self.notification_repo.count_unread(user_id)

    async def delete(self, notification_id: UUID, user_id: UUID) -> None:
        """Delete one of the user's notifications.

        Another user's notification is reported as not found.
        """
        try:
            notification = await self.notification_repo.get_by_id(notification_id)
            if notification is None or notification.user_id != user_id:
                raise NotFoundError(f"Notification {notification_id} not found")

            await self.notification_repo.delete(notification)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Notification deleted", notification_id=str(notification_id))
