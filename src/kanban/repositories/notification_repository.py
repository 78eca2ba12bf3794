"""Repository for Notification entity."""

from uuid import UUID

from sqlalchemy import func, update
from sqlmodel import select

from src.kanban.models import Notification
from src.kanban.repositories.base import BaseRepository


class NotificationRepository(BaseRepository[Notification]):
    model = Notification

    async def list_for_user(
        self,
        user_id: UUID,
        cursor: str | None = None,
        limit: int = 20,
    ) -> tuple[list[Notification], str | None, bool]:
        """List a recipient's notifications, newest first."""
        query = select(Notification).where(Notification.user_id == user_id)
        return await self.paginate(query, cursor, limit, Notification.created_at)

    async def mark_all_read(self, user_id: UUID) -> int:
        """Mark every unread notification of the user as read."""
        result = await self.session.execute(
            update(Notification)
            .where(
                Notification.user_id == user_id,  # type: ignore[arg-type]
                Notification.is_read == False,  # type: ignore[arg-type]  # noqa: E712
            )
            .values(is_read=True)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount  # type: ignore[attr-defined, no-any-return]

    async def count_unread(self, user_id: UUID) -> int:
        result = await self.session.execute(
            select(func.count())
            .select_from(Notification)
            .where(
                Notification.user_id == user_id,
                Notification.is_read == False,  # type: ignore[arg-type]  # noqa: E712
            )
        )
        return result.scalar_one()
