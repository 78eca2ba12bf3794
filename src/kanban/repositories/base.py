"""Base repositories with common query helpers."""

from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, select

from src.kanban.schemas.pagination import decode_cursor, encode_cursor


class BaseRepository[ModelType: SQLModel]:
    """Base repository providing common database operations.

    Repositories handle data access only. Transaction control (commit)
    is done in the service layer.
    """

    model: type[ModelType]

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, id: UUID) -> ModelType | None:
        """Get a record by its primary key."""
        result = await self.session.execute(
            select(self.model).where(self.model.id == id)  # type: ignore[attr-defined]
        )
        return result.scalar_one_or_none()

    def add(self, entity: ModelType) -> None:
        """Add entity to session (no flush/commit)."""
        self.session.add(entity)

    async def delete(self, entity: ModelType) -> None:
        """Mark entity for deletion (no commit)."""
        await self.session.delete(entity)

    async def paginate(
        self,
        query: Any,
        cursor: str | None,
        limit: int,
        cursor_field: Any,
    ) -> tuple[list[ModelType], str | None, bool]:
        """Execute cursor-based pagination on a query, newest first.

        Returns:
            Tuple of (items, next_cursor, has_more)
        """
        if cursor:
            try:
                cursor_str = decode_cursor(cursor)
                cursor_value: datetime | UUID | str
                try:
                    cursor_value = datetime.fromisoformat(cursor_str)
                except ValueError:
                    try:
                        cursor_value = UUID(cursor_str)
                    except ValueError:
                        cursor_value = cursor_str
                query = query.where(cursor_field < cursor_value)
            except (ValueError, TypeError):
                # Invalid cursor - ignore and start from beginning
                pass

        query = query.order_by(cursor_field.desc()).limit(limit + 1)

        result = await self.session.execute(query)
        items = list(result.scalars().all())

        has_more = len(items) > limit
        if has_more:
            items = items[:limit]

        next_cursor = None
        if has_more and items:
            value = getattr(items[-1], cursor_field.key)
            if isinstance(value, datetime):
                next_cursor = encode_cursor(value.isoformat())
            elif value is not None:
                next_cursor = encode_cursor(str(value))

        return items, next_cursor, has_more


class OrderedRepository[ModelType: SQLModel](BaseRepository[ModelType]):
    """Repository for positioned, soft-deletable children of a parent.

    Normal reads exclude archived rows. Lifecycle and restore paths pass
    ``include_archived=True`` to see every row regardless of ``deleted_at``.
    """

    parent_field: str

    @property
    def _parent_column(self) -> Any:
        return getattr(self.model, self.parent_field)

    async def get_by_id(self, id: UUID, include_archived: bool = False) -> ModelType | None:
        query = select(self.model).where(self.model.id == id)  # type: ignore[attr-defined]
        if not include_archived:
            query = query.where(self.model.deleted_at.is_(None))  # type: ignore[attr-defined]
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def list_siblings(
        self, parent_id: UUID, include_archived: bool = False
    ) -> list[ModelType]:
        """List children of a parent ordered by (position, id)."""
        query = select(self.model).where(self._parent_column == parent_id)
        if not include_archived:
            query = query.where(self.model.deleted_at.is_(None))  # type: ignore[attr-defined]
        query = query.order_by(
            self.model.position,  # type: ignore[attr-defined]
            self.model.id,  # type: ignore[attr-defined]
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def max_position(self, parent_id: UUID) -> int | None:
        """Highest position under a parent, archived rows included."""
        result = await self.session.execute(
            select(func.max(self.model.position)).where(  # type: ignore[attr-defined]
                self._parent_column == parent_id
            )
        )
        return result.scalar_one_or_none()
