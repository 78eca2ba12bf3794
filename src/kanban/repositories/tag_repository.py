"""Repositories for Tag and CardTag entities."""

from uuid import UUID

from sqlalchemy import delete, func
from sqlmodel import select

from src.kanban.models import CardTag, Tag
from src.kanban.repositories.base import BaseRepository


class TagRepository(BaseRepository[Tag]):
    model = Tag

    async def list_by_project(self, project_id: UUID) -> list[Tag]:
        result = await self.session.execute(
            select(Tag).where(Tag.project_id == project_id).order_by(Tag.name, Tag.id)
        )
        return list(result.scalars().all())

    async def name_taken(
        self, project_id: UUID, name: str, exclude_id: UUID | None = None
    ) -> bool:
        """Case-insensitive check for an existing tag name in the project."""
        query = select(Tag.id).where(
            Tag.project_id == project_id,
            func.lower(Tag.name) == name.lower(),
        )
        if exclude_id is not None:
            query = query.where(Tag.id != exclude_id)
        result = await self.session.execute(query.limit(1))
        return result.first() is not None

    async def list_for_card(self, card_id: UUID) -> list[Tag]:
        result = await self.session.execute(
            select(Tag)
            .join(CardTag, CardTag.tag_id == Tag.id)  # type: ignore[arg-type]
            .where(CardTag.card_id == card_id)
            .order_by(Tag.name, Tag.id)
        )
        return list(result.scalars().all())


class CardTagRepository(BaseRepository[CardTag]):
    model = CardTag

    async def get_link(self, card_id: UUID, tag_id: UUID) -> CardTag | None:
        result = await self.session.execute(
            select(CardTag).where(CardTag.card_id == card_id, CardTag.tag_id == tag_id)
        )
        return result.scalar_one_or_none()

    async def delete_for_tag(self, tag_id: UUID) -> int:
        """Remove every card link of a tag. Returns the number of rows deleted."""
        result = await self.session.execute(delete(CardTag).where(CardTag.tag_id == tag_id))  # type: ignore[arg-type]
        return result.rowcount  # type: ignore[attr-defined, no-any-return]
