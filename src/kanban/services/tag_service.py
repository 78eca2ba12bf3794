"""Project tags and their assignment to cards."""

from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.kanban.core.exceptions import ConflictError, NotFoundError, ValidationFailedError
from src.kanban.core.logging import get_logger
from src.kanban.models import Board, Card, CardTag, ProjectRole, Tag
from src.kanban.repositories import (
    CardRepository,
    CardTagRepository,
    ProjectRepository,
    TagRepository,
)
from src.kanban.schemas import TagCreate, TagUpdate
from src.kanban.services.access_gate import AccessGate

logger = get_logger(__name__)


class TagService:
    """Service for tag operations.

    Defining tags needs a moderator; attaching them to cards needs a member.
    """

    def __init__(
        self,
        tag_repo: TagRepository,
        card_tag_repo: CardTagRepository,
        card_repo: CardRepository,
        project_repo: ProjectRepository,
        gate: AccessGate,
        session: AsyncSession,
    ):
        self.tag_repo = tag_repo
        self.card_tag_repo = card_tag_repo
        self.card_repo = card_repo
        self.project_repo = project_repo
        self.gate = gate
        self.session = session

    async def _get_tag(self, tag_id: UUID) -> Tag:
        tag = await self.tag_repo.get_by_id(tag_id)
        if tag is None:
            raise NotFoundError(f"Tag {tag_id} not found")
        return tag

    async def _get_card(self, card_id: UUID) -> tuple[Card, Board]:
        found = await self.card_repo.get_with_context(card_id)
        if found is None:
            raise NotFoundError(f"Card {card_id} not found")
        card, _, board = found
        return card, board

    async def _commit(self) -> None:
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise ConflictError("Tag already exists") from e

    async def create(self, project_id: UUID, actor_id: UUID, data: TagCreate) -> Tag:
        try:
            if await self.project_repo.get_by_id(project_id) is None:
                raise NotFoundError(f"Project {project_id} not found")
            await self.gate.require(project_id, actor_id, ProjectRole.MODERATOR)

            if await self.tag_repo.name_taken(project_id, data.name):
                raise ConflictError(f'Tag "{data.name}" already exists in this project')

            tag = Tag(project_id=project_id, name=data.name, color=data.color)
            self.tag_repo.add(tag)
            await self._commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Tag created", tag_id=str(tag.id), project_id=str(project_id))
        return tag

    async def get(self, tag_id: UUID, actor_id: UUID) -> Tag:
        tag = await self._get_tag(tag_id)
        await self.gate.require(tag.project_id, actor_id, ProjectRole.VIEWER)
        return tag

    async def list_for_project(self, project_id: UUID, actor_id: UUID) -> list[Tag]:
        if await self.project_repo.get_by_id(project_id) is None:
            raise NotFoundError(f"Project {project_id} not found")
        await self.gate.require(project_id, actor_id, ProjectRole.VIEWER)
        return await self.tag_repo.list_by_project(project_id)

    async def update(self, tag_id: UUID, actor_id: UUID, data: TagUpdate) -> Tag:
        """Rename and/or recolor a tag. At least one of the two is required."""
        if data.name is None and data.color is None:
            raise ValidationFailedError("Provide a name or a color to update")

        try:
            tag = await self._get_tag(tag_id)
            await self.gate.require(tag.project_id, actor_id, ProjectRole.MODERATOR)

            if data.name is not None:
                if await self.tag_repo.name_taken(tag.project_id, data.name, exclude_id=tag.id):
                    raise ConflictError(f'Tag "{data.name}" already exists in this project')
                tag.name = data.name
            if data.color is not None:
                tag.color = data.color
            await self._commit()
        except Exception:
            await self.session.rollback()
            raise

        return tag

    async def delete(self, tag_id: UUID, actor_id: UUID) -> None:
        """Delete a tag and detach it from every card."""
        try:
            tag = await self._get_tag(tag_id)
            await self.gate.require(tag.project_id, actor_id, ProjectRole.MODERATOR)

            detached = await self.card_tag_repo.delete_for_tag(tag.id)
            await self.tag_repo.delete(tag)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Tag deleted", tag_id=str(tag_id), detached_cards=detached)

    async def list_for_card(self, card_id: UUID, actor_id: UUID) -> list[Tag]:
        _, board = await self._get_card(card_id)
        await self.gate.require(board.project_id, actor_id, ProjectRole.VIEWER)
        return await self.tag_repo.list_for_card(card_id)

    async def attach(self, card_id: UUID, tag_id: UUID, actor_id: UUID) -> Tag:
        """Attach a tag of the card's project. Attaching twice is a no-op."""
        try:
            card, board = await self._get_card(card_id)
            tag = await self._get_tag(tag_id)
            await self.gate.require(board.project_id, actor_id, ProjectRole.MEMBER)
            if tag.project_id != board.project_id:
                raise ValidationFailedError("Tag belongs to a different project")

            if await self.card_tag_repo.get_link(card.id, tag.id) is None:
                self.card_tag_repo.add(CardTag(card_id=card.id, tag_id=tag.id))
                await self._commit()
        except Exception:
            await self.session.rollback()
            raise

        return tag

    async def detach(self, card_id: UUID, tag_id: UUID, actor_id: UUID) -> None:
        try:
            _, board = await self._get_card(card_id)
            await self.gate.require(board.project_id, actor_id, ProjectRole.MEMBER)

            link = await self.card_tag_repo.get_link(card_id, tag_id)
            if link is None:
                raise NotFoundError(f"Tag {tag_id} is not attached to card {card_id}")
            await self.card_tag_repo.delete(link)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
