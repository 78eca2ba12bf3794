"""Subtask service: the ordered checklist of a card."""

from uuid import UUID

from src.kanban.core.exceptions import NotFoundError, ValidationFailedError
from src.kanban.core.logging import get_logger
from src.kanban.models import Board, Card, ProjectRole, Subtask
from src.kanban.repositories import CardRepository, SubtaskRepository
from src.kanban.schemas import SubtaskCreate, SubtaskUpdate
from src.kanban.services.access_gate import AccessGate
from src.kanban.services.concurrency import ConcurrencyGuard
from src.kanban.services.lifecycle import LifecycleManager
from src.kanban.services.positioning import PositionAllocator

logger = get_logger(__name__)


class SubtaskService:
    """Service for subtask operations. Access is decided on the card's project."""

    def __init__(
        self,
        subtask_repo: SubtaskRepository,
        card_repo: CardRepository,
        gate: AccessGate,
        allocator: PositionAllocator,
        lifecycle: LifecycleManager,
        guard: ConcurrencyGuard,
    ):
        self.subtask_repo = subtask_repo
        self.card_repo = card_repo
        self.gate = gate
        self.allocator = allocator
        self.lifecycle = lifecycle
        self.guard = guard

    async def _get_card(self, card_id: UUID) -> tuple[Card, Board]:
        found = await self.card_repo.get_with_context(card_id)
        if found is None:
            raise NotFoundError(f"Card {card_id} not found")
        card, column, board = found
        if column.deleted_at is not None or board.deleted_at is not None:
            raise NotFoundError(f"Card {card_id} not found")
        return card, board

    async def _get_subtask(
        self, subtask_id: UUID, include_archived: bool = False
    ) -> tuple[Subtask, Card, Board]:
        found = await self.subtask_repo.get_with_context(
            subtask_id, include_archived=include_archived
        )
        if found is None:
            raise NotFoundError(f"Subtask {subtask_id} not found")
        subtask, card, column, board = found
        if not include_archived and any(
            r.deleted_at is not None for r in (card, column, board)
        ):
            raise NotFoundError(f"Subtask {subtask_id} not found")
        return subtask, card, board

    async def create(self, card_id: UUID, actor_id: UUID, data: SubtaskCreate) -> Subtask:
        """Create a subtask as the last one of the card."""

        async def operation() -> Subtask:
            _, board = await self._get_card(card_id)
            await self.gate.require(board.project_id, actor_id, ProjectRole.MEMBER)

            position = self.allocator.append_position(
                [await self.subtask_repo.max_position(card_id)]
            )
            subtask = Subtask(card_id=card_id, description=data.description, position=position)
            self.subtask_repo.add(subtask)
            return subtask

        subtask = await self.guard.run_serializable(operation)
        logger.info("Subtask created", subtask_id=str(subtask.id), card_id=str(card_id))
        return subtask

    async def list_for_card(self, card_id: UUID, actor_id: UUID) -> list[Subtask]:
        _, board = await self._get_card(card_id)
        await self.gate.require(board.project_id, actor_id, ProjectRole.VIEWER)
        return await self.subtask_repo.list_siblings(card_id)

    async def counts(self, card_id: UUID, actor_id: UUID) -> tuple[int, int]:
        """Return (completed, total) over the card's live subtasks."""
        _, board = await self._get_card(card_id)
        await self.gate.require(board.project_id, actor_id, ProjectRole.VIEWER)
        return await self.subtask_repo.counts(card_id)

    async def update(self, subtask_id: UUID, actor_id: UUID, data: SubtaskUpdate) -> Subtask:
        if data.description is None and data.completed is None:
            raise ValidationFailedError("Provide a description or a completed flag to update")

        async def operation() -> Subtask:
            subtask, _, board = await self._get_subtask(subtask_id)
            await self.gate.require(board.project_id, actor_id, ProjectRole.MEMBER)

            if data.description is not None:
                subtask.description = data.description
            if data.completed is not None:
                subtask.completed = data.completed
            subtask.updated_at = self.lifecycle.now()
            return subtask

        return await self.guard.run_atomic(operation)

    async def reorder(
        self,
        subtask_id: UUID,
        actor_id: UUID,
        before_id: UUID | None,
        after_id: UUID | None,
    ) -> Subtask:
        self.allocator.validate_anchors(subtask_id, before_id, after_id)

        async def operation() -> Subtask:
            subtask, _, board = await self._get_subtask(subtask_id)
            await self.gate.require(board.project_id, actor_id, ProjectRole.MEMBER)

            siblings = await self.subtask_repo.list_siblings(subtask.card_id)
            self.allocator.reorder(siblings, subtask, before_id, after_id, self.lifecycle.now())
            return subtask

        subtask = await self.guard.run_serializable(operation)
        logger.info("Subtask reordered", subtask_id=str(subtask_id), position=subtask.position)
        return subtask

    async def archive(self, subtask_id: UUID, actor_id: UUID) -> Subtask:
        async def operation() -> Subtask:
            subtask, _, board = await self._get_subtask(subtask_id, include_archived=True)
            await self.gate.require(board.project_id, actor_id, ProjectRole.MEMBER)
            self.lifecycle.archive(subtask, [])
            return subtask

        subtask = await self.guard.run_serializable(operation)
        logger.info("Subtask archived", subtask_id=str(subtask_id))
        return subtask

    async def restore(self, subtask_id: UUID, actor_id: UUID) -> Subtask:
        """Restore an archived subtask. Rejected while its card is archived."""

        async def operation() -> Subtask:
            subtask, card, board = await self._get_subtask(subtask_id, include_archived=True)
            await self.gate.require(board.project_id, actor_id, ProjectRole.MEMBER)
            if card.deleted_at is not None:
                raise ValidationFailedError("Cannot restore a subtask of an archived card")
            if subtask.deleted_at is None:
                return subtask

            self.lifecycle.restore(subtask, [])
            live = await self.subtask_repo.list_siblings(subtask.card_id)
            if any(s.id != subtask.id and s.position == subtask.position for s in live):
                subtask.position = self.allocator.append_position(
                    [await self.subtask_repo.max_position(subtask.card_id)]
                )
            return subtask

        subtask = await self.guard.run_serializable(operation)
        logger.info("Subtask restored", subtask_id=str(subtask_id))
        return subtask
