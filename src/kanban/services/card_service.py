"""Card service."""

from uuid import UUID

from src.kanban.core.exceptions import NotFoundError, ValidationFailedError
from src.kanban.core.logging import get_logger
from src.kanban.models import Board, Card, Column, NotificationType, ProjectRole
from src.kanban.repositories import (
    BoardRepository,
    CardRepository,
    ColumnRepository,
    SubtaskRepository,
)
from src.kanban.schemas import CardCreate, CardUpdate
from src.kanban.services.access_gate import AccessGate
from src.kanban.services.concurrency import ConcurrencyGuard
from src.kanban.services.lifecycle import LifecycleManager
from src.kanban.services.notification_service import NotificationService
from src.kanban.services.positioning import PositionAllocator

logger = get_logger(__name__)

CONTENT_FIELDS = {"title", "description", "planned_duration_hours"}
MAX_PAGE_SIZE = 100


class CardService:
    """Service for card operations.

    Content updates are guarded by the card ``version``; placement changes
    (create, reorder, move, restore) and archive run SERIALIZABLE. Archive and
    restore cascade to the card's subtasks.
    """

    def __init__(
        self,
        card_repo: CardRepository,
        column_repo: ColumnRepository,
        board_repo: BoardRepository,
        subtask_repo: SubtaskRepository,
        gate: AccessGate,
        allocator: PositionAllocator,
        lifecycle: LifecycleManager,
        guard: ConcurrencyGuard,
        notifications: NotificationService,
    ):
        self.card_repo = card_repo
        self.column_repo = column_repo
        self.board_repo = board_repo
        self.subtask_repo = subtask_repo
        self.gate = gate
        self.allocator = allocator
        self.lifecycle = lifecycle
        self.guard = guard
        self.notifications = notifications

    async def _get_column(self, column_id: UUID) -> tuple[Column, Board]:
        found = await self.column_repo.get_with_board(column_id)
        if found is None or found[1].deleted_at is not None:
            raise NotFoundError(f"Column {column_id} not found")
        return found

    async def _get_card(
        self, card_id: UUID, include_archived: bool = False
    ) -> tuple[Card, Column, Board]:
        found = await self.card_repo.get_with_context(card_id, include_archived=include_archived)
        if found is None:
            raise NotFoundError(f"Card {card_id} not found")
        card, column, board = found
        if not include_archived and (column.deleted_at is not None or board.deleted_at is not None):
            raise NotFoundError(f"Card {card_id} not found")
        return card, column, board

    def _notify_creator(
        self, card: Card, actor_id: UUID, type: NotificationType, title: str, message: str
    ) -> None:
        """Tell the card's creator about a change made by somebody else."""
        if card.created_by is None or card.created_by == actor_id:
            return
        self.notifications.add(
            user_id=card.created_by,
            type=type,
            title=title,
            message=message,
            entity_type="card",
            entity_id=card.id,
            created_by=actor_id,
        )

    async def create(self, column_id: UUID, actor_id: UUID, data: CardCreate) -> Card:
        """Create a card as the last one of the column."""

        async def operation() -> Card:
            _, board = await self._get_column(column_id)
            await self.gate.require(board.project_id, actor_id, ProjectRole.MEMBER)

            position = self.allocator.append_position(
                [await self.card_repo.max_position(column_id)]
            )
            card = Card(
                column_id=column_id,
                title=data.title,
                description=data.description,
                planned_duration_hours=data.planned_duration_hours,
                position=position,
                created_by=actor_id,
            )
            self.card_repo.add(card)
            return card

        card = await self.guard.run_serializable(operation)
        logger.info("Card created", card_id=str(card.id), column_id=str(column_id))
        return card

    async def get(self, card_id: UUID, actor_id: UUID) -> Card:
        card, _, board = await self._get_card(card_id)
        await self.gate.require(board.project_id, actor_id, ProjectRole.VIEWER)
        return card

    async def list_for_column(self, column_id: UUID, actor_id: UUID) -> list[Card]:
        _, board = await self._get_column(column_id)
        await self.gate.require(board.project_id, actor_id, ProjectRole.VIEWER)
        return await self.card_repo.list_siblings(column_id)

    async def list_for_board(
        self, board_id: UUID, actor_id: UUID, limit: int, offset: int
    ) -> list[Card]:
        """Live cards of the board, column by column in display order."""
        board = await self.board_repo.get_by_id(board_id)
        if board is None:
            raise NotFoundError(f"Board {board_id} not found")
        await self.gate.require(board.project_id, actor_id, ProjectRole.VIEWER)
        limit = max(1, min(limit, MAX_PAGE_SIZE))
        return await self.card_repo.list_by_board(board_id, limit, max(0, offset))

    async def list_archived(
        self, board_id: UUID, actor_id: UUID, limit: int, offset: int
    ) -> list[Card]:
        """Archived cards of a board, newest archive first. The board itself may be archived."""
        board = await self.board_repo.get_by_id(board_id, include_archived=True)
        if board is None:
            raise NotFoundError(f"Board {board_id} not found")
        await self.gate.require(board.project_id, actor_id, ProjectRole.VIEWER)
        limit = max(1, min(limit, MAX_PAGE_SIZE))
        return await self.card_repo.list_archived_by_board(board_id, limit, max(0, offset))

    async def update(self, card_id: UUID, actor_id: UUID, data: CardUpdate) -> Card:
        """Replace card content if ``data.version`` is still the stored version.

        Raises:
            ConflictError: Someone else updated the card first.
        """

        async def operation() -> Card:
            _, _, board = await self._get_card(card_id)
            await self.gate.require(board.project_id, actor_id, ProjectRole.MEMBER)

            content = data.model_dump(include=CONTENT_FIELDS)
            card = await self.guard.update_card_content(
                card_id, content, data.version, self.lifecycle.now()
            )
            self._notify_creator(
                card,
                actor_id,
                NotificationType.CARD_UPDATED,
                "Card updated",
                f'Card "{card.title}" was updated',
            )
            return card

        card = await self.guard.run_atomic(operation)
        logger.info("Card updated", card_id=str(card_id), version=card.version)
        return card

    async def reorder(
        self,
        card_id: UUID,
        actor_id: UUID,
        before_id: UUID | None,
        after_id: UUID | None,
    ) -> Card:
        """Move a card between its new neighbours within its column."""
        self.allocator.validate_anchors(card_id, before_id, after_id)

        async def operation() -> Card:
            card, _, board = await self._get_card(card_id)
            await self.gate.require(board.project_id, actor_id, ProjectRole.MEMBER)

            siblings = await self.card_repo.list_siblings(card.column_id)
            self.allocator.reorder(siblings, card, before_id, after_id, self.lifecycle.now())
            return card

        card = await self.guard.run_serializable(operation)
        logger.info("Card reordered", card_id=str(card_id), position=card.position)
        return card

    async def move(self, card_id: UUID, actor_id: UUID, column_id: UUID, index: int) -> Card:
        """Move a card to ``index`` of a column of the same project.

        The target may be the card's current column.
        """

        async def operation() -> Card:
            card, source, board = await self._get_card(card_id)
            await self.gate.require(board.project_id, actor_id, ProjectRole.MEMBER)

            target, target_board = await self._get_column(column_id)
            if target_board.project_id != board.project_id:
                raise ValidationFailedError("Cards can only move between columns of the same project")

            siblings = await self.card_repo.list_siblings(target.id)
            card.column_id = target.id
            self.allocator.place_at_index(siblings, card, index, self.lifecycle.now())

            if source.id != target.id:
                self._notify_creator(
                    card,
                    actor_id,
                    NotificationType.CARD_MOVED,
                    "Card moved",
                    f'Card "{card.title}" was moved from "{source.name}" to "{target.name}"',
                )
            return card

        card = await self.guard.run_serializable(operation)
        logger.info(
            "Card moved",
            card_id=str(card_id),
            column_id=str(column_id),
            position=card.position,
        )
        return card

    async def archive(self, card_id: UUID, actor_id: UUID) -> Card:
        async def operation() -> Card:
            card, _, board = await self._get_card(card_id, include_archived=True)
            await self.gate.require(board.project_id, actor_id, ProjectRole.MEMBER)
            if card.deleted_at is not None:
                return card

            subtasks = await self.subtask_repo.list_siblings(card.id, include_archived=True)
            self.lifecycle.archive(card, subtasks)
            self._notify_creator(
                card,
                actor_id,
                NotificationType.CARD_DELETED,
                "Card archived",
                f'Card "{card.title}" was archived',
            )
            return card

        card = await self.guard.run_serializable(operation)
        logger.info("Card archived", card_id=str(card_id))
        return card

    async def restore(self, card_id: UUID, actor_id: UUID) -> Card:
        """Restore an archived card.

        Rejected while its column or board is archived.
        """

        async def operation() -> Card:
            card, column, board = await self._get_card(card_id, include_archived=True)
            await self.gate.require(board.project_id, actor_id, ProjectRole.MEMBER)
            if column.deleted_at is not None or board.deleted_at is not None:
                raise ValidationFailedError("Cannot restore a card of an archived column or board")
            if card.deleted_at is None:
                return card

            subtasks = await self.subtask_repo.list_siblings(card.id, include_archived=True)
            self.lifecycle.restore(card, subtasks)
            live = await self.card_repo.list_siblings(card.column_id)
            if any(c.id != card.id and c.position == card.position for c in live):
                card.position = self.allocator.append_position(
                    [await self.card_repo.max_position(card.column_id)]
                )
            return card

        card = await self.guard.run_serializable(operation)
        logger.info("Card restored", card_id=str(card_id))
        return card
