"""Column service."""

from uuid import UUID

from src.kanban.core.exceptions import NotFoundError, ValidationFailedError
from src.kanban.core.logging import get_logger
from src.kanban.models import Board, Column, ProjectRole
from src.kanban.repositories import (
    BoardRepository,
    CardRepository,
    ColumnRepository,
    SubtaskRepository,
)
from src.kanban.schemas import ColumnCreate, ColumnUpdate
from src.kanban.services.access_gate import AccessGate
from src.kanban.services.concurrency import ConcurrencyGuard
from src.kanban.services.lifecycle import LifecycleManager
from src.kanban.services.positioning import PositionAllocator

logger = get_logger(__name__)


class ColumnService:
    """Service for column operations. Access is decided on the board's project."""

    def __init__(
        self,
        column_repo: ColumnRepository,
        board_repo: BoardRepository,
        card_repo: CardRepository,
        subtask_repo: SubtaskRepository,
        gate: AccessGate,
        allocator: PositionAllocator,
        lifecycle: LifecycleManager,
        guard: ConcurrencyGuard,
    ):
        self.column_repo = column_repo
        self.board_repo = board_repo
        self.card_repo = card_repo
        self.subtask_repo = subtask_repo
        self.gate = gate
        self.allocator = allocator
        self.lifecycle = lifecycle
        self.guard = guard

    async def _get_board(self, board_id: UUID) -> Board:
        board = await self.board_repo.get_by_id(board_id)
        if board is None:
            raise NotFoundError(f"Board {board_id} not found")
        return board

    async def _get_column(
        self, column_id: UUID, include_archived: bool = False
    ) -> tuple[Column, Board]:
        found = await self.column_repo.get_with_board(column_id, include_archived=include_archived)
        if found is None:
            raise NotFoundError(f"Column {column_id} not found")
        column, board = found
        if board.deleted_at is not None and not include_archived:
            raise NotFoundError(f"Column {column_id} not found")
        return column, board

    async def create(self, board_id: UUID, actor_id: UUID, data: ColumnCreate) -> Column:
        """Create a column as the last one of the board."""

        async def operation() -> Column:
            board = await self._get_board(board_id)
            await self.gate.require(board.project_id, actor_id, ProjectRole.MEMBER)

            position = self.allocator.append_position(
                [await self.column_repo.max_position(board_id)]
            )
            column = Column(board_id=board_id, name=data.name, position=position)
            self.column_repo.add(column)
            return column

        column = await self.guard.run_serializable(operation)
        logger.info("Column created", column_id=str(column.id), board_id=str(board_id))
        return column

    async def get(self, column_id: UUID, actor_id: UUID) -> Column:
        column, board = await self._get_column(column_id)
        await self.gate.require(board.project_id, actor_id, ProjectRole.VIEWER)
        return column

    async def list_for_board(self, board_id: UUID, actor_id: UUID) -> list[Column]:
        board = await self._get_board(board_id)
        await self.gate.require(board.project_id, actor_id, ProjectRole.VIEWER)
        return await self.column_repo.list_siblings(board_id)

    async def update(self, column_id: UUID, actor_id: UUID, data: ColumnUpdate) -> Column:
        async def operation() -> Column:
            column, board = await self._get_column(column_id)
            await self.gate.require(board.project_id, actor_id, ProjectRole.MEMBER)
            column.name = data.name
            column.updated_at = self.lifecycle.now()
            return column

        return await self.guard.run_atomic(operation)

    async def reorder(
        self,
        column_id: UUID,
        actor_id: UUID,
        before_id: UUID | None,
        after_id: UUID | None,
    ) -> Column:
        self.allocator.validate_anchors(column_id, before_id, after_id)

        async def operation() -> Column:
            column, board = await self._get_column(column_id)
            await self.gate.require(board.project_id, actor_id, ProjectRole.MEMBER)

            siblings = await self.column_repo.list_siblings(column.board_id)
            self.allocator.reorder(siblings, column, before_id, after_id, self.lifecycle.now())
            return column

        column = await self.guard.run_serializable(operation)
        logger.info("Column reordered", column_id=str(column_id), position=column.position)
        return column

    async def archive(self, column_id: UUID, actor_id: UUID) -> Column:
        """Archive a column, its live cards and their live subtasks."""

        async def operation() -> tuple[Column, int]:
            column, board = await self._get_column(column_id, include_archived=True)
            await self.gate.require(board.project_id, actor_id, ProjectRole.MEMBER)

            now = self.lifecycle.now()
            cards = await self.card_repo.list_siblings(column.id, include_archived=True)
            subtasks = await self.subtask_repo.list_by_cards([c.id for c in cards])
            live_cards = sum(1 for c in cards if c.deleted_at is None)
            epoch = self.lifecycle.archive(column, cards, now)
            self.lifecycle.archive_children(epoch, subtasks, now)
            return column, live_cards

        column, card_count = await self.guard.run_serializable(operation)
        logger.info("Column archived", column_id=str(column_id), cards=card_count)
        return column

    async def restore(self, column_id: UUID, actor_id: UUID) -> Column:
        """Restore a column with the cards and subtasks its archive took down.

        Rejected while the board is archived; restore the board instead.
        """

        async def operation() -> Column:
            column, board = await self._get_column(column_id, include_archived=True)
            await self.gate.require(board.project_id, actor_id, ProjectRole.MEMBER)
            if board.deleted_at is not None:
                raise ValidationFailedError("Cannot restore a column of an archived board")
            if column.deleted_at is None:
                return column

            now = self.lifecycle.now()
            epoch = column.deleted_at
            cards = await self.card_repo.list_siblings(column.id, include_archived=True)
            restored_cards = self.lifecycle.restore(column, cards, now)
            subtasks = await self.subtask_repo.list_by_cards([c.id for c in restored_cards])
            self.lifecycle.restore_children(epoch, subtasks, now)

            live = await self.column_repo.list_siblings(column.board_id)
            if any(c.id != column.id and c.position == column.position for c in live):
                column.position = self.allocator.append_position(
                    [await self.column_repo.max_position(column.board_id)]
                )
            return column

        column = await self.guard.run_serializable(operation)
        logger.info("Column restored", column_id=str(column_id))
        return column
