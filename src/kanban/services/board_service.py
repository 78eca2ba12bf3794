"""Board service: ordered boards of a project and their archive cascade."""

from uuid import UUID

from src.kanban.core.exceptions import NotFoundError
from src.kanban.core.logging import get_logger
from src.kanban.models import Board, ProjectRole
from src.kanban.repositories import (
    BoardRepository,
    CardRepository,
    ColumnRepository,
    ProjectRepository,
    SubtaskRepository,
)
from src.kanban.schemas import BoardCreate, BoardUpdate
from src.kanban.services.access_gate import AccessGate
from src.kanban.services.concurrency import ConcurrencyGuard
from src.kanban.services.lifecycle import LifecycleManager
from src.kanban.services.positioning import PositionAllocator

logger = get_logger(__name__)


class BoardService:
    """Service for board operations.

    Create, reorder, archive and restore run SERIALIZABLE through the guard since they
    read sibling positions or children before writing. Every operation does its own
    reads inside the transaction it commits.
    """

    def __init__(
        self,
        board_repo: BoardRepository,
        column_repo: ColumnRepository,
        card_repo: CardRepository,
        subtask_repo: SubtaskRepository,
        project_repo: ProjectRepository,
        gate: AccessGate,
        allocator: PositionAllocator,
        lifecycle: LifecycleManager,
        guard: ConcurrencyGuard,
    ):
        self.board_repo = board_repo
        self.column_repo = column_repo
        self.card_repo = card_repo
        self.subtask_repo = subtask_repo
        self.project_repo = project_repo
        self.gate = gate
        self.allocator = allocator
        self.lifecycle = lifecycle
        self.guard = guard

    async def _get_board(self, board_id: UUID, include_archived: bool = False) -> Board:
        board = await self.board_repo.get_by_id(board_id, include_archived=include_archived)
        if board is None:
            raise NotFoundError(f"Board {board_id} not found")
        return board

    async def _require_project(self, project_id: UUID) -> None:
        if await self.project_repo.get_by_id(project_id) is None:
            raise NotFoundError(f"Project {project_id} not found")

    async def create(self, project_id: UUID, actor_id: UUID, data: BoardCreate) -> Board:
        """Create a board as the last one of the project."""

        async def operation() -> Board:
            await self._require_project(project_id)
            await self.gate.require(project_id, actor_id, ProjectRole.MEMBER)

            position = self.allocator.append_position(
                [await self.board_repo.max_position(project_id)]
            )
            board = Board(project_id=project_id, name=data.name, position=position)
            self.board_repo.add(board)
            return board

        board = await self.guard.run_serializable(operation)
        logger.info("Board created", board_id=str(board.id), project_id=str(project_id))
        return board

    async def get(self, board_id: UUID, actor_id: UUID) -> Board:
        board = await self._get_board(board_id)
        await self.gate.require(board.project_id, actor_id, ProjectRole.VIEWER)
        return board

    async def list_for_project(self, project_id: UUID, actor_id: UUID) -> list[Board]:
        """Live boards of a project in position order."""
        await self._require_project(project_id)
        await self.gate.require(project_id, actor_id, ProjectRole.VIEWER)
        return await self.board_repo.list_siblings(project_id)

    async def list_archived(self, project_id: UUID, actor_id: UUID) -> list[Board]:
        await self._require_project(project_id)
        await self.gate.require(project_id, actor_id, ProjectRole.VIEWER)
        return await self.board_repo.list_archived(project_id)

    async def update(self, board_id: UUID, actor_id: UUID, data: BoardUpdate) -> Board:
        async def operation() -> Board:
            board = await self._get_board(board_id)
            await self.gate.require(board.project_id, actor_id, ProjectRole.MEMBER)
            board.name = data.name
            board.updated_at = self.lifecycle.now()
            return board

        return await self.guard.run_atomic(operation)

    async def reorder(
        self,
        board_id: UUID,
        actor_id: UUID,
        before_id: UUID | None,
        after_id: UUID | None,
    ) -> Board:
        """Move a board between its new neighbours within the project."""
        self.allocator.validate_anchors(board_id, before_id, after_id)

        async def operation() -> Board:
            board = await self._get_board(board_id)
            await self.gate.require(board.project_id, actor_id, ProjectRole.MEMBER)

            siblings = await self.board_repo.list_siblings(board.project_id)
            self.allocator.reorder(siblings, board, before_id, after_id, self.lifecycle.now())
            return board

        board = await self.guard.run_serializable(operation)
        logger.info("Board reordered", board_id=str(board_id), position=board.position)
        return board

    async def archive(self, board_id: UUID, actor_id: UUID) -> Board:
        """Archive a board with everything live beneath it."""

        async def operation() -> tuple[Board, int, int]:
            board = await self._get_board(board_id, include_archived=True)
            await self.gate.require(board.project_id, actor_id, ProjectRole.MEMBER)

            now = self.lifecycle.now()
            columns = await self.column_repo.list_siblings(board.id, include_archived=True)
            cards = await self.card_repo.list_by_columns([c.id for c in columns])
            subtasks = await self.subtask_repo.list_by_cards([c.id for c in cards])

            live_columns = sum(1 for c in columns if c.deleted_at is None)
            epoch = self.lifecycle.archive(board, columns, now)
            archived_cards = self.lifecycle.archive_children(epoch, cards, now)
            self.lifecycle.archive_children(epoch, subtasks, now)
            return board, live_columns, archived_cards

        board, column_count, card_count = await self.guard.run_serializable(operation)
        logger.info(
            "Board archived",
            board_id=str(board_id),
            columns=column_count,
            cards=card_count,
        )
        return board

    async def restore(self, board_id: UUID, actor_id: UUID) -> Board:
        """Restore a board with the columns, cards and subtasks its archive took down.

        Anything archived on their own before the board stay archived.
        """

        async def operation() -> Board:
            board = await self._get_board(board_id, include_archived=True)
            await self.gate.require(board.project_id, actor_id, ProjectRole.MEMBER)
            if board.deleted_at is None:
                return board

            now = self.lifecycle.now()
            epoch = board.deleted_at
            columns = await self.column_repo.list_siblings(board.id, include_archived=True)
            restored_columns = self.lifecycle.restore(board, columns, now)
            cards = await self.card_repo.list_by_columns([c.id for c in restored_columns])
            restored_cards = self.lifecycle.restore_children(epoch, cards, now)
            subtasks = await self.subtask_repo.list_by_cards([c.id for c in restored_cards])
            self.lifecycle.restore_children(epoch, subtasks, now)

            live = await self.board_repo.list_siblings(board.project_id)
            if any(b.id != board.id and b.position == board.position for b in live):
                board.position = self.allocator.append_position(
                    [await self.board_repo.max_position(board.project_id)]
                )
            return board

        board = await self.guard.run_serializable(operation)
        logger.info("Board restored", board_id=str(board_id))
        return board
