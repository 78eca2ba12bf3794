"""Unit tests for BoardService with mocked repositories."""

from datetime import datetime, timedelta
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid7

import pytest

from src.kanban.core.exceptions import ForbiddenError, NotFoundError, ValidationFailedError
from src.kanban.models import ProjectRole
from src.kanban.schemas import BoardCreate, BoardUpdate
from src.kanban.services import (
    AccessGate,
    BoardService,
    ConcurrencyGuard,
    LifecycleManager,
    PositionAllocator,
)
from tests.factories import (
    BoardFactory,
    CardFactory,
    ColumnFactory,
    ProjectFactory,
    SubtaskFactory,
)

pytestmark = pytest.mark.unit

NOW = datetime(2026, 2, 2, 10, 0, 0)


@pytest.fixture
def repos() -> dict[str, MagicMock]:
    board_repo = MagicMock()
    board_repo.get_by_id = AsyncMock()
    board_repo.list_siblings = AsyncMock(return_value=[])
    board_repo.list_archived = AsyncMock(return_value=[])
    board_repo.max_position = AsyncMock(return_value=None)

    column_repo = MagicMock()
    column_repo.list_siblings = AsyncMock(return_value=[])

    card_repo = MagicMock()
    card_repo.list_by_columns = AsyncMock(return_value=[])

    subtask_repo = MagicMock()
    subtask_repo.list_by_cards = AsyncMock(return_value=[])

    project_repo = MagicMock()
    project_repo.get_by_id = AsyncMock(return_value=ProjectFactory.build())

    return {
        "board": board_repo,
        "column": column_repo,
        "card": card_repo,
        "subtask": subtask_repo,
        "project": project_repo,
    }


@pytest.fixture
def role_lookup() -> AsyncMock:
    return AsyncMock(return_value=ProjectRole.MEMBER)


@pytest.fixture
def service(repos, role_lookup, mock_session) -> BoardService:
    return BoardService(
        repos["board"],
        repos["column"],
        repos["card"],
        repos["subtask"],
        repos["project"],
        AccessGate(role_lookup),
        PositionAllocator(1000),
        LifecycleManager(clock=lambda: NOW),
        ConcurrencyGuard(mock_session, repos["card"]),
    )


class TestCreate:
    async def test_first_board_gets_gap_position(self, service, repos, mock_session):
        project_id = uuid7()

        board = await service.create(project_id, uuid7(), BoardCreate(name="Roadmap"))

        assert board.position == 1000
        assert board.project_id == project_id
        repos["board"].add.assert_called_once_with(board)
        mock_session.commit.assert_awaited_once()

    async def test_appends_after_archived_max(self, service, repos):
        repos["board"].max_position.return_value = 7000

        board = await service.create(uuid7(), uuid7(), BoardCreate(name="Next"))

        assert board.position == 8000

    async def test_missing_project_is_not_found_before_forbidden(
        self, service, repos, role_lookup
    ):
        repos["project"].get_by_id.return_value = None
        role_lookup.return_value = None

        with pytest.raises(NotFoundError):
            await service.create(uuid7(), uuid7(), BoardCreate(name="x"))

    async def test_viewer_cannot_create(self, service, role_lookup, mock_session):
        role_lookup.return_value = ProjectRole.VIEWER

        with pytest.raises(ForbiddenError):
            await service.create(uuid7(), uuid7(), BoardCreate(name="x"))

        mock_session.rollback.assert_awaited_once()
        mock_session.commit.assert_not_awaited()


class TestReadAndUpdate:
    async def test_viewer_can_get(self, service, repos, role_lookup):
        board = BoardFactory.build()
        repos["board"].get_by_id.return_value = board
        role_lookup.return_value = ProjectRole.VIEWER

        assert await service.get(board.id, uuid7()) is board

    async def test_get_missing_is_not_found(self, service, repos):
        repos["board"].get_by_id.return_value = None

        with pytest.raises(NotFoundError):
            await service.get(uuid7(), uuid7())

    async def test_update_renames(self, service, repos):
        board = BoardFactory.build(name="Old")
        repos["board"].get_by_id.return_value = board

        result = await service.update(board.id, uuid7(), BoardUpdate(name="New"))

        assert result.name == "New"
        assert result.updated_at == NOW


class TestReorder:
    async def test_places_between_anchors(self, service, repos):
        project_id = uuid7()
        a, b, c = (
            BoardFactory.build(project_id=project_id, position=p) for p in (1000, 2000, 3000)
        )
        repos["board"].get_by_id.return_value = c
        repos["board"].list_siblings.return_value = [a, b, c]

        result = await service.reorder(c.id, uuid7(), a.id, b.id)

        assert result.position == 1500

    async def test_invalid_anchors_rejected_before_any_read(self, service, repos):
        with pytest.raises(ValidationFailedError):
            await service.reorder(uuid7(), uuid7(), None, None)

        repos["board"].get_by_id.assert_not_awaited()


class TestArchiveRestore:
    def _tree(self, repos):
        board = BoardFactory.build()
        columns = [ColumnFactory.build(board_id=board.id, position=p) for p in (1000, 2000)]
        cards = [CardFactory.build(column_id=columns[i % 2].id) for i in range(4)]
        repos["board"].get_by_id.return_value = board
        repos["column"].list_siblings.return_value = columns
        repos["card"].list_by_columns.return_value = cards
        return board, columns, cards

    async def test_archive_cascades_to_columns_and_cards(self, service, repos):
        board, columns, cards = self._tree(repos)

        await service.archive(board.id, uuid7())

        assert board.deleted_at == NOW
        assert all(c.deleted_at == NOW for c in columns)
        assert all(c.deleted_at == NOW for c in cards)

    async def test_archive_runs_serializable(self, service, repos, mock_session):
        board, _, _ = self._tree(repos)

        await service.archive(board.id, uuid7())

        mock_session.connection.assert_awaited_with(
            execution_options={"isolation_level": "SERIALIZABLE"}
        )
        mock_session.commit.assert_awaited_once()

    async def test_archive_and_restore_reach_subtasks(self, service, repos):
        board, _, cards = self._tree(repos)
        earlier = NOW - timedelta(hours=1)
        steps = [SubtaskFactory.build(card_id=c.id) for c in cards]
        steps[0].deleted_at = earlier
        repos["subtask"].list_by_cards.return_value = steps

        await service.archive(board.id, uuid7())
        assert [s.deleted_at for s in steps] == [earlier, NOW, NOW, NOW]

        repos["board"].list_siblings.return_value = []
        await service.restore(board.id, uuid7())

        assert [s.deleted_at for s in steps] == [earlier, None, None, None]

    async def test_restore_brings_back_cascade_only(self, service, repos):
        board, columns, cards = self._tree(repos)
        earlier = NOW - timedelta(days=3)
        columns[1].deleted_at = earlier
        await service.archive(board.id, uuid7())

        repos["card"].list_by_columns.return_value = [c for c in cards if c.column_id == columns[0].id]
        repos["board"].list_siblings.return_value = []

        await service.restore(board.id, uuid7())

        assert board.deleted_at is None
        assert columns[0].deleted_at is None
        assert columns[1].deleted_at == earlier
        assert all(c.deleted_at is None for c in cards if c.column_id == columns[0].id)

    async def test_restore_moves_colliding_board_to_end(self, service, repos):
        project_id = uuid7()
        board = BoardFactory.build(project_id=project_id, position=2000, deleted_at=NOW)
        other = BoardFactory.build(project_id=project_id, position=2000)
        repos["board"].get_by_id.return_value = board
        repos["board"].list_siblings.return_value = [other]
        repos["board"].max_position.return_value = 3000

        await service.restore(board.id, uuid7())

        assert board.position == 4000

    async def test_restore_of_live_board_is_noop(self, service, repos, mock_session):
        board = BoardFactory.build()
        repos["board"].get_by_id.return_value = board

        assert await service.restore(board.id, uuid7()) is board
        repos["column"].list_siblings.assert_not_awaited()

    async def test_list_archived_requires_viewer(self, service, role_lookup):
        role_lookup.return_value = None

        with pytest.raises(ForbiddenError):
            await service.list_archived(uuid7(), uuid7())
