"""Unit tests for TagService."""

from unittest.mock import AsyncMock, MagicMock
from uuid import uuid7

import pytest

from src.kanban.core.exceptions import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ValidationFailedError,
)
from src.kanban.models import ProjectRole
from src.kanban.schemas import TagCreate, TagUpdate
from src.kanban.services import AccessGate, TagService
from tests.factories import (
    BoardFactory,
    CardFactory,
    CardTagFactory,
    ColumnFactory,
    ProjectFactory,
    TagFactory,
)

pytestmark = pytest.mark.unit


@pytest.fixture
def tag_repo() -> MagicMock:
    repo = MagicMock()
    repo.get_by_id = AsyncMock()
    repo.name_taken = AsyncMock(return_value=False)
    repo.delete = AsyncMock()
    return repo


@pytest.fixture
def card_tag_repo() -> MagicMock:
    repo = MagicMock()
    repo.get_link = AsyncMock(return_value=None)
    repo.delete_for_tag = AsyncMock(return_value=0)
    repo.delete = AsyncMock()
    return repo


@pytest.fixture
def card_repo() -> MagicMock:
    repo = MagicMock()
    repo.get_with_context = AsyncMock()
    return repo


@pytest.fixture
def project_repo() -> MagicMock:
    repo = MagicMock()
    repo.get_by_id = AsyncMock(return_value=ProjectFactory.build())
    return repo


@pytest.fixture
def role_lookup() -> AsyncMock:
    return AsyncMock(return_value=ProjectRole.MODERATOR)


@pytest.fixture
def service(tag_repo, card_tag_repo, card_repo, project_repo, role_lookup, mock_session):
    return TagService(
        tag_repo, card_tag_repo, card_repo, project_repo, AccessGate(role_lookup), mock_session
    )


def card_in_project(card_repo, project_id):
    board = BoardFactory.build(project_id=project_id)
    column = ColumnFactory.build(board_id=board.id)
    card = CardFactory.build(column_id=column.id)
    card_repo.get_with_context.return_value = (card, column, board)
    return card


class TestDefineTags:
    async def test_moderator_creates_tag(self, service, tag_repo, mock_session):
        project_id = uuid7()

        tag = await service.create(project_id, uuid7(), TagCreate(name="bug", color="#FF0000"))

        assert tag.project_id == project_id
        tag_repo.add.assert_called_once_with(tag)
        mock_session.commit.assert_awaited_once()

    async def test_member_cannot_create(self, service, role_lookup):
        role_lookup.return_value = ProjectRole.MEMBER

        with pytest.raises(ForbiddenError):
            await service.create(uuid7(), uuid7(), TagCreate(name="bug", color="#FF0000"))

    async def test_duplicate_name_conflicts(self, service, tag_repo):
        tag_repo.name_taken.return_value = True

        with pytest.raises(ConflictError):
            await service.create(uuid7(), uuid7(), TagCreate(name="Bug", color="#FF0000"))

    async def test_empty_update_rejected(self, service, tag_repo):
        with pytest.raises(ValidationFailedError):
            await service.update(uuid7(), uuid7(), TagUpdate())

        tag_repo.get_by_id.assert_not_awaited()

    async def test_recolor(self, service, tag_repo):
        tag = TagFactory.build(color="#000000")
        tag_repo.get_by_id.return_value = tag

        result = await service.update(tag.id, uuid7(), TagUpdate(color="#ABCDEF"))

        assert result.color == "#ABCDEF"

    async def test_delete_detaches_from_cards(self, service, tag_repo, card_tag_repo):
        tag = TagFactory.build()
        tag_repo.get_by_id.return_value = tag
        card_tag_repo.delete_for_tag.return_value = 3

        await service.delete(tag.id, uuid7())

        card_tag_repo.delete_for_tag.assert_awaited_once_with(tag.id)
        tag_repo.delete.assert_awaited_once_with(tag)


class TestCardTags:
    async def test_attach_adds_link(self, service, tag_repo, card_tag_repo, card_repo):
        tag = TagFactory.build()
        card = card_in_project(card_repo, tag.project_id)
        tag_repo.get_by_id.return_value = tag

        await service.attach(card.id, tag.id, uuid7())

        link = card_tag_repo.add.call_args.args[0]
        assert (link.card_id, link.tag_id) == (card.id, tag.id)

    async def test_attach_twice_is_noop(self, service, tag_repo, card_tag_repo, card_repo):
        tag = TagFactory.build()
        card = card_in_project(card_repo, tag.project_id)
        tag_repo.get_by_id.return_value = tag
        card_tag_repo.get_link.return_value = CardTagFactory.build(card_id=card.id, tag_id=tag.id)

        await service.attach(card.id, tag.id, uuid7())

        card_tag_repo.add.assert_not_called()

    async def test_attach_foreign_tag_rejected(self, service, tag_repo, card_repo):
        tag = TagFactory.build()
        card = card_in_project(card_repo, uuid7())
        tag_repo.get_by_id.return_value = tag

        with pytest.raises(ValidationFailedError):
            await service.attach(card.id, tag.id, uuid7())

    async def test_detach_missing_link_not_found(self, service, card_repo):
        card = card_in_project(card_repo, uuid7())

        with pytest.raises(NotFoundError):
            await service.detach(card.id, uuid7(), uuid7())
