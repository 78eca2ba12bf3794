"""Unit tests for NotificationService."""

from unittest.mock import AsyncMock, MagicMock
from uuid import uuid7

import pytest

from src.kanban.core.exceptions import NotFoundError, ValidationFailedError
from src.kanban.models import Notification, NotificationType
from src.kanban.services import NotificationService

pytestmark = pytest.mark.unit


@pytest.fixture
def notification_repo() -> MagicMock:
    repo = MagicMock()
    repo.get_by_id = AsyncMock()
    repo.list_for_user = AsyncMock(return_value=([], None, False))
    repo.mark_all_read = AsyncMock(return_value=0)
    repo.count_unread = AsyncMock(return_value=0)
    repo.delete = AsyncMock()
    return repo


@pytest.fixture
def service(notification_repo, mock_session) -> NotificationService:
    return NotificationService(notification_repo, mock_session)


async def test_add_queues_without_commit(service, notification_repo, mock_session):
    user_id = uuid7()

    notification = service.add(
        user_id, NotificationType.CARD_UPDATED, " Card updated ", 'Card "Docs" was updated'
    )

    assert notification.title == "Card updated"
    assert notification.type == "card_updated"
    assert notification.is_read is False
    notification_repo.add.assert_called_once_with(notification)
    mock_session.commit.assert_not_awaited()


def test_blank_title_rejected(service, notification_repo):
    with pytest.raises(ValidationFailedError):
        service.add(uuid7(), NotificationType.CARD_MOVED, "   ", "body")

    notification_repo.add.assert_not_called()


async def test_mark_read_of_someone_elses_notification_is_not_found(service, notification_repo):
    notification_repo.get_by_id.return_value = Notification(
        user_id=uuid7(), type="card_moved", title="t", message="m"
    )

    with pytest.raises(NotFoundError):
        await service.mark_read(uuid7(), uuid7())


async def test_mark_read(service, notification_repo):
    owner = uuid7()
    notification = Notification(user_id=owner, type="card_moved", title="t", message="m")
    notification_repo.get_by_id.return_value = notification

    result = await service.mark_read(notification.id, owner)

    assert result.is_read is True


async def test_list_limit_is_clamped(service, notification_repo):
    user_id = uuid7()

    await service.list_for_user(user_id, None, 500)

    notification_repo.list_for_user.assert_awaited_once_with(user_id, None, 50)


async def test_mark_all_read_returns_count(service, notification_repo):
    notification_repo.mark_all_read.return_value = 7

    assert await service.mark_all_read(uuid7()) == 7


async def test_unread_count(service, notification_repo):
    user_id = uuid7()
    notification_repo.count_unread.return_value = 3

    assert await service.unread_count(user_id) == 3
    notification_repo.count_unread.assert_awaited_once_with(user_id)


async def test_delete_own_notification(service, notification_repo, mock_session):
    owner = uuid7()
    notification = Notification(user_id=owner, type="card_deleted", title="t", message="m")
    notification_repo.get_by_id.return_value = notification

    await service.delete(notification.id, owner)

    notification_repo.delete.assert_awaited_once_with(notification)
    mock_session.commit.assert_awaited_once()


async def test_delete_someone_elses_notification_is_not_found(
    service, notification_repo, mock_session
):
    notification_repo.get_by_id.return_value = Notification(
        user_id=uuid7(), type="card_deleted", title="t", message="m"
    )

    with pytest.raises(NotFoundError):
        await service.delete(uuid7(), uuid7())

    notification_repo.delete.assert_not_awaited()
    mock_session.rollback.assert_awaited_once()
