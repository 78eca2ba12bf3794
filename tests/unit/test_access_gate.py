"""Unit tests for project role checks."""

from unittest.mock import AsyncMock
from uuid import uuid7

import pytest

from src.kanban.core.exceptions import ForbiddenError
from src.kanban.models import ProjectRole
from src.kanban.services.access_gate import AccessGate

pytestmark = pytest.mark.unit


def gate_with(role: ProjectRole | None) -> AccessGate:
    return AccessGate(AsyncMock(return_value=role))


class TestRoleOrder:
    @pytest.mark.parametrize(
        ("actual", "minimum", "allowed"),
        [
            (ProjectRole.OWNER, ProjectRole.OWNER, True),
            (ProjectRole.OWNER, ProjectRole.VIEWER, True),
            (ProjectRole.MODERATOR, ProjectRole.MEMBER, True),
            (ProjectRole.MODERATOR, ProjectRole.OWNER, False),
            (ProjectRole.MEMBER, ProjectRole.MEMBER, True),
            (ProjectRole.MEMBER, ProjectRole.MODERATOR, False),
            (ProjectRole.VIEWER, ProjectRole.VIEWER, True),
            (ProjectRole.VIEWER, ProjectRole.MEMBER, False),
        ],
    )
    def test_satisfies(self, actual, minimum, allowed):
        assert actual.satisfies(minimum) is allowed


class TestAuthorize:
    async def test_non_member_is_denied(self):
        assert await gate_with(None).authorize(uuid7(), uuid7(), ProjectRole.VIEWER) is False

    async def test_viewer_can_read_but_not_write(self):
        gate = gate_with(ProjectRole.VIEWER)

        assert await gate.authorize(uuid7(), uuid7(), ProjectRole.VIEWER) is True
        assert await gate.authorize(uuid7(), uuid7(), ProjectRole.MEMBER) is False

    async def test_owner_passes_every_check(self):
        gate = gate_with(ProjectRole.OWNER)

        for minimum in ProjectRole:
            assert await gate.authorize(uuid7(), uuid7(), minimum) is True

    async def test_lookup_receives_project_and_user(self):
        lookup = AsyncMock(return_value=ProjectRole.MEMBER)
        project_id, user_id = uuid7(), uuid7()

        await AccessGate(lookup).authorize(project_id, user_id, ProjectRole.MEMBER)

        lookup.assert_awaited_once_with(project_id, user_id)


class TestRequire:
    async def test_returns_role_when_allowed(self):
        role = await gate_with(ProjectRole.MODERATOR).require(uuid7(), uuid7(), ProjectRole.MEMBER)
        assert role is ProjectRole.MODERATOR

    async def test_raises_forbidden_when_insufficient(self):
        with pytest.raises(ForbiddenError):
            await gate_with(ProjectRole.VIEWER).require(uuid7(), uuid7(), ProjectRole.MEMBER)

    async def test_denial_is_logged(self, capturing_logger):
        project_id = uuid7()

        with pytest.raises(ForbiddenError):
            await gate_with(None).require(project_id, uuid7(), ProjectRole.VIEWER)

        [entry] = [c for c in capturing_logger.calls if c.kwargs.get("event") == "Access denied"]
        assert entry.kwargs["project_id"] == str(project_id)
        assert entry.kwargs["minimum_role"] == "viewer"
