"""Project role checks shared by every resource service."""

from collections.abc import Awaitable, Callable
from uuid import UUID

from src.kanban.core.exceptions import ForbiddenError
from src.kanban.core.logging import get_logger
from src.kanban.models import ProjectRole

logger = get_logger(__name__)

RoleLookup = Callable[[UUID, UUID], Awaitable[ProjectRole | None]]


class AccessGate:
    """Authorize an actor against a minimum project role.

    The role lookup is injected (normally ``MembershipRepository.get_role``)
    so the gate holds no membership state of its own.
    """

    def __init__(self, role_lookup: RoleLookup):
        self._role_lookup = role_lookup

    async def authorize(
        self, project_id: UUID, user_id: UUID, minimum_role: ProjectRole
    ) -> bool:
        """Return True iff the user is a member with at least ``minimum_role``."""
        role = await self._role_lookup(project_id, user_id)
        if role is None:
            return False
        return role.satisfies(minimum_role)

    async def require(
        self, project_id: UUID, user_id: UUID, minimum_role: ProjectRole
    ) -> ProjectRole:
        """Return the actor's role, or raise ForbiddenError if it is insufficient."""
        role = await self._role_lookup(project_id, user_id)
        if role is None or not role.satisfies(minimum_role):
            logger.info(
                "Access denied",
                project_id=str(project_id),
                user_id=str(user_id),
                minimum_role=minimum_role.value,
            )
            raise ForbiddenError()
        return role
