"""Repository for ProjectMember entity."""

from uuid import UUID

from sqlmodel import select

from src.kanban.models import ProjectMember, ProjectRole
from src.kanban.repositories.base import BaseRepository


class MembershipRepository(BaseRepository[ProjectMember]):
    """Read access to project memberships.

    ``get_role`` is the role-lookup capability handed to the AccessGate.
    """

    model = ProjectMember

    async def get_membership(self, project_id: UUID, user_id: UUID) -> ProjectMember | None:
        """Get membership for a user in a project."""
        result = await self.session.execute(
            select(ProjectMember).where(
                ProjectMember.project_id == project_id,
                ProjectMember.user_id == user_id,
            )
        )
        return result.scalar_one_or_none()

    async def get_role(self, project_id: UUID, user_id: UUID) -> ProjectRole | None:
        """Return the user's role in the project, or None if not a member."""
        membership = await self.get_membership(project_id, user_id)
        if membership is None:
            return None
        return membership.role_enum

    async def list_project_ids(self, user_id: UUID) -> list[UUID]:
        """List ids of every project the user belongs to."""
        result = await self.session.execute(
            select(ProjectMember.project_id).where(ProjectMember.user_id == user_id)
        )
        return list(result.scalars().all())

    def create_membership(
        self,
        project_id: UUID,
        user_id: UUID,
        role: ProjectRole = ProjectRole.MEMBER,
    ) -> ProjectMember:
        """Create a new membership (add to session, no commit)."""
        membership = ProjectMember(project_id=project_id, user_id=user_id, role=role.value)
        self.session.add(membership)
        return membership

    async def list_members(self, project_id: UUID) -> list[ProjectMember]:
        """Members of a project in joining order."""
        result = await self.session.execute(
            select(ProjectMember)
            .where(ProjectMember.project_id == project_id)
            .order_by(ProjectMember.joined_at, ProjectMember.id)
        )
        return list(result.scalars().all())
