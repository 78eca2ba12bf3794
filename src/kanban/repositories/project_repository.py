"""Repository for Project entity."""

from uuid import UUID

from sqlmodel import select

from src.kanban.models import Project, ProjectMember
from src.kanban.repositories.base import BaseRepository


class ProjectRepository(BaseRepository[Project]):
    model = Project

    async def list_for_user(self, user_id: UUID) -> list[Project]:
        """List projects the user is a member of, by name."""
        result = await self.session.execute(
            select(Project)
            .join(ProjectMember, ProjectMember.project_id == Project.id)  # type: ignore[arg-type]
            .where(ProjectMember.user_id == user_id)
            .order_by(Project.name, Project.id)
        )
        return list(result.scalars().all())
