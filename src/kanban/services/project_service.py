"""Project service."""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.kanban.core.exceptions import NotFoundError
from src.kanban.core.logging import get_logger
from src.kanban.models import Project, ProjectMember, ProjectRole
from src.kanban.models.base import utc_now
from src.kanban.repositories import MembershipRepository, ProjectRepository
from src.kanban.schemas import ProjectCreate, ProjectUpdate
from src.kanban.services.access_gate import AccessGate

logger = get_logger(__name__)


class ProjectService:
    """Service for project operations."""

    def __init__(
        self,
        project_repo: ProjectRepository,
        membership_repo: MembershipRepository,
        gate: AccessGate,
        session: AsyncSession,
    ):
        self.project_repo = project_repo
        self.membership_repo = membership_repo
        self.gate = gate
        self.session = session

    async def create(self, actor_id: UUID, data: ProjectCreate) -> Project:
        """Create a project. The creator becomes its owner."""
        try:
            project = Project(name=data.name, description=data.description)
            self.project_repo.add(project)
            await self.session.flush()
            self.membership_repo.create_membership(project.id, actor_id, ProjectRole.OWNER)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Project created", project_id=str(project.id), owner_id=str(actor_id))
        return project

    async def get(self, project_id: UUID, actor_id: UUID) -> Project:
        project = await self.project_repo.get_by_id(project_id)
        if project is None:
            raise NotFoundError(f"Project {project_id} not found")
        await self.gate.require(project_id, actor_id, ProjectRole.VIEWER)
        return project

    async def list_for_user(self, actor_id: UUID) -> list[Project]:
        return await self.project_repo.list_for_user(actor_id)

    async def update(self, project_id: UUID, actor_id: UUID, data: ProjectUpdate) -> Project:
        """Update name and/or description. Owner only."""
        try:
            project = await self.project_repo.get_by_id(project_id)
            if project is None:
                raise NotFoundError(f"Project {project_id} not found")
            await self.gate.require(project_id, actor_id, ProjectRole.OWNER)

            changes = data.model_dump(exclude_unset=True)
            if changes.get("name") is not None:
                project.name = changes["name"]
            if "description" in changes:
                project.description = changes["description"]
            project.updated_at = utc_now()
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Project updated", project_id=str(project_id), actor_id=str(actor_id))
        return project

    async def list_members(self, project_id: UUID, actor_id: UUID) -> list[ProjectMember]:
        """Members of a project, owners first, then by joining time."""
        project = await self.project_repo.get_by_id(project_id)
        if project is None:
            raise NotFoundError(f"Project {project_id} not found")
        await self.gate.require(project_id, actor_id, ProjectRole.VIEWER)

        members = await self.membership_repo.list_members(project_id)
        return sorted(members, key=lambda m: (m.role_enum.rank, m.joined_at))
