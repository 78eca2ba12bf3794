"""Project and membership models."""

from datetime import datetime
from uuid import UUID, uuid7

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel

from src.kanban.models.base import utc_now
from src.kanban.models.enums import ProjectRole


class Project(SQLModel, table=True):
    """Collaboration space owning boards and tags. Never ordered itself."""

    __tablename__ = "projects"

    id: UUID = Field(default_factory=uuid7, primary_key=True)
    name: str = Field(max_length=200, index=True)
    description: str | None = Field(default=None, max_length=1000)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class ProjectMember(SQLModel, table=True):
    """Role of a user within a project.

    Rows are written by the membership-management service; the board engine
    only reads them.
    """

    __tablename__ = "project_members"
    __table_args__ = (UniqueConstraint("project_id", "user_id", name="uq_project_member"),)

    id: UUID = Field(default_factory=uuid7, primary_key=True)
    project_id: UUID = Field(foreign_key="projects.id", index=True)
    user_id: UUID = Field(index=True)
    role: str = Field(default=ProjectRole.MEMBER.value, max_length=20)
    joined_at: datetime = Field(default_factory=utc_now)

    @property
    def role_enum(self) -> ProjectRole:
        """Get role as ProjectRole enum."""
        return ProjectRole(self.role)
