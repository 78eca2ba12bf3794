"""Project tags and their card assignments."""

from datetime import datetime
from uuid import UUID, uuid7

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel

from src.kanban.models.base import utc_now


class Tag(SQLModel, table=True):
    """Label defined per project. Names are unique per project, ignoring case."""

    __tablename__ = "tags"
    __table_args__ = (UniqueConstraint("project_id", "name", name="uq_tags_project_name"),)

    id: UUID = Field(default_factory=uuid7, primary_key=True)
    project_id: UUID = Field(foreign_key="projects.id", index=True)
    name: str = Field(max_length=50)
    color: str = Field(max_length=7)
    created_at: datetime = Field(default_factory=utc_now)


class CardTag(SQLModel, table=True):
    """Join row between a card and a tag. No lifecycle of its own."""

    __tablename__ = "card_tags"
    __table_args__ = (UniqueConstraint("card_id", "tag_id", name="uq_card_tags_card_tag"),)

    id: UUID = Field(default_factory=uuid7, primary_key=True)
    card_id: UUID = Field(foreign_key="cards.id", index=True)
    tag_id: UUID = Field(foreign_key="tags.id", index=True)
    created_at: datetime = Field(default_factory=utc_now)
