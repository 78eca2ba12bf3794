"""Ordered, soft-deletable board resources: boards, columns, cards and subtasks.

Each carries an integer ``position`` that orders it among its non-archived
siblings, and a nullable ``deleted_at`` archival timestamp.
"""

from datetime import datetime
from decimal import Decimal
from uuid import UUID, uuid7

from sqlalchemy import Index
from sqlmodel import Field, SQLModel

from src.kanban.models.base import utc_now


class Board(SQLModel, table=True):
    """Board within a project; parent of an ordered set of columns."""

    __tablename__ = "boards"
    __table_args__ = (Index("ix_boards_project_position", "project_id", "position"),)

    id: UUID = Field(default_factory=uuid7, primary_key=True)
    project_id: UUID = Field(foreign_key="projects.id", index=True)
    name: str = Field(max_length=200)
    position: int = Field(default=0)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
    deleted_at: datetime | None = Field(default=None)


class Column(SQLModel, table=True):
    """Column within a board; parent of an ordered set of cards."""

    __tablename__ = "columns"
    __table_args__ = (Index("ix_columns_board_position", "board_id", "position"),)

    id: UUID = Field(default_factory=uuid7, primary_key=True)
    board_id: UUID = Field(foreign_key="boards.id", index=True)
    name: str = Field(max_length=100)
    position: int = Field(default=0)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
    deleted_at: datetime | None = Field(default=None)


class Card(SQLModel, table=True):
    """Card within a column.

    ``version`` starts at 1 and is bumped by exactly one on every content
    update; updates carry the version they were based on.
    """

    __tablename__ = "cards"
    __table_args__ = (Index("ix_cards_column_position", "column_id", "position"),)

    id: UUID = Field(default_factory=uuid7, primary_key=True)
    column_id: UUID = Field(foreign_key="columns.id", index=True)
    title: str = Field(max_length=200)
    description: str | None = Field(default=None, max_length=8000)
    planned_duration_hours: Decimal | None = Field(default=None, max_digits=7, decimal_places=2)
    position: int = Field(default=0)
    version: int = Field(default=1)
    created_by: UUID | None = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
    deleted_at: datetime | None = Field(default=None)


class Subtask(SQLModel, table=True):
    """Checklist item of a card, ordered among the card's subtasks."""

    __tablename__ = "subtasks"
    __table_args__ = (Index("ix_subtasks_card_position", "card_id", "position"),)

    id: UUID = Field(default_factory=uuid7, primary_key=True)
    card_id: UUID = Field(foreign_key="cards.id", index=True)
    description: str = Field(max_length=500)
    completed: bool = Field(default=False)
    position: int = Field(default=0)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
    deleted_at: datetime | None = Field(default=None)
