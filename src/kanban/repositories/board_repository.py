"""Repositories for the ordered board hierarchy: boards, columns, cards, subtasks."""

from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import func, update
from sqlmodel import select

from src.kanban.models import Board, Card, Column, Subtask
from src.kanban.repositories.base import OrderedRepository


class BoardRepository(OrderedRepository[Board]):
    """Boards ordered within a project."""

    model = Board
    parent_field = "project_id"

    async def list_archived(self, project_id: UUID) -> list[Board]:
        """Archived boards of a project, most recently archived first."""
        result = await self.session.execute(
            select(Board)
            .where(Board.project_id == project_id, Board.deleted_at.is_not(None))  # type: ignore[union-attr]
            .order_by(Board.deleted_at.desc(), Board.id)  # type: ignore[union-attr]
        )
        return list(result.scalars().all())


class ColumnRepository(OrderedRepository[Column]):
    """Columns ordered within a board."""

    model = Column
    parent_field = "board_id"

    async def get_with_board(
        self, column_id: UUID, include_archived: bool = False
    ) -> tuple[Column, Board] | None:
        """Get a column together with its board."""
        query = select(Column, Board).join(Board, Board.id == Column.board_id)  # type: ignore[arg-type]
        query = query.where(Column.id == column_id)
        if not include_archived:
            query = query.where(Column.deleted_at.is_(None))  # type: ignore[union-attr]
        result = await self.session.execute(query)
        row = result.first()
        if row is None:
            return None
        return row[0], row[1]


class CardRepository(OrderedRepository[Card]):
    """Cards ordered within a column."""

    model = Card
    parent_field = "column_id"

    async def get_with_context(
        self, card_id: UUID, include_archived: bool = False
    ) -> tuple[Card, Column, Board] | None:
        """Get a card together with its column and board."""
        query = (
            select(Card, Column, Board)
            .join(Column, Column.id == Card.column_id)  # type: ignore[arg-type]
            .join(Board, Board.id == Column.board_id)  # type: ignore[arg-type]
            .where(Card.id == card_id)
        )
        if not include_archived:
            query = query.where(Card.deleted_at.is_(None))  # type: ignore[union-attr]
        result = await self.session.execute(query)
        row = result.first()
        if row is None:
            return None
        return row[0], row[1], row[2]

    async def list_by_board(self, board_id: UUID, limit: int, offset: int) -> list[Card]:
        """Live cards of a board's live columns, in board reading order."""
        result = await self.session.execute(
            select(Card)
            .join(Column, Column.id == Card.column_id)  # type: ignore[arg-type]
            .where(
                Column.board_id == board_id,
                Column.deleted_at.is_(None),  # type: ignore[union-attr]
                Card.deleted_at.is_(None),  # type: ignore[union-attr]
            )
            .order_by(Column.position, Column.id, Card.position, Card.id)
            .limit(limit)
            .offset(offset)
        )
        return list(result.scalars().all())

    async def list_archived_by_board(self, board_id: UUID, limit: int, offset: int) -> list[Card]:
        """Archived cards of a board, most recently archived first."""
        result = await self.session.execute(
            select(Card)
            .join(Column, Column.id == Card.column_id)  # type: ignore[arg-type]
            .where(Column.board_id == board_id, Card.deleted_at.is_not(None))  # type: ignore[union-attr]
            .order_by(Card.deleted_at.desc(), Card.id)  # type: ignore[union-attr]
            .limit(limit)
            .offset(offset)
        )
        return list(result.scalars().all())

    async def list_by_columns(self, column_ids: list[UUID]) -> list[Card]:
        """Every card of the given columns, archived rows included."""
        if not column_ids:
            return []
        result = await self.session.execute(
            select(Card)
            .where(Card.column_id.in_(column_ids))  # type: ignore[attr-defined]
            .order_by(Card.column_id, Card.position, Card.id)
        )
        return list(result.scalars().all())

    async def compare_and_set_content(
        self,
        card_id: UUID,
        expected_version: int,
        values: dict[str, Any],
        updated_at: datetime,
    ) -> bool:
        """Write content and bump version iff the stored version matches.

        The version check and the write are one UPDATE statement.
        Returns True when a row was updated.
        """
        result = await self.session.execute(
            update(Card)
            .where(
                Card.id == card_id,  # type: ignore[arg-type]
                Card.version == expected_version,  # type: ignore[arg-type]
                Card.deleted_at.is_(None),  # type: ignore[union-attr]
            )
            .values(**values, version=Card.version + 1, updated_at=updated_at)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1  # type: ignore[attr-defined]

    async def refetch(self, card_id: UUID) -> Card | None:
        """Reload a card from the database, overwriting the identity map copy."""
        result = await self.session.execute(
            select(Card).where(Card.id == card_id).execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()


class SubtaskRepository(OrderedRepository[Subtask]):
    """Subtasks ordered within a card."""

    model = Subtask
    parent_field = "card_id"

    async def get_with_context(
        self, subtask_id: UUID, include_archived: bool = False
    ) -> tuple[Subtask, Card, Column, Board] | None:
        """Get a subtask together with its card, column and board."""
        query = (
            select(Subtask, Card, Column, Board)
            .join(Card, Card.id == Subtask.card_id)  # type: ignore[arg-type]
            .join(Column, Column.id == Card.column_id)  # type: ignore[arg-type]
            .join(Board, Board.id == Column.board_id)  # type: ignore[arg-type]
            .where(Subtask.id == subtask_id)
        )
        if not include_archived:
            query = query.where(Subtask.deleted_at.is_(None))  # type: ignore[union-attr]
        result = await self.session.execute(query)
        row = result.first()
        if row is None:
            return None
        return row[0], row[1], row[2], row[3]

    async def list_by_cards(self, card_ids: list[UUID]) -> list[Subtask]:
        """Every subtask of the given cards, archived rows included."""
        if not card_ids:
            return []
        result = await self.session.execute(
            select(Subtask)
            .where(Subtask.card_id.in_(card_ids))  # type: ignore[attr-defined]
            .order_by(Subtask.card_id, Subtask.position, Subtask.id)
        )
        return list(result.scalars().all())

    async def counts(self, card_id: UUID) -> tuple[int, int]:
        """Return (completed, total) over the card's live subtasks."""
        result = await self.session.execute(
            select(
                func.count().filter(Subtask.completed.is_(True)),  # type: ignore[attr-defined]
                func.count(),
            ).where(
                Subtask.card_id == card_id,
                Subtask.deleted_at.is_(None),  # type: ignore[union-attr]
            )
        )
        completed, total = result.one()
        return completed, total
