"""Gap-based integer ordering for sibling resources.

Siblings (boards of a project, columns of a board, cards of a column,
subtasks of a card) carry integer positions spaced ``gap`` apart. A move
normally writes a single new position between its new neighbours; only when
those neighbours are adjacent integers, or the slot one gap past an end is
taken, are all siblings renumbered to ``(index + 1) * gap``.

Anchors name the new neighbours. A lone ``after_id`` that is not the first
sibling lands at the midpoint between it and its current predecessor. A lone
``before_id`` that is not the last sibling lands at the midpoint between it
and its current successor; ``before + gap`` there could pass that successor.
A lone ``before_id`` on the last sibling appends one gap past it, and a lone
``after_id`` on the first sibling goes one gap below it.

The allocator mutates the loaded ORM objects in place and never touches the
session; callers flush and commit inside a serializable transaction.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol
from uuid import UUID

from src.kanban.core.exceptions import NotFoundError, ValidationFailedError
from src.kanban.core.logging import get_logger

logger = get_logger(__name__)

DEFAULT_GAP = 1000


class Positioned(Protocol):
    id: UUID
    position: int
    updated_at: datetime


@dataclass(frozen=True)
class Placement:
    """Outcome of a move.

    ``renumbered`` holds every sibling in final order when the renumbering
    path ran, otherwise None.
    """

    position: int
    renumbered: list[Positioned] | None = None

    @property
    def did_renumber(self) -> bool:
        return self.renumbered is not None


class PositionAllocator:
    def __init__(self, gap: int = DEFAULT_GAP):
        if gap < 2:
            raise ValueError("gap must be at least 2")
        self.gap = gap

    def append_position(self, positions: Sequence[int | None]) -> int:
        """Position for a new last sibling: max + gap, or gap when empty."""
        existing = [p for p in positions if p is not None]
        return (max(existing) if existing else 0) + self.gap

    @staticmethod
    def validate_anchors(
        moving_id: UUID, before_id: UUID | None, after_id: UUID | None
    ) -> None:
        """Reject malformed anchor combinations before anything is read."""
        if before_id is None and after_id is None:
            raise ValidationFailedError("At least one anchor is required")
        if moving_id in (before_id, after_id):
            raise ValidationFailedError("A resource cannot be used as its own anchor")
        if before_id is not None and before_id == after_id:
            raise ValidationFailedError("Before and after anchors must be different")

    def reorder(
        self,
        siblings: Sequence[Positioned],
        moving: Positioned,
        before_id: UUID | None,
        after_id: UUID | None,
        now: datetime,
    ) -> Placement:
        """Move ``moving`` right after ``before_id`` and/or right before ``after_id``.

        Args:
            siblings: Every live sibling, ``moving`` included, ordered by
                (position, id).
            moving: The sibling being moved.
            before_id: Anchor the sibling must follow.
            after_id: Anchor the sibling must precede.
            now: Timestamp written to every touched sibling.

        Raises:
            ValidationFailedError: Malformed anchors, or anchors out of order.
            NotFoundError: An anchor is not among the live siblings.
        """
        self.validate_anchors(moving.id, before_id, after_id)

        if len(siblings) <= 1:
            moving.updated_at = now
            return Placement(position=moving.position)

        others = [s for s in siblings if s.id != moving.id]
        index_of = {s.id: i for i, s in enumerate(others)}

        before_index = self._resolve(index_of, before_id, "Before")
        after_index = self._resolve(index_of, after_id, "After")

        if before_index is not None and after_index is not None:
            if before_index >= after_index:
                raise ValidationFailedError("Before anchor must appear before after anchor")

        # Immediately before the after anchor, otherwise immediately after the before anchor.
        if after_index is not None:
            insert_at = after_index
        else:
            assert before_index is not None
            insert_at = before_index + 1

        return self._place(others, moving, insert_at, now)

    def place_at_index(
        self,
        siblings: Sequence[Positioned],
        moving: Positioned,
        index: int,
        now: datetime,
    ) -> Placement:
        """Insert ``moving`` at a zero-based index among ``siblings``.

        ``moving`` is excluded from ``siblings`` if present; the index is
        clamped to ``[0, len(siblings)]``. Used when a card enters a column.
        """
        others = [s for s in siblings if s.id != moving.id]

        if not others:
            moving.position = self.gap
            moving.updated_at = now
            return Placement(position=moving.position)

        insert_at = max(0, min(index, len(others)))
        return self._place(others, moving, insert_at, now)

    def renumber(self, ordered: Sequence[Positioned], now: datetime) -> None:
        """Assign ``(index + 1) * gap`` to every sibling in the given order."""
        for index, sibling in enumerate(ordered):
            sibling.position = (index + 1) * self.gap
            sibling.updated_at = now

    def _place(
        self,
        others: list[Positioned],
        moving: Positioned,
        insert_at: int,
        now: datetime,
    ) -> Placement:
        prev = others[insert_at - 1] if insert_at > 0 else None
        nxt = others[insert_at] if insert_at < len(others) else None
        taken = {s.position for s in others}

        if prev is not None and nxt is not None:
            candidate = (prev.position + nxt.position) // 2
            needs_renumber = nxt.position - prev.position < 2
        elif nxt is not None:
            candidate = nxt.position - self.gap
            needs_renumber = candidate in taken
        else:
            assert prev is not None
            candidate = prev.position + self.gap
            needs_renumber = candidate in taken

        if not needs_renumber:
            moving.position = candidate
            moving.updated_at = now
            return Placement(position=candidate)

        ordered = list(others)
        ordered.insert(insert_at, moving)
        self.renumber(ordered, now)

        logger.info(
            "Positions renumbered",
            moved_id=str(moving.id),
            sibling_count=len(ordered),
        )
        return Placement(position=moving.position, renumbered=ordered)

    @staticmethod
    def _resolve(index_of: dict[UUID, int], anchor_id: UUID | None, label: str) -> int | None:
        if anchor_id is None:
            return None
        if anchor_id not in index_of:
            raise NotFoundError(f"{label} anchor {anchor_id} not found among siblings")
        return index_of[anchor_id]
