"""Cascading archive/restore for soft-deletable resources.

Restore policy: a cascade stamps the parent and every child it archives with
one timestamp (the cascade epoch). Restoring the parent brings back only the
children still carrying that epoch. A child archived on its own before the
parent keeps its own timestamp and stays archived when the parent returns.
"""

from collections.abc import Callable, Sequence
from datetime import datetime
from typing import Protocol

from src.kanban.models.base import utc_now


class SoftDeletable(Protocol):
    updated_at: datetime
    deleted_at: datetime | None


class LifecycleManager:
    """Apply archive/restore to a resource and its children.

    Children must be loaded with the archive filter bypassed; which of them
    are live is decided here, not by the query.
    """

    def __init__(self, clock: Callable[[], datetime] = utc_now):
        self._clock = clock

    def now(self) -> datetime:
        return self._clock()

    def archive(
        self,
        resource: SoftDeletable,
        children: Sequence[SoftDeletable],
        now: datetime | None = None,
    ) -> datetime:
        """Archive ``resource`` and every live child. Returns the cascade epoch.

        Re-archiving keeps the resource's original timestamp and only sweeps
        up children that are still live.
        """
        now = now or self._clock()
        if resource.deleted_at is None:
            resource.deleted_at = now
            resource.updated_at = now
        epoch = resource.deleted_at

        self.archive_children(epoch, children, now)
        return epoch

    def archive_children(
        self,
        epoch: datetime,
        children: Sequence[SoftDeletable],
        now: datetime | None = None,
    ) -> int:
        """Stamp every live child with ``epoch``. Returns how many were archived."""
        now = now or self._clock()
        count = 0
        for child in children:
            if child.deleted_at is None:
                child.deleted_at = epoch
                child.updated_at = now
                count += 1
        return count

    def restore[T: SoftDeletable](
        self,
        resource: SoftDeletable,
        children: Sequence[T],
        now: datetime | None = None,
    ) -> list[T]:
        """Restore ``resource`` and the children its cascade archived.

        Restoring a live resource is a no-op. Returns the restored children so
        callers can continue the cascade with ``restore_children``.
        """
        now = now or self._clock()
        epoch = resource.deleted_at
        if epoch is None:
            return []

        resource.deleted_at = None
        resource.updated_at = now
        return self.restore_children(epoch, children, now)

    def restore_children[T: SoftDeletable](
        self,
        epoch: datetime,
        children: Sequence[T],
        now: datetime | None = None,
    ) -> list[T]:
        """Clear ``deleted_at`` on children archived at exactly ``epoch``."""
        now = now or self._clock()
        restored: list[T] = []
        for child in children:
            if child.deleted_at is not None and child.deleted_at == epoch:
                child.deleted_at = None
                child.updated_at = now
                restored.append(child)
        return restored
