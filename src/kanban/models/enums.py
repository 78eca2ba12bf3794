"""Shared enums for models."""

from enum import Enum


class ProjectRole(str, Enum):
    """Member role within a project.

    Roles are totally ordered by privilege: owner > moderator > member > viewer.
    A lower rank means more privilege.
    """

    OWNER = "owner"
    MODERATOR = "moderator"
    MEMBER = "member"
    VIEWER = "viewer"

    @property
    def rank(self) -> int:
        return _ROLE_RANKS[self]

    def satisfies(self, minimum: "ProjectRole") -> bool:
        """Whether this role is at least as privileged as ``minimum``."""
        return self.rank <= minimum.rank


_ROLE_RANKS = {
    ProjectRole.OWNER: 0,
    ProjectRole.MODERATOR: 1,
    ProjectRole.MEMBER: 2,
    ProjectRole.VIEWER: 3,
}


class NotificationType(str, Enum):
    """Kind of event a notification reports."""

    CARD_UPDATED = "card_updated"
    CARD_DELETED = "card_deleted"
    CARD_MOVED = "card_moved"
