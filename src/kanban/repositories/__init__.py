"""Repository layer - data access abstraction."""

from src.kanban.repositories.base import BaseRepository, OrderedRepository
from src.kanban.repositories.board_repository import (
    BoardRepository,
    CardRepository,
    ColumnRepository,
    SubtaskRepository,
)
from src.kanban.repositories.membership_repository import MembershipRepository
from src.kanban.repositories.notification_repository import NotificationRepository
from src.kanban.repositories.project_repository import ProjectRepository
from src.kanban.repositories.tag_repository import CardTagRepository, TagRepository

__all__ = [
    # Base
    "BaseRepository",
    "OrderedRepository",
    # Board hierarchy
    "BoardRepository",
    "CardRepository",
    "ColumnRepository",
    "SubtaskRepository",
    # Projects
    "MembershipRepository",
    "ProjectRepository",
    # Tags
    "CardTagRepository",
    "TagRepository",
    # Notifications
    "NotificationRepository",
]
