"""Model exports.

Import from here: `from src.kanban.models import Board, Column, Card`
"""

from src.kanban.models.board import Board, Card, Column, Subtask
from src.kanban.models.enums import NotificationType, ProjectRole
from src.kanban.models.notification import Notification
from src.kanban.models.project import Project, ProjectMember
from src.kanban.models.tag import CardTag, Tag

__all__ = [
    # Enums
    "NotificationType",
    "ProjectRole",
    # Tables
    "Board",
    "Card",
    "CardTag",
    "Column",
    "Notification",
    "Project",
    "ProjectMember",
    "Subtask",
    "Tag",
]
