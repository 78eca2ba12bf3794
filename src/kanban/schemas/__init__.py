from src.kanban.schemas.board import (
    BoardCreate,
    BoardRead,
    BoardUpdate,
    CardCreate,
    CardMoveRequest,
    CardRead,
    CardUpdate,
    ColumnCreate,
    ColumnRead,
    ColumnUpdate,
    ReorderRequest,
    SubtaskCounts,
    SubtaskCreate,
    SubtaskRead,
    SubtaskUpdate,
)
from src.kanban.schemas.notification import NotificationRead
from src.kanban.schemas.pagination import PaginatedResponse
from src.kanban.schemas.project import (
    ProjectCreate,
    ProjectMemberRead,
    ProjectRead,
    ProjectUpdate,
)
from src.kanban.schemas.tag import TagCreate, TagRead, TagUpdate

__all__ = [
    "BoardCreate",
    "BoardRead",
    "BoardUpdate",
    "CardCreate",
    "CardMoveRequest",
    "CardRead",
    "CardUpdate",
    "ColumnCreate",
    "ColumnRead",
    "ColumnUpdate",
    "NotificationRead",
    "PaginatedResponse",
    "ProjectCreate",
    "ProjectMemberRead",
    "ProjectRead",
    "ProjectUpdate",
    "ReorderRequest",
    "SubtaskCounts",
    "SubtaskCreate",
    "SubtaskRead",
    "SubtaskUpdate",
    "TagCreate",
    "TagRead",
    "TagUpdate",
]
