"""FastAPI dependency injection definitions."""

from src.kanban.api.dependencies.auth import CurrentActor, get_current_actor
from src.kanban.api.dependencies.db import DBSession, get_db_session
from src.kanban.api.dependencies.services import (
    BoardServiceDep,
    CardServiceDep,
    ColumnServiceDep,
    NotificationServiceDep,
    ProjectServiceDep,
    SubtaskServiceDep,
    TagServiceDep,
    get_board_service,
    get_card_service,
    get_column_service,
    get_notification_service,
    get_project_service,
    get_subtask_service,
    get_tag_service,
)

__all__ = [
    # Database
    "DBSession",
    "get_db_session",
    # Auth
    "CurrentActor",
    "get_current_actor",
    # Services
    "BoardServiceDep",
    "CardServiceDep",
    "ColumnServiceDep",
    "NotificationServiceDep",
    "ProjectServiceDep",
    "SubtaskServiceDep",
    "TagServiceDep",
    "get_board_service",
    "get_card_service",
    "get_column_service",
    "get_notification_service",
    "get_project_service",
    "get_subtask_service",
    "get_tag_service",
]
