from src.kanban.services.access_gate import AccessGate
from src.kanban.services.board_service import BoardService
from src.kanban.services.card_service import CardService
from src.kanban.services.column_service import ColumnService
from src.kanban.services.concurrency import ConcurrencyGuard
from src.kanban.services.lifecycle import LifecycleManager
from src.kanban.services.notification_service import NotificationService
from src.kanban.services.positioning import PositionAllocator
from src.kanban.services.project_service import ProjectService
from src.kanban.services.subtask_service import SubtaskService
from src.kanban.services.tag_service import TagService

__all__ = [
    "AccessGate",
    "BoardService",
    "CardService",
    "ColumnService",
    "ConcurrencyGuard",
    "LifecycleManager",
    "NotificationService",
    "PositionAllocator",
    "ProjectService",
    "SubtaskService",
    "TagService",
]
