"""Database utilities - engine and sessions."""

from src.kanban.core.db.engine import dispose_engine, get_engine
from src.kanban.core.db.session import get_session

__all__ = [
    "dispose_engine",
    "get_engine",
    "get_session",
]
