from fastapi import APIRouter

from src.kanban.api.v1 import boards, cards, columns, notifications, projects, subtasks, tags

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(projects.router)
api_router.include_router(boards.router)
api_router.include_router(columns.router)
api_router.include_router(cards.router)
api_router.include_router(subtasks.router)
api_router.include_router(tags.router)
api_router.include_router(notifications.router)
