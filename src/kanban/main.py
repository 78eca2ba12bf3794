from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from sqlalchemy import text

from src.kanban.api.middlewares import setup_middlewares
from src.kanban.api.v1.router import api_router
from src.kanban.core.config import get_settings
from src.kanban.core.db import dispose_engine, get_session
from src.kanban.core.exceptions import setup_exception_handlers
from src.kanban.core.logging import get_logger, setup_logging

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan - startup and shutdown."""
    settings = get_settings()
    setup_logging(settings.debug)
    logger.info("Starting application", app_name=settings.app_name, env=settings.app_env)

    yield

    logger.info("Closing connections...")
    await dispose_engine()
    logger.info("Shutdown complete")


OPENAPI_TAGS = [
    {"name": "projects", "description": "Projects and the caller's memberships"},
    {"name": "boards", "description": "Ordered boards of a project"},
    {"name": "columns", "description": "Ordered columns of a board"},
    {"name": "cards", "description": "Versioned cards, reordering and moves"},
    {"name": "subtasks", "description": "Ordered checklists of a card"},
    {"name": "tags", "description": "Project tags and card labels"},
    {"name": "notifications", "description": "The caller's notification inbox"},
]


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Kanban boards with ordered columns and cards",
        version="0.1.0",
        openapi_tags=OPENAPI_TAGS,
        lifespan=lifespan,
        openapi_url="/openapi.json" if settings.enable_openapi else None,
        docs_url="/docs" if settings.enable_openapi else None,
        redoc_url="/redoc" if settings.enable_openapi else None,
    )

    setup_exception_handlers(app)
    setup_middlewares(app, settings)
    app.include_router(api_router)

    @app.get("/health")
    async def health() -> JSONResponse:
        """Health check including database connectivity."""
        health_status: dict[str, Any] = {"status": "healthy", "database": "unknown"}

        try:
            async with get_session() as session:
                await session.execute(text("SELECT 1"))
            health_status["database"] = "healthy"
        except Exception as e:
            logger.warning("Health check failed", error=str(e))
            health_status["database"] = "unhealthy"
            health_status["status"] = "unhealthy"

        status_code = 200 if health_status["status"] == "healthy" else 503
        return JSONResponse(content=health_status, status_code=status_code)

    return app


app = create_app()
