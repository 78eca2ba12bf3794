"""Domain errors and the exception handlers that render them with request_id."""

from asgi_correlation_id import correlation_id
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.kanban.core.logging import get_logger

logger = get_logger(__name__)


class KanbanError(Exception):
    """Base class for errors raised by the service layer."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class NotFoundError(KanbanError):
    """Resource or anchor does not exist (or is archived)."""

    status_code = status.HTTP_404_NOT_FOUND


class ForbiddenError(KanbanError):
    """Actor is not a member of the project or lacks the minimum role."""

    status_code = status.HTTP_403_FORBIDDEN

    def __init__(self, detail: str = "Forbidden"):
        super().__init__(detail)


class ValidationFailedError(KanbanError):
    """Input is well-formed JSON but violates a domain rule."""

    status_code = 422


class ConflictError(KanbanError):
    """Duplicate unique attribute or stale version."""

    status_code = status.HTTP_409_CONFLICT


class TransactionConflictError(ConflictError):
    """Serializable transaction kept aborting after the allowed retries."""

    def __init__(self, detail: str = "Concurrent modification, please retry"):
        super().__init__(detail)


def setup_exception_handlers(app: FastAPI) -> None:
    """Configure exception handlers that include request_id in responses."""

    @app.exception_handler(KanbanError)
    async def kanban_exception_handler(request: Request, exc: KanbanError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "detail": exc.detail,
                "request_id": correlation_id.get(),
            },
        )

    @app.exception_handler(StarletteHTTPException)
    async def starlette_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "detail": exc.detail,
                "request_id": correlation_id.get(),
            },
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "detail": exc.detail,
                "request_id": correlation_id.get(),
            },
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        request_id = correlation_id.get()
        logger.exception(
            "Unhandled exception",
            exc_info=exc,
            request_id=request_id,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=500,
            content={
                "detail": "Internal server error",
                "request_id": request_id,
            },
        )
