"""Board endpoints."""

from uuid import UUID

from fastapi import APIRouter, status

from src.kanban.api.dependencies import BoardServiceDep, CurrentActor
from src.kanban.schemas import BoardCreate, BoardRead, BoardUpdate, ReorderRequest

router = APIRouter(tags=["boards"])


@router.post(
    "/projects/{project_id}/boards",
    response_model=BoardRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create board",
    description="Create a board at the end of the project. Requires the member role.",
)
async def create_board(
    project_id: UUID,
    request: BoardCreate,
    service: BoardServiceDep,
    actor_id: CurrentActor,
) -> BoardRead:
    board = await service.create(project_id, actor_id, request)
    return BoardRead.model_validate(board)


@router.get(
    "/projects/{project_id}/boards",
    response_model=list[BoardRead],
    summary="List boards",
    description="Live boards of the project in display order.",
)
async def list_boards(
    project_id: UUID,
    service: BoardServiceDep,
    actor_id: CurrentActor,
) -> list[BoardRead]:
    boards = await service.list_for_project(project_id, actor_id)
    return [BoardRead.model_validate(b) for b in boards]


@router.get(
    "/projects/{project_id}/boards/archived",
    response_model=list[BoardRead],
    summary="List archived boards",
)
async def list_archived_boards(
    project_id: UUID,
    service: BoardServiceDep,
    actor_id: CurrentActor,
) -> list[BoardRead]:
    boards = await service.list_archived(project_id, actor_id)
    return [BoardRead.model_validate(b) for b in boards]


@router.get("/boards/{board_id}", response_model=BoardRead, summary="Get board")
async def get_board(
    board_id: UUID,
    service: BoardServiceDep,
    actor_id: CurrentActor,
) -> BoardRead:
    board = await service.get(board_id, actor_id)
    return BoardRead.model_validate(board)


@router.patch("/boards/{board_id}", response_model=BoardRead, summary="Rename board")
async def update_board(
    board_id: UUID,
    request: BoardUpdate,
    service: BoardServiceDep,
    actor_id: CurrentActor,
) -> BoardRead:
    board = await service.update(board_id, actor_id, request)
    return BoardRead.model_validate(board)


@router.post(
    "/boards/{board_id}/reorder",
    response_model=BoardRead,
    summary="Reorder board",
    description="Place the board right after `before_id` and/or right before `after_id`.",
    responses={
        404: {"description": "Board or anchor not found"},
        409: {"description": "Concurrent reorder, retry"},
        422: {"description": "Invalid anchors"},
    },
)
async def reorder_board(
    board_id: UUID,
    request: ReorderRequest,
    service: BoardServiceDep,
    actor_id: CurrentActor,
) -> BoardRead:
    board = await service.reorder(board_id, actor_id, request.before_id, request.after_id)
    return BoardRead.model_validate(board)


@router.post(
    "/boards/{board_id}/archive",
    response_model=BoardRead,
    summary="Archive board",
    description="Archive the board together with its live columns and cards.",
)
async def archive_board(
    board_id: UUID,
    service: BoardServiceDep,
    actor_id: CurrentActor,
) -> BoardRead:
    board = await service.archive(board_id, actor_id)
    return BoardRead.model_validate(board)


@router.post(
    "/boards/{board_id}/restore",
    response_model=BoardRead,
    summary="Restore board",
    description="Restore the board and whatever its archive took down with it.",
)
async def restore_board(
    board_id: UUID,
    service: BoardServiceDep,
    actor_id: CurrentActor,
) -> BoardRead:
    board = await service.restore(board_id, actor_id)
    return BoardRead.model_validate(board)
