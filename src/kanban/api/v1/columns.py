"""Column endpoints."""

from uuid import UUID

from fastapi import APIRouter, status

from src.kanban.api.dependencies import ColumnServiceDep, CurrentActor
from src.kanban.schemas import ColumnCreate, ColumnRead, ColumnUpdate, ReorderRequest

router = APIRouter(tags=["columns"])


@router.post(
    "/boards/{board_id}/columns",
    response_model=ColumnRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create column",
)
async def create_column(
    board_id: UUID,
    request: ColumnCreate,
    service: ColumnServiceDep,
    actor_id: CurrentActor,
) -> ColumnRead:
    column = await service.create(board_id, actor_id, request)
    return ColumnRead.model_validate(column)


@router.get("/boards/{board_id}/columns", response_model=list[ColumnRead], summary="List columns")
async def list_columns(
    board_id: UUID,
    service: ColumnServiceDep,
    actor_id: CurrentActor,
) -> list[ColumnRead]:
    columns = await service.list_for_board(board_id, actor_id)
    return [ColumnRead.model_validate(c) for c in columns]


@router.get("/columns/{column_id}", response_model=ColumnRead, summary="Get column")
async def get_column(
    column_id: UUID,
    service: ColumnServiceDep,
    actor_id: CurrentActor,
) -> ColumnRead:
    column = await service.get(column_id, actor_id)
    return ColumnRead.model_validate(column)


@router.patch("/columns/{column_id}", response_model=ColumnRead, summary="Rename column")
async def update_column(
    column_id: UUID,
    request: ColumnUpdate,
    service: ColumnServiceDep,
    actor_id: CurrentActor,
) -> ColumnRead:
    column = await service.update(column_id, actor_id, request)
    return ColumnRead.model_validate(column)


@router.post("/columns/{column_id}/reorder", response_model=ColumnRead, summary="Reorder column")
async def reorder_column(
    column_id: UUID,
    request: ReorderRequest,
    service: ColumnServiceDep,
    actor_id: CurrentActor,
) -> ColumnRead:
    column = await service.reorder(column_id, actor_id, request.before_id, request.after_id)
    return ColumnRead.model_validate(column)


@router.post(
    "/columns/{column_id}/archive",
    response_model=ColumnRead,
    summary="Archive column",
    description="Archive the column together with its live cards.",
)
async def archive_column(
    column_id: UUID,
    service: ColumnServiceDep,
    actor_id: CurrentActor,
) -> ColumnRead:
    column = await service.archive(column_id, actor_id)
    return ColumnRead.model_validate(column)


@router.post(
    "/columns/{column_id}/restore",
    response_model=ColumnRead,
    summary="Restore column",
    responses={422: {"description": "The board is archived"}},
)
async def restore_column(
    column_id: UUID,
    service: ColumnServiceDep,
    actor_id: CurrentActor,
) -> ColumnRead:
    column = await service.restore(column_id, actor_id)
    return ColumnRead.model_validate(column)
