"""Subtask endpoints: the ordered checklist of a card."""

from uuid import UUID

from fastapi import APIRouter, status

from src.kanban.api.dependencies import CurrentActor, SubtaskServiceDep
from src.kanban.schemas import (
    ReorderRequest,
    SubtaskCounts,
    SubtaskCreate,
    SubtaskRead,
    SubtaskUpdate,
)

router = APIRouter(tags=["subtasks"])


@router.post(
    "/cards/{card_id}/subtasks",
    response_model=SubtaskRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create subtask",
)
async def create_subtask(
    card_id: UUID,
    request: SubtaskCreate,
    service: SubtaskServiceDep,
    actor_id: CurrentActor,
) -> SubtaskRead:
    subtask = await service.create(card_id, actor_id, request)
    return SubtaskRead.model_validate(subtask)


@router.get(
    "/cards/{card_id}/subtasks",
    response_model=list[SubtaskRead],
    summary="List subtasks",
)
async def list_subtasks(
    card_id: UUID,
    service: SubtaskServiceDep,
    actor_id: CurrentActor,
) -> list[SubtaskRead]:
    subtasks = await service.list_for_card(card_id, actor_id)
    return [SubtaskRead.model_validate(s) for s in subtasks]


@router.get(
    "/cards/{card_id}/subtasks/counts",
    response_model=SubtaskCounts,
    summary="Count subtasks",
    description="Completed and total counts over the card's live subtasks.",
)
async def count_subtasks(
    card_id: UUID,
    service: SubtaskServiceDep,
    actor_id: CurrentActor,
) -> SubtaskCounts:
    completed, total = await service.counts(card_id, actor_id)
    return SubtaskCounts(completed=completed, total=total)


@router.patch("/subtasks/{subtask_id}", response_model=SubtaskRead, summary="Update subtask")
async def update_subtask(
    subtask_id: UUID,
    request: SubtaskUpdate,
    service: SubtaskServiceDep,
    actor_id: CurrentActor,
) -> SubtaskRead:
    subtask = await service.update(subtask_id, actor_id, request)
    return SubtaskRead.model_validate(subtask)


@router.post(
    "/subtasks/{subtask_id}/reorder", response_model=SubtaskRead, summary="Reorder subtask"
)
async def reorder_subtask(
    subtask_id: UUID,
    request: ReorderRequest,
    service: SubtaskServiceDep,
    actor_id: CurrentActor,
) -> SubtaskRead:
    subtask = await service.reorder(subtask_id, actor_id, request.before_id, request.after_id)
    return SubtaskRead.model_validate(subtask)


@router.post(
    "/subtasks/{subtask_id}/archive", response_model=SubtaskRead, summary="Archive subtask"
)
async def archive_subtask(
    subtask_id: UUID,
    service: SubtaskServiceDep,
    actor_id: CurrentActor,
) -> SubtaskRead:
    subtask = await service.archive(subtask_id, actor_id)
    return SubtaskRead.model_validate(subtask)


@router.post(
    "/subtasks/{subtask_id}/restore",
    response_model=SubtaskRead,
    summary="Restore subtask",
    responses={422: {"description": "The card is archived"}},
)
async def restore_subtask(
    subtask_id: UUID,
    service: SubtaskServiceDep,
    actor_id: CurrentActor,
) -> SubtaskRead:
    subtask = await service.restore(subtask_id, actor_id)
    return SubtaskRead.model_validate(subtask)
