"""Card endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query, status

from src.kanban.api.dependencies import CardServiceDep, CurrentActor
from src.kanban.schemas import CardCreate, CardMoveRequest, CardRead, CardUpdate, ReorderRequest

router = APIRouter(tags=["cards"])


@router.post(
    "/columns/{column_id}/cards",
    response_model=CardRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create card",
)
async def create_card(
    column_id: UUID,
    request: CardCreate,
    service: CardServiceDep,
    actor_id: CurrentActor,
) -> CardRead:
    card = await service.create(column_id, actor_id, request)
    return CardRead.model_validate(card)


@router.get("/columns/{column_id}/cards", response_model=list[CardRead], summary="List cards")
async def list_cards(
    column_id: UUID,
    service: CardServiceDep,
    actor_id: CurrentActor,
) -> list[CardRead]:
    cards = await service.list_for_column(column_id, actor_id)
    return [CardRead.model_validate(c) for c in cards]


@router.get(
    "/boards/{board_id}/cards",
    response_model=list[CardRead],
    summary="List board cards",
    description="Live cards of the board, column by column in display order.",
)
async def list_board_cards(
    board_id: UUID,
    service: CardServiceDep,
    actor_id: CurrentActor,
    limit: Annotated[int, Query(ge=1, le=100, description="Max items to return")] = 50,
    offset: Annotated[int, Query(ge=0, description="Items to skip")] = 0,
) -> list[CardRead]:
    cards = await service.list_for_board(board_id, actor_id, limit, offset)
    return [CardRead.model_validate(c) for c in cards]


@router.get(
    "/boards/{board_id}/cards/archived",
    response_model=list[CardRead],
    summary="List archived cards",
    description="Archived cards of the board, most recently archived first.",
)
async def list_archived_cards(
    board_id: UUID,
    service: CardServiceDep,
    actor_id: CurrentActor,
    limit: Annotated[int, Query(ge=1, le=100, description="Max items to return")] = 50,
    offset: Annotated[int, Query(ge=0, description="Items to skip")] = 0,
) -> list[CardRead]:
    cards = await service.list_archived(board_id, actor_id, limit, offset)
    return [CardRead.model_validate(c) for c in cards]


@router.get("/cards/{card_id}", response_model=CardRead, summary="Get card")
async def get_card(
    card_id: UUID,
    service: CardServiceDep,
    actor_id: CurrentActor,
) -> CardRead:
    card = await service.get(card_id, actor_id)
    return CardRead.model_validate(card)


@router.patch(
    "/cards/{card_id}",
    response_model=CardRead,
    summary="Update card",
    description="Replace card content. `version` must be the version the edit was based on.",
    responses={409: {"description": "Card has been modified since `version`"}},
)
async def update_card(
    card_id: UUID,
    request: CardUpdate,
    service: CardServiceDep,
    actor_id: CurrentActor,
) -> CardRead:
    card = await service.update(card_id, actor_id, request)
    return CardRead.model_validate(card)


@router.post("/cards/{card_id}/reorder", response_model=CardRead, summary="Reorder card")
async def reorder_card(
    card_id: UUID,
    request: ReorderRequest,
    service: CardServiceDep,
    actor_id: CurrentActor,
) -> CardRead:
    card = await service.reorder(card_id, actor_id, request.before_id, request.after_id)
    return CardRead.model_validate(card)


@router.post(
    "/cards/{card_id}/move",
    response_model=CardRead,
    summary="Move card",
    description="Move the card to a position in another column of the same project.",
)
async def move_card(
    card_id: UUID,
    request: CardMoveRequest,
    service: CardServiceDep,
    actor_id: CurrentActor,
) -> CardRead:
    card = await service.move(card_id, actor_id, request.column_id, request.index)
    return CardRead.model_validate(card)


@router.post("/cards/{card_id}/archive", response_model=CardRead, summary="Archive card")
async def archive_card(
    card_id: UUID,
    service: CardServiceDep,
    actor_id: CurrentActor,
) -> CardRead:
    card = await service.archive(card_id, actor_id)
    return CardRead.model_validate(card)


@router.post(
    "/cards/{card_id}/restore",
    response_model=CardRead,
    summary="Restore card",
    responses={422: {"description": "The column or board is archived"}},
)
async def restore_card(
    card_id: UUID,
    service: CardServiceDep,
    actor_id: CurrentActor,
) -> CardRead:
    card = await service.restore(card_id, actor_id)
    return CardRead.model_validate(card)
