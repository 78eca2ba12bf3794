"""Tag endpoints, including tag assignment on cards."""

from uuid import UUID

from fastapi import APIRouter, status

from src.kanban.api.dependencies import CurrentActor, TagServiceDep
from src.kanban.schemas import TagCreate, TagRead, TagUpdate

router = APIRouter(tags=["tags"])


@router.post(
    "/projects/{project_id}/tags",
    response_model=TagRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create tag",
    description="Requires the moderator role. Names are unique per project, ignoring case.",
    responses={409: {"description": "Tag name already exists"}},
)
async def create_tag(
    project_id: UUID,
    request: TagCreate,
    service: TagServiceDep,
    actor_id: CurrentActor,
) -> TagRead:
    tag = await service.create(project_id, actor_id, request)
    return TagRead.model_validate(tag)


@router.get("/projects/{project_id}/tags", response_model=list[TagRead], summary="List tags")
async def list_tags(
    project_id: UUID,
    service: TagServiceDep,
    actor_id: CurrentActor,
) -> list[TagRead]:
    tags = await service.list_for_project(project_id, actor_id)
    return [TagRead.model_validate(t) for t in tags]


@router.get("/tags/{tag_id}", response_model=TagRead, summary="Get tag")
async def get_tag(
    tag_id: UUID,
    service: TagServiceDep,
    actor_id: CurrentActor,
) -> TagRead:
    tag = await service.get(tag_id, actor_id)
    return TagRead.model_validate(tag)


@router.patch("/tags/{tag_id}", response_model=TagRead, summary="Update tag")
async def update_tag(
    tag_id: UUID,
    request: TagUpdate,
    service: TagServiceDep,
    actor_id: CurrentActor,
) -> TagRead:
    tag = await service.update(tag_id, actor_id, request)
    return TagRead.model_validate(tag)


@router.delete(
    "/tags/{tag_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete tag",
    description="Delete the tag and remove it from every card.",
)
async def delete_tag(
    tag_id: UUID,
    service: TagServiceDep,
    actor_id: CurrentActor,
) -> None:
    await service.delete(tag_id, actor_id)


@router.get("/cards/{card_id}/tags", response_model=list[TagRead], summary="List card tags")
async def list_card_tags(
    card_id: UUID,
    service: TagServiceDep,
    actor_id: CurrentActor,
) -> list[TagRead]:
    tags = await service.list_for_card(card_id, actor_id)
    return [TagRead.model_validate(t) for t in tags]


@router.put(
    "/cards/{card_id}/tags/{tag_id}",
    response_model=TagRead,
    summary="Attach tag to card",
    responses={422: {"description": "Tag belongs to another project"}},
)
async def attach_tag(
    card_id: UUID,
    tag_id: UUID,
    service: TagServiceDep,
    actor_id: CurrentActor,
) -> TagRead:
    tag = await service.attach(card_id, tag_id, actor_id)
    return TagRead.model_validate(tag)


@router.delete(
    "/cards/{card_id}/tags/{tag_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Detach tag from card",
)
async def detach_tag(
    card_id: UUID,
    tag_id: UUID,
    service: TagServiceDep,
    actor_id: CurrentActor,
) -> None:
    await service.detach(card_id, tag_id, actor_id)
