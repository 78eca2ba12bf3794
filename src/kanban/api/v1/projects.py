"""Project endpoints."""

from uuid import UUID

from fastapi import APIRouter, status

from src.kanban.api.dependencies import CurrentActor, ProjectServiceDep
from src.kanban.schemas import ProjectCreate, ProjectMemberRead, ProjectRead, ProjectUpdate

router = APIRouter(prefix="/projects", tags=["projects"])


@router.get(
    "",
    response_model=list[ProjectRead],
    summary="List projects",
    description="List every project the caller is a member of.",
)
async def list_projects(
    service: ProjectServiceDep,
    actor_id: CurrentActor,
) -> list[ProjectRead]:
    projects = await service.list_for_user(actor_id)
    return [ProjectRead.model_validate(p) for p in projects]


@router.post(
    "",
    response_model=ProjectRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create project",
    description="Create a project. The caller becomes its owner.",
    responses={201: {"description": "Project created"}},
)
async def create_project(
    request: ProjectCreate,
    service: ProjectServiceDep,
    actor_id: CurrentActor,
) -> ProjectRead:
    project = await service.create(actor_id, request)
    return ProjectRead.model_validate(project)


@router.get(
    "/{project_id}",
    response_model=ProjectRead,
    summary="Get project",
    responses={
        200: {"description": "Project details"},
        403: {"description": "Not a member of the project"},
        404: {"description": "Project not found"},
    },
)
async def get_project(
    project_id: UUID,
    service: ProjectServiceDep,
    actor_id: CurrentActor,
) -> ProjectRead:
    project = await service.get(project_id, actor_id)
    return ProjectRead.model_validate(project)


@router.patch(
    "/{project_id}",
    response_model=ProjectRead,
    summary="Update project",
    description="Update name and/or description. Requires the owner role.",
    responses={
        200: {"description": "Project updated"},
        403: {"description": "Owner role required"},
        404: {"description": "Project not found"},
    },
)
async def update_project(
    project_id: UUID,
    request: ProjectUpdate,
    service: ProjectServiceDep,
    actor_id: CurrentActor,
) -> ProjectRead:
    project = await service.update(project_id, actor_id, request)
    return ProjectRead.model_validate(project)


@router.get(
    "/{project_id}/members",
    response_model=list[ProjectMemberRead],
    summary="List project members",
    description="Most privileged role first, by joining time within a role.",
    responses={
        403: {"description": "Not a member of the project"},
        404: {"description": "Project not found"},
    },
)
async def list_members(
    project_id: UUID,
    service: ProjectServiceDep,
    actor_id: CurrentActor,
) -> list[ProjectMemberRead]:
    members = await service.list_members(project_id, actor_id)
    return [ProjectMemberRead.model_validate(m) for m in members]
