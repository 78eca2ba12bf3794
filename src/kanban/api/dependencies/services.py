"""Service factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.kanban.api.dependencies.db import DBSession
from src.kanban.api.dependencies.repositories import (
    BoardRepo,
    CardRepo,
    CardTagRepo,
    ColumnRepo,
    MembershipRepo,
    NotificationRepo,
    ProjectRepo,
    SubtaskRepo,
    TagRepo,
)
from src.kanban.core.config import get_settings
from src.kanban.services import (
    AccessGate,
    BoardService,
    CardService,
    ColumnService,
    ConcurrencyGuard,
    LifecycleManager,
    NotificationService,
    PositionAllocator,
    ProjectService,
    SubtaskService,
    TagService,
)


def get_access_gate(membership_repo: MembershipRepo) -> AccessGate:
    """Access gate backed by the membership table."""
    return AccessGate(membership_repo.get_role)


def get_position_allocator() -> PositionAllocator:
    return PositionAllocator(get_settings().position_gap)


def get_lifecycle_manager() -> LifecycleManager:
    return LifecycleManager()


def get_concurrency_guard(session: DBSession, card_repo: CardRepo) -> ConcurrencyGuard:
    return ConcurrencyGuard(session, card_repo, retry_limit=get_settings().reorder_retry_limit)


Gate = Annotated[AccessGate, Depends(get_access_gate)]
Allocator = Annotated[PositionAllocator, Depends(get_position_allocator)]
Lifecycle = Annotated[LifecycleManager, Depends(get_lifecycle_manager)]
Guard = Annotated[ConcurrencyGuard, Depends(get_concurrency_guard)]


def get_notification_service(
    notification_repo: NotificationRepo, session: DBSession
) -> NotificationService:
    return NotificationService(notification_repo, session)


NotificationServiceDep = Annotated[NotificationService, Depends(get_notification_service)]


def get_project_service(
    project_repo: ProjectRepo,
    membership_repo: MembershipRepo,
    gate: Gate,
    session: DBSession,
) -> ProjectService:
    return ProjectService(project_repo, membership_repo, gate, session)


def get_board_service(
    board_repo: BoardRepo,
    column_repo: ColumnRepo,
    card_repo: CardRepo,
    subtask_repo: SubtaskRepo,
    project_repo: ProjectRepo,
    gate: Gate,
    allocator: Allocator,
    lifecycle: Lifecycle,
    guard: Guard,
) -> BoardService:
    return BoardService(
        board_repo,
        column_repo,
        card_repo,
        subtask_repo,
        project_repo,
        gate,
        allocator,
        lifecycle,
        guard,
    )


def get_column_service(
    column_repo: ColumnRepo,
    board_repo: BoardRepo,
    card_repo: CardRepo,
    subtask_repo: SubtaskRepo,
    gate: Gate,
    allocator: Allocator,
    lifecycle: Lifecycle,
    guard: Guard,
) -> ColumnService:
    return ColumnService(
        column_repo, board_repo, card_repo, subtask_repo, gate, allocator, lifecycle, guard
    )


def get_card_service(
    card_repo: CardRepo,
    column_repo: ColumnRepo,
    board_repo: BoardRepo,
    subtask_repo: SubtaskRepo,
    gate: Gate,
    allocator: Allocator,
    lifecycle: Lifecycle,
    guard: Guard,
    notifications: NotificationServiceDep,
) -> CardService:
    return CardService(
        card_repo,
        column_repo,
        board_repo,
        subtask_repo,
        gate,
        allocator,
        lifecycle,
        guard,
        notifications,
    )


def get_subtask_service(
    subtask_repo: SubtaskRepo,
    card_repo: CardRepo,
    gate: Gate,
    allocator: Allocator,
    lifecycle: Lifecycle,
    guard: Guard,
) -> SubtaskService:
    return SubtaskService(subtask_repo, card_repo, gate, allocator, lifecycle, guard)


def get_tag_service(
    tag_repo: TagRepo,
    card_tag_repo: CardTagRepo,
    card_repo: CardRepo,
    project_repo: ProjectRepo,
    gate: Gate,
    session: DBSession,
) -> TagService:
    return TagService(tag_repo, card_tag_repo, card_repo, project_repo, gate, session)


ProjectServiceDep = Annotated[ProjectService, Depends(get_project_service)]
BoardServiceDep = Annotated[BoardService, Depends(get_board_service)]
ColumnServiceDep = Annotated[ColumnService, Depends(get_column_service)]
CardServiceDep = Annotated[CardService, Depends(get_card_service)]
SubtaskServiceDep = Annotated[SubtaskService, Depends(get_subtask_service)]
TagServiceDep = Annotated[TagService, Depends(get_tag_service)]
