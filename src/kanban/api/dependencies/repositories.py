"""Repository factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.kanban.api.dependencies.db import DBSession
from src.kanban.repositories import (
    BoardRepository,
    CardRepository,
    CardTagRepository,
    ColumnRepository,
    MembershipRepository,
    NotificationRepository,
    ProjectRepository,
    SubtaskRepository,
    TagRepository,
)


def get_project_repository(session: DBSession) -> ProjectRepository:
    return ProjectRepository(session)


def get_membership_repository(session: DBSession) -> MembershipRepository:
    return MembershipRepository(session)


def get_board_repository(session: DBSession) -> BoardRepository:
    return BoardRepository(session)


def get_column_repository(session: DBSession) -> ColumnRepository:
    return ColumnRepository(session)


def get_card_repository(session: DBSession) -> CardRepository:
    return CardRepository(session)


def get_subtask_repository(session: DBSession) -> SubtaskRepository:
    return SubtaskRepository(session)


def get_tag_repository(session: DBSession) -> TagRepository:
    return TagRepository(session)


def get_card_tag_repository(session: DBSession) -> CardTagRepository:
    return CardTagRepository(session)


def get_notification_repository(session: DBSession) -> NotificationRepository:
    return NotificationRepository(session)


ProjectRepo = Annotated[ProjectRepository, Depends(get_project_repository)]
MembershipRepo = Annotated[MembershipRepository, Depends(get_membership_repository)]
BoardRepo = Annotated[BoardRepository, Depends(get_board_repository)]
ColumnRepo = Annotated[ColumnRepository, Depends(get_column_repository)]
CardRepo = Annotated[CardRepository, Depends(get_card_repository)]
SubtaskRepo = Annotated[SubtaskRepository, Depends(get_subtask_repository)]
TagRepo = Annotated[TagRepository, Depends(get_tag_repository)]
CardTagRepo = Annotated[CardTagRepository, Depends(get_card_tag_repository)]
NotificationRepo = Annotated[NotificationRepository, Depends(get_notification_repository)]
