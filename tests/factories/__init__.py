"""Test factories for generating test data.

Re-exports all factories for convenient imports:
    from tests.factories import BoardFactory, CardFactory, ...
"""

from tests.factories.base import BaseFactory, generate_uuid7, utc_now
from tests.factories.board import (
    BoardFactory,
    CardFactory,
    ColumnFactory,
    SubtaskFactory,
)
from tests.factories.project import ProjectFactory, ProjectMemberFactory
from tests.factories.tag import CardTagFactory, TagFactory

__all__ = [
    # Base
    "BaseFactory",
    "generate_uuid7",
    "utc_now",
    # Projects
    "ProjectFactory",
    "ProjectMemberFactory",
    # Board hierarchy
    "BoardFactory",
    "CardFactory",
    "ColumnFactory",
    "SubtaskFactory",
    # Tags
    "CardTagFactory",
    "TagFactory",
]
