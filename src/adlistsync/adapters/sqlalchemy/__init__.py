"""SQLAlchemy adapter package for the gravity database."""

from __future__ import annotations

from .mappings import (
    DEFAULT_GROUP_ID,
    adlist_by_group_table,
    adlist_table,
    create_all_tables,
    group_table,
    metadata,
)
from .repositories import (
    SqlAlchemyAdlistRepository,
    SqlAlchemyGroupRepository,
    SqlAlchemyMembershipRepository,
)
from .unit_of_work import (
    SqlAlchemyAdlistUnitOfWork,
    StartupError,
    build_engine,
    shutdown,
    startup,
)

__all__ = [
    "DEFAULT_GROUP_ID",
    "SqlAlchemyAdlistRepository",
    "SqlAlchemyAdlistUnitOfWork",
    "SqlAlchemyGroupRepository",
    "SqlAlchemyMembershipRepository",
    "StartupError",
    "adlist_by_group_table",
    "adlist_table",
    "build_engine",
    "create_all_tables",
    "group_table",
    "metadata",
    "shutdown",
    "startup",
]
