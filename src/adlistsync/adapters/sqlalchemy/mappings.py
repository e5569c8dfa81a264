"""SQLAlchemy table metadata for the parts of the gravity database we touch."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Final

from sqlalchemy import Boolean, Column, ForeignKey, Integer, MetaData, Table, Text, text

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)

DEFAULT_GROUP_ID: Final[int] = 0
"""Pi-hole's built-in "Default" group; never a target of group remapping."""

metadata = MetaData(
    naming_convention={
        "ix": "ix_%(column_0_label)s",
        "uq": "uq_%(table_name)s_%(column_0_label)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
        "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
        "pk": "pk_%(table_name)s",
    }
)

adlist_table = Table(
    "adlist",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("address", Text, nullable=False, unique=True),
    Column("enabled", Boolean, nullable=False, server_default=text("1")),
    Column("comment", Text, nullable=True),
    sqlite_autoincrement=True,
)

group_table = Table(
    "group",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("enabled", Boolean, nullable=False, server_default=text("1")),
    Column("name", Text, nullable=False, unique=True),
    Column("description", Text, nullable=True),
)

adlist_by_group_table = Table(
    "adlist_by_group",
    metadata,
    Column("adlist_id", Integer, ForeignKey("adlist.id"), primary_key=True),
    Column("group_id", Integer, ForeignKey("group.id"), primary_key=True),
)


def create_all_tables(engine: Engine) -> None:
    """Create missing tables; existing gravity tables are left untouched."""

    log.debug("Ensuring gravity tables exist")
    metadata.create_all(engine, checkfirst=True)
