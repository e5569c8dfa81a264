"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING, cast

from sqlalchemy import delete, select, true, update

from adlistsync.adapters.sqlalchemy.errors import store_errors
from adlistsync.adapters.sqlalchemy.mappings import (
    DEFAULT_GROUP_ID,
    adlist_by_group_table,
    adlist_table,
    group_table,
)
from adlistsync.domain.model import AdlistRecord, Group
from adlistsync.domain.tagging import MANAGED_MARKER

if TYPE_CHECKING:
    from collections.abc import Iterable

    from sqlalchemy import ColumnElement, Select
    from sqlalchemy.orm import Session

    from adlistsync.domain.model import GroupSpec, MembershipPair


def _is_managed() -> ColumnElement[bool]:
    return adlist_table.c.comment.startswith(MANAGED_MARKER, autoescape=True)


def _managed_ids() -> Select[tuple[int]]:
    return select(adlist_table.c.id).where(_is_managed())


class SqlAlchemyAdlistRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def managed(self, *, enabled_only: bool = False) -> list[AdlistRecord]:
        stmt = (
            select(
                adlist_table.c.id,
                adlist_table.c.address,
                adlist_table.c.enabled,
                adlist_table.c.comment,
            )
            .where(_is_managed())
            .order_by(adlist_table.c.id)
        )
        if enabled_only:
            stmt = stmt.where(adlist_table.c.enabled == true())
        with store_errors("Reading managed adlists"):
            rows = self.session.execute(stmt).all()
        return [
            AdlistRecord(
                id=row.id,
                address=row.address,
                enabled=bool(row.enabled),
                comment=row.comment,
            )
            for row in rows
        ]

    def insert_missing(self, records: Iterable[AdlistRecord]) -> int:
        stmt = adlist_table.insert().prefix_with("OR IGNORE")
        inserted = 0
        with store_errors("Inserting adlists"):
            for record in records:
                values = {
                    "address": record.address,
                    "enabled": record.enabled,
                    "comment": record.comment,
                }
                result = self.session.execute(stmt, values)
                inserted += result.rowcount
        return inserted

    def disable(self, addresses: Iterable[str]) -> int:
        targets = sorted(set(addresses))
        if not targets:
            return 0
        stmt = (
            update(adlist_table)
            .where(adlist_table.c.address.in_(targets))
            .where(adlist_table.c.enabled == true())
            .where(_is_managed())
            .values(enabled=False)
        )
        with store_errors("Disabling adlists"):
            return self.session.execute(stmt).rowcount


class SqlAlchemyGroupRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def ensure(self, catalog: Iterable[GroupSpec]) -> int:
        stmt = group_table.insert().prefix_with("OR IGNORE")
        created = 0
        with store_errors("Ensuring groups"):
            for spec in catalog:
                result = self.session.execute(
                    stmt,
                    {"enabled": True, "name": spec.name, "description": spec.description},
                )
                created += result.rowcount
        return created

    def by_names(self, names: Iterable[str]) -> list[Group]:
        wanted = sorted(set(names))
        if not wanted:
            return []
        stmt = (
            select(
                group_table.c.id,
                group_table.c.name,
                group_table.c.description,
                group_table.c.enabled,
            )
            .where(group_table.c.name.in_(wanted))
            .where(group_table.c.id != DEFAULT_GROUP_ID)
            .order_by(group_table.c.id)
        )
        with store_errors("Reading groups"):
            rows = self.session.execute(stmt).all()
        return [
            Group(
                id=row.id,
                name=row.name,
                description=row.description,
                enabled=bool(row.enabled),
            )
            for row in rows
        ]


class SqlAlchemyMembershipRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def managed_pairs(self) -> set[MembershipPair]:
        stmt = select(adlist_by_group_table.c.adlist_id, adlist_by_group_table.c.group_id).where(
            adlist_by_group_table.c.adlist_id.in_(_managed_ids())
        )
        with store_errors("Reading memberships"):
            rows = self.session.execute(stmt).all()
        return {cast("MembershipPair", (row.adlist_id, row.group_id)) for row in rows}

    def clear_managed(self) -> int:
        stmt = delete(adlist_by_group_table).where(
            adlist_by_group_table.c.adlist_id.in_(_managed_ids())
        )
        with store_errors("Clearing memberships"):
            return self.session.execute(stmt).rowcount

    def add(self, pairs: Iterable[MembershipPair]) -> int:
        stmt = adlist_by_group_table.insert().prefix_with("OR IGNORE")
        added = 0
        with store_errors("Inserting memberships"):
            for adlist_id, group_id in sorted(pairs):
                result = self.session.execute(stmt, {"adlist_id": adlist_id, "group_id": group_id})
                added += result.rowcount
        return added


if TYPE_CHECKING:
    from adlistsync.domain.ports.persistence import (
        AdlistRepository,
        GroupRepository,
        MembershipRepository,
    )

    _session_stub = cast("Session", object())
    _adlist_repo: AdlistRepository = SqlAlchemyAdlistRepository(_session_stub)
    _group_repo: GroupRepository = SqlAlchemyGroupRepository(_session_stub)
    _membership_repo: MembershipRepository = SqlAlchemyMembershipRepository(_session_stub)
