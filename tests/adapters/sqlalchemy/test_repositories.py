from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy.orm import sessionmaker

from adlistsync.adapters.sqlalchemy import (
    SqlAlchemyAdlistRepository,
    SqlAlchemyGroupRepository,
    SqlAlchemyMembershipRepository,
)
from adlistsync.domain.model import AdlistRecord, GroupSpec
from tests.helpers.adlists import (
    adlist_rows,
    group_ids,
    memberships,
    seed_adlists,
    seed_groups,
    seed_memberships,
)

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine
    from sqlalchemy.orm import Session


def _session(engine: Engine) -> Session:
    return sessionmaker(bind=engine)()


def test_managed_filters_on_comment_marker(sqlite_engine: Engine) -> None:
    ids = seed_adlists(
        sqlite_engine,
        ("http://a", True, "[std][x] foo"),
        ("http://b", False, "[tick][y] bar"),
        ("http://user", True, "mine"),
        ("http://none", True, None),
    )
    session = _session(sqlite_engine)
    try:
        repository = SqlAlchemyAdlistRepository(session)
        managed = repository.managed()
        enabled = repository.managed(enabled_only=True)
    finally:
        session.close()

    assert managed == [
        AdlistRecord(address="http://a", enabled=True, comment="[std][x] foo", id=ids["http://a"]),
        AdlistRecord(
            address="http://b", enabled=False, comment="[tick][y] bar", id=ids["http://b"]
        ),
    ]
    assert [record.address for record in enabled] == ["http://a"]


def test_managed_requires_marker_at_start_of_comment(sqlite_engine: Engine) -> None:
    seed_adlists(
        sqlite_engine,
        ("http://a", True, "mine [std]"),
        ("http://b", True, " [std][x] foo"),
    )
    session = _session(sqlite_engine)
    try:
        assert SqlAlchemyAdlistRepository(session).managed() == []
    finally:
        session.close()


def test_insert_missing_ignores_existing_addresses(sqlite_engine: Engine) -> None:
    seed_adlists(sqlite_engine, ("http://user", True, "mine"))
    session = _session(sqlite_engine)
    try:
        inserted = SqlAlchemyAdlistRepository(session).insert_missing(
            [
                AdlistRecord(address="http://user", enabled=True, comment="[std][x] foo"),
                AdlistRecord(address="http://new", enabled=True, comment="[tick][y] bar"),
            ]
        )
        session.commit()
    finally:
        session.close()

    assert inserted == 1
    assert adlist_rows(sqlite_engine) == {
        "http://user": (True, "mine"),
        "http://new": (True, "[tick][y] bar"),
    }


def test_disable_only_touches_enabled_managed_rows(sqlite_engine: Engine) -> None:
    seed_adlists(
        sqlite_engine,
        ("http://a", True, "[std][x] foo"),
        ("http://off", False, "[std][x] foo"),
        ("http://user", True, "mine"),
    )
    session = _session(sqlite_engine)
    try:
        disabled = SqlAlchemyAdlistRepository(session).disable(
            ["http://a", "http://off", "http://user", "http://missing"]
        )
        session.commit()
    finally:
        session.close()

    assert disabled == 1
    assert adlist_rows(sqlite_engine) == {
        "http://a": (False, "[std][x] foo"),
        "http://off": (False, "[std][x] foo"),
        "http://user": (True, "mine"),
    }


def test_ensure_groups_is_keyed_by_name(sqlite_engine: Engine) -> None:
    seed_groups(sqlite_engine, "std")
    catalog = (GroupSpec("tick", "Safe"), GroupSpec("std", "Standard"))
    session = _session(sqlite_engine)
    try:
        repository = SqlAlchemyGroupRepository(session)
        created = repository.ensure(catalog)
        created_again = repository.ensure(catalog)
        session.commit()
    finally:
        session.close()

    assert created == 1
    assert created_again == 0
    assert set(group_ids(sqlite_engine)) == {"Default", "std", "tick"}


def test_by_names_excludes_default_group(sqlite_engine: Engine) -> None:
    ids = seed_groups(sqlite_engine, "std")
    session = _session(sqlite_engine)
    try:
        groups = SqlAlchemyGroupRepository(session).by_names(["Default", "std", "unknown"])
    finally:
        session.close()

    assert [(group.id, group.name) for group in groups] == [(ids["std"], "std")]


def test_membership_repository_scopes_to_managed_records(sqlite_engine: Engine) -> None:
    lists = seed_adlists(
        sqlite_engine,
        ("http://a", True, "[std][x] foo"),
        ("http://user", True, "mine"),
    )
    groups = seed_groups(sqlite_engine, "std", "tick")
    seed_memberships(sqlite_engine, ("http://a", "std"), ("http://user", "std"))
    session = _session(sqlite_engine)
    try:
        repository = SqlAlchemyMembershipRepository(session)
        before = repository.managed_pairs()
        cleared = repository.clear_managed()
        added = repository.add({(lists["http://a"], groups["tick"])})
        duplicate = repository.add({(lists["http://a"], groups["tick"])})
        session.commit()
    finally:
        session.close()

    assert before == {(lists["http://a"], groups["std"])}
    assert cleared == 1
    assert added == 1
    assert duplicate == 0
    assert memberships(sqlite_engine) == {("http://a", "tick"), ("http://user", "std")}
