from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from adlistsync import app
from adlistsync.adapters.sqlalchemy import build_engine, create_all_tables, shutdown
from adlistsync.app import open_store, sync_adlists
from adlistsync.config import FeedConfig, MissingConfigurationError, StorageConfig
from adlistsync.domain.errors import FetchError, ParseError
from adlistsync.domain.model import ReconcileReport
from tests.helpers.adlists import (
    FakeCandidateSource,
    adlist_rows,
    make_candidate,
    memberships,
    seed_adlists,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from pathlib import Path

    from sqlalchemy.engine import Engine

    from adlistsync.adapters.sqlalchemy import SqlAlchemyAdlistUnitOfWork


class _RecordingFactory:
    def __init__(self, factory: Callable[[], SqlAlchemyAdlistUnitOfWork]) -> None:
        self._factory = factory
        self.calls = 0

    def __call__(self) -> SqlAlchemyAdlistUnitOfWork:
        self.calls += 1
        return self._factory()


@pytest.fixture
def gravity_file(tmp_path: Path) -> Iterator[Path]:
    path = tmp_path / "gravity.db"
    engine = build_engine(f"sqlite+pysqlite:///{path}")
    create_all_tables(engine)
    engine.dispose()
    try:
        yield path
    finally:
        shutdown()


def test_sync_adlists_reconciles_fetched_candidates(
    sqlite_engine: Engine,
    sqlite_unit_of_work: Callable[[], SqlAlchemyAdlistUnitOfWork],
    caplog: pytest.LogCaptureFixture,
) -> None:
    seed_adlists(sqlite_engine, ("http://old", True, "[cross][z] gone"))
    source = FakeCandidateSource([make_candidate("http://a", tick_type="tick")])

    with caplog.at_level(logging.INFO, logger="adlistsync"):
        report = sync_adlists(source=source, unit_of_work_factory=sqlite_unit_of_work)

    assert source.calls == 1
    assert report == ReconcileReport(
        staged=1,
        inserted=1,
        disabled=1,
        membership_edits=1,
        groups_created=3,
    )
    assert adlist_rows(sqlite_engine) == {
        "http://old": (False, "[cross][z] gone"),
        "http://a": (True, "[tick][x] foo"),
    }
    assert memberships(sqlite_engine) == {("http://a", "tick")}
    assert "Fetched 1 adlist(s)" in caplog.text
    assert "Added 1 missing adlist(s)" in caplog.text
    assert "Disabled 1 extraneous adlist(s)" in caplog.text


@pytest.mark.parametrize(
    "error",
    [
        FetchError("Fetching https://example.org/csv.txt failed with HTTP 503"),
        ParseError("Line 3: expected 5 columns, got 4", line=3),
    ],
)
def test_sync_adlists_leaves_store_untouched_when_feed_fails(
    sqlite_engine: Engine,
    sqlite_unit_of_work: Callable[[], SqlAlchemyAdlistUnitOfWork],
    error: Exception,
) -> None:
    seed_adlists(sqlite_engine, ("http://old", True, "[std][x] stale"))
    factory = _RecordingFactory(sqlite_unit_of_work)

    with pytest.raises(type(error)):
        sync_adlists(source=FakeCandidateSource(error=error), unit_of_work_factory=factory)

    assert factory.calls == 0
    assert adlist_rows(sqlite_engine) == {"http://old": (True, "[std][x] stale")}


def test_sync_adlists_dry_run_rolls_back(
    sqlite_engine: Engine,
    sqlite_unit_of_work: Callable[[], SqlAlchemyAdlistUnitOfWork],
    caplog: pytest.LogCaptureFixture,
) -> None:
    source = FakeCandidateSource([make_candidate("http://a")])

    with caplog.at_level(logging.INFO, logger="adlistsync"):
        report = sync_adlists(
            source=source,
            unit_of_work_factory=sqlite_unit_of_work,
            dry_run=True,
        )

    assert report.inserted == 1
    assert adlist_rows(sqlite_engine) == {}
    assert "Dry run: changes rolled back" in caplog.text


def test_sync_adlists_opens_configured_gravity_file(gravity_file: Path) -> None:
    source = FakeCandidateSource([make_candidate("http://a")])

    report = sync_adlists(source=source, storage=StorageConfig(database_path=gravity_file))

    assert report.inserted == 1
    engine = build_engine(f"sqlite+pysqlite:///{gravity_file}")
    try:
        assert adlist_rows(engine) == {"http://a": (True, "[std][x] foo")}
    finally:
        engine.dispose()


def test_sync_adlists_rejects_missing_gravity_file(tmp_path: Path) -> None:
    source = FakeCandidateSource([make_candidate("http://a")])

    with pytest.raises(MissingConfigurationError, match="is invalid"):
        sync_adlists(source=source, storage=StorageConfig(database_path=tmp_path / "nope.db"))

    assert source.calls == 0


def test_sync_adlists_logs_feed_url(
    sqlite_unit_of_work: Callable[[], SqlAlchemyAdlistUnitOfWork],
    caplog: pytest.LogCaptureFixture,
) -> None:
    feed = FeedConfig(url="https://example.org/csv.txt", timeout_seconds=5.0)

    with caplog.at_level(logging.INFO, logger="adlistsync"):
        sync_adlists(
            source=FakeCandidateSource(),
            unit_of_work_factory=sqlite_unit_of_work,
            feed=feed,
        )

    assert "Fetching adlists from https://example.org/csv.txt" in caplog.text


def test_open_store_prefers_explicit_storage_over_env(
    gravity_file: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    calls: list[dict[str, object]] = []

    def fake_startup(**kwargs: object) -> None:
        calls.append(kwargs)

    monkeypatch.setenv("DATABASE_URI", "sqlite+pysqlite:///:memory:")
    monkeypatch.setattr(app, "startup", fake_startup)

    open_store(StorageConfig(database_path=gravity_file))

    assert calls == [
        {"database_uri": f"sqlite+pysqlite:///{gravity_file.resolve()}", "force": True}
    ]


def test_open_store_uses_database_uri_env(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[dict[str, object]] = []

    def fake_startup(**kwargs: object) -> None:
        calls.append(kwargs)

    monkeypatch.setenv("DATABASE_URI", "sqlite+pysqlite:////tmp/other.db")
    monkeypatch.setattr(app, "startup", fake_startup)

    open_store()

    assert calls == [{"database_uri": "sqlite+pysqlite:////tmp/other.db", "force": True}]
