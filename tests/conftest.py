from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from sqlalchemy.engine import Engine  # noqa: TC002

from adlistsync.adapters.sqlalchemy import build_engine, create_all_tables
from adlistsync.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyAdlistUnitOfWork,
    shutdown,
    startup,
)

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    engine = build_engine("sqlite+pysqlite:///:memory:")
    create_all_tables(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sqlite_unit_of_work(
    sqlite_engine: Engine,
) -> Iterator[Callable[[], SqlAlchemyAdlistUnitOfWork]]:
    startup(engine=sqlite_engine, force=True, create_schema=False)

    def factory() -> SqlAlchemyAdlistUnitOfWork:
        return SqlAlchemyAdlistUnitOfWork()

    try:
        yield factory
    finally:
        shutdown()
