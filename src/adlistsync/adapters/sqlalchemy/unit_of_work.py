"""SQLAlchemy-backed unit of work for reconcile runs.

Every reconcile runs inside one ``BEGIN IMMEDIATE`` transaction on the gravity
database: the write lock is taken when the session first touches the store, and
either the whole run commits or nothing does.
"""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Any, Literal

from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker

from adlistsync.adapters.sqlalchemy.errors import store_errors
from adlistsync.adapters.sqlalchemy.mappings import create_all_tables
from adlistsync.adapters.sqlalchemy.repositories import (
    SqlAlchemyAdlistRepository,
    SqlAlchemyGroupRepository,
    SqlAlchemyMembershipRepository,
)
from adlistsync.config.storage import get_database_config
from adlistsync.domain.ports.unit_of_work import AdlistRepositories

if TYPE_CHECKING:
    from types import TracebackType

    from sqlalchemy.engine import Connection, Engine

log = getLogger(__name__)


class StartupError(RuntimeError):
    """Raised when the store is used before ``startup()`` or outside a ``with`` block."""


@dataclass(slots=True)
class _StoreState:
    engine: Engine | None = None
    session_factory: sessionmaker[Session] | None = None


_STATE = _StoreState()


def build_engine(database_uri: str) -> Engine:
    """Create an engine whose transactions take the SQLite write lock up front."""

    engine = create_engine(database_uri, future=True)
    if engine.dialect.name == "sqlite":
        # pysqlite's implicit BEGIN is deferred; manage transactions ourselves
        @event.listens_for(engine, "connect")
        def _disable_implicit_begin(dbapi_connection: Any, _record: object) -> None:  # noqa: ANN401
            dbapi_connection.isolation_level = None

        @event.listens_for(engine, "begin")
        def _begin_immediate(connection: Connection) -> None:
            connection.exec_driver_sql("BEGIN IMMEDIATE")

    return engine


def startup(
    *,
    engine: Engine | None = None,
    database_uri: str | None = None,
    force: bool = False,
    create_schema: bool = True,
) -> None:
    """Bind the adapter to ``engine`` (or a fresh one for ``database_uri``).

    Missing gravity tables are created unless ``create_schema`` is false; an
    existing schema is left alone.
    """

    if _STATE.engine is not None and not force:
        raise StartupError("Store already initialised. Pass force=True to reconfigure.")

    resolved_engine = engine or build_engine(database_uri or get_database_config().uri)
    if create_schema:
        with store_errors("Creating gravity tables"):
            create_all_tables(resolved_engine)

    if _STATE.engine is not None and _STATE.engine is not resolved_engine:
        _STATE.engine.dispose()
    _STATE.engine = resolved_engine
    _STATE.session_factory = sessionmaker(bind=resolved_engine, expire_on_commit=False)
    log.debug("Store bound to %s", resolved_engine.url)


def configured_engine() -> Engine | None:
    return _STATE.engine


def is_started() -> bool:
    return _STATE.engine is not None


def shutdown() -> None:
    """Dispose the bound engine and forget it (primarily for tests)."""

    if _STATE.engine is not None:
        _STATE.engine.dispose()
    _STATE.engine = None
    _STATE.session_factory = None


class SqlAlchemyAdlistUnitOfWork:
    """One transaction spanning adlists, groups and memberships.

    Leaving the ``with`` block without ``commit()`` discards every change; an
    exception inside the block rolls back explicitly before it propagates.
    """

    def __init__(self) -> None:
        if _STATE.session_factory is None:
            raise StartupError(
                "Store not initialised. Call adlistsync.adapters.sqlalchemy.startup() "
                "before requesting a unit of work."
            )
        self._session_factory = _STATE.session_factory
        self._session: Session | None = None
        self._repositories: AdlistRepositories | None = None

    def _build_repositories(self, session: Session) -> AdlistRepositories:
        return AdlistRepositories(
            adlists=SqlAlchemyAdlistRepository(session),
            groups=SqlAlchemyGroupRepository(session),
            memberships=SqlAlchemyMembershipRepository(session),
        )

    def __enter__(self) -> SqlAlchemyAdlistUnitOfWork:
        if self._session is not None:
            raise StartupError("Unit of work already entered")
        self._session = self._session_factory()
        self._repositories = self._build_repositories(self._session)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        session = self.session
        try:
            if exc_type is not None:
                self.rollback()
        finally:
            session.close()
            self._session = None
            self._repositories = None
        return False

    @property
    def session(self) -> Session:
        if self._session is None:
            raise StartupError("Unit of work used outside its with block")
        return self._session

    @property
    def repositories(self) -> AdlistRepositories:
        if self._repositories is None:
            raise StartupError("Unit of work used outside its with block")
        return self._repositories

    def commit(self) -> None:
        with store_errors("Committing transaction"):
            self.session.commit()

    def rollback(self) -> None:
        with store_errors("Rolling back transaction"):
            self.session.rollback()


if TYPE_CHECKING:
    from adlistsync.domain.ports.unit_of_work import AdlistUnitOfWork

    _uow_check: AdlistUnitOfWork = SqlAlchemyAdlistUnitOfWork()
