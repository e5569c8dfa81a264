"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING

from adlistsync.adapters.firebog import FirebogFetcher
from adlistsync.adapters.sqlalchemy.unit_of_work import SqlAlchemyAdlistUnitOfWork, startup
from adlistsync.config import DEFAULT_GROUP_CATALOG, get_database_config, get_feed_config
from adlistsync.domain.ports.unit_of_work import AdlistUnitOfWork
from adlistsync.domain.reconciliation import reconcile

if TYPE_CHECKING:
    from collections.abc import Sequence

    from adlistsync.config import FeedConfig, StorageConfig
    from adlistsync.domain.model import GroupSpec, ReconcileReport
    from adlistsync.domain.ports.fetching import CandidateFetcher

UnitOfWorkFactory = Callable[[], AdlistUnitOfWork]


log = getLogger(__name__)


def open_store(storage: StorageConfig | None = None) -> None:
    """Point the SQLAlchemy adapter at the configured gravity database."""

    database = get_database_config(storage=storage)
    startup(database_uri=database.uri, force=True)
    log.info("Opened DB: '%s'", database.uri)


def sync_adlists(
    *,
    source: CandidateFetcher | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    storage: StorageConfig | None = None,
    feed: FeedConfig | None = None,
    catalog: Sequence[GroupSpec] = DEFAULT_GROUP_CATALOG,
    dry_run: bool = False,
) -> ReconcileReport:
    """Fetch the remote adlist feed and reconcile the gravity database with it.

    The feed is fetched completely before the store transaction begins, so a
    fetch or parse failure leaves the store untouched.
    """

    feed_config = feed or get_feed_config()
    effective_source = source or FirebogFetcher(config=feed_config)
    if unit_of_work_factory is None:
        open_store(storage)
        unit_of_work_factory = SqlAlchemyAdlistUnitOfWork

    log.info("Fetching adlists from %s", feed_config.url)
    candidates = effective_source()
    log.info("Fetched %s adlist(s)", len(candidates))

    report = reconcile(
        candidates,
        unit_of_work_factory=unit_of_work_factory,
        catalog=catalog,
        commit=not dry_run,
    )

    log.info("Added %s missing adlist(s)", report.inserted)
    log.info("Disabled %s extraneous adlist(s)", report.disabled)
    log.info(
        "Applied %s adlist/group membership edit(s) (%s group(s) created)",
        report.membership_edits,
        report.groups_created,
    )
    if dry_run:
        log.info("Dry run: changes rolled back")

    return report
