"""Reconcile the stored adlists with the remote feed.

A run has four steps, each reading the store state left by the previous one:

1) stage the candidates as ``(address, True, tag)`` tuples
2) insert staged tuples not present among the enabled managed records
3) soft-disable enabled managed records absent from the staged tuples
4) drop and recompute group memberships of managed records

Comparisons use the whole tuple, so a candidate whose tag changed upstream is
both "missing" (new tuple) and "extraneous" (old tuple). Insertions never
overwrite an existing address.
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from adlistsync.domain.classification import classify
from adlistsync.domain.model import AdlistRecord, ReconcileReport
from adlistsync.domain.tagging import tag

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence

    from adlistsync.domain.model import CandidateEntry, Group, GroupSpec, MembershipPair, RecordKey
    from adlistsync.domain.ports.unit_of_work import AdlistRepositories, AdlistUnitOfWork

log = getLogger(__name__)


def stage_candidates(candidates: Iterable[CandidateEntry]) -> set[RecordKey]:
    """Materialise the run's working set of desired record tuples."""

    return {(entry.source_url, True, tag(entry)) for entry in candidates}


def plan_insertions(
    staged: set[RecordKey],
    enabled_managed: Iterable[AdlistRecord],
) -> list[AdlistRecord]:
    present = {record.key for record in enabled_managed}
    missing = sorted(staged - present)
    return [
        AdlistRecord(address=address, enabled=enabled, comment=comment)
        for address, enabled, comment in missing
    ]


def plan_disables(
    enabled_managed: Iterable[AdlistRecord],
    staged: set[RecordKey],
) -> list[str]:
    extraneous = {record.key for record in enabled_managed} - staged
    return sorted({address for address, _enabled, _comment in extraneous})


def plan_memberships(
    records: Iterable[AdlistRecord],
    groups: Iterable[Group],
) -> set[MembershipPair]:
    """Pair each record with the single group its tag classifies into."""

    group_ids = {group.name: group.id for group in groups}
    pairs: set[MembershipPair] = set()
    for record in records:
        if record.id is None or record.comment is None:
            continue
        name = classify(record.comment, group_ids)
        if name is not None:
            pairs.add((record.id, group_ids[name]))
    return pairs


def reconcile(
    candidates: Sequence[CandidateEntry],
    *,
    unit_of_work_factory: Callable[[], AdlistUnitOfWork],
    catalog: Sequence[GroupSpec],
    commit: bool = True,
) -> ReconcileReport:
    """Apply the feed to the store in one unit of work and report the changes.

    Any failure rolls the unit of work back and propagates. With
    ``commit=False`` the changes are computed, then discarded.
    """

    staged = stage_candidates(candidates)
    log.debug("Staged %s candidate tuple(s) from %s entries", len(staged), len(candidates))

    with unit_of_work_factory() as uow:
        repositories = uow.repositories

        inserted = _insert_missing(repositories, staged)
        log.debug("Inserted %s missing adlist(s)", inserted)

        disabled = _disable_extraneous(repositories, staged)
        log.debug("Disabled %s extraneous adlist(s)", disabled)

        groups_created, membership_edits = _remap_groups(repositories, catalog)
        log.debug(
            "Remapped groups: created=%s, membership_edits=%s",
            groups_created,
            membership_edits,
        )

        if commit:
            uow.commit()
        else:
            uow.rollback()

    return ReconcileReport(
        staged=len(staged),
        inserted=inserted,
        disabled=disabled,
        membership_edits=membership_edits,
        groups_created=groups_created,
    )


def _insert_missing(repositories: AdlistRepositories, staged: set[RecordKey]) -> int:
    baseline = repositories.adlists.managed(enabled_only=True)
    missing = plan_insertions(staged, baseline)
    if not missing:
        return 0
    return repositories.adlists.insert_missing(missing)


def _disable_extraneous(repositories: AdlistRepositories, staged: set[RecordKey]) -> int:
    current = repositories.adlists.managed(enabled_only=True)
    addresses = plan_disables(current, staged)
    if not addresses:
        return 0
    return repositories.adlists.disable(addresses)


def _remap_groups(
    repositories: AdlistRepositories,
    catalog: Sequence[GroupSpec],
) -> tuple[int, int]:
    before = repositories.memberships.managed_pairs()
    repositories.memberships.clear_managed()

    groups_created = repositories.groups.ensure(catalog)
    groups = repositories.groups.by_names(spec.name for spec in catalog)

    records = repositories.adlists.managed(enabled_only=True)
    after = plan_memberships(records, groups)
    repositories.memberships.add(after)

    return groups_created, len(before ^ after)
