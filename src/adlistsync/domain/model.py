"""Adlist domain types (pure, dependency-light)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

RecordKey: TypeAlias = tuple[str, bool, str]
"""Comparison tuple of a record: (address, enabled, comment)."""

MembershipPair: TypeAlias = tuple[int, int]
"""(adlist_id, group_id) as stored in the membership table."""


@dataclass(frozen=True, slots=True)
class CandidateEntry:
    """One row of the remote feed; lives only for the duration of a run."""

    category: str
    tick_type: str
    source_repo: str
    description: str
    source_url: str


@dataclass(frozen=True, slots=True)
class AdlistRecord:
    """Persisted adlist row.

    ``id`` is assigned by the store and is ``None`` for rows not yet written.
    """

    address: str
    enabled: bool
    comment: str | None
    id: int | None = None

    @property
    def key(self) -> RecordKey:
        return (self.address, self.enabled, self.comment or "")


@dataclass(frozen=True, slots=True)
class GroupSpec:
    """Catalog entry for a group the sync ensures exists."""

    name: str
    description: str


@dataclass(frozen=True, slots=True)
class Group:
    id: int
    name: str
    description: str | None = None
    enabled: bool = True


@dataclass(frozen=True, slots=True)
class ReconcileReport:
    """Outcome of a reconcile run."""

    staged: int
    inserted: int
    disabled: int
    membership_edits: int
    groups_created: int = 0
