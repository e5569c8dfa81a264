"""Ports for the persisted adlist store."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from adlistsync.domain.model import AdlistRecord, Group, GroupSpec, MembershipPair


@runtime_checkable
class AdlistRepository(Protocol):
    """Persistence contract for adlist records."""

    def managed(self, *, enabled_only: bool = False) -> Sequence[AdlistRecord]:
        """Return records whose comment carries the managed marker."""
        ...

    def insert_missing(self, records: Iterable[AdlistRecord]) -> int:
        """Insert records, skipping addresses that already exist; return rows written."""
        ...

    def disable(self, addresses: Iterable[str]) -> int:
        """Soft-disable managed records by address; return rows updated."""
        ...


@runtime_checkable
class GroupRepository(Protocol):
    """Persistence contract for groups."""

    def ensure(self, catalog: Iterable[GroupSpec]) -> int:
        """Create catalog groups missing by name; return groups created."""
        ...

    def by_names(self, names: Iterable[str]) -> Sequence[Group]: ...


@runtime_checkable
class MembershipRepository(Protocol):
    """Persistence contract for adlist/group membership rows."""

    def managed_pairs(self) -> set[MembershipPair]:
        """Return memberships whose adlist is a managed record."""
        ...

    def clear_managed(self) -> int: ...

    def add(self, pairs: Iterable[MembershipPair]) -> int: ...
