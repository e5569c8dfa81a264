"""Transaction boundary shared by the reconcile steps."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from types import TracebackType

    from adlistsync.domain.ports.persistence import (
        AdlistRepository,
        GroupRepository,
        MembershipRepository,
    )


@dataclass(slots=True)
class AdlistRepositories:
    """Repositories touched by a reconcile run, all bound to one transaction."""

    adlists: AdlistRepository
    groups: GroupRepository
    memberships: MembershipRepository


@runtime_checkable
class AdlistUnitOfWork(Protocol):
    """All-or-nothing scope: nothing persists unless ``commit()`` is called."""

    @property
    def repositories(self) -> AdlistRepositories: ...

    def __enter__(self) -> AdlistUnitOfWork: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...
