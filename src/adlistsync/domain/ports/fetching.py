"""Ports for fetching the remote adlist feed."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from adlistsync.domain.model import CandidateEntry


@runtime_checkable
class CandidateFetcher(Protocol):
    """Callable port returning the complete, parsed feed.

    Implementations raise ``FetchError`` or ``ParseError`` instead of
    returning a partial sequence.
    """

    def __call__(self) -> Sequence[CandidateEntry]: ...


__all__ = ["CandidateFetcher"]
