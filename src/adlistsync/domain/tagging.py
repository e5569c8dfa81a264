"""Tag derivation and the managed-record marker.

The tag is stored verbatim in the adlist comment. Its leading ``[`` is what
marks a record as owned by the sync; the first bracketed segment doubles as
the group key (see :mod:`adlistsync.domain.classification`).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from adlistsync.domain.model import CandidateEntry

MANAGED_MARKER: Final[str] = "["


def tag(entry: CandidateEntry) -> str:
    """Return ``[<tick_type>][<category>] <description>`` for ``entry``."""

    return f"[{entry.tick_type}][{entry.category}] {entry.description}"


def is_managed(comment: str | None) -> bool:
    """Return whether a stored comment marks its record as managed."""

    return comment is not None and comment.startswith(MANAGED_MARKER)
