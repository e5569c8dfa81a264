"""Group classification of managed adlist tags."""

from __future__ import annotations

from typing import TYPE_CHECKING

from adlistsync.domain.tagging import MANAGED_MARKER

if TYPE_CHECKING:
    from collections.abc import Iterable


def leading_segment(tag: str) -> str | None:
    """Return the text inside the first ``[...]`` of ``tag``, if it starts with one."""

    if not tag.startswith(MANAGED_MARKER):
        return None
    end = tag.find("]", len(MANAGED_MARKER))
    if end == -1:
        return None
    return tag[len(MANAGED_MARKER) : end]


def classify(tag: str, group_names: Iterable[str]) -> str | None:
    """Return the group whose name equals the tag's first bracketed segment.

    Names are compared exactly, so at most one group of a catalog with unique
    names can match. ``None`` means the record stays ungrouped.
    """

    segment = leading_segment(tag)
    if segment is None:
        return None
    for name in group_names:
        if name == segment:
            return name
    return None
