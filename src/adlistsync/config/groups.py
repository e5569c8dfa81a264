"""Group catalog applied to managed adlists."""

from __future__ import annotations

from typing import Final

from adlistsync.domain.model import GroupSpec

# names double as the feed's tick types
DEFAULT_GROUP_CATALOG: Final[tuple[GroupSpec, ...]] = (
    GroupSpec(name="tick", description="Safe, least likely to interfere with browsing"),
    GroupSpec(name="std", description="Standard"),
    GroupSpec(name="cross", description="Dangerous, false positives, deprecated, biased"),
)
