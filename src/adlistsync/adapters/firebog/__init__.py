"""Public interface for the firebog feed adapter."""

from __future__ import annotations

from .client import FirebogFetcher
from .schema import FEED_COLUMNS, FeedRow
from .translator import parse_candidate, parse_feed

__all__ = [
    "FEED_COLUMNS",
    "FeedRow",
    "FirebogFetcher",
    "parse_candidate",
    "parse_feed",
]
