"""Remote feed configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import float_env, optional_env

FIREBOG_FEED_URL = "https://v.firebog.net/hosts/csv.txt"
FEED_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True, slots=True)
class FeedConfig:
    """Where the adlist CSV is published and how long to wait for it."""

    url: str = FIREBOG_FEED_URL
    timeout_seconds: float = FEED_TIMEOUT_SECONDS


def get_feed_config(
    *,
    url: str | None = None,
    timeout_seconds: float | None = None,
) -> FeedConfig:
    return FeedConfig(
        url=url or optional_env("ADLISTSYNC_FEED_URL") or FIREBOG_FEED_URL,
        timeout_seconds=timeout_seconds
        or float_env("ADLISTSYNC_TIMEOUT", FEED_TIMEOUT_SECONDS),
    )
