"""HTTP client for the firebog adlist feed."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

import httpx

from adlistsync.adapters.http_client import HttpClient, HttpClientConfig
from adlistsync.config.feed import FeedConfig, get_feed_config
from adlistsync.domain.errors import FetchError
from adlistsync.domain.ports.fetching import CandidateFetcher

from .translator import parse_feed

if TYPE_CHECKING:
    from collections.abc import Callable

    from adlistsync.domain.model import CandidateEntry

log = getLogger(__name__)


def _http_config(feed: FeedConfig) -> HttpClientConfig:
    return HttpClientConfig(name="firebog", timeout_seconds=feed.timeout_seconds)


def _default_client_factory(config: HttpClientConfig) -> HttpClient:
    return HttpClient(config)


@dataclass(slots=True)
class FirebogFetcher:
    config: FeedConfig = field(default_factory=get_feed_config)
    client_factory: Callable[[HttpClientConfig], HttpClient] = field(
        default=_default_client_factory
    )

    def __call__(self) -> list[CandidateEntry]:
        return asyncio.run(self._fetch_async())

    async def _fetch_async(self) -> list[CandidateEntry]:
        body = await self._download()
        entries = parse_feed(body)
        log.debug("Parsed %s candidate(s) from %s", len(entries), self.config.url)
        return entries

    async def _download(self) -> bytes:
        url = self.config.url
        try:
            async with self.client_factory(_http_config(self.config)) as client:
                return await client.fetch_bytes(url)
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            raise FetchError(f"Feed request to {url} failed with HTTP {status}") from exc
        except httpx.HTTPError as exc:
            raise FetchError(f"Feed request to {url} failed: {exc}") from exc


if TYPE_CHECKING:
    _fetcher_check: CandidateFetcher = FirebogFetcher()
