"""Async httpx client used to download remote feeds."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

import httpx

from adlistsync import __version__

if TYPE_CHECKING:
    from types import TracebackType

log = getLogger(__name__)

USER_AGENT = f"adlistsync/{__version__}"


@dataclass(slots=True, frozen=True)
class HttpClientConfig:
    name: str
    timeout_seconds: float = 30.0
    follow_redirects: bool = True
    user_agent: str = USER_AGENT


class HttpClient:
    """Single-purpose download client; one instance per feed fetch."""

    def __init__(
        self,
        config: HttpClientConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        self._client = httpx.AsyncClient(
            timeout=config.timeout_seconds,
            follow_redirects=config.follow_redirects,
            headers={"User-Agent": config.user_agent},
            transport=transport,
        )

    async def __aenter__(self) -> HttpClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def fetch_bytes(self, url: str) -> bytes:
        """GET ``url`` and return the body; non-2xx responses raise ``HTTPStatusError``."""

        response = await self._client.get(url)
        log.debug(
            "%s: GET %s -> %s (%s bytes)",
            self.config.name,
            url,
            response.status_code,
            len(response.content),
        )
        response.raise_for_status()
        return response.content
