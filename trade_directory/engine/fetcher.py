"""HTTP fetching of one live source per call."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

import httpx
import structlog

from ..records import SourceName
from ..errors import FetchError

DEFAULT_TIMEOUT = 15.0


@dataclass(slots=True)
class FetchResponse:
    """Standardised response wrapper."""

    source: SourceName
    url: str
    status_code: int
    text: str
    headers: Dict[str, str]
    raw: httpx.Response | None = field(repr=False, default=None)


class SourceFetcher:
    """Issue a single GET against one source; no retries."""

    def __init__(
        self,
        source: SourceName,
        client: httpx.AsyncClient,
        logger: structlog.BoundLogger | None = None,
    ) -> None:
        self.source = source
        self._client = client
        self.logger = logger or structlog.get_logger("trade_directory.fetcher").bind(
            source=source.value
        )

    async def fetch(
        self,
        url: str,
        headers: dict[str, str] | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> FetchResponse:
        try:
            response = await self._client.get(url, headers=headers, timeout=timeout)
        except httpx.TimeoutException as exc:
            raise FetchError(self.source.value, f"timed out after {timeout:g}s") from exc
        except httpx.HTTPError as exc:
            raise FetchError(self.source.value, exc) from exc
        if not response.is_success:
            raise FetchError(self.source.value, f"unexpected status {response.status_code}")
        self.logger.info(
            "source_fetched", url=str(response.url), status=response.status_code, size=len(response.text)
        )
        return FetchResponse(
            source=self.source,
            url=str(response.url),
            status_code=response.status_code,
            text=response.text,
            headers=dict(response.headers),
            raw=response,
        )


__all__ = ["DEFAULT_TIMEOUT", "FetchResponse", "SourceFetcher"]
