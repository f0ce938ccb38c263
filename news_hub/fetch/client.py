"""
HTTP client for the news API.

The API serves two endpoints:
- a listing (GET /api/news) returning raw article records
- a per-article detail (GET /api/news/{id}) returning the scraped content,
  author, read time, tags and confidence

Transport errors and 5xx responses are retried with a linear backoff. Any
failure that remains, including 4xx responses and payloads that are not
JSON or not of the expected shape, is raised as TransportError.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any
from urllib.parse import quote

import httpx

from ..config import ApiConfig, get_api_base_url
from ..errors import TransportError
from ..utils.logging import log_event, truncate_text

logger = logging.getLogger(__name__)


class NewsApiClient:
    """Async client for the listing and detail endpoints.

    Attributes:
        cfg: API configuration
        base_url: Resolved base URL without a trailing slash
    """

    def __init__(self, cfg: ApiConfig | None = None, transport: httpx.AsyncBaseTransport | None = None):
        self.cfg = cfg or ApiConfig()
        self.base_url = get_api_base_url(self.cfg).rstrip("/")
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> NewsApiClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def fetch_list(self) -> list[dict[str, Any]]:
        """Fetch the article listing.

        The payload may be a JSON array, or an object holding the array under
        "articles" or "data".

        Raises:
            TransportError: If the request fails or the payload is not a list
        """
        url = self.base_url + self.cfg.list_path
        data = await self._get_json(url)
        if isinstance(data, dict):
            data = data.get("articles", data.get("data"))
        if not isinstance(data, list):
            raise TransportError("Malformed listing payload: expected a list of articles", url=url)
        return data

    async def fetch_detail(self, record_id: Any) -> dict[str, Any]:
        """Fetch the detail payload of one article.

        Raises:
            TransportError: If the request fails or the payload is not an object
        """
        path = self.cfg.detail_path.format(id=quote(str(record_id), safe=""))
        url = self.base_url + path
        data = await self._get_json(url)
        if not isinstance(data, dict):
            raise TransportError("Malformed detail payload: expected an object", url=url)
        return data

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.cfg.timeout_seconds,
                headers={"User-Agent": self.cfg.user_agent, "Accept": "application/json"},
                follow_redirects=True,
                trust_env=self.cfg.trust_env,
                transport=self._transport,
            )
        return self._client

    async def _get_json(self, url: str) -> Any:
        client = self._get_client()
        last_error = TransportError("No request attempted", url=url)

        for attempt in range(self.cfg.retries + 1):
            try:
                resp = await client.get(url)
            except httpx.HTTPError as exc:
                last_error = TransportError(f"{type(exc).__name__}: {exc}", url=url)
            else:
                if resp.status_code < 400:
                    try:
                        return resp.json()
                    except ValueError as exc:
                        raise TransportError(
                            f"Invalid JSON: {exc} - Response: {truncate_text(resp.text)}",
                            status_code=resp.status_code,
                            url=url,
                        ) from exc
                error = TransportError(
                    f"HTTP {resp.status_code}: {truncate_text(resp.text)}",
                    status_code=resp.status_code,
                    url=url,
                )
                if resp.status_code < 500:
                    raise error
                last_error = error

            if attempt < self.cfg.retries:
                log_event(
                    logger,
                    "Retrying request",
                    level=logging.DEBUG,
                    event="request_retry",
                    url=url,
                    attempt=attempt + 1,
                    error=str(last_error),
                )
                await asyncio.sleep(0.5 * (attempt + 1))

        raise last_error
