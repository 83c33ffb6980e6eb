from __future__ import annotations

import logging
from typing import Any, Optional, Protocol
from urllib.parse import quote

import httpx

from propsheet.config import ProviderSettings
from propsheet.shared.errors import FetchError

from .provider_constants import EVENT_ID_PLACEHOLDER

logger = logging.getLogger(__name__)


class DataSource(Protocol):
    """What the export flow needs from a provider: two raw JSON fetches."""

    async def fetch_events(self) -> Any: ...

    async def fetch_odds(self, event_id: str) -> Any: ...


class LadbrokesClient:
    """
    Async HTTP client for the Ladbrokes CMS and SiteServer feeds.

    - Returns parsed JSON bodies unmodified
    - Raises FetchError on non-2xx, network failure or timeout
    - Never retries; a failure is surfaced once to the caller
    """

    def __init__(
        self,
        *,
        settings: Optional[ProviderSettings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.settings = settings or ProviderSettings()
        headers = {
            "Accept": "application/json",
            "User-Agent": self.settings.user_agent,
        }
        self._client = httpx.AsyncClient(
            timeout=self.settings.timeout_seconds,
            headers=headers,
            transport=transport,
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "LadbrokesClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    # ------------------------------------------------------------------
    # Public fetch helpers
    # ------------------------------------------------------------------
    async def fetch_events(self) -> Any:
        url = self.settings.events_url
        logger.debug({"ladbrokes_events_request": {"url": url}})
        return await self._get_json(url)

    async def fetch_odds(self, event_id: str) -> Any:
        event_id = str(event_id or "").strip()
        if not event_id:
            raise ValueError("event_id is required to fetch odds")
        url = self.settings.odds_url.replace(EVENT_ID_PLACEHOLDER, quote(event_id, safe=""))
        logger.debug({"ladbrokes_odds_request": {"event_id": event_id, "url": url}})
        return await self._get_json(url)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    async def _get_json(self, url: str) -> Any:
        try:
            resp = await self._client.get(url)
            resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            message = _upstream_message(exc.response)
            logger.warning({"ladbrokes_http_error": {"url": url, "status": status, "message": message}})
            raise FetchError(message, status_code=status, url=url) from exc
        except httpx.TimeoutException as exc:
            logger.warning({"ladbrokes_timeout": {"url": url}})
            raise FetchError(f"request timed out after {self.settings.timeout_seconds}s", url=url) from exc
        except httpx.RequestError as exc:
            logger.warning({"ladbrokes_request_error": {"url": url, "error": str(exc)}})
            raise FetchError(f"request failed: {exc}", url=url) from exc
        try:
            return resp.json()
        except ValueError as exc:
            raise FetchError("upstream returned a non-JSON body", status_code=resp.status_code, url=url) from exc


def _upstream_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        for key in ("message", "error"):
            if body.get(key):
                return str(body[key])
    text = response.text.strip()
    return text[:200] if text else (response.reason_phrase or "upstream error")


__all__ = [
    "DataSource",
    "LadbrokesClient",
]
