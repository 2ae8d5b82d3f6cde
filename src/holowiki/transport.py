"""Transport implementations for the wiki API."""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

import httpx

from .errors import ApiError, TransportError

logger = logging.getLogger("holowiki.transport")

QUERY_PARAMS = {"action": "query", "format": "json"}


class WikiTransport:
    async def fetch(self, params: Mapping[str, str], headers: Mapping[str, str]) -> Dict[str, Any]:  # pragma: no cover - interface
        raise NotImplementedError

    async def close(self) -> None:  # pragma: no cover - optional override
        return None


class HttpTransport(WikiTransport):
    def __init__(self, api_url: str, *, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        self._api_url = api_url
        # Timeouts are enforced by the scheduler's cancellation guard.
        self._client = httpx.AsyncClient(timeout=None, transport=transport)

    async def fetch(self, params: Mapping[str, str], headers: Mapping[str, str]) -> Dict[str, Any]:
        query = {**QUERY_PARAMS, **params}
        try:
            response = await self._client.get(self._api_url, params=query, headers=dict(headers))
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.error("Wiki request failed status=%s body=%s", exc.response.status_code, exc.response.text[:200])
            raise TransportError(f"Wiki API returned HTTP {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            logger.error("Wiki request failed error=%r", exc)
            raise TransportError(str(exc) or type(exc).__name__) from exc

        try:
            data = response.json()
        except ValueError as exc:
            raise TransportError("Wiki API returned a non-JSON body") from exc
        if not isinstance(data, dict):
            raise TransportError(f"Wiki API returned {type(data).__name__}, expected an object")
        error = data.get("error")
        if isinstance(error, dict):
            logger.error("Wiki API error code=%s info=%s", error.get("code"), error.get("info"))
            raise ApiError(str(error.get("code", "unknown")), str(error.get("info", "")))
        return data

    async def close(self) -> None:
        await self._client.aclose()


__all__ = ["HttpTransport", "QUERY_PARAMS", "WikiTransport"]
