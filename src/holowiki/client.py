"""Python client for the Hololive Fan Wiki API."""

from __future__ import annotations

import asyncio
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

import httpx

from .config import ClientConfig
from .identity import DEFAULT_USER_AGENT, UserAgentOptions, build_user_agent, normalize_contact
from .models import QueryRequest
from .scheduler import RequestScheduler
from .transport import HttpTransport, WikiTransport


class HololiveWiki:
    """Manages requests to the Hololive Fan Wiki.

    Everything is validated up front: an invalid option raises ``TypeError``
    or ``ValueError`` and no client is created. Once built, the identity and
    timing configuration cannot be changed; construct a new client instead.
    """

    def __init__(
        self,
        user_agent: Optional[UserAgentOptions] = None,
        config: Optional[ClientConfig] = None,
        *,
        request_timeout: Optional[float] = None,
        request_interval: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        wiki_transport: Optional[WikiTransport] = None,
    ) -> None:
        options = user_agent if user_agent is not None else DEFAULT_USER_AGENT
        if not isinstance(options, UserAgentOptions):
            raise TypeError(f"user_agent: Expected UserAgentOptions; received {type(options).__name__}.")
        config = config if config is not None else ClientConfig()
        if request_timeout is not None or request_interval is not None:
            config = ClientConfig(
                request_timeout=config.request_timeout if request_timeout is None else request_timeout,
                request_interval=config.request_interval if request_interval is None else request_interval,
                api_url=config.api_url,
            )

        self._user_agent = build_user_agent(options)
        self._options = options
        self._contact: str = normalize_contact(options.contact)  # type: ignore[assignment]
        self._config = config
        self._headers = MappingProxyType(
            {
                "User-Agent": self._user_agent,
                "Accept-Encoding": "gzip",
                "Connection": "keep-alive",
            }
        )
        self._transport = wiki_transport or HttpTransport(config.api_url, transport=transport)
        self._scheduler = RequestScheduler(
            self._transport,
            self._headers,
            interval=config.interval_seconds,
            timeout=config.timeout_seconds,
        )

    async def __aenter__(self) -> "HololiveWiki":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    @property
    def name(self) -> str:
        return self._options.name

    @property
    def version(self) -> str:
        return self._options.version

    @property
    def contact(self) -> str:
        return self._contact

    @property
    def user_agent(self) -> str:
        return self._user_agent

    @property
    def headers(self) -> Mapping[str, str]:
        return self._headers

    @property
    def config(self) -> ClientConfig:
        return self._config

    def submit(self, request: QueryRequest) -> "asyncio.Future[Dict[str, Any]]":
        return self._scheduler.submit(request)

    async def query(self, **params: Any) -> Dict[str, Any]:
        """Queue an ``action=query`` call and wait for its batch to return.

        The response is the combined result of every request that shared the
        batch, so callers pick out the pages or lists they asked for. An
        ``error`` object in the response raises :class:`~holowiki.errors.ApiError`.
        """
        return await self.submit(QueryRequest(params=params))

    async def close(self) -> None:
        await self._scheduler.close()
        await self._transport.close()


__all__ = ["HololiveWiki"]
