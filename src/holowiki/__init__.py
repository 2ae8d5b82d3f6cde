"""Hololive Fan Wiki API client."""

from .client import HololiveWiki
from .config import ClientConfig
from .errors import ApiError, DispatchTimeoutError, HoloWikiError, SchedulerClosedError, TransportError
from .identity import UserAgentOptions, build_user_agent
from .models import QueryRequest

__all__ = [
    "ApiError",
    "ClientConfig",
    "DispatchTimeoutError",
    "HoloWikiError",
    "HololiveWiki",
    "QueryRequest",
    "SchedulerClosedError",
    "TransportError",
    "UserAgentOptions",
    "build_user_agent",
]
