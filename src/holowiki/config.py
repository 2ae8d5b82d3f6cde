"""Configuration objects for the holowiki client."""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_API_URL = "https://hololive.wiki/w/api.php"

REQUEST_TIMEOUT_RANGE = (500, 30000)
REQUEST_INTERVAL_RANGE = (500, 5000)


def _check_duration(field: str, value: object, bounds: tuple[int, int]) -> None:
    # bool is an int subclass but never a meaningful duration
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"{field}: Expected number; received {type(value).__name__}.")
    low, high = bounds
    if not low <= value <= high:
        raise ValueError(f"{field}: Must be between {low} and {high} ms; received {value}.")


@dataclass(frozen=True)
class ClientConfig:
    """Timing limits for a client, in milliseconds."""

    request_timeout: float = 10000
    request_interval: float = 1000
    api_url: str = DEFAULT_API_URL

    def __post_init__(self) -> None:
        _check_duration("request_timeout", self.request_timeout, REQUEST_TIMEOUT_RANGE)
        _check_duration("request_interval", self.request_interval, REQUEST_INTERVAL_RANGE)
        if not isinstance(self.api_url, str):
            raise TypeError(f"api_url: Expected str; received {type(self.api_url).__name__}.")
        if not self.api_url.startswith(("http://", "https://")):
            raise ValueError(f"api_url: Expected an http(s) URL; received {self.api_url!r}.")

    @property
    def timeout_seconds(self) -> float:
        return self.request_timeout / 1000

    @property
    def interval_seconds(self) -> float:
        return self.request_interval / 1000

    @classmethod
    def from_env(cls) -> "ClientConfig":
        timeout = float(os.environ.get("HOLOWIKI_REQUEST_TIMEOUT_MS", "10000"))
        interval = float(os.environ.get("HOLOWIKI_REQUEST_INTERVAL_MS", "1000"))
        api_url = os.environ.get("HOLOWIKI_API_URL") or DEFAULT_API_URL
        return cls(request_timeout=timeout, request_interval=interval, api_url=api_url)


__all__ = ["ClientConfig", "DEFAULT_API_URL", "REQUEST_INTERVAL_RANGE", "REQUEST_TIMEOUT_RANGE"]
