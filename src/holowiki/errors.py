"""Errors raised while dispatching wiki requests."""

from __future__ import annotations


class HoloWikiError(Exception):
    """Base class for dispatch-time failures."""


class TransportError(HoloWikiError):
    """The upstream call failed or returned an unusable body."""


class ApiError(TransportError):
    """The wiki answered with an ``error`` object instead of a result."""

    def __init__(self, code: str, info: str) -> None:
        super().__init__(f"Wiki API error {code}: {info}")
        self.code = code
        self.info = info


class DispatchTimeoutError(HoloWikiError, TimeoutError):
    def __init__(self, timeout: float) -> None:
        super().__init__(f"Request did not settle within {timeout:.3f}s")
        self.timeout = timeout


class SchedulerClosedError(HoloWikiError):
    """Raised for requests submitted to, or still queued on, a closed scheduler."""


__all__ = ["ApiError", "HoloWikiError", "TransportError", "DispatchTimeoutError", "SchedulerClosedError"]
