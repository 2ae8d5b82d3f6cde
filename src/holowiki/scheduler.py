"""Rate-limited batching of wiki requests.

Requests submitted in quick succession are coalesced into one upstream call.
At most one dispatch timer exists per scheduler, and consecutive dispatches
start at least ``interval`` seconds apart. The next slot is reserved when a
dispatch starts rather than when it finishes, so a slow call never shortens
the spacing for the batch behind it. Each call is bounded by a cancellation
guard that aborts it after ``timeout`` seconds.
"""

from __future__ import annotations

import asyncio
import logging
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .errors import DispatchTimeoutError, SchedulerClosedError
from .metrics import BATCHED_REQUESTS, DISPATCH_COUNTER, DISPATCH_LATENCY
from .models import QueryRequest, merge_params, split_compatible
from .transport import WikiTransport

logger = logging.getLogger("holowiki.scheduler")

Pending = Tuple[QueryRequest, "asyncio.Future[Dict[str, Any]]"]


class RequestScheduler:
    def __init__(
        self,
        transport: WikiTransport,
        headers: Mapping[str, str],
        *,
        interval: float,
        timeout: float,
    ) -> None:
        self._transport = transport
        self._headers = MappingProxyType(dict(headers))
        self._interval = interval
        self._timeout = timeout
        self._pending: List[Pending] = []
        self._next_allowed_at = 0.0
        self._timer: Optional[asyncio.TimerHandle] = None
        self._dispatches: Dict[asyncio.Task, List[Pending]] = {}
        self._closed = False

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    @property
    def is_armed(self) -> bool:
        return self._timer is not None

    @property
    def is_dispatching(self) -> bool:
        return bool(self._dispatches)

    @property
    def next_allowed_at(self) -> float:
        """Earliest loop time at which the next batch may be sent."""
        return self._next_allowed_at

    @property
    def closed(self) -> bool:
        return self._closed

    def submit(self, request: QueryRequest) -> "asyncio.Future[Dict[str, Any]]":
        """Queue ``request`` and return a future for the batch's response.

        Must be called from a running event loop. The future resolves with
        the decoded JSON body of the call that carried the request, or with
        the error that call ended in.
        """
        if self._closed:
            raise SchedulerClosedError("Scheduler is closed")
        loop = asyncio.get_running_loop()
        future: "asyncio.Future[Dict[str, Any]]" = loop.create_future()
        self._pending.append((request, future))
        if self._timer is None:
            self._arm(loop)
        return future

    def _arm(self, loop: asyncio.AbstractEventLoop) -> None:
        now = loop.time()
        if self._next_allowed_at > now:
            delay = self._next_allowed_at - now
        else:
            delay = self._interval
        logger.debug("Dispatch timer armed delay=%.3fs pending=%d", delay, len(self._pending))
        self._timer = loop.call_later(delay, self._fire)

    def _fire(self) -> None:
        self._timer = None
        if not self._pending:
            return
        taken, deferred = split_compatible(request for request, _ in self._pending)
        batch = [self._pending[index] for index in taken]
        self._pending = [self._pending[index] for index in deferred]
        loop = asyncio.get_running_loop()
        self._next_allowed_at = loop.time() + self._interval
        task = loop.create_task(self._dispatch(batch))
        self._dispatches[task] = batch
        task.add_done_callback(self._forget)
        if self._pending:
            logger.debug("Deferred %d request(s) with conflicting parameters", len(self._pending))
            self._arm(loop)

    def _forget(self, task: asyncio.Task) -> None:
        self._dispatches.pop(task, None)

    async def _dispatch(self, batch: List[Pending]) -> None:
        loop = asyncio.get_running_loop()
        started = loop.time()
        params = merge_params(request for request, _ in batch)
        BATCHED_REQUESTS.inc(len(batch))
        logger.debug("Dispatching %d request(s) params=%s", len(batch), params)

        call = asyncio.ensure_future(self._transport.fetch(params, self._headers))
        timed_out = False

        def abort() -> None:
            nonlocal timed_out
            timed_out = True
            call.cancel()

        guard = loop.call_later(self._timeout, abort)
        try:
            result = await call
        except asyncio.CancelledError:
            if not timed_out:
                # The scheduler itself is shutting down.
                _settle(batch, error=SchedulerClosedError("Scheduler closed during dispatch"))
                raise
            logger.warning("Dispatch of %d request(s) timed out after %.3fs", len(batch), self._timeout)
            DISPATCH_COUNTER.labels(outcome="timeout").inc()
            _settle(batch, error=DispatchTimeoutError(self._timeout))
        except Exception as exc:
            logger.warning("Dispatch of %d request(s) failed: %s", len(batch), exc)
            DISPATCH_COUNTER.labels(outcome="error").inc()
            _settle(batch, error=exc)
        else:
            DISPATCH_COUNTER.labels(outcome="ok").inc()
            _settle(batch, result=result)
        finally:
            guard.cancel()
            DISPATCH_LATENCY.observe(loop.time() - started)

    async def close(self) -> None:
        """Stop scheduling, failing queued requests and aborting in-flight calls."""
        if self._closed:
            return
        self._closed = True
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        batch, self._pending = self._pending, []
        _settle(batch, error=SchedulerClosedError("Scheduler closed before dispatch"))
        dispatches = list(self._dispatches.items())
        for task, _ in dispatches:
            task.cancel()
        if dispatches:
            await asyncio.gather(*(task for task, _ in dispatches), return_exceptions=True)
        # A task cancelled before its first step never reaches its own handler.
        for _, batch in dispatches:
            _settle(batch, error=SchedulerClosedError("Scheduler closed during dispatch"))


def _settle(
    batch: List[Pending],
    *,
    result: Optional[Dict[str, Any]] = None,
    error: Optional[BaseException] = None,
) -> None:
    for _, future in batch:
        if future.done():
            continue
        if error is not None:
            future.set_exception(error)
        else:
            future.set_result(result)  # type: ignore[arg-type]


__all__ = ["RequestScheduler"]
