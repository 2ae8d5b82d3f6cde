"""Prometheus instrumentation for request dispatch."""

from __future__ import annotations

from prometheus_client import Counter, Histogram

DISPATCH_COUNTER = Counter("holowiki_dispatches_total", "Batched wiki dispatches", ["outcome"])
BATCHED_REQUESTS = Counter("holowiki_batched_requests_total", "Requests carried by dispatches")
DISPATCH_LATENCY = Histogram("holowiki_dispatch_latency_seconds", "Wall-clock time of a dispatch")

__all__ = ["BATCHED_REQUESTS", "DISPATCH_COUNTER", "DISPATCH_LATENCY"]
