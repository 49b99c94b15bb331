# Copyright (c) 2026 WPMCP Contributors. All Rights Reserved.

"""
Metrics — In-memory counters for gateway observability.

Counters are keyed ``name`` or ``name:label`` (e.g. ``mcp_requests:acme``).
Latencies are kept in bounded windows and summarized on export.
"""

from __future__ import annotations

import time
from collections import defaultdict, deque
from typing import Any, Deque, Dict

_WINDOW = 1000


class Metrics:
    """Simple in-memory metrics collector."""

    def __init__(self):
        self._counters: Dict[str, int] = defaultdict(int)
        self._latencies: Dict[str, Deque[float]] = defaultdict(lambda: deque(maxlen=_WINDOW))
        self._start_time = time.time()

    def inc(self, name: str, amount: int = 1) -> None:
        self._counters[name] += amount

    def get_counter(self, name: str) -> int:
        return self._counters.get(name, 0)

    def observe(self, name: str, value_ms: float) -> None:
        """Record one latency observation in milliseconds."""
        self._latencies[name].append(value_ms)

    def reset(self) -> None:
        self._counters.clear()
        self._latencies.clear()
        self._start_time = time.time()

    def snapshot(self) -> Dict[str, Any]:
        """Export counters and latency summaries as a dict."""
        latencies = {}
        for name, values in self._latencies.items():
            if not values:
                continue
            latencies[name] = {
                "count": len(values),
                "avg_ms": round(sum(values) / len(values), 2),
                "max_ms": round(max(values), 2),
            }
        return {
            "uptime_seconds": round(time.time() - self._start_time, 1),
            "counters": dict(self._counters),
            "latencies": latencies,
        }


# Global singleton
platform_metrics = Metrics()
