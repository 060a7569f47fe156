"""
In-process telemetry for the calculator backend.

Events go to the log. Counters and a rolling window of latency samples per
metric stay in memory for /debug/stats; nothing is shipped to a metrics
backend, so numbers reset when the process restarts.
"""

from __future__ import annotations

import contextlib
import logging
import time
from collections import deque
from collections.abc import Iterator
from typing import Any

logger = logging.getLogger("cardinal.telemetry")

# Most recent samples kept per latency metric
LATENCY_WINDOW = 1000

_COUNTERS: dict[str, int] = {}
_LATENCIES: dict[str, deque[float]] = {}

_EMPTY_STATS = {"count": 0, "min": 0.0, "max": 0.0, "avg": 0.0, "p50": 0.0, "p95": 0.0, "p99": 0.0}


def _metric_key(metric_name: str) -> str:
    # "llm.sales_script.latency" and "llm.sales_script.latency_ms" are one metric
    if metric_name.endswith(".latency"):
        return f"{metric_name}_ms"
    return metric_name


def log_event(event_name: str, **fields: Any) -> None:
    """Structured log line. Callers redact PII before passing fields."""
    logger.info("event=%s %s", event_name, fields)


def counter(name: str, increment: int = 1) -> int:
    value = _COUNTERS.get(name, 0) + increment
    _COUNTERS[name] = value
    logger.debug("counter=%s value=%s", name, value)
    return value


def get_counters() -> dict[str, int]:
    return dict(_COUNTERS)


def record_latency(metric_name: str, seconds: float) -> None:
    """Add one sample; the oldest falls out once LATENCY_WINDOW is reached."""
    key = _metric_key(metric_name)
    samples = _LATENCIES.get(key)
    if samples is None:
        samples = _LATENCIES[key] = deque(maxlen=LATENCY_WINDOW)
    samples.append(seconds)


@contextlib.contextmanager
def time_block(metric_name: str) -> Iterator[None]:
    """
    Time the enclosed block, including blocks that raise.

    Usage:
        with time_block("llm.yard_photo.latency"):
            response = model.generate_content(parts)
    """
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed = time.perf_counter() - start
        logger.debug("timing=%s seconds=%.6f", _metric_key(metric_name), elapsed)
        record_latency(metric_name, elapsed)


def get_latency_stats(metric_name: str) -> dict[str, float]:
    """min/max/avg and p50/p95/p99 over the current window, in seconds."""
    samples = sorted(_LATENCIES.get(_metric_key(metric_name), ()))
    count = len(samples)
    if not count:
        return dict(_EMPTY_STATS)

    def pct(fraction: float) -> float:
        return samples[min(int(count * fraction), count - 1)]

    return {
        "count": count,
        "min": samples[0],
        "max": samples[-1],
        "avg": sum(samples) / count,
        "p50": pct(0.50),
        "p95": pct(0.95),
        "p99": pct(0.99),
    }


def get_p95(metric_name: str) -> float:
    return get_latency_stats(metric_name)["p95"]


def get_all_latency_stats() -> dict[str, dict[str, float]]:
    return {name: get_latency_stats(name) for name in list(_LATENCIES)}


def reset_latencies() -> None:
    """Drop every latency sample. Tests call this between cases."""
    _LATENCIES.clear()
