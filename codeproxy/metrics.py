"""Counters describing tool-calling performance and reliability."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import timedelta


@dataclass(frozen=True)
class MetricsSnapshot:
    """The values of the tool metrics at one moment."""

    total_calls: int
    successful_transformations: int
    failed_transformations: int
    tool_results_processed: int
    state_lookup_failures: int
    avg_transform_time_us: int
    success_rate: float

    def __str__(self) -> str:
        return (
            f"Tool Metrics: {self.total_calls} calls ({self.success_rate:.1f}% success), "
            f"{self.tool_results_processed} results, {self.state_lookup_failures} state failures, "
            f"avg {self.avg_transform_time_us / 1000.0:.2f}ms"
        )


def _to_microseconds(duration: timedelta | float) -> int:
    if isinstance(duration, timedelta):
        return duration // timedelta(microseconds=1)
    return int(duration * 1_000_000)


class ToolMetrics:
    """Thread-safe counters of tool transformations and results."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.total_calls = 0
        self.successful_transformations = 0
        self.failed_transformations = 0
        self.tool_results_processed = 0
        self.state_lookup_failures = 0
        self.total_transform_time_us = 0

    def record_transformation(self, duration: timedelta | float) -> None:
        """Count a successful transformation that took ``duration`` (timedelta or seconds)."""
        micros = _to_microseconds(duration)
        with self._lock:
            self.total_calls += 1
            self.successful_transformations += 1
            self.total_transform_time_us += micros

    def record_failure(self) -> None:
        with self._lock:
            self.total_calls += 1
            self.failed_transformations += 1

    def record_tool_result(self) -> None:
        with self._lock:
            self.tool_results_processed += 1

    def record_state_lookup_failure(self) -> None:
        with self._lock:
            self.state_lookup_failures += 1

    def avg_transform_time_us(self) -> int:
        """Mean transformation time in whole microseconds, 0 when nothing was recorded."""
        with self._lock:
            count = self.successful_transformations
            return self.total_transform_time_us // count if count else 0

    def success_rate(self) -> float:
        """Percentage of calls that transformed successfully, 0.0 when there were none."""
        with self._lock:
            total = self.total_calls
            return self.successful_transformations / total * 100.0 if total else 0.0

    def snapshot(self) -> MetricsSnapshot:
        avg = self.avg_transform_time_us()
        rate = self.success_rate()
        with self._lock:
            return MetricsSnapshot(
                total_calls=self.total_calls,
                successful_transformations=self.successful_transformations,
                failed_transformations=self.failed_transformations,
                tool_results_processed=self.tool_results_processed,
                state_lookup_failures=self.state_lookup_failures,
                avg_transform_time_us=avg,
                success_rate=rate,
            )

    def reset(self) -> None:
        with self._lock:
            self.total_calls = 0
            self.successful_transformations = 0
            self.failed_transformations = 0
            self.tool_results_processed = 0
            self.state_lookup_failures = 0
            self.total_transform_time_us = 0


TOOL_METRICS = ToolMetrics()