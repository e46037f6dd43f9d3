"""
Per-call timing and failure bookkeeping for ``OkxClient``.

Failures are counted by exception class and split into retryable (transport,
throttling, maintenance) and final ones, mirroring ``OkxError.retryable``.
"""

import time
from collections import Counter, defaultdict, deque
from dataclasses import dataclass, field
from typing import Deque, Dict, List, Optional


@dataclass(frozen=True)
class RequestMetrics:
    """Metrics for a single request."""
    endpoint: str
    method: str
    status_code: int
    duration_ms: float
    timestamp: float
    error_type: Optional[str] = None
    retryable: bool = False

    @property
    def failed(self) -> bool:
        return self.error_type is not None or not 200 <= self.status_code < 400


@dataclass
class Statistics:
    """Client performance statistics."""
    total_requests: int = 0
    successful_requests: int = 0
    failed_requests: int = 0
    retryable_failures: int = 0
    total_duration_ms: float = 0.0
    avg_duration_ms: float = 0.0
    errors_by_type: Counter = field(default_factory=Counter)

    def update(self, metrics: RequestMetrics) -> None:
        self.total_requests += 1
        self.total_duration_ms += metrics.duration_ms
        self.avg_duration_ms = self.total_duration_ms / self.total_requests

        if not metrics.failed:
            self.successful_requests += 1
            return
        self.failed_requests += 1
        if metrics.retryable:
            self.retryable_failures += 1
        if metrics.error_type is not None:
            self.errors_by_type[metrics.error_type] += 1


class PerformanceMonitor:
    """Records every facade call; history is bounded by ``max_history``."""

    def __init__(self, max_history: int = 1000):
        self._max_history = max_history
        self._statistics = Statistics()
        self._history: Deque[RequestMetrics] = deque(maxlen=max_history)
        self._by_endpoint: Dict[str, Deque[RequestMetrics]] = defaultdict(
            lambda: deque(maxlen=max_history)
        )

    def record_request(
        self,
        endpoint: str,
        method: str,
        status_code: int,
        duration_ms: float,
        error_type: Optional[str] = None,
        retryable: bool = False,
    ) -> None:
        """Record metrics for a completed call.

        Args:
            endpoint: Venue path of the call
            method: HTTP method
            status_code: HTTP status, or a synthetic one for failures
            duration_ms: Wall time of the call
            error_type: Exception class name when the call failed
            retryable: Whether that exception is flagged retryable
        """
        metrics = RequestMetrics(
            endpoint=endpoint,
            method=method,
            status_code=status_code,
            duration_ms=duration_ms,
            timestamp=time.time(),
            error_type=error_type,
            retryable=retryable,
        )
        self._statistics.update(metrics)
        self._history.append(metrics)
        self._by_endpoint[f"{method} {endpoint}"].append(metrics)

    @property
    def statistics(self) -> Statistics:
        return self._statistics

    def get_endpoint_stats(self, endpoint: str, method: str) -> Dict[str, float]:
        """Count, mean duration and success rate of one endpoint's recent calls."""
        calls = self._by_endpoint.get(f"{method} {endpoint}")
        if not calls:
            return {"count": 0, "avg_duration_ms": 0.0, "success_rate": 0.0}

        return {
            "count": len(calls),
            "avg_duration_ms": sum(c.duration_ms for c in calls) / len(calls),
            "success_rate": sum(1 for c in calls if not c.failed) / len(calls),
        }

    def get_recent_requests(self, count: int = 10) -> List[RequestMetrics]:
        return list(self._history)[-count:]

    def get_error_rate(self, window_seconds: float = 60.0) -> float:
        """Share of failed calls within the last ``window_seconds``."""
        cutoff = time.time() - window_seconds
        recent = [m for m in self._history if m.timestamp >= cutoff]
        if not recent:
            return 0.0
        return sum(1 for m in recent if m.failed) / len(recent)

    def reset(self) -> None:
        self._statistics = Statistics()
        self._history.clear()
        self._by_endpoint.clear()
