"""
Color.io Metrics Collection
In-process counters and timing statistics for palette requests.
"""
import time
from collections import defaultdict, Counter
from contextlib import contextmanager
from threading import Lock
from typing import Any, Dict, Iterator, List, Optional

import numpy as np
from loguru import logger


class MetricsCollector:
    """Thread-safe in-process metrics collector."""

    def __init__(self):
        self._lock = Lock()
        self._counters: Dict[str, int] = Counter()
        self._timings: Dict[str, List[float]] = defaultdict(list)
        self._palette_sizes: List[int] = []
        self._start_time = time.time()

    def increment_request_count(self, endpoint: str):
        """Count a request, overall and per endpoint."""
        with self._lock:
            self._counters["colors_requests_total"] += 1
            self._counters[f"colors_requests_total_{endpoint}"] += 1

    def increment_failure_count(self, error_type: str):
        """Increment failure counter by error type."""
        with self._lock:
            self._counters[f"colors_failed_total_{error_type}"] += 1

    def record_timing(self, operation: str, duration_ms: float):
        with self._lock:
            self._timings[f"{operation}_duration_ms"].append(duration_ms)

    def record_palette_size(self, size: int):
        """Record how many colors an extraction returned."""
        with self._lock:
            self._palette_sizes.append(size)

    def get_counters(self) -> Dict[str, int]:
        with self._lock:
            return dict(self._counters)

    def get_timing_stats(self) -> Dict[str, Dict[str, float]]:
        """Count, mean, min, max, p50 and p95 per recorded operation."""
        with self._lock:
            return {
                operation: self._describe(timings)
                for operation, timings in self._timings.items()
                if timings
            }

    def get_palette_size_stats(self) -> Dict[str, float]:
        with self._lock:
            if not self._palette_sizes:
                return {}
            return self._describe(self._palette_sizes)

    def get_uptime_seconds(self) -> float:
        return time.time() - self._start_time

    def get_summary(self) -> Dict[str, Any]:
        """Get complete metrics summary."""
        return {
            "uptime_seconds": self.get_uptime_seconds(),
            "counters": self.get_counters(),
            "timing_stats": self.get_timing_stats(),
            "palette_size_stats": self.get_palette_size_stats(),
        }

    def reset(self):
        """Reset all metrics (for testing)."""
        with self._lock:
            self._counters.clear()
            self._timings.clear()
            self._palette_sizes.clear()
            self._start_time = time.time()

    @staticmethod
    def _describe(values: List[float]) -> Dict[str, float]:
        """Summary statistics; percentiles are linearly interpolated."""
        data = np.asarray(values, dtype=np.float64)
        p50, p95 = np.percentile(data, [50, 95])
        return {
            "count": int(data.size),
            "mean": float(data.mean()),
            "min": float(data.min()),
            "max": float(data.max()),
            "p50": float(p50),
            "p95": float(p95),
        }


# Global metrics instance
_metrics: Optional[MetricsCollector] = None


def get_metrics() -> MetricsCollector:
    """Get or create global metrics collector."""
    global _metrics
    if _metrics is None:
        _metrics = MetricsCollector()
    return _metrics


def reset_metrics():
    """Reset global metrics (for testing)."""
    global _metrics
    if _metrics is not None:
        _metrics.reset()


@contextmanager
def performance_monitor(operation: str, **fields: Any) -> Iterator[None]:
    """
    Time a block, record it under ``operation`` and log the outcome.

    Failures are logged and re-raised unchanged.
    """
    start = time.perf_counter()
    error: Optional[BaseException] = None
    try:
        yield
    except Exception as exc:
        error = exc
        raise
    finally:
        duration_ms = (time.perf_counter() - start) * 1000
        get_metrics().record_timing(operation, duration_ms)
        context = logger.bind(operation=operation, **fields)
        if error is not None:
            context.warning(f"Operation {operation} failed after {duration_ms:.1f}ms: {error}")
        else:
            context.debug(f"Operation {operation} completed in {duration_ms:.1f}ms")
