"""
Tests for in-process metrics and request ids.
"""
import re

import pytest

from colorio.utils.ids import generate_request_id
from colorio.utils.metrics import MetricsCollector, get_metrics, performance_monitor


class TestMetricsCollector:
    """Test counters and timing statistics"""

    def setup_method(self):
        self.metrics = MetricsCollector()

    def test_request_counters(self):
        self.metrics.increment_request_count("extract")
        self.metrics.increment_request_count("extract")
        self.metrics.increment_request_count("convert")
        counters = self.metrics.get_counters()
        assert counters["colors_requests_total"] == 3
        assert counters["colors_requests_total_extract"] == 2
        assert counters["colors_requests_total_convert"] == 1

    def test_timing_stats(self):
        for duration in [10.0, 20.0, 30.0, 40.0, 50.0]:
            self.metrics.record_timing("kmeans", duration)
        stats = self.metrics.get_timing_stats()["kmeans_duration_ms"]
        assert stats["count"] == 5
        assert stats["mean"] == 30.0
        assert stats["min"] == 10.0
        assert stats["max"] == 50.0
        assert stats["p50"] == 30.0
        assert stats["p95"] == pytest.approx(48.0)

    def test_empty_stats(self):
        assert self.metrics.get_timing_stats() == {}
        assert self.metrics.get_palette_size_stats() == {}

    def test_reset(self):
        self.metrics.increment_failure_count("empty_image")
        self.metrics.record_palette_size(4)
        self.metrics.reset()
        summary = self.metrics.get_summary()
        assert summary["counters"] == {}
        assert summary["palette_size_stats"] == {}


class TestPerformanceMonitor:
    """Test stage timing"""

    def test_records_timing(self):
        with performance_monitor("median_cut"):
            pass
        assert get_metrics().get_timing_stats()["median_cut_duration_ms"]["count"] == 1

    def test_failure_propagates_and_is_timed(self):
        with pytest.raises(RuntimeError):
            with performance_monitor("dedup"):
                raise RuntimeError("boom")
        assert "dedup_duration_ms" in get_metrics().get_timing_stats()


def test_request_id_format():
    request_id = generate_request_id()
    assert re.fullmatch(r"pal-\d{14}-[0-9a-f]{8}", request_id)
    assert generate_request_id() != request_id
    assert generate_request_id("x").startswith("x-")
