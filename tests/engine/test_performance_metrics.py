"""
Tests for PerformanceMetrics rolling statistics.
"""

import pytest
from pydantic import ValidationError

from engine.performance_metrics import PerformanceMetrics


class TestPerformanceMetrics:
    """Totals, peak and the recent window."""

    def test_empty_metrics(self):
        metrics = PerformanceMetrics()

        assert metrics.avg_time_per_animation == 0.0
        assert metrics.recent_avg_performance is None
        assert metrics.get_report().peak_batch_size == 0

    def test_totals_and_peak(self):
        metrics = PerformanceMetrics()
        metrics.record_batch_update(10, 0.01)
        metrics.record_batch_update(20, 0.03)

        assert metrics.total_animations == 30
        assert metrics.total_update_time == pytest.approx(0.04)
        assert metrics.avg_time_per_animation == pytest.approx(0.04 / 30)
        assert metrics.peak_batch_size == 20

    def test_recent_window(self):
        metrics = PerformanceMetrics(recent_window=2)
        metrics.record_batch_update(10, 1.0)
        metrics.record_batch_update(10, 0.1)
        metrics.record_batch_update(10, 0.1)

        assert metrics.recent_avg_performance == pytest.approx(0.01)

    def test_recent_average_without_animations(self):
        metrics = PerformanceMetrics()
        metrics.record_batch_update(0, 0.001)

        assert metrics.recent_avg_performance is None
        assert metrics.avg_time_per_animation == 0.0

    def test_history_is_bounded(self):
        metrics = PerformanceMetrics(max_history=3)
        for i in range(5):
            metrics.record_batch_update(i, 0.001)

        assert len(metrics.update_history) == 3
        assert metrics.update_history[0] == (2, 0.001)
        # Totals are cumulative, not windowed
        assert metrics.total_animations == 10

    def test_report_is_frozen(self):
        metrics = PerformanceMetrics()
        metrics.record_batch_update(4, 0.002)
        report = metrics.get_report()

        assert report.total_animations == 4
        assert report.recent_avg_performance == pytest.approx(0.0005)
        with pytest.raises(ValidationError):
            report.total_animations = 5

    def test_format_report(self):
        metrics = PerformanceMetrics()
        metrics.record_batch_update(20, 0.002)

        text = metrics.format_report("Batch")
        lines = text.splitlines()

        assert lines[0] == "Batch"
        assert "├─ animations: 20" in lines
        assert "├─ peak batch: 20" in lines
        assert lines[-1] == "└─ recent avg: 100.0µs"

    def test_format_report_without_data(self):
        assert "recent avg: n/a" in PerformanceMetrics().format_report()
