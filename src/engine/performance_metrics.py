"""
Performance Metrics - rolling statistics for batch updates

Cumulative totals plus a bounded history of (animation_count, seconds)
pairs. Nothing is ever reset; create a new collector to start over.
"""

from collections import deque
from typing import Deque, Optional, Tuple

from models.reports import PerformanceReport
from utils.logger import tree_lines

DEFAULT_HISTORY = 100
DEFAULT_RECENT_WINDOW = 10


def _format_seconds(seconds: Optional[float]) -> str:
    if seconds is None:
        return "n/a"
    if seconds >= 1.0:
        return f"{seconds:.3f}s"
    if seconds >= 0.001:
        return f"{seconds * 1000:.3f}ms"
    return f"{seconds * 1_000_000:.1f}µs"


class PerformanceMetrics:
    """
    Batch update statistics collector

    Args:
        max_history: Length of the rolling history (oldest dropped first)
        recent_window: How many trailing history entries recent_avg_performance uses
    """

    def __init__(self, max_history: int = DEFAULT_HISTORY, recent_window: int = DEFAULT_RECENT_WINDOW):
        self.total_animations = 0
        self.total_update_time = 0.0
        self.peak_batch_size = 0
        self.recent_window = max(1, recent_window)
        self.update_history: Deque[Tuple[int, float]] = deque(maxlen=max(1, max_history))

    def record_batch_update(self, animation_count: int, update_time: float) -> None:
        """Record one update of `animation_count` animations taking `update_time` seconds"""
        self.total_animations += animation_count
        self.total_update_time += update_time
        self.peak_batch_size = max(self.peak_batch_size, animation_count)
        self.update_history.append((animation_count, update_time))

    @property
    def avg_time_per_animation(self) -> float:
        if self.total_animations == 0:
            return 0.0
        return self.total_update_time / self.total_animations

    @property
    def recent_avg_performance(self) -> Optional[float]:
        """Seconds per animation over the most recent updates (None without data)"""
        if not self.update_history:
            return None

        recent = list(self.update_history)[-self.recent_window:]
        total_time = sum(seconds for _, seconds in recent)
        total_animations = sum(count for count, _ in recent)

        if total_animations == 0:
            return None
        return total_time / total_animations

    def get_report(self) -> PerformanceReport:
        return PerformanceReport(
            total_animations=self.total_animations,
            total_update_time=self.total_update_time,
            avg_time_per_animation=self.avg_time_per_animation,
            peak_batch_size=self.peak_batch_size,
            recent_avg_performance=self.recent_avg_performance,
        )

    def format_report(self, title: str = "Animation performance") -> str:
        """
        Human-readable report

            Animation performance
            ├─ animations: 1200
            ├─ total time: 18.000ms
            ├─ avg / animation: 15.0µs
            ├─ peak batch: 12
            └─ recent avg: 14.0µs
        """
        details = [
            f"animations: {self.total_animations}",
            f"updates recorded: {len(self.update_history)}",
            f"total time: {_format_seconds(self.total_update_time)}",
            f"avg / animation: {_format_seconds(self.avg_time_per_animation)}",
            f"peak batch: {self.peak_batch_size}",
            f"recent avg: {_format_seconds(self.recent_avg_performance)}",
        ]
        return "\n".join([title] + tree_lines(details, indent=""))
