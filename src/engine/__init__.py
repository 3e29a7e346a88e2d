"""
Batched animation engine

- interpolation_cache: LRU cache of interpolation samples
- performance_metrics: Rolling update statistics
- animation_batch: Per-optimization-level animation groups
- optimized_manager: Top-level per-frame orchestrator
"""

__all__ = [
    "interpolation_cache",
    "performance_metrics",
    "animation_batch",
    "optimized_manager",
]
