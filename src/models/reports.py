"""
Diagnostic snapshots - Pydantic models for performance and cache statistics

Read-only views handed to diagnostics tooling. model_dump() gives plain dicts.
"""

from typing import Optional

from pydantic import BaseModel, Field


class PerformanceReport(BaseModel):
    """Cumulative and recent batch update statistics"""
    total_animations: int = Field(description="Animations processed across all recorded updates")
    total_update_time: float = Field(description="Total update time in seconds")
    avg_time_per_animation: float = Field(description="Average seconds per processed animation")
    peak_batch_size: int = Field(description="Largest animation count seen in a single update")
    recent_avg_performance: Optional[float] = Field(
        None,
        description="Average seconds per animation over the most recent updates"
    )

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "total_animations": 1200,
                "total_update_time": 0.018,
                "avg_time_per_animation": 0.000015,
                "peak_batch_size": 12,
                "recent_avg_performance": 0.000014
            }
        }


class CacheStats(BaseModel):
    """Interpolation cache hit/miss accounting"""
    hits: int = Field(description="Lookups answered from a stored sample")
    misses: int = Field(description="Lookups that had to compute a value")
    hit_rate: float = Field(description="hits / (hits + misses), 0.0 with no lookups")
    cache_size: int = Field(description="Number of cached keys")
    max_size: int = Field(description="Capacity before LRU eviction")

    class Config:
        frozen = True
