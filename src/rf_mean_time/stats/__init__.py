"""Statistics module for Robot Framework Mean Time.

This module provides aggregation of the recorded timing history into
per-test mean, minimum and maximum durations.
"""

from rf_mean_time.stats.aggregator import (
    Aggregate,
    EmptyHistoryError,
    summarize,
    summarize_one,
)

__all__ = ["Aggregate", "EmptyHistoryError", "summarize", "summarize_one"]
