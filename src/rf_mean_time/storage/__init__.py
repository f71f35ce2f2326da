"""Storage for historical test timings.

This module provides the statistics store that persists every elapsed time
recorded for every test across Robot Framework runs.
"""

from rf_mean_time.storage.history_store import (
    HistoryRecord,
    HistoryStore,
    RunRecord,
    StoreCorruptError,
    StoreUnwritableError,
    write_json_atomic,
)

__all__ = [
    "HistoryRecord",
    "HistoryStore",
    "RunRecord",
    "StoreCorruptError",
    "StoreUnwritableError",
    "write_json_atomic",
]
