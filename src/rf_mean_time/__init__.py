"""Robot Framework Mean Time - historical test duration statistics.

Use as a listener:

    robot --listener rf_mean_time.MeanTimeListener tests/
"""

__version__ = "0.1.0"

from rf_mean_time.config import MeanTimeConfig
from rf_mean_time.listener import MeanTimeListener
from rf_mean_time.reporter import record_run, reset_statistics
from rf_mean_time.stats.aggregator import EmptyHistoryError
from rf_mean_time.storage.history_store import StoreCorruptError, StoreUnwritableError

__all__ = [
    "EmptyHistoryError",
    "MeanTimeConfig",
    "MeanTimeListener",
    "StoreCorruptError",
    "StoreUnwritableError",
    "__version__",
    "record_run",
    "reset_statistics",
]
