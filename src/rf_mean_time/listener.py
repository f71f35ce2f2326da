"""MeanTimeListener - Robot Framework Listener API v3 implementation.

This module provides the listener that records the elapsed time of every test
during a run and, once execution closes, merges those timings into the
statistics store and publishes the mean time report.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Union

from robot.api.interfaces import ListenerV3

from rf_mean_time.config import MeanTimeConfig
from rf_mean_time.report.renderer import Report
from rf_mean_time.reporter import record_run, reset_statistics
from rf_mean_time.storage.history_store import RunRecord

logger = logging.getLogger(__name__)


def elapsed_seconds(result: Any) -> float:
    """Extract the elapsed time of a result object in seconds.

    Robot Framework 7 exposes ``elapsed_time`` as a timedelta; older
    versions and test doubles may hand over a plain number of seconds.

    Args:
        result: Test result object.

    Returns:
        Elapsed seconds, 0.0 when the result carries no timing.
    """
    if not hasattr(result, "elapsed_time"):
        return 0.0
    elapsed = result.elapsed_time
    if hasattr(elapsed, "total_seconds"):
        return float(elapsed.total_seconds())
    return float(elapsed)


class MeanTimeListener(ListenerV3):
    """Robot Framework Listener reporting mean, min and max test durations.

    Every run appends each test's elapsed time to a statistics store. After
    the run a report of all tests, slowest average first, is written to a
    file and the top lines are echoed to the console.

    Args:
        count: Number of report lines printed to the console.
        previous_runs_filename: Path of the statistics store.
        report_filename: Path of the rendered report.

    Attributes:
        ROBOT_LISTENER_API_VERSION: API version (always 3).

    Example:
        ```bash
        robot --listener rf_mean_time.MeanTimeListener:count=10 tests/
        ```
    """

    ROBOT_LISTENER_API_VERSION = 3

    def __init__(
        self,
        count: Union[int, str, None] = None,
        previous_runs_filename: Optional[str] = None,
        report_filename: Optional[str] = None,
    ) -> None:
        self.config = MeanTimeConfig.from_options(
            count=count,
            previous_runs_filename=previous_runs_filename,
            report_filename=report_filename,
        )
        self.current_run: RunRecord = {}
        self.report: Optional[Report] = None

    @staticmethod
    def reset_statistics(previous_runs_filename: Optional[str] = None) -> None:
        """Reset the statistics store, see ``rf_mean_time.reset_statistics``."""
        reset_statistics(previous_runs_filename)

    def end_test(self, data: Any, result: Any) -> None:
        """Called when a test case finishes.

        Records the test's elapsed time under its long name. A test name seen
        twice in one run keeps the last timing.

        Args:
            data: Test execution data (contains longname).
            result: Test result object (contains elapsed_time).
        """
        self.current_run[data.longname] = elapsed_seconds(result)

    def close(self) -> None:
        """Called when the whole execution ends.

        Merges the collected timings into the store and publishes the
        report. Nothing is written when no test ran.
        """
        if not self.current_run:
            logger.debug("No test timings recorded, statistics left unchanged")
            return

        self.report = record_run(self.current_run, self.config)
        self.current_run = {}
