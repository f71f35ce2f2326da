"""Configuration for the mean time reporter."""

from __future__ import annotations

import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Union

DEFAULT_COUNT = 15
PREVIOUS_RUNS_BASENAME = "robotframework_mean_time_previous_runs.json"
REPORT_BASENAME = "robotframework_mean_time_report.txt"


def default_previous_runs_filename() -> Path:
    return Path(tempfile.gettempdir()) / PREVIOUS_RUNS_BASENAME


def default_report_filename() -> Path:
    return Path(tempfile.gettempdir()) / REPORT_BASENAME


def parse_count(value: Union[int, str]) -> int:
    """Convert a console line count, which may arrive as a listener string.

    Raises:
        ValueError: If the value is not a non-negative integer.
    """
    count = int(value)
    if count < 0:
        raise ValueError(f"count must not be negative, got {count}")
    return count


@dataclass
class MeanTimeConfig:
    """Options recognised by the listener and the CLI.

    Attributes:
        count: Number of report lines echoed to the console after a run.
        previous_runs_filename: Location of the statistics store.
        report_filename: Location of the rendered report.
    """

    count: int = DEFAULT_COUNT
    previous_runs_filename: Path = field(default_factory=default_previous_runs_filename)
    report_filename: Path = field(default_factory=default_report_filename)

    @classmethod
    def from_options(cls, **options: Any) -> MeanTimeConfig:
        """Build a config from keyword options, skipping ``None`` values.

        Raises:
            TypeError: On an unknown option name.
            ValueError: On an invalid count.
        """
        known = {"count", "previous_runs_filename", "report_filename"}
        unknown = set(options) - known
        if unknown:
            raise TypeError(f"Unknown option(s): {', '.join(sorted(unknown))}")

        config = cls()
        if options.get("count") is not None:
            config.count = parse_count(options["count"])
        if options.get("previous_runs_filename") is not None:
            config.previous_runs_filename = Path(options["previous_runs_filename"])
        if options.get("report_filename") is not None:
            config.report_filename = Path(options["report_filename"])
        return config
