"""Text rendering of the mean time report.

Each test gets one line of the following form, ready for ``head``:

    Avg: 0.055555500  Min: 0.049876500  Max: 0.061234500  Description: Suite.Test

Numbers carry 9 fractional digits and are padded to 12 characters. The body
is sorted by the whole line in descending order. Since every line starts with
the mean, this lists the slowest tests first as long as all means have the
same number of integer digits; equal means fall back to min, max and then the
test name, all descending.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

import click

from rf_mean_time.stats.aggregator import Aggregate
from rf_mean_time.storage.history_store import HistoryRecord

AVG_LABEL = "Avg:"
MIN_LABEL = "Min:"
MAX_LABEL = "Max:"
DES_LABEL = "Description:"

COLUMN_WIDTH = 12
FRACTION_DIGITS = 9

REPORT_NAME = "Robot Framework Mean Time Report"

_LABEL_COLORS = (
    (AVG_LABEL, "yellow"),
    (MIN_LABEL, "green"),
    (MAX_LABEL, "red"),
    (DES_LABEL, "blue"),
)


@dataclass
class Report:
    """A rendered report: one title line and the sorted body lines.

    Attributes:
        title: Report heading, without line terminator.
        lines: Body lines, each terminated with a newline.
    """

    title: str
    lines: list[str] = field(default_factory=list)

    def text(self) -> str:
        """Return the report exactly as written to the report file."""
        return self.title + "\n" + "".join(self.lines)


def format_seconds(value: float) -> str:
    """Format a duration with 9 fractional digits, padded to the column width.

    Examples:
        >>> format_seconds(0.5)
        '0.500000000 '
        >>> format_seconds(12.25)
        '12.250000000'
    """
    return f"{value:.{FRACTION_DIGITS}f}".ljust(COLUMN_WIDTH)


def format_line(aggregate: Aggregate) -> str:
    """Render one report line for a test aggregate."""
    return (
        f"{AVG_LABEL} {format_seconds(aggregate.mean)} "
        f"{MIN_LABEL} {format_seconds(aggregate.minimum)} "
        f"{MAX_LABEL} {format_seconds(aggregate.maximum)} "
        f"{DES_LABEL} {aggregate.identifier}\n"
    )


def report_title(samples: int) -> str:
    """Heading shared by the report file and the console output."""
    return f"{REPORT_NAME} (Samples: {samples})"


def sample_count(history: HistoryRecord) -> int:
    """Return the number of runs shown in the report title.

    Reads the sample count of the first test in the history and assumes
    every test has the same number of samples. Tests added after the first
    run make this an overestimate for them; reset the statistics to realign.
    """
    for timings in history.values():
        return len(timings)
    return 0


def render(aggregates: Iterable[Aggregate], samples: int) -> Report:
    """Build the report from test aggregates.

    Args:
        aggregates: One aggregate per test, in any order.
        samples: Count displayed in the title, see ``sample_count``.

    Returns:
        Report whose lines are sorted in descending text order.
    """
    lines = sorted((format_line(aggregate) for aggregate in aggregates), reverse=True)
    return Report(title=report_title(samples), lines=lines)


def top_n(report: Report, n: int) -> list[str]:
    """Return the first ``n`` body lines of the report."""
    return report.lines[: max(n, 0)]


def style_line(line: str) -> str:
    """Colour the labels of a report line for terminal output."""
    for label, color in _LABEL_COLORS:
        line = line.replace(label, click.style(label, fg=color), 1)
    return line
