"""Per-test summary statistics computed from the timing history."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from rf_mean_time.storage.history_store import HistoryRecord

MEAN_PRECISION = 9


class EmptyHistoryError(AssertionError):
    """Raised when a history entry holds no samples.

    Merging always appends at least one timing, so hitting this means the
    history was built or edited incorrectly.
    """


@dataclass(frozen=True)
class Aggregate:
    """Summary of every timing recorded for one test.

    Attributes:
        identifier: Test long name.
        sample_count: Number of recorded timings.
        mean: Average in seconds, rounded to 9 decimal places.
        minimum: Fastest recorded timing in seconds.
        maximum: Slowest recorded timing in seconds.
    """

    identifier: str
    sample_count: int
    mean: float
    minimum: float
    maximum: float


def summarize_one(identifier: str, timings: Sequence[float]) -> Aggregate:
    """Build the aggregate for a single test.

    Raises:
        EmptyHistoryError: If ``timings`` is empty.
    """
    if not timings:
        raise EmptyHistoryError(f"No samples recorded for {identifier!r}")

    count = len(timings)
    return Aggregate(
        identifier=identifier,
        sample_count=count,
        mean=round(sum(timings) / count, MEAN_PRECISION),
        minimum=min(timings),
        maximum=max(timings),
    )


def summarize(history: HistoryRecord) -> list[Aggregate]:
    """Compute one aggregate per test, in history order."""
    return [summarize_one(identifier, timings) for identifier, timings in history.items()]
