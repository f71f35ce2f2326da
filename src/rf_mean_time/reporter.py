"""Mean time reporting pipeline.

One run flows through: load history -> merge run -> save history ->
summarize -> render -> write report file -> echo the slowest tests.
History is passed explicitly between steps, nothing is cached across runs.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

import click

from rf_mean_time.config import MeanTimeConfig
from rf_mean_time.report.renderer import Report, render, sample_count, style_line, top_n
from rf_mean_time.stats.aggregator import summarize
from rf_mean_time.storage.history_store import (
    HistoryRecord,
    HistoryStore,
    RunRecord,
    StoreUnwritableError,
)

logger = logging.getLogger(__name__)


def build_report(history: HistoryRecord) -> Report:
    """Summarize the history and render it as a sorted report."""
    return render(summarize(history), sample_count(history))


def write_report(report: Report, report_filename: Path) -> Path:
    """Overwrite the report file with the rendered report.

    Raises:
        StoreUnwritableError: If the report cannot be written.
    """
    try:
        report_filename.parent.mkdir(parents=True, exist_ok=True)
        report_filename.write_text(report.text(), encoding="utf-8")
    except OSError as e:
        raise StoreUnwritableError(f"Cannot write {report_filename}: {e}") from e
    logger.debug("Wrote report with %d line(s) to %s", len(report.lines), report_filename)
    return report_filename


def echo_report(report: Report, count: int) -> None:
    """Print the report title and the first ``count`` lines to stdout."""
    click.echo()
    click.echo(click.style(report.title, underline=True))
    for line in top_n(report, count):
        click.echo(style_line(line), nl=False)


def record_run(run: RunRecord, config: Optional[MeanTimeConfig] = None) -> Report:
    """Merge one run into the statistics store and publish the new report.

    Args:
        run: Mapping of test identifier to elapsed seconds.
        config: Reporter options, defaults when omitted.

    Returns:
        The rendered report.

    Raises:
        StoreCorruptError: If the existing store cannot be parsed. Nothing
            is merged or written in that case.
        StoreUnwritableError: If the store or report cannot be written.
    """
    config = config or MeanTimeConfig()
    store = HistoryStore(config.previous_runs_filename)

    history = store.load()
    store.merge(history, run)
    store.save(history)
    logger.debug("Merged %d timing(s) into %s", len(run), store.path)

    report = build_report(history)
    write_report(report, config.report_filename)
    echo_report(report, config.count)
    return report


def reset_statistics(previous_runs_filename: Optional[Union[str, Path]] = None) -> None:
    """Discard every recorded timing in the statistics store.

    Args:
        previous_runs_filename: Store location, the default one when omitted.
    """
    config = MeanTimeConfig.from_options(previous_runs_filename=previous_runs_filename)
    HistoryStore(config.previous_runs_filename).reset()
