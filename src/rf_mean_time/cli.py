"""Command-line interface for Robot Framework Mean Time."""

from typing import Optional

import click

from rf_mean_time import __version__
from rf_mean_time.config import MeanTimeConfig
from rf_mean_time.report.renderer import format_seconds
from rf_mean_time.reporter import build_report, echo_report, write_report
from rf_mean_time.stats.aggregator import summarize_one
from rf_mean_time.storage.history_store import (
    HistoryStore,
    StoreCorruptError,
    StoreUnwritableError,
)

previous_runs_option = click.option(
    "--previous-runs",
    "previous_runs",
    type=click.Path(dir_okay=False),
    default=None,
    help="Statistics store path. Defaults to a file in the temp directory.",
)


@click.group()
@click.version_option(version=__version__, prog_name="mean-time")
def main() -> None:
    """Robot Framework Mean Time - slowest tests across runs."""
    pass


@main.command()
@previous_runs_option
def reset(previous_runs: Optional[str]) -> None:
    """Discard all recorded timings.

    Leaves an empty, valid statistics store behind. Running it twice has the
    same effect as running it once.
    """
    config = MeanTimeConfig.from_options(previous_runs_filename=previous_runs)
    store = HistoryStore(config.previous_runs_filename)
    try:
        store.reset()
    except StoreUnwritableError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1) from None
    click.echo(f"Statistics reset: {store.path}")


@main.command()
@previous_runs_option
@click.option(
    "--report-file",
    "report_file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Report output path. Defaults to a file in the temp directory.",
)
@click.option(
    "--count",
    "-n",
    type=click.IntRange(min=0),
    default=None,
    help="Number of report lines to display (default 15).",
)
def report(previous_runs: Optional[str], report_file: Optional[str], count: Optional[int]) -> None:
    """Rebuild the report from the recorded timings.

    Nothing is merged into the store. The report file is overwritten and
    the slowest tests are displayed.
    """
    config = MeanTimeConfig.from_options(
        count=count,
        previous_runs_filename=previous_runs,
        report_filename=report_file,
    )
    store = HistoryStore(config.previous_runs_filename)

    try:
        history = store.load()
    except StoreCorruptError as e:
        click.echo(f"Error: {e}", err=True)
        click.echo("Fix the file by hand or run 'mean-time reset'.", err=True)
        raise SystemExit(1) from None

    if not history:
        click.echo("No statistics recorded yet.")
        return

    rendered = build_report(history)
    try:
        write_report(rendered, config.report_filename)
    except StoreUnwritableError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1) from None

    echo_report(rendered, config.count)
    click.echo(f"\nFull report: {config.report_filename}")


@main.command()
@click.argument("identifier")
@previous_runs_option
def info(identifier: str, previous_runs: Optional[str]) -> None:
    """Display the recorded timings of a single test.

    IDENTIFIER is the test long name, e.g. 'Suite.Login Should Work'.
    """
    config = MeanTimeConfig.from_options(previous_runs_filename=previous_runs)

    try:
        history = HistoryStore(config.previous_runs_filename).load()
    except StoreCorruptError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1) from None

    timings = history.get(identifier)
    if not timings:
        click.echo(f"Error: No timings recorded for '{identifier}'", err=True)
        raise SystemExit(1)

    aggregate = summarize_one(identifier, timings)
    click.echo(f"\nTest: {click.style(identifier, bold=True)}")
    click.echo(f"Samples: {aggregate.sample_count}")
    click.echo(f"Avg: {format_seconds(aggregate.mean).rstrip()}")
    click.echo(f"Min: {format_seconds(aggregate.minimum).rstrip()}")
    click.echo(f"Max: {format_seconds(aggregate.maximum).rstrip()}")

    click.echo(f"\nTimings ({len(timings)}):")
    for index, elapsed in enumerate(timings, start=1):
        click.echo(f"  {index:>3}. {format_seconds(elapsed).rstrip()}")


if __name__ == "__main__":
    main()
