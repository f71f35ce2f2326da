"""Unit tests for the reporting pipeline."""

import json
from pathlib import Path

import pytest

from rf_mean_time.config import MeanTimeConfig
from rf_mean_time.report import Report
from rf_mean_time.reporter import (
    build_report,
    echo_report,
    record_run,
    reset_statistics,
    write_report,
)
from rf_mean_time.storage import HistoryStore, StoreCorruptError, StoreUnwritableError


@pytest.fixture
def config(tmp_path: Path) -> MeanTimeConfig:
    """Reporter options pointing into the test's temp directory."""
    return MeanTimeConfig(
        count=15,
        previous_runs_filename=tmp_path / "previous_runs.json",
        report_filename=tmp_path / "report.txt",
    )


class TestBuildReport:
    """Tests for build_report function."""

    def test_report_from_history(self) -> None:
        """One line per test, title from the first entry's samples."""
        report = build_report({"test_a": [0.4, 0.6, 0.5], "test_b": [0.1, 0.1, 0.1]})

        assert report.title.endswith("(Samples: 3)")
        assert len(report.lines) == 2
        assert report.lines[0] == (
            "Avg: 0.500000000  Min: 0.400000000  Max: 0.600000000  Description: test_a\n"
        )


class TestWriteReport:
    """Tests for write_report function."""

    def test_overwrites_report_file(self, tmp_path: Path) -> None:
        """The report file is replaced wholesale."""
        report_file = tmp_path / "report.txt"
        report_file.write_text("stale content\n" * 10, encoding="utf-8")
        report = Report(title="Title", lines=["line\n"])

        write_report(report, report_file)

        assert report_file.read_text(encoding="utf-8") == "Title\nline\n"

    def test_unwritable_report_raises(self, tmp_path: Path) -> None:
        """A report path under a file cannot be written."""
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")

        with pytest.raises(StoreUnwritableError):
            write_report(Report(title="t"), blocker / "report.txt")


class TestEchoReport:
    """Tests for echo_report function."""

    def test_prints_title_and_top_lines(self, capsys: pytest.CaptureFixture) -> None:
        """Only the first count lines are displayed."""
        report = Report(title="My Title", lines=["first\n", "second\n", "third\n"])

        echo_report(report, 2)

        out = capsys.readouterr().out
        assert "My Title" in out
        assert "first\nsecond\n" in out
        assert "third" not in out


class TestRecordRun:
    """Tests for record_run function."""

    def test_first_run_creates_store(self, config: MeanTimeConfig) -> None:
        """An empty store gets one sample per test."""
        record_run({"test_a": 0.5, "test_b": 0.1}, config)

        history = HistoryStore(config.previous_runs_filename).load()
        assert history == {"test_a": [0.5], "test_b": [0.1]}

    def test_first_run_report_order(self, config: MeanTimeConfig) -> None:
        """The slower test is listed first."""
        report = record_run({"test_a": 0.5, "test_b": 0.1}, config)

        assert len(report.lines) == 2
        assert report.lines[0].endswith("Description: test_a\n")
        assert report.lines[1].endswith("Description: test_b\n")

    def test_existing_history_is_extended(self, config: MeanTimeConfig) -> None:
        """A new run is appended after the recorded timings."""
        HistoryStore(config.previous_runs_filename).save({"test_a": [0.4, 0.6]})

        report = record_run({"test_a": 0.5}, config)

        history = HistoryStore(config.previous_runs_filename).load()
        assert history == {"test_a": [0.4, 0.6, 0.5]}
        assert report.title.endswith("(Samples: 3)")
        assert report.lines == [
            "Avg: 0.500000000  Min: 0.400000000  Max: 0.600000000  Description: test_a\n"
        ]

    def test_report_file_written(self, config: MeanTimeConfig) -> None:
        """The full report lands in the report file."""
        report = record_run({"test_a": 0.5}, config)

        assert config.report_filename.read_text(encoding="utf-8") == report.text()

    def test_console_shows_count_lines(
        self, tmp_path: Path, capsys: pytest.CaptureFixture
    ) -> None:
        """Console output is limited to the configured count."""
        config = MeanTimeConfig(
            count=1,
            previous_runs_filename=tmp_path / "store.json",
            report_filename=tmp_path / "report.txt",
        )

        record_run({"slow": 0.9, "fast": 0.1}, config)

        out = capsys.readouterr().out
        assert "Robot Framework Mean Time Report (Samples: 1)" in out
        assert "Description: slow" in out
        assert "Description: fast" not in out

    def test_corrupt_store_aborts_run(self, config: MeanTimeConfig) -> None:
        """Nothing is merged or written when the store is corrupt."""
        config.previous_runs_filename.write_text("{broken", encoding="utf-8")

        with pytest.raises(StoreCorruptError):
            record_run({"test_a": 0.5}, config)

        assert config.previous_runs_filename.read_text(encoding="utf-8") == "{broken"
        assert not config.report_filename.exists()

    def test_store_is_plain_json(self, config: MeanTimeConfig) -> None:
        """The store stays human-editable JSON."""
        record_run({"Suite.Test": 1.25}, config)

        data = json.loads(config.previous_runs_filename.read_text(encoding="utf-8"))
        assert data == {"Suite.Test": [1.25]}


class TestResetStatistics:
    """Tests for reset_statistics function."""

    def test_reset_clears_history(self, config: MeanTimeConfig) -> None:
        """Recorded timings are discarded."""
        record_run({"test_a": 0.5}, config)

        reset_statistics(config.previous_runs_filename)

        assert HistoryStore(config.previous_runs_filename).load() == {}

    def test_run_after_reset_starts_over(self, config: MeanTimeConfig) -> None:
        """The next run after a reset is the first sample again."""
        record_run({"test_a": 0.5}, config)
        reset_statistics(str(config.previous_runs_filename))

        report = record_run({"test_a": 0.7}, config)

        assert report.title.endswith("(Samples: 1)")
        assert HistoryStore(config.previous_runs_filename).load() == {"test_a": [0.7]}
