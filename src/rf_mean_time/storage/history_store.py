"""History store for persisting per-test timings between runs.

This module provides the HistoryStore class which keeps the durable record of
every elapsed time observed for every test, keyed by the test long name.

Store format (JSON, human-editable):
    {
      "Suite.Login Should Work": [0.512, 0.498, 0.530],
      "Suite.Logout Should Work": [0.101]
    }
"""

from __future__ import annotations

import json
import logging
import math
import os
import tempfile
from pathlib import Path
from typing import Any, Union

logger = logging.getLogger(__name__)

HistoryRecord = dict[str, list[float]]
RunRecord = dict[str, float]


class StoreCorruptError(ValueError):
    """Raised when the store exists but does not hold a valid history.

    Attributes:
        path: Location of the offending store file.
    """

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Corrupt statistics store {path}: {reason}")


class StoreUnwritableError(OSError):
    """Raised when the store (or the report) cannot be written to disk."""


def write_json_atomic(file_path: Path, data: dict[str, Any]) -> None:
    """Write JSON data to file atomically.

    Writes to a temporary file in the target directory first, then renames
    it over the target path so a crash never leaves a half-written file.

    Args:
        file_path: The target file path.
        data: The dictionary to serialize as JSON.

    Raises:
        StoreUnwritableError: If the directory or file cannot be written.
    """
    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(
            suffix=".tmp", prefix=file_path.stem + "_", dir=file_path.parent
        )
    except OSError as e:
        raise StoreUnwritableError(f"Cannot write {file_path}: {e}") from e

    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
            f.write("\n")
        os.replace(tmp_path, file_path)
    except OSError as e:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise StoreUnwritableError(f"Cannot write {file_path}: {e}") from e


def _is_timing(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value) and value >= 0
    except OverflowError:
        return False


class HistoryStore:
    """Manages the statistics store file on disk.

    The store only ever grows by appending one timing per test per run.
    The sole destructive operation is reset, which leaves an empty but
    valid store behind.

    Attributes:
        path: Location of the store file.

    Example:
        >>> store = HistoryStore("/tmp/previous_runs.json")
        >>> history = store.load()
        >>> store.merge(history, {"Suite.Login": 0.42})
        >>> store.save(history)
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    def exists(self) -> bool:
        """Return True if the store file is present on disk."""
        return self.path.exists()

    def load(self) -> HistoryRecord:
        """Read the persisted history.

        A missing store and a zero-byte store both load as an empty history.

        Returns:
            Mapping of test identifier to its chronological timings.

        Raises:
            StoreCorruptError: If the content is not a mapping of string to a
                list of non-negative numbers.
        """
        if not self.path.exists():
            logger.debug("No statistics store at %s, starting empty", self.path)
            return {}

        try:
            with open(self.path, encoding="utf-8") as f:
                content = f.read()
        except UnicodeDecodeError as e:
            raise StoreCorruptError(self.path, f"not UTF-8 text ({e})") from e

        if not content.strip():
            logger.debug("Statistics store %s is empty", self.path)
            return {}

        try:
            data = json.loads(content)
        except (json.JSONDecodeError, RecursionError) as e:
            raise StoreCorruptError(self.path, f"invalid JSON ({e})") from e

        history = self._validate(data)
        logger.debug("Loaded %d test(s) from %s", len(history), self.path)
        return history

    def _validate(self, data: Any) -> HistoryRecord:
        if not isinstance(data, dict):
            raise StoreCorruptError(
                self.path, f"expected an object, got {type(data).__name__}"
            )

        history: HistoryRecord = {}
        for identifier, timings in data.items():
            if not isinstance(timings, list):
                raise StoreCorruptError(
                    self.path, f"timings for {identifier!r} are not a list"
                )
            for value in timings:
                if not _is_timing(value):
                    raise StoreCorruptError(
                        self.path, f"invalid timing {value!r} for {identifier!r}"
                    )
            history[identifier] = [float(value) for value in timings]
        return history

    @staticmethod
    def merge(history: HistoryRecord, run: RunRecord) -> HistoryRecord:
        """Append one run's timings to the history.

        Tests new to the history get a single-sample list. Tests in the
        history but absent from the run keep their timings untouched.

        Args:
            history: History to update in place.
            run: Mapping of test identifier to elapsed seconds for one run.

        Returns:
            The same history object, updated.

        Raises:
            ValueError: If a timing is negative or not finite. The history is
                left unchanged.
        """
        timings = {identifier: float(elapsed) for identifier, elapsed in run.items()}
        for identifier, elapsed in timings.items():
            if not _is_timing(elapsed):
                raise ValueError(f"Invalid timing {elapsed!r} for {identifier!r}")

        for identifier, elapsed in timings.items():
            history.setdefault(identifier, []).append(elapsed)
        return history

    def save(self, history: HistoryRecord) -> None:
        """Atomically overwrite the store with the given history.

        Raises:
            StoreUnwritableError: If the store cannot be written.
        """
        write_json_atomic(self.path, history)
        logger.debug("Saved %d test(s) to %s", len(history), self.path)

    def reset(self) -> None:
        """Discard all recorded timings, leaving an empty valid store.

        Raises:
            StoreUnwritableError: If the store cannot be written.
        """
        write_json_atomic(self.path, {})
        logger.debug("Reset statistics store %s", self.path)
