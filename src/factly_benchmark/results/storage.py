"""Result storage for saving and loading benchmark runs.

This module persists each BenchmarkResult as one JSON file in the
results directory and scans that directory for listing, history and
suggestions.
"""

from __future__ import annotations

import json
import re
from pathlib import Path

from pydantic import ValidationError

from factly_benchmark.config.defaults import ERROR_STATUS_THRESHOLD
from factly_benchmark.logging_config import get_logger
from factly_benchmark.models.results import BenchmarkResult, ResultSummary
from factly_benchmark.results.exceptions import ResultNotFoundError, StorageError

__all__ = ["ResultStore", "result_filename"]

logger = get_logger(__name__)

_TIMESTAMP_SEPARATORS = re.compile(r"[:.]")


def result_filename(result: BenchmarkResult) -> str:
    """Derive the artifact filename from the timestamp and target label.

    Example: ``2025-01-31T10-00-00-000Z_openai-gpt-4o-t0.2.json``.
    """
    timestamp = _TIMESTAMP_SEPARATORS.sub("-", result.timestamp)
    label = result.target.label.replace("/", "-").replace("\\", "-")
    return f"{timestamp}_{label}.json"


class ResultStore:
    """Manages storage and retrieval of benchmark results.

    One JSON file per run; filenames start with the run timestamp, so
    sorting them orders the runs chronologically.

    Attributes:
        results_dir: Directory holding result files.

    """

    def __init__(self, results_dir: Path | str) -> None:
        """Initialize the store.

        Args:
            results_dir: Directory holding result files.

        """
        self.results_dir = Path(results_dir)

    def save(self, result: BenchmarkResult) -> Path:
        """Save a result to its JSON file.

        Args:
            result: The result to save.

        Returns:
            Path to the saved file.

        Raises:
            StorageError: If the file cannot be written.

        """
        self.results_dir.mkdir(parents=True, exist_ok=True)
        file_path = self.results_dir / result_filename(result)

        try:
            with file_path.open("w", encoding="utf-8") as f:
                json.dump(result.to_json_dict(), f, indent=2)
        except OSError as e:
            raise StorageError(f"Failed to save result to {file_path}: {e}") from e

        logger.info("result_saved", result_id=result.id, path=str(file_path))
        return file_path

    def load(self, path: Path | str) -> BenchmarkResult:
        """Load a result from a JSON file.

        Args:
            path: Path of the result file.

        Returns:
            The loaded result.

        Raises:
            ResultNotFoundError: If the file does not exist.
            StorageError: If the file cannot be read, parsed or validated.

        """
        file_path = Path(path)
        if not file_path.is_file():
            raise ResultNotFoundError(f"Result file not found: {file_path}")

        try:
            with file_path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise StorageError(f"Failed to parse result from {file_path}: {e}") from e
        except OSError as e:
            raise StorageError(f"Failed to read result from {file_path}: {e}") from e

        try:
            return BenchmarkResult.model_validate(data)
        except ValidationError as e:
            raise StorageError(f"Failed to validate result from {file_path}: {e}") from e

    def files(self) -> list[Path]:
        """Return every result file, newest first."""
        if not self.results_dir.is_dir():
            return []
        return sorted(self.results_dir.glob("*.json"), reverse=True)

    def load_all(self) -> list[tuple[Path, BenchmarkResult]]:
        """Load every readable result, newest first.

        Unreadable or invalid files are logged and skipped.
        """
        loaded: list[tuple[Path, BenchmarkResult]] = []
        for file_path in self.files():
            try:
                loaded.append((file_path, self.load(file_path)))
            except StorageError as e:
                logger.warning("result_load_failed", path=str(file_path), error=str(e))
        return loaded

    def list_results(self) -> list[ResultSummary]:
        """Summarize every readable result, newest first."""
        return [_summarize(path, result) for path, result in self.load_all()]

    def existing_names(self) -> set[str]:
        """Return the config names used by stored results."""
        return {result.config.name for _, result in self.load_all()}

    def find_by_id(self, result_id: str) -> tuple[Path, BenchmarkResult]:
        """Find a stored result by its id.

        Raises:
            ResultNotFoundError: If no stored result has the id.

        """
        for file_path, result in self.load_all():
            if result.id == result_id:
                return file_path, result
        raise ResultNotFoundError(f"No result with id '{result_id}'")

    def delete(self, result_id: str) -> Path:
        """Delete the stored result with the given id.

        Returns:
            Path of the deleted file.

        Raises:
            ResultNotFoundError: If no stored result has the id.
            StorageError: If the file cannot be removed.

        """
        file_path, _ = self.find_by_id(result_id)
        try:
            file_path.unlink()
        except OSError as e:
            raise StorageError(f"Failed to delete result {file_path}: {e}") from e

        logger.info("result_deleted", result_id=result_id, path=str(file_path))
        return file_path


def _summarize(file_path: Path, result: BenchmarkResult) -> ResultSummary:
    total_cases = sum(len(suite.cases) for suite in result.suites)
    error_count = sum(suite.error_count for suite in result.suites)
    error_rate = error_count / total_cases if total_cases else 0.0

    return ResultSummary(
        id=result.id,
        timestamp=result.timestamp,
        config_name=result.config.name,
        overall_score=result.overall_score,
        file_path=str(file_path),
        file_name=file_path.name,
        target=result.target,
        suites_count=len(result.suites),
        total_latency_ms=result.total_latency_ms,
        cost=result.cost,
        error_count=error_count,
        error_rate=error_rate,
        status="error" if error_rate > ERROR_STATUS_THRESHOLD else "success",
    )
