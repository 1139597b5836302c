"""Pytest configuration and shared fixtures for the factly-benchmark test suite.

This module provides fixtures for building run configurations and stored
results, writing dataset fixtures to a temporary directory, and isolating
tests from harness environment variables.
"""

import json
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pytest

from factly_benchmark.config.settings import get_settings
from factly_benchmark.models.config import BenchmarkConfig, TargetConfig
from factly_benchmark.models.results import (
    BenchmarkResult,
    CaseEvaluation,
    MetricAggregate,
    SuiteEvaluation,
)


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Clear harness environment variables and the cached settings."""
    for name in (
        "LLM_API_KEY",
        "FACTLY_BENCH_RESULTS_DIR",
        "FACTLY_BENCH_DATASETS_DIR",
        "FACTLY_BENCH_CONCURRENCY",
        "FACTLY_BENCH_JUDGE_MAX_CONCURRENCY",
        "FACTLY_BENCH_JUDGE_MAX_RETRIES",
        "FACTLY_BENCH_JUDGE_RETRY_DELAY",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def make_config() -> Callable[..., BenchmarkConfig]:
    """Factory for run configurations with test-friendly defaults."""

    def _make(name: str = "test-run", **overrides: Any) -> BenchmarkConfig:
        fields: dict[str, Any] = {
            "name": name,
            "backend_url": "http://backend.test",
            "target": TargetConfig(),
        }
        fields.update(overrides)
        return BenchmarkConfig(**fields)

    return _make


def _aggregate(mean: float, count: int = 1) -> MetricAggregate:
    """Build an aggregate with the given mean and no spread."""
    return MetricAggregate(mean=mean, stddev=0.0, min=mean, max=mean, count=count)


@pytest.fixture
def make_result() -> Callable[..., BenchmarkResult]:
    """Factory for stored results.

    ``suites`` maps suite name to ``{metric: mean}``; ``errors`` maps suite
    name to the number of errored cases to add next to one clean case.
    """

    def _make(
        name: str = "run",
        *,
        timestamp: str = "2025-01-01T00:00:00.000Z",
        suites: dict[str, dict[str, float]] | None = None,
        overall_score: float = 0.5,
        errors: dict[str, int] | None = None,
        result_id: str | None = None,
        **target: Any,
    ) -> BenchmarkResult:
        target_config = TargetConfig(**target)
        evaluations = []
        for suite, metrics in (suites or {}).items():
            cases = [CaseEvaluation(case_id=f"{suite}-ok")]
            cases += [
                CaseEvaluation(case_id=f"{suite}-err-{i}", error="HTTP 500")
                for i in range((errors or {}).get(suite, 0))
            ]
            evaluations.append(
                SuiteEvaluation(
                    suite=suite,
                    cases=cases,
                    aggregated={metric: _aggregate(v) for metric, v in metrics.items()},
                )
            )
        return BenchmarkResult(
            id=result_id or f"id-{name}",
            timestamp=timestamp,
            config=BenchmarkConfig(name=name, target=target_config),
            target=target_config,
            suites=evaluations,
            overall_score=overall_score,
            total_latency_ms=1500.0,
        )

    return _make


@pytest.fixture
def write_dataset(tmp_path: Path) -> Callable[[str, Any], Path]:
    """Write a JSON fixture under ``tmp_path/datasets`` and return its path."""

    def _write(relative: str, content: Any) -> Path:
        path = tmp_path / "datasets" / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(content), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def datasets_dir(tmp_path: Path) -> Path:
    """Path of the dataset root used by write_dataset."""
    path = tmp_path / "datasets"
    path.mkdir(exist_ok=True)
    return path
