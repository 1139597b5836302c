"""Cross-configuration comparison of benchmark results."""

from __future__ import annotations

from collections.abc import Sequence

from factly_benchmark.models.results import (
    BenchmarkResult,
    ComparisonEntry,
    ComparisonResult,
    ComparisonValue,
)
from factly_benchmark.results.polarity import is_lower_better

__all__ = ["compare_results"]


def _metric_value(result: BenchmarkResult, suite: str, metric: str) -> float:
    evaluation = result.suite(suite)
    if evaluation is None or metric not in evaluation.aggregated:
        return 0.0
    return evaluation.aggregated[metric].mean


def compare_results(results: Sequence[BenchmarkResult]) -> ComparisonResult:
    """Build a metric-by-metric comparison table.

    Every ``suite/metric`` seen in any result gets one value per result
    (0 when absent), a best config chosen by polarity, and each value's
    delta from the best. Ties go to the earliest result.

    Raises:
        ValueError: If fewer than two results are given.

    """
    if len(results) < 2:
        raise ValueError("Need at least 2 results to compare")

    keys: dict[str, tuple[str, str]] = {}
    for result in results:
        for suite in result.suites:
            for metric in suite.aggregated:
                keys.setdefault(f"{suite.suite}/{metric}", (suite.suite, metric))

    entries: list[ComparisonEntry] = []
    for key, (suite, metric) in keys.items():
        values = [
            (result.config.name, _metric_value(result, suite, metric)) for result in results
        ]
        if is_lower_better(metric):
            best_name, best_value = min(values, key=lambda v: v[1])
        else:
            best_name, best_value = max(values, key=lambda v: v[1])

        entries.append(
            ComparisonEntry(
                metric=key,
                values=[
                    ComparisonValue(config_name=name, value=value, delta=value - best_value)
                    for name, value in values
                ],
                best_config_name=best_name,
            )
        )

    entries.sort(key=lambda e: e.metric)
    return ComparisonResult(configs=[r.config.name for r in results], entries=entries)
