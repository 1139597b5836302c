"""Score history and regression detection."""

from __future__ import annotations

from factly_benchmark.config.defaults import DEFAULT_REGRESSION_THRESHOLD
from factly_benchmark.models.results import BenchmarkResult, HistoryPoint, RegressionAlert
from factly_benchmark.results.polarity import is_lower_better
from factly_benchmark.results.storage import ResultStore

__all__ = ["detect_regressions", "get_history", "history_point"]


def history_point(result: BenchmarkResult, suite: str | None = None) -> HistoryPoint:
    """Flatten a result into a history point.

    Args:
        result: Stored benchmark result.
        suite: Optional suite filter for the metric map.

    """
    metric_values: dict[str, float] = {}
    for evaluation in result.suites:
        if suite and evaluation.suite != suite:
            continue
        for name, aggregate in evaluation.aggregated.items():
            metric_values[f"{evaluation.suite}/{name}"] = aggregate.mean

    return HistoryPoint(
        timestamp=result.timestamp,
        config_name=result.config.name,
        score=result.overall_score,
        metric_values=metric_values,
    )


def get_history(store: ResultStore, suite: str | None = None) -> list[HistoryPoint]:
    """Return one point per readable stored result, oldest first.

    Corrupt or unreadable files are skipped by the store.
    """
    points = [history_point(result, suite) for _, result in store.load_all()]
    points.sort(key=lambda p: p.timestamp)
    return points


def detect_regressions(
    current: BenchmarkResult,
    previous: BenchmarkResult,
    threshold: float = DEFAULT_REGRESSION_THRESHOLD,
) -> list[RegressionAlert]:
    """Flag metrics that moved the wrong way by more than the threshold.

    Only metrics present in the same-named suite of both results are
    compared.
    """
    alerts: list[RegressionAlert] = []

    for evaluation in current.suites:
        previous_suite = previous.suite(evaluation.suite)
        if previous_suite is None:
            continue

        for name, aggregate in evaluation.aggregated.items():
            previous_aggregate = previous_suite.aggregated.get(name)
            if previous_aggregate is None:
                continue

            delta = aggregate.mean - previous_aggregate.mean
            regressed = delta > threshold if is_lower_better(name) else delta < -threshold
            if regressed:
                alerts.append(
                    RegressionAlert(
                        metric=name,
                        suite=evaluation.suite,
                        previous_value=previous_aggregate.mean,
                        current_value=aggregate.mean,
                        delta=delta,
                        config_name=current.config.name,
                    )
                )

    return alerts
