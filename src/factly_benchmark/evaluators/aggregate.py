"""Aggregation of per-case metrics into per-suite statistics."""

from __future__ import annotations

import math
from collections.abc import Sequence

from factly_benchmark.models.results import AggregatedMetrics, CaseEvaluation, MetricAggregate

__all__ = ["aggregate_metrics", "suite_mean"]


def aggregate_metrics(cases: Sequence[CaseEvaluation]) -> AggregatedMetrics:
    """Compute mean/stddev/min/max/count per metric name.

    Each metric is aggregated only over the values actually recorded under
    its name; errored cases carry no metrics and contribute nothing. The
    standard deviation is the population one.
    """
    by_name: dict[str, list[float]] = {}
    for case in cases:
        for metric in case.metrics:
            by_name.setdefault(metric.name, []).append(metric.value)

    aggregated: AggregatedMetrics = {}
    for name, values in by_name.items():
        mean = sum(values) / len(values)
        variance = sum((v - mean) ** 2 for v in values) / len(values)
        aggregated[name] = MetricAggregate(
            mean=mean,
            stddev=math.sqrt(variance),
            min=min(values),
            max=max(values),
            count=len(values),
        )
    return aggregated


def suite_mean(aggregated: AggregatedMetrics) -> float | None:
    """Mean of a suite's metric means, or None when it has no metrics."""
    if not aggregated:
        return None
    return sum(a.mean for a in aggregated.values()) / len(aggregated)
