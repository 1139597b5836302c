"""Evaluation and result models.

This module defines the Pydantic models produced by evaluation and stored
as run artifacts: per-case metric scores, per-suite aggregates, the full
benchmark result and the derived comparison/history views.
"""

from __future__ import annotations

from typing import Any

from pydantic import Field

from factly_benchmark.models.base import BaseSchema
from factly_benchmark.models.config import BenchmarkConfig, TargetConfig
from factly_benchmark.models.enums import MetricType

__all__ = [
    "AggregatedMetrics",
    "BenchmarkResult",
    "CaseEvaluation",
    "ComparisonEntry",
    "ComparisonResult",
    "ComparisonValue",
    "CostEstimate",
    "GapPoint",
    "HistoryPoint",
    "MetricAggregate",
    "MetricScore",
    "RegressionAlert",
    "ResultSummary",
    "SuiteEvaluation",
    "Suggestion",
    "SuggestionGap",
    "TokenUsage",
]


class MetricScore(BaseSchema):
    """A single named metric value for one case.

    Judge-derived values are normalized to [0, 1]; automated metrics may be
    raw counts (heading_count, section_count, ...) or ratios.
    """

    name: str
    value: float
    type: MetricType = MetricType.auto
    details: str | None = None


class CaseEvaluation(BaseSchema):
    """Metrics for one case; metrics is empty when the case errored."""

    case_id: str
    metrics: list[MetricScore] = Field(default_factory=list)
    error: str | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None


class MetricAggregate(BaseSchema):
    """Summary statistics of one metric over the cases that produced it."""

    mean: float
    stddev: float
    min: float
    max: float
    count: int


AggregatedMetrics = dict[str, MetricAggregate]


class SuiteEvaluation(BaseSchema):
    """All case evaluations of one suite plus their aggregate."""

    suite: str
    cases: list[CaseEvaluation] = Field(default_factory=list)
    aggregated: AggregatedMetrics = Field(default_factory=dict)

    @property
    def error_count(self) -> int:
        return sum(1 for case in self.cases if case.failed)


class TokenUsage(BaseSchema):
    """Token counts reported by a provider."""

    input_tokens: int = 0
    output_tokens: int = 0
    total_tokens: int = 0

    @classmethod
    def from_usage(cls, usage: Any) -> TokenUsage | None:
        """Read a provider `usage` block.

        Accepts `input_tokens`/`output_tokens` or `prompt_tokens`/
        `completion_tokens`. Counts that are not numbers read as 0; anything
        but a mapping yields None.
        """
        if not isinstance(usage, dict):
            return None
        input_tokens = _count(usage, "input_tokens", "prompt_tokens")
        output_tokens = _count(usage, "output_tokens", "completion_tokens")
        return cls(
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            total_tokens=input_tokens + output_tokens,
        )


def _count(usage: dict[str, Any], *keys: str) -> int:
    for key in keys:
        value = usage.get(key)
        if value is None:
            continue
        if isinstance(value, bool):
            return 0
        try:
            return max(int(float(value)), 0)
        except (TypeError, ValueError, OverflowError):
            return 0
    return 0


class CostEstimate(BaseSchema):
    """Token usage with its estimated price."""

    tokens: TokenUsage = Field(default_factory=TokenUsage)
    estimated_usd: float = 0.0


class BenchmarkResult(BaseSchema):
    """Complete outcome of one benchmark run, persisted as one JSON artifact.

    Attributes:
        id: Opaque unique identifier.
        timestamp: ISO-8601 UTC timestamp of the run.
        config: Configuration the run was executed with.
        target: Target configuration under test.
        suites: Evaluation of every suite that was run.
        overall_score: Unweighted mean of per-suite mean-of-metric-means.
        total_latency_ms: Sum of backend latencies across all runner results.
        cost: Optional token/cost estimate.

    """

    id: str
    timestamp: str
    config: BenchmarkConfig
    target: TargetConfig
    suites: list[SuiteEvaluation] = Field(default_factory=list)
    overall_score: float = 0.0
    total_latency_ms: float = 0.0
    cost: CostEstimate | None = None

    def suite(self, name: str) -> SuiteEvaluation | None:
        """Return the evaluation of the named suite, if it was run."""
        for suite in self.suites:
            if suite.suite == name:
                return suite
        return None


class ResultSummary(BaseSchema):
    """Listing entry for a stored result."""

    id: str
    timestamp: str
    config_name: str
    overall_score: float
    file_path: str
    file_name: str
    target: TargetConfig
    suites_count: int
    total_latency_ms: float
    cost: CostEstimate | None = None
    error_count: int = 0
    error_rate: float = 0.0
    status: str = "success"


class ComparisonValue(BaseSchema):
    """One configuration's value for a compared metric."""

    config_name: str
    value: float
    delta: float | None = None


class ComparisonEntry(BaseSchema):
    """A metric compared across configurations."""

    metric: str
    values: list[ComparisonValue] = Field(default_factory=list)
    best_config_name: str


class ComparisonResult(BaseSchema):
    """Metric table across two or more results."""

    configs: list[str] = Field(default_factory=list)
    entries: list[ComparisonEntry] = Field(default_factory=list)


class HistoryPoint(BaseSchema):
    """One stored run as a point on the score timeline."""

    timestamp: str
    config_name: str
    score: float
    metric_values: dict[str, float] = Field(default_factory=dict)


class RegressionAlert(BaseSchema):
    """A metric that moved the wrong way by more than the threshold."""

    metric: str
    suite: str
    previous_value: float
    current_value: float
    delta: float
    config_name: str


class GapPoint(BaseSchema):
    """One side of a suggestion's score gap."""

    label: str
    value: float


class SuggestionGap(BaseSchema):
    """Score gap between the latest (or worst) run and a better reference."""

    latest: GapPoint
    reference: GapPoint
    delta: float


class Suggestion(BaseSchema):
    """An improvement suggestion derived from stored results.

    Attributes:
        type: Rule that produced the suggestion (``low_score``, ``regression``, ...).
        title: One-line summary.
        message: What the results show.
        detail: Why it matters and what to try.
        gap: Optional score gap backing the suggestion.
        suggested_config: Optional config fragment to try next.

    """

    type: str
    title: str
    message: str
    detail: str
    gap: SuggestionGap | None = None
    suggested_config: dict[str, Any] | None = None
