"""Data models for factly-benchmark.

This module re-exports the configuration, dataset, runner and result
models used throughout the harness.
"""

from factly_benchmark.models.base import BaseSchema, FrozenSchema
from factly_benchmark.models.config import (
    BenchmarkConfig,
    EvaluatorConfig,
    MatchingConfig,
    MatrixAxes,
    MatrixConfig,
    TargetConfig,
)
from factly_benchmark.models.enums import (
    MatchingMethod,
    MetricType,
    SuiteName,
)
from factly_benchmark.models.results import (
    AggregatedMetrics,
    BenchmarkResult,
    CaseEvaluation,
    ComparisonEntry,
    ComparisonResult,
    ComparisonValue,
    CostEstimate,
    GapPoint,
    HistoryPoint,
    MetricAggregate,
    MetricScore,
    RegressionAlert,
    ResultSummary,
    SuiteEvaluation,
    Suggestion,
    SuggestionGap,
    TokenUsage,
)
from factly_benchmark.models.runner import Expectation, RunnerResult

__all__ = [
    "AggregatedMetrics",
    "BaseSchema",
    "BenchmarkConfig",
    "BenchmarkResult",
    "CaseEvaluation",
    "ComparisonEntry",
    "ComparisonResult",
    "ComparisonValue",
    "CostEstimate",
    "GapPoint",
    "EvaluatorConfig",
    "Expectation",
    "FrozenSchema",
    "HistoryPoint",
    "MatchingConfig",
    "MatchingMethod",
    "MatrixAxes",
    "MatrixConfig",
    "MetricAggregate",
    "MetricScore",
    "MetricType",
    "RegressionAlert",
    "ResultSummary",
    "RunnerResult",
    "SuiteEvaluation",
    "Suggestion",
    "SuggestionGap",
    "SuiteName",
    "TargetConfig",
    "TokenUsage",
]
