"""Enumeration types for factly-benchmark.

This module defines the closed sets used across the harness: suite names,
metric kinds and matching methods.
"""

from enum import Enum

__all__ = [
    "MatchingMethod",
    "MetricType",
    "SuiteName",
]


class SuiteName(str, Enum):
    """Named category of benchmark cases sharing one runner and evaluator."""

    fact_extraction = "fact-extraction"
    insight_extraction = "insight-extraction"
    recommendation_extraction = "recommendation-extraction"
    output_formulation = "output-formulation"
    dedup = "dedup"
    impact_check = "impact-check"
    update_proposal = "update-proposal"
    pipeline = "pipeline"

    @classmethod
    def values(cls) -> list[str]:
        """Return every suite name in declaration order."""
        return [member.value for member in cls]


class MetricType(str, Enum):
    """Origin of a metric value.

    Attributes:
        auto: Deterministic automated metric.
        llm_judge: Rubric score from an LLM judge, normalized to [0, 1].

    """

    auto = "auto"
    llm_judge = "llm-judge"


class MatchingMethod(str, Enum):
    """How extracted items are matched against gold items."""

    string = "string"
    embedding = "embedding"
