"""Runner result models.

A RunnerResult pairs the backend's raw response with the gold expectation
of the case that produced it. Expectations form a tagged union keyed by
``kind`` so evaluators dispatch on an explicit type rather than on fields
hidden inside the response payload.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import Field

from factly_benchmark.models.base import BaseSchema
from factly_benchmark.models.datasets import (
    DedupPair,
    DedupScanScenario,
    FactExtractionCase,
    ImpactScenario,
    InsightExtractionCase,
    OutputFormulationCase,
    PipelineCase,
    RecommendationExtractionCase,
    UpdateProposalScenario,
)
from factly_benchmark.models.results import TokenUsage

__all__ = [
    "DedupCheckExpectation",
    "DedupScanExpectation",
    "Expectation",
    "FactsExpectation",
    "ImpactExpectation",
    "InsightsExpectation",
    "OutputsExpectation",
    "PipelineExpectation",
    "RecommendationsExpectation",
    "RunnerResult",
    "UpdateProposalExpectation",
]


class FactsExpectation(BaseSchema):
    kind: Literal["facts"] = "facts"
    case: FactExtractionCase


class InsightsExpectation(BaseSchema):
    kind: Literal["insights"] = "insights"
    case: InsightExtractionCase


class RecommendationsExpectation(BaseSchema):
    kind: Literal["recommendations"] = "recommendations"
    case: RecommendationExtractionCase


class OutputsExpectation(BaseSchema):
    kind: Literal["outputs"] = "outputs"
    case: OutputFormulationCase


class DedupCheckExpectation(BaseSchema):
    kind: Literal["dedup-check"] = "dedup-check"
    case: DedupPair


class DedupScanExpectation(BaseSchema):
    kind: Literal["dedup-scan"] = "dedup-scan"
    case: DedupScanScenario


class ImpactExpectation(BaseSchema):
    kind: Literal["impact"] = "impact"
    case: ImpactScenario


class UpdateProposalExpectation(BaseSchema):
    kind: Literal["update-proposal"] = "update-proposal"
    case: UpdateProposalScenario


class PipelineExpectation(BaseSchema):
    """Gold data for a pipeline run.

    The raw response of a pipeline result maps each stage name (facts,
    insights, recommendations, outputs) to that stage's backend response.
    """

    kind: Literal["pipeline"] = "pipeline"
    case: PipelineCase


Expectation = Annotated[
    Union[
        FactsExpectation,
        InsightsExpectation,
        RecommendationsExpectation,
        OutputsExpectation,
        DedupCheckExpectation,
        DedupScanExpectation,
        ImpactExpectation,
        UpdateProposalExpectation,
        PipelineExpectation,
    ],
    Field(discriminator="kind"),
]


class RunnerResult(BaseSchema):
    """Outcome of one (case, run index) execution against the backend.

    Exactly one of ``raw_response`` and ``error`` is meaningful: a result
    with a response is a success, a result with ``raw_response=None``
    carries the error message instead.

    Attributes:
        case_id: Dataset case identifier.
        suite: Suite the case belongs to.
        run_index: Zero-based repetition index.
        raw_response: Parsed backend response, or None on failure.
        latency_ms: Wall-clock backend latency (partial for failed pipelines).
        error: Error message when the call failed.
        expectation: Gold expectation of the case.
        usage: Token usage reported by the backend, when present.

    """

    case_id: str
    suite: str
    run_index: int = 0
    raw_response: dict[str, Any] | None = None
    latency_ms: float = 0.0
    error: str | None = None
    expectation: Expectation
    usage: TokenUsage | None = None

    @property
    def ok(self) -> bool:
        return self.raw_response is not None and self.error is None
