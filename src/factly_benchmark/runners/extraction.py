"""Runners for the four extraction stages.

Each runner issues one backend call per case run: facts from input text,
insights from facts, recommendations from insights and outputs from
recommendations.
"""

from __future__ import annotations

from factly_benchmark.client.http_client import BackendClient
from factly_benchmark.models.config import BenchmarkConfig
from factly_benchmark.models.datasets import (
    FactExtractionCase,
    InsightExtractionCase,
    OutputFormulationCase,
    RecommendationExtractionCase,
)
from factly_benchmark.models.enums import SuiteName
from factly_benchmark.models.runner import (
    FactsExpectation,
    InsightsExpectation,
    OutputsExpectation,
    RecommendationsExpectation,
    RunnerResult,
)
from factly_benchmark.runners.base import SuiteRunner

__all__ = [
    "FactExtractionRunner",
    "InsightExtractionRunner",
    "OutputFormulationRunner",
    "RecommendationExtractionRunner",
]


class FactExtractionRunner(SuiteRunner):
    """POST /extract/facts for every fact-extraction case."""

    suite = SuiteName.fact_extraction

    def load_cases(self) -> list[FactExtractionCase]:
        return self.datasets.fact_extraction_cases()

    def expectation(self, case: FactExtractionCase) -> FactsExpectation:
        return FactsExpectation(case=case)

    async def execute(
        self,
        case: FactExtractionCase,
        run_index: int,
        config: BenchmarkConfig,
        client: BackendClient,
    ) -> RunnerResult:
        response = await client.post(
            "/extract/facts",
            {
                "input_text": case.input_text,
                "goal": case.goal,
                "input_id": f"benchmark-{case.id}-run{run_index}",
            },
        )
        return self.success(case, run_index, response)


class InsightExtractionRunner(SuiteRunner):
    """POST /extract/insights for every insight-extraction case."""

    suite = SuiteName.insight_extraction

    def load_cases(self) -> list[InsightExtractionCase]:
        return self.datasets.insight_extraction_cases()

    def expectation(self, case: InsightExtractionCase) -> InsightsExpectation:
        return InsightsExpectation(case=case)

    async def execute(
        self,
        case: InsightExtractionCase,
        run_index: int,
        config: BenchmarkConfig,
        client: BackendClient,
    ) -> RunnerResult:
        response = await client.post(
            "/extract/insights",
            {
                "facts": [fact.model_dump() for fact in case.facts],
                "goal": case.goal,
            },
        )
        return self.success(case, run_index, response)


class RecommendationExtractionRunner(SuiteRunner):
    """POST /extract/recommendations for every recommendation-extraction case."""

    suite = SuiteName.recommendation_extraction

    def load_cases(self) -> list[RecommendationExtractionCase]:
        return self.datasets.recommendation_extraction_cases()

    def expectation(self, case: RecommendationExtractionCase) -> RecommendationsExpectation:
        return RecommendationsExpectation(case=case)

    async def execute(
        self,
        case: RecommendationExtractionCase,
        run_index: int,
        config: BenchmarkConfig,
        client: BackendClient,
    ) -> RunnerResult:
        response = await client.post(
            "/extract/recommendations",
            {
                "insights": [insight.model_dump() for insight in case.insights],
                "goal": case.goal,
            },
        )
        return self.success(case, run_index, response)


class OutputFormulationRunner(SuiteRunner):
    """POST /extract/outputs for every output-formulation case."""

    suite = SuiteName.output_formulation

    def load_cases(self) -> list[OutputFormulationCase]:
        return self.datasets.output_formulation_cases()

    def expectation(self, case: OutputFormulationCase) -> OutputsExpectation:
        return OutputsExpectation(case=case)

    async def execute(
        self,
        case: OutputFormulationCase,
        run_index: int,
        config: BenchmarkConfig,
        client: BackendClient,
    ) -> RunnerResult:
        response = await client.post(
            "/extract/outputs",
            {
                "recommendations": [rec.model_dump() for rec in case.recommendations],
                "goal": case.goal,
                "output_type": case.output_type,
            },
        )
        return self.success(case, run_index, response)
