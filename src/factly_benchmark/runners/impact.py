"""Runner for the impact-check suite."""

from __future__ import annotations

from factly_benchmark.client.http_client import BackendClient
from factly_benchmark.models.config import BenchmarkConfig
from factly_benchmark.models.datasets import ImpactScenario
from factly_benchmark.models.enums import SuiteName
from factly_benchmark.models.runner import ImpactExpectation, RunnerResult
from factly_benchmark.runners.base import SuiteRunner

__all__ = ["ImpactRunner"]


class ImpactRunner(SuiteRunner):
    """POST /check/impact with an upstream edit and its children."""

    suite = SuiteName.impact_check

    def load_cases(self) -> list[ImpactScenario]:
        return self.datasets.impact_scenarios()

    def expectation(self, case: ImpactScenario) -> ImpactExpectation:
        return ImpactExpectation(case=case)

    async def execute(
        self,
        case: ImpactScenario,
        run_index: int,
        config: BenchmarkConfig,
        client: BackendClient,
    ) -> RunnerResult:
        response = await client.post(
            "/check/impact",
            {
                "old_text": case.old_text,
                "new_text": case.new_text,
                "children": [child.model_dump() for child in case.children],
            },
        )
        return self.success(case, run_index, response)
