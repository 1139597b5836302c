"""Runner for the update-proposal suite."""

from __future__ import annotations

from typing import Any

from factly_benchmark.client.http_client import BackendClient
from factly_benchmark.models.config import BenchmarkConfig
from factly_benchmark.models.datasets import UpdateProposalScenario
from factly_benchmark.models.enums import SuiteName
from factly_benchmark.models.runner import RunnerResult, UpdateProposalExpectation
from factly_benchmark.runners.base import SuiteRunner

__all__ = ["UpdateProposalRunner"]


class UpdateProposalRunner(SuiteRunner):
    """POST /propose/update describing an upstream change to an entity."""

    suite = SuiteName.update_proposal

    def load_cases(self) -> list[UpdateProposalScenario]:
        return self.datasets.update_proposal_scenarios()

    def expectation(self, case: UpdateProposalScenario) -> UpdateProposalExpectation:
        return UpdateProposalExpectation(case=case)

    async def execute(
        self,
        case: UpdateProposalScenario,
        run_index: int,
        config: BenchmarkConfig,
        client: BackendClient,
    ) -> RunnerResult:
        body: dict[str, Any] = {
            "entity_type": case.entity_type,
            "current_text": case.current_text,
            "upstream_change": {
                "old_text": case.upstream_old_text,
                "new_text": case.upstream_new_text,
                "entity_type": case.upstream_entity_type,
            },
            "goal": case.goal,
        }
        if case.output_type is not None:
            body["output_type"] = case.output_type

        response = await client.post("/propose/update", body)
        return self.success(case, run_index, response)
