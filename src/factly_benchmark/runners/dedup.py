"""Runner for the dedup suite.

The suite covers two kinds of case: labelled pairs sent to /dedup/check
and item sets sent to /dedup/scan. Check pairs run first, then scans.
"""

from __future__ import annotations

from factly_benchmark.client.http_client import BackendClient
from factly_benchmark.models.config import BenchmarkConfig
from factly_benchmark.models.datasets import DedupPair, DedupScanScenario
from factly_benchmark.models.enums import SuiteName
from factly_benchmark.models.runner import (
    DedupCheckExpectation,
    DedupScanExpectation,
    RunnerResult,
)
from factly_benchmark.runners.base import SuiteRunner

__all__ = ["DedupRunner"]


class DedupRunner(SuiteRunner):
    suite = SuiteName.dedup

    def load_cases(self) -> list[DedupPair | DedupScanScenario]:
        return [*self.datasets.dedup_pairs(), *self.datasets.dedup_scan_scenarios()]

    def expectation(
        self, case: DedupPair | DedupScanScenario
    ) -> DedupCheckExpectation | DedupScanExpectation:
        if isinstance(case, DedupPair):
            return DedupCheckExpectation(case=case)
        return DedupScanExpectation(case=case)

    async def execute(
        self,
        case: DedupPair | DedupScanScenario,
        run_index: int,
        config: BenchmarkConfig,
        client: BackendClient,
    ) -> RunnerResult:
        if isinstance(case, DedupPair):
            response = await client.post(
                "/dedup/check",
                {
                    "text": case.text_a,
                    "candidates": [{"id": case.id, "text": case.text_b}],
                },
            )
        else:
            response = await client.post(
                "/dedup/scan",
                {"items": [item.model_dump() for item in case.items]},
            )
        return self.success(case, run_index, response)
