"""End-to-end pipeline runner.

One pipeline run chains four backend calls, feeding each stage's
suggestions into the next stage under synthetic ids (``f-0``, ``i-0``,
``r-0``, ...). Stage latencies are summed. If a stage fails the chain
stops and the latency accumulated so far is kept on the error result.
"""

from __future__ import annotations

from typing import Any

from factly_benchmark.client.exceptions import BackendError
from factly_benchmark.client.http_client import BackendClient
from factly_benchmark.logging_config import get_logger
from factly_benchmark.models.config import BenchmarkConfig
from factly_benchmark.models.datasets import PipelineCase
from factly_benchmark.models.enums import SuiteName
from factly_benchmark.models.results import TokenUsage
from factly_benchmark.models.runner import PipelineExpectation, RunnerResult
from factly_benchmark.runners.base import SuiteRunner, extract_usage, response_dict

__all__ = ["PIPELINE_STAGES", "PipelineRunner"]

logger = get_logger(__name__)

PIPELINE_STAGES = ("facts", "insights", "recommendations", "outputs")


def _suggestion_texts(data: dict[str, Any]) -> list[str]:
    suggestions = data.get("suggestions") or []
    return [s.get("text", "") for s in suggestions if isinstance(s, dict)]


class PipelineRunner(SuiteRunner):
    """Runs facts -> insights -> recommendations -> outputs per case."""

    suite = SuiteName.pipeline

    def load_cases(self) -> list[PipelineCase]:
        return self.datasets.pipeline_cases()

    def expectation(self, case: PipelineCase) -> PipelineExpectation:
        return PipelineExpectation(case=case)

    async def execute(
        self,
        case: PipelineCase,
        run_index: int,
        config: BenchmarkConfig,
        client: BackendClient,
    ) -> RunnerResult:
        total_latency = 0.0
        stages: dict[str, dict[str, Any]] = {}
        usage = TokenUsage()

        async def call(stage: str, path: str, body: dict[str, Any]) -> dict[str, Any]:
            nonlocal total_latency
            response = await client.post(path, body)
            total_latency += response.latency_ms
            data = response_dict(response)
            stages[stage] = data
            stage_usage = extract_usage(data)
            if stage_usage is not None:
                usage.input_tokens += stage_usage.input_tokens
                usage.output_tokens += stage_usage.output_tokens
                usage.total_tokens += stage_usage.total_tokens
            return data

        try:
            facts = await call(
                "facts",
                "/extract/facts",
                {
                    "input_text": case.input_text,
                    "goal": case.goal,
                    "input_id": f"pipeline-{case.id}-run{run_index}",
                },
            )
            insights = await call(
                "insights",
                "/extract/insights",
                {
                    "facts": [
                        {"fact_id": f"f-{i}", "text": text}
                        for i, text in enumerate(_suggestion_texts(facts))
                    ],
                    "goal": case.goal,
                },
            )
            recommendations = await call(
                "recommendations",
                "/extract/recommendations",
                {
                    "insights": [
                        {"insight_id": f"i-{i}", "text": text}
                        for i, text in enumerate(_suggestion_texts(insights))
                    ],
                    "goal": case.goal,
                },
            )
            await call(
                "outputs",
                "/extract/outputs",
                {
                    "recommendations": [
                        {"recommendation_id": f"r-{i}", "text": text}
                        for i, text in enumerate(_suggestion_texts(recommendations))
                    ],
                    "goal": case.goal,
                    "output_type": case.output_type,
                },
            )
        except BackendError as e:
            failed_stage = next(s for s in PIPELINE_STAGES if s not in stages)
            logger.warning(
                "pipeline_stage_failed",
                case_id=case.id,
                run_index=run_index,
                stage=failed_stage,
                latency_ms=round(total_latency, 1),
                error=str(e),
            )
            return self.failure(
                case, run_index, f"{failed_stage} stage: {e}", latency_ms=total_latency
            )

        return RunnerResult(
            case_id=case.id,
            suite=self.suite.value,
            run_index=run_index,
            raw_response=stages,
            latency_ms=total_latency,
            expectation=self.expectation(case),
            usage=usage if usage.total_tokens else None,
        )
