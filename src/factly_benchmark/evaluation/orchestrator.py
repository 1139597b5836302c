"""Suite evaluation.

evaluate_suite() turns a suite's runner results into a SuiteEvaluation:
every successful result is scored by the evaluator registered for its
expectation kind, every failed result becomes a metric-less case carrying
its error, and metrics are aggregated over the cases that produced them.

Judge dimensions run only when the run configures an evaluator and the
case has at least one extracted item to judge.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from typing import Any

from factly_benchmark.evaluators.aggregate import aggregate_metrics
from factly_benchmark.evaluators.automated.dedup import (
    compute_dedup_check_metrics,
    compute_dedup_scan_metrics,
)
from factly_benchmark.evaluators.automated.impact import (
    compute_impact_metrics,
    compute_value_propagation,
)
from factly_benchmark.evaluators.automated.matching import (
    compute_precision_recall_f1,
    compute_source_anchoring,
)
from factly_benchmark.evaluators.automated.structural import evaluate_markdown_structure
from factly_benchmark.evaluators.automated.traceability import (
    compute_traceability_accuracy,
)
from factly_benchmark.evaluators.judge import dimensions
from factly_benchmark.evaluators.judge.client import JudgeClient
from factly_benchmark.logging_config import get_logger
from factly_benchmark.models.config import BenchmarkConfig
from factly_benchmark.models.results import CaseEvaluation, MetricScore, SuiteEvaluation
from factly_benchmark.models.runner import (
    DedupCheckExpectation,
    DedupScanExpectation,
    FactsExpectation,
    ImpactExpectation,
    InsightsExpectation,
    OutputsExpectation,
    PipelineExpectation,
    RecommendationsExpectation,
    RunnerResult,
    UpdateProposalExpectation,
)

__all__ = ["evaluate_case", "evaluate_suite"]

logger = get_logger(__name__)

CaseEvaluator = Callable[
    [dict[str, Any], Any, BenchmarkConfig, JudgeClient | None],
    Awaitable[list[MetricScore]],
]


def _suggestions(data: dict[str, Any] | None) -> list[dict[str, Any]]:
    if not data:
        return []
    return [s for s in data.get("suggestions") or [] if isinstance(s, dict)]


def _texts(items: Sequence[dict[str, Any]]) -> list[str]:
    return [str(item.get("text", "")) for item in items]


async def _judged(*calls: Awaitable[MetricScore]) -> list[MetricScore]:
    return list(await asyncio.gather(*calls))


async def _evaluate_facts(
    data: dict[str, Any],
    expectation: FactsExpectation,
    config: BenchmarkConfig,
    judge: JudgeClient | None,
) -> list[MetricScore]:
    case = expectation.case
    suggestions = _suggestions(data)
    extracted = _texts(suggestions)

    metrics = compute_precision_recall_f1(
        extracted, [g.text for g in case.gold_facts], config.matching.threshold
    )
    metrics.append(compute_source_anchoring(suggestions, case.input_text))

    if judge is not None and extracted:
        metrics += await _judged(
            dimensions.evaluate_fact_atomicity(judge, extracted),
            dimensions.evaluate_non_fact_rate(judge, extracted),
        )
    return metrics


async def _evaluate_insights(
    data: dict[str, Any],
    expectation: InsightsExpectation,
    config: BenchmarkConfig,
    judge: JudgeClient | None,
) -> list[MetricScore]:
    case = expectation.case
    suggestions = _suggestions(data)
    extracted = _texts(suggestions)

    metrics = compute_precision_recall_f1(
        extracted, [g.text for g in case.gold_insights], config.matching.threshold
    )
    source_ids = data.get("fact_ids") or [f.fact_id for f in case.facts]
    metrics.append(
        compute_traceability_accuracy(
            suggestions, [g.source_facts for g in case.gold_insights], source_ids
        )
    )

    if judge is not None and extracted:
        facts = [f.text for f in case.facts]
        metrics += await _judged(
            dimensions.evaluate_insight_non_triviality(judge, extracted, facts),
            dimensions.evaluate_insight_validity(judge, extracted, facts),
        )
    return metrics


async def _evaluate_recommendations(
    data: dict[str, Any],
    expectation: RecommendationsExpectation,
    config: BenchmarkConfig,
    judge: JudgeClient | None,
) -> list[MetricScore]:
    case = expectation.case
    suggestions = _suggestions(data)
    extracted = _texts(suggestions)

    metrics = compute_precision_recall_f1(
        extracted, [g.text for g in case.gold_recommendations], config.matching.threshold
    )
    source_ids = data.get("insight_ids") or [i.insight_id for i in case.insights]
    metrics.append(
        compute_traceability_accuracy(
            suggestions, [g.source_insights for g in case.gold_recommendations], source_ids
        )
    )

    if judge is not None and extracted:
        insights = [i.text for i in case.insights]
        metrics += await _judged(
            dimensions.evaluate_actionability(judge, extracted),
            dimensions.evaluate_relevance(judge, extracted, insights, case.goal),
        )
    return metrics


async def _evaluate_outputs(
    data: dict[str, Any],
    expectation: OutputsExpectation,
    config: BenchmarkConfig,
    judge: JudgeClient | None,
) -> list[MetricScore]:
    case = expectation.case
    extracted = _texts(_suggestions(data))

    metrics = compute_precision_recall_f1(
        extracted, [g.text for g in case.gold_outputs], config.matching.threshold
    )
    if extracted:
        # structure is judged on the first output document only
        metrics += evaluate_markdown_structure(extracted[0], case.output_type)

    if judge is not None and extracted:
        recommendations = [r.text for r in case.recommendations]
        metrics += await _judged(
            dimensions.evaluate_output_completeness(judge, extracted[0], recommendations),
            dimensions.evaluate_output_traceability(judge, extracted[0]),
        )
    return metrics


async def _evaluate_dedup_check(
    data: dict[str, Any],
    expectation: DedupCheckExpectation,
    config: BenchmarkConfig,
    judge: JudgeClient | None,
) -> list[MetricScore]:
    pair = expectation.case
    duplicates = [d for d in data.get("duplicates") or [] if isinstance(d, dict)]
    metrics = compute_dedup_check_metrics([(duplicates, pair)])

    explanation = (duplicates[0].get("explanation") if duplicates else None) or data.get(
        "explanation"
    )
    if judge is not None and explanation:
        metrics.append(
            await dimensions.evaluate_dedup_explanation(
                judge, pair.text_a, pair.text_b, str(explanation), bool(duplicates)
            )
        )
    return metrics


async def _evaluate_dedup_scan(
    data: dict[str, Any],
    expectation: DedupScanExpectation,
    config: BenchmarkConfig,
    judge: JudgeClient | None,
) -> list[MetricScore]:
    return [
        compute_dedup_scan_metrics(data.get("groups") or [], expectation.case.expected_groups)
    ]


async def _evaluate_impact(
    data: dict[str, Any],
    expectation: ImpactExpectation,
    config: BenchmarkConfig,
    judge: JudgeClient | None,
) -> list[MetricScore]:
    predicted = [p for p in data.get("impacted") or [] if isinstance(p, dict)]
    return compute_impact_metrics(predicted, expectation.case.expected_impacts)


async def _evaluate_update_proposal(
    data: dict[str, Any],
    expectation: UpdateProposalExpectation,
    config: BenchmarkConfig,
    judge: JudgeClient | None,
) -> list[MetricScore]:
    scenario = expectation.case
    proposed = str(data.get("proposed_text") or "")

    metrics = compute_value_propagation(
        proposed, scenario.expected_values_present, scenario.expected_values_absent
    )
    if judge is not None and proposed:
        metrics += await _judged(
            dimensions.evaluate_semantic_correctness(
                judge,
                scenario.current_text,
                scenario.upstream_old_text,
                scenario.upstream_new_text,
                proposed,
            ),
            dimensions.evaluate_style_preservation(judge, scenario.current_text, proposed),
        )
    return metrics


def _prefixed(prefix: str, metrics: list[MetricScore]) -> list[MetricScore]:
    return [m.model_copy(update={"name": f"{prefix}{m.name}"}) for m in metrics]


async def _evaluate_pipeline(
    data: dict[str, Any],
    expectation: PipelineExpectation,
    config: BenchmarkConfig,
    judge: JudgeClient | None,
) -> list[MetricScore]:
    case = expectation.case
    threshold = config.matching.threshold
    stages = (
        ("facts", "pipeline_facts_", case.gold_facts),
        ("insights", "pipeline_insights_", case.gold_insights),
        ("recommendations", "pipeline_recs_", case.gold_recommendations),
        ("outputs", "pipeline_outputs_", case.gold_outputs),
    )

    metrics: list[MetricScore] = []
    for stage, prefix, gold in stages:
        if stage not in data:
            continue
        extracted = _texts(_suggestions(data[stage]))
        metrics += _prefixed(
            prefix,
            compute_precision_recall_f1(extracted, [g.text for g in gold], threshold),
        )
        if stage == "outputs" and extracted:
            structure = evaluate_markdown_structure(extracted[0], case.output_type)
            metrics += _prefixed(
                prefix, [m for m in structure if m.name == "structural_score"]
            )
    return metrics


_EVALUATORS: dict[str, CaseEvaluator] = {
    "facts": _evaluate_facts,
    "insights": _evaluate_insights,
    "recommendations": _evaluate_recommendations,
    "outputs": _evaluate_outputs,
    "dedup-check": _evaluate_dedup_check,
    "dedup-scan": _evaluate_dedup_scan,
    "impact": _evaluate_impact,
    "update-proposal": _evaluate_update_proposal,
    "pipeline": _evaluate_pipeline,
}


async def evaluate_case(
    result: RunnerResult,
    config: BenchmarkConfig,
    judge: JudgeClient | None = None,
) -> CaseEvaluation:
    """Evaluate one runner result.

    A failed result becomes a CaseEvaluation with no metrics and its error.
    So does a response the evaluator cannot score.
    """
    if not result.ok or result.raw_response is None:
        return CaseEvaluation(
            case_id=result.case_id, error=result.error or "No response from backend"
        )

    evaluator = _EVALUATORS[result.expectation.kind]
    try:
        metrics = await evaluator(result.raw_response, result.expectation, config, judge)
    except Exception as e:
        logger.warning(
            "case_evaluation_failed",
            case_id=result.case_id,
            suite=result.suite,
            error=f"{type(e).__name__}: {e}",
        )
        return CaseEvaluation(
            case_id=result.case_id, error=f"Evaluation failed: {type(e).__name__}: {e}"
        )
    return CaseEvaluation(case_id=result.case_id, metrics=metrics)


async def evaluate_suite(
    suite: str,
    results: Sequence[RunnerResult],
    config: BenchmarkConfig,
    judge: JudgeClient | None = None,
) -> SuiteEvaluation:
    """Evaluate every runner result of a suite and aggregate the metrics.

    Args:
        suite: Suite name.
        results: All runner results of the suite, successful or not.
        config: Run configuration (matching threshold, evaluator).
        judge: Shared judge client. When the config has an evaluator and no
            client is given, a client is created for this call.

    Returns:
        SuiteEvaluation with one case per runner result.

    """
    owns_judge = judge is None and config.evaluator is not None
    if owns_judge:
        judge = JudgeClient(config.evaluator)
    if config.evaluator is None:
        judge = None

    try:
        cases = list(
            await asyncio.gather(*(evaluate_case(result, config, judge) for result in results))
        )
    finally:
        if owns_judge and judge is not None:
            await judge.close()

    evaluation = SuiteEvaluation(suite=suite, cases=cases, aggregated=aggregate_metrics(cases))
    logger.info(
        "suite_evaluated",
        suite=suite,
        cases=len(cases),
        errors=evaluation.error_count,
        metrics=len(evaluation.aggregated),
    )
    return evaluation
