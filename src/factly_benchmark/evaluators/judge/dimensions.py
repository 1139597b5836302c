"""Judge dimensions.

Each dimension pairs a fixed rubric with the content assembled from a
case's inputs and the backend's outputs, and names the resulting metric.
"""

from __future__ import annotations

from factly_benchmark.evaluators.judge.client import JudgeClient
from factly_benchmark.evaluators.judge.prompts import (
    ACTIONABILITY_PROMPT,
    ATOMICITY_PROMPT,
    COMPLETENESS_PROMPT,
    EXPLANATION_QUALITY_PROMPT,
    LOGICAL_VALIDITY_PROMPT,
    NON_FACT_RATE_PROMPT,
    NON_TRIVIALITY_PROMPT,
    OUTPUT_TRACEABILITY_PROMPT,
    RELEVANCE_PROMPT,
    SEMANTIC_CORRECTNESS_PROMPT,
    STYLE_PRESERVATION_PROMPT,
    numbered,
)
from factly_benchmark.models.results import MetricScore

__all__ = [
    "evaluate_actionability",
    "evaluate_dedup_explanation",
    "evaluate_fact_atomicity",
    "evaluate_insight_non_triviality",
    "evaluate_insight_validity",
    "evaluate_non_fact_rate",
    "evaluate_output_completeness",
    "evaluate_output_traceability",
    "evaluate_relevance",
    "evaluate_semantic_correctness",
    "evaluate_style_preservation",
]


async def evaluate_fact_atomicity(client: JudgeClient, facts: list[str]) -> MetricScore:
    content = f"Extracted facts:\n{numbered(facts)}"
    return await client.judge(ATOMICITY_PROMPT, content, "fact_atomicity")


async def evaluate_non_fact_rate(client: JudgeClient, facts: list[str]) -> MetricScore:
    content = f"Extracted items:\n{numbered(facts)}"
    return await client.judge(NON_FACT_RATE_PROMPT, content, "non_fact_rate")


def _insight_content(insights: list[str], facts: list[str]) -> str:
    return f"Source facts:\n{numbered(facts)}\n\nDerived insights:\n{numbered(insights)}"


async def evaluate_insight_non_triviality(
    client: JudgeClient, insights: list[str], facts: list[str]
) -> MetricScore:
    return await client.judge(
        NON_TRIVIALITY_PROMPT, _insight_content(insights, facts), "insight_non_triviality"
    )


async def evaluate_insight_validity(
    client: JudgeClient, insights: list[str], facts: list[str]
) -> MetricScore:
    return await client.judge(
        LOGICAL_VALIDITY_PROMPT, _insight_content(insights, facts), "insight_logical_validity"
    )


async def evaluate_actionability(client: JudgeClient, recommendations: list[str]) -> MetricScore:
    content = f"Recommendations:\n{numbered(recommendations)}"
    return await client.judge(ACTIONABILITY_PROMPT, content, "recommendation_actionability")


async def evaluate_relevance(
    client: JudgeClient, recommendations: list[str], insights: list[str], goal: str
) -> MetricScore:
    content = (
        f"Research goal: {goal}\n\n"
        f"Source insights:\n{numbered(insights)}\n\n"
        f"Recommendations:\n{numbered(recommendations)}"
    )
    return await client.judge(RELEVANCE_PROMPT, content, "recommendation_relevance")


async def evaluate_output_completeness(
    client: JudgeClient, output: str, recommendations: list[str]
) -> MetricScore:
    content = (
        f"Source recommendations:\n{numbered(recommendations)}\n\n"
        f"Generated output:\n{output}"
    )
    return await client.judge(COMPLETENESS_PROMPT, content, "output_completeness")


async def evaluate_output_traceability(client: JudgeClient, output: str) -> MetricScore:
    return await client.judge(
        OUTPUT_TRACEABILITY_PROMPT, f"Generated output:\n{output}", "output_traceability"
    )


async def evaluate_dedup_explanation(
    client: JudgeClient,
    text_a: str,
    text_b: str,
    explanation: str,
    is_duplicate: bool,
) -> MetricScore:
    verdict = "DUPLICATE" if is_duplicate else "NOT DUPLICATE"
    content = (
        f"Text A: {text_a}\n"
        f"Text B: {text_b}\n"
        f"System verdict: {verdict}\n"
        f"System explanation: {explanation}"
    )
    return await client.judge(EXPLANATION_QUALITY_PROMPT, content, "dedup_explanation_quality")


async def evaluate_semantic_correctness(
    client: JudgeClient,
    current_text: str,
    upstream_old: str,
    upstream_new: str,
    proposed_text: str,
) -> MetricScore:
    content = (
        f"Original text: {current_text}\n"
        f"Upstream old: {upstream_old}\n"
        f"Upstream new: {upstream_new}\n"
        f"Proposed update: {proposed_text}"
    )
    return await client.judge(
        SEMANTIC_CORRECTNESS_PROMPT, content, "proposal_semantic_correctness"
    )


async def evaluate_style_preservation(
    client: JudgeClient, current_text: str, proposed_text: str
) -> MetricScore:
    content = f"Original text: {current_text}\nProposed update: {proposed_text}"
    return await client.judge(STYLE_PRESERVATION_PROMPT, content, "proposal_style_preservation")
