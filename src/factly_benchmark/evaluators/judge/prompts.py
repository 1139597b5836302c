"""Rubric prompts for LLM-judge scoring.

Each rubric rates one qualitative dimension on a 1-5 scale and asks for
a fixed ``SCORE:`` / ``REASONING:`` reply that the judge client parses.
"""

__all__ = [
    "ACTIONABILITY_PROMPT",
    "ATOMICITY_PROMPT",
    "COMPLETENESS_PROMPT",
    "EXPLANATION_QUALITY_PROMPT",
    "LOGICAL_VALIDITY_PROMPT",
    "NON_FACT_RATE_PROMPT",
    "NON_TRIVIALITY_PROMPT",
    "OUTPUT_TRACEABILITY_PROMPT",
    "RELEVANCE_PROMPT",
    "SEMANTIC_CORRECTNESS_PROMPT",
    "STYLE_PRESERVATION_PROMPT",
    "numbered",
]

RESPONSE_FORMAT = """Respond in exactly this format:
SCORE: <number>
REASONING: <your explanation>"""


def numbered(items: list[str]) -> str:
    """Render items as a 1-based numbered list."""
    return "\n".join(f"{i}. {item}" for i, item in enumerate(items, start=1))


# Fact extraction
ATOMICITY_PROMPT = f"""You are an expert evaluator of fact extraction quality.
Evaluate whether each extracted fact is ATOMIC: it contains exactly one factual claim, not multiple claims combined.

Rate on a scale of 1-5:
1 = Most facts contain multiple claims
2 = Many facts contain multiple claims
3 = Mix of atomic and multi-claim facts
4 = Most facts are atomic
5 = All facts are atomic single claims

{RESPONSE_FORMAT}"""

NON_FACT_RATE_PROMPT = f"""You are an expert evaluator of fact extraction quality.
Evaluate what fraction of the extracted items are NOT objective facts but rather opinions, interpretations, or subjective statements.

Rate on a scale of 1-5:
1 = Most items are opinions/interpretations (>60%)
2 = Many items are opinions/interpretations (40-60%)
3 = Some items are opinions/interpretations (20-40%)
4 = Few items are opinions/interpretations (5-20%)
5 = Almost all items are objective facts (<5% opinions)

{RESPONSE_FORMAT}"""

# Insight extraction
NON_TRIVIALITY_PROMPT = f"""You are an expert evaluator of insight quality.
Evaluate whether the insights go BEYOND simple reformulation of the input facts and provide genuine analytical value (cross-cutting patterns, implications, contradictions).

Rate on a scale of 1-5:
1 = All insights are just reformulations of individual facts
2 = Most insights are reformulations with minor additions
3 = Mix of trivial and genuinely analytical insights
4 = Most insights provide genuine analytical value
5 = All insights are non-trivial, revealing patterns or implications

{RESPONSE_FORMAT}"""

LOGICAL_VALIDITY_PROMPT = f"""You are an expert evaluator of insight quality.
Evaluate whether each insight is LOGICALLY DERIVABLE from the given facts without speculation or unsupported leaps.

Rate on a scale of 1-5:
1 = Most insights are speculative or unsupported
2 = Many insights contain unsupported claims
3 = Mix of well-supported and speculative insights
4 = Most insights are well-supported by the facts
5 = All insights are clearly derivable from the facts

{RESPONSE_FORMAT}"""

# Recommendation extraction
ACTIONABILITY_PROMPT = f"""You are an expert evaluator of recommendation quality.
Evaluate whether each recommendation is ACTIONABLE: it describes a specific, concrete action that can be implemented (not vague or generic advice).

Rate on a scale of 1-5:
1 = Most recommendations are vague or generic
2 = Many recommendations lack specificity
3 = Mix of actionable and vague recommendations
4 = Most recommendations are specific and actionable
5 = All recommendations are concrete, specific, and actionable

{RESPONSE_FORMAT}"""

RELEVANCE_PROMPT = f"""You are an expert evaluator of recommendation quality.
Given the research goal and the source insights, evaluate whether each recommendation is RELEVANT and aligned with the research objective.

Rate on a scale of 1-5:
1 = Most recommendations are off-topic or irrelevant
2 = Many recommendations diverge from the goal
3 = Mix of relevant and tangential recommendations
4 = Most recommendations are well-aligned with the goal
5 = All recommendations directly address the research goal

{RESPONSE_FORMAT}"""

# Output formulation
COMPLETENESS_PROMPT = f"""You are an expert evaluator of output document quality.
Evaluate whether the output document covers all key recommendations and provides comprehensive coverage of the analysis results.

Rate on a scale of 1-5:
1 = Major recommendations are missing
2 = Several important recommendations are not covered
3 = Covers most but misses some recommendations
4 = Covers nearly all recommendations
5 = Complete coverage of all key recommendations

{RESPONSE_FORMAT}"""

OUTPUT_TRACEABILITY_PROMPT = f"""You are an expert evaluator of output document quality.
Evaluate whether the output document properly traces its claims back to specific sources (facts, data points, citations) rather than making unsupported assertions.

Rate on a scale of 1-5:
1 = No traceability, all claims are unsupported
2 = Few claims are traced to sources
3 = Some claims have source references
4 = Most claims are traced to sources
5 = Excellent traceability with clear source references

{RESPONSE_FORMAT}"""

# Dedup
EXPLANATION_QUALITY_PROMPT = f"""You are an expert evaluator of deduplication explanation quality.
Given two texts and the system's explanation of why they are (or are not) duplicates, evaluate the quality of the explanation.

Rate on a scale of 1-5:
1 = Explanation is wrong or incoherent
2 = Explanation is vague and unhelpful
3 = Explanation is partially correct but lacks detail
4 = Explanation is mostly accurate and clear
5 = Explanation is precise, accurate, and clearly identifies the semantic relationship

{RESPONSE_FORMAT}"""

# Update proposal
SEMANTIC_CORRECTNESS_PROMPT = f"""You are an expert evaluator of update proposal quality.
Given the original text, the upstream change (old -> new), and the proposed updated text, evaluate whether the proposal correctly reflects the semantic impact of the upstream change.

Rate on a scale of 1-5:
1 = Proposal is wrong or introduces errors
2 = Proposal partially reflects the change but has significant issues
3 = Proposal reflects the change but with some inaccuracies
4 = Proposal correctly reflects the change with minor issues
5 = Proposal perfectly reflects the upstream change

{RESPONSE_FORMAT}"""

STYLE_PRESERVATION_PROMPT = f"""You are an expert evaluator of update proposal quality.
Compare the original text with the proposed updated text. Evaluate whether the proposal preserves the original tone, style, and approximate length.

Rate on a scale of 1-5:
1 = Completely different style/tone
2 = Significantly different style or length
3 = Somewhat different but recognizable
4 = Mostly preserves style with minor differences
5 = Perfectly preserves tone, style, and length

{RESPONSE_FORMAT}"""
