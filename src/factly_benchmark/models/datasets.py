"""Dataset case models.

This module defines Pydantic models for the gold-standard fixture files
each suite replays against the backend. Fixture files use snake_case keys.
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from factly_benchmark.models.base import BaseSchema

__all__ = [
    "DedupPair",
    "DedupScanScenario",
    "FactExtractionCase",
    "FactItem",
    "GoldFact",
    "GoldInsight",
    "GoldOutput",
    "GoldRecommendation",
    "ImpactLabel",
    "ImpactScenario",
    "InsightExtractionCase",
    "InsightItem",
    "OutputFormulationCase",
    "PipelineCase",
    "RecommendationExtractionCase",
    "RecommendationItem",
    "TextItem",
    "UpdateProposalScenario",
]


class GoldFact(BaseSchema):
    """Expected fact, optionally anchored to an excerpt of the input."""

    text: str
    source_excerpt: str | None = None


class GoldInsight(BaseSchema):
    """Expected insight with 1-based indices of the facts it derives from."""

    text: str
    source_facts: list[int] = Field(default_factory=list)


class GoldRecommendation(BaseSchema):
    """Expected recommendation with 1-based indices of its source insights."""

    text: str
    source_insights: list[int] = Field(default_factory=list)


class GoldOutput(BaseSchema):
    """Expected output document."""

    text: str
    output_type: str = "report"


class FactItem(BaseSchema):
    """Fact as sent to the insight extraction endpoint."""

    fact_id: str
    text: str


class InsightItem(BaseSchema):
    """Insight as sent to the recommendation extraction endpoint."""

    insight_id: str
    text: str


class RecommendationItem(BaseSchema):
    """Recommendation as sent to the output formulation endpoint."""

    recommendation_id: str
    text: str


class TextItem(BaseSchema):
    """Identified text used by dedup scans and impact checks."""

    id: str
    text: str


class ImpactLabel(BaseSchema):
    """Whether a child item is impacted by an upstream change."""

    id: str
    impacted: bool


class FactExtractionCase(BaseSchema):
    """Input text with the facts a good extraction should produce."""

    id: str
    domain: str = ""
    input_text: str
    goal: str = ""
    gold_facts: list[GoldFact] = Field(default_factory=list)


class InsightExtractionCase(BaseSchema):
    """Facts with the insights a good extraction should derive."""

    id: str
    domain: str = ""
    goal: str = ""
    facts: list[FactItem] = Field(default_factory=list)
    gold_insights: list[GoldInsight] = Field(default_factory=list)


class RecommendationExtractionCase(BaseSchema):
    """Insights with the recommendations a good extraction should derive."""

    id: str
    domain: str = ""
    goal: str = ""
    insights: list[InsightItem] = Field(default_factory=list)
    gold_recommendations: list[GoldRecommendation] = Field(default_factory=list)


class OutputFormulationCase(BaseSchema):
    """Recommendations with the expected output document."""

    id: str
    domain: str = ""
    goal: str = ""
    output_type: str = "report"
    recommendations: list[RecommendationItem] = Field(default_factory=list)
    gold_outputs: list[GoldOutput] = Field(default_factory=list)


class DedupPair(BaseSchema):
    """Pair of texts labelled as duplicate or not."""

    id: str
    text_a: str
    text_b: str
    is_duplicate: bool
    difficulty: Literal["easy", "medium", "hard"] = "medium"
    expected_score_range: tuple[float, float] | None = None


class DedupScanScenario(BaseSchema):
    """Item set with the expected duplicate groups."""

    id: str
    items: list[TextItem] = Field(default_factory=list)
    expected_groups: list[list[str]] = Field(default_factory=list)


class ImpactScenario(BaseSchema):
    """Upstream edit with the children it should and should not impact."""

    id: str
    old_text: str
    new_text: str
    children: list[TextItem] = Field(default_factory=list)
    expected_impacts: list[ImpactLabel] = Field(default_factory=list)


class UpdateProposalScenario(BaseSchema):
    """Upstream edit with values the proposed update must carry or drop."""

    id: str
    entity_type: str
    current_text: str
    upstream_old_text: str
    upstream_new_text: str
    upstream_entity_type: str
    goal: str = ""
    output_type: str | None = None
    expected_values_present: list[str] = Field(default_factory=list)
    expected_values_absent: list[str] = Field(default_factory=list)


class PipelineCase(BaseSchema):
    """Input text with gold data for every pipeline stage."""

    id: str
    domain: str = ""
    input_text: str
    goal: str = ""
    output_type: str = "report"
    gold_facts: list[GoldFact] = Field(default_factory=list)
    gold_insights: list[GoldInsight] = Field(default_factory=list)
    gold_recommendations: list[GoldRecommendation] = Field(default_factory=list)
    gold_outputs: list[GoldOutput] = Field(default_factory=list)
