"""Unit tests for markdown structure heuristics and traceability accuracy."""

import pytest

from factly_benchmark.evaluators.automated.structural import evaluate_markdown_structure
from factly_benchmark.evaluators.automated.traceability import (
    compute_traceability_accuracy,
    jaccard,
)

REPORT = """# Quarterly report

> Revenue grew 12% year over year.

## Findings

- Churn fell
- Hiring slowed
"""


class TestMarkdownStructure:
    """Tests for output structure metrics."""

    def test_well_structured_report(self) -> None:
        """Test a report with headings, citations and bullets."""
        metrics = {m.name: m.value for m in evaluate_markdown_structure(REPORT, "report")}
        assert metrics["has_headings"] == 1.0
        assert metrics["section_count"] == 2
        assert metrics["blockquote_count"] == 1
        assert metrics["has_citations"] == 1.0
        assert metrics["has_bullets"] == 1.0
        assert metrics["structural_score"] == 1.0
        assert "has_numbered_steps" not in metrics

    def test_plain_text(self) -> None:
        """Test unstructured text scores zero."""
        metrics = {m.name: m.value for m in evaluate_markdown_structure("just text", "report")}
        assert metrics["structural_score"] == 0.0
        assert metrics["has_bullets"] == 0.0

    def test_action_plan_numbered_steps(self) -> None:
        """Test action plans report numbered steps."""
        text = "# Plan\n\n1. Call the customer\n2. Ship the fix\n"
        metrics = {m.name: m.value for m in evaluate_markdown_structure(text, "action_plan")}
        assert metrics["has_numbered_steps"] == 1.0
        assert metrics["structural_score"] == pytest.approx(1 / 3)


class TestTraceability:
    """Tests for declared-versus-gold parent overlap."""

    def test_jaccard(self) -> None:
        """Test Jaccard of id sets, with empty sets scoring 0."""
        assert jaccard({"a", "b"}, {"b", "c"}) == pytest.approx(1 / 3)
        assert jaccard(set(), set()) == 0.0

    def test_exact_parents(self) -> None:
        """Test declared parents equal to the gold parents score 1."""
        extracted = [
            {"text": "i1", "related_fact_ids": ["f-a", "f-b"]},
            {"text": "i2", "related_fact_ids": ["f-c"]},
        ]
        metric = compute_traceability_accuracy(
            extracted, [[1, 2], [3]], ["f-a", "f-b", "f-c"]
        )
        assert metric.name == "traceability_accuracy"
        assert metric.value == 1.0

    def test_insight_parents_and_out_of_range(self) -> None:
        """Test insight parent ids and ignored out-of-range gold indices."""
        extracted = [{"text": "r1", "related_insight_ids": ["i-a"]}]
        metric = compute_traceability_accuracy(extracted, [[1, 9]], ["i-a", "i-b"])
        assert metric.value == 1.0

    def test_empty_sides_score_zero(self) -> None:
        """Test nothing to pair scores 0."""
        assert compute_traceability_accuracy([], [[1]], ["f"]).value == 0.0
        assert compute_traceability_accuracy([{"text": "x"}], [], ["f"]).value == 0.0

    def test_pairs_by_position_up_to_shorter_list(self) -> None:
        """Test only the overlapping prefix of both lists is scored."""
        extracted = [
            {"text": "i1", "related_fact_ids": ["f-a"]},
            {"text": "i2", "related_fact_ids": []},
        ]
        metric = compute_traceability_accuracy(extracted, [[1]], ["f-a"])
        assert metric.value == 1.0
