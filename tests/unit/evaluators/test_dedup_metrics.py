"""Unit tests for dedup metrics.

Tests the duplicate-check confusion metrics, the Adjusted Rand Index used
for scan groups, and the local trigram baseline.
"""

import pytest

from factly_benchmark.evaluators.automated.dedup import (
    adjusted_rand_index,
    compute_dedup_check_metrics,
    compute_dedup_scan_metrics,
    evaluate_trigram_dedup,
    trigram_similarity,
)
from factly_benchmark.models.datasets import DedupPair


def _pair(pair_id: str, is_duplicate: bool, score_range=None, a="text a", b="text b") -> DedupPair:
    return DedupPair(
        id=pair_id,
        text_a=a,
        text_b=b,
        is_duplicate=is_duplicate,
        expected_score_range=score_range,
    )


class TestDedupCheckMetrics:
    """Tests for duplicate-check classification metrics."""

    def test_perfect_classification(self) -> None:
        """Test correct verdicts on one duplicate and one distinct pair."""
        outcomes = [
            ([{"id": "p1", "similarity": 0.9}], _pair("p1", True)),
            ([], _pair("p2", False)),
        ]
        metrics = {m.name: m.value for m in compute_dedup_check_metrics(outcomes)}
        assert metrics["dedup_tpr"] == 1.0
        assert metrics["dedup_fpr"] == 0.0
        assert metrics["dedup_precision"] == 1.0
        assert metrics["dedup_recall"] == 1.0
        assert metrics["dedup_f1"] == 1.0

    def test_false_positive(self) -> None:
        """Test a duplicate verdict on a distinct pair raises the FPR."""
        outcomes = [([{"id": "p1"}], _pair("p1", False))]
        metrics = {m.name: m.value for m in compute_dedup_check_metrics(outcomes)}
        assert metrics["dedup_fpr"] == 1.0
        assert metrics["dedup_precision"] == 0.0

    def test_score_mae_against_range_midpoint(self) -> None:
        """Test the top similarity is compared with the expected midpoint."""
        outcomes = [([{"id": "p1", "similarity": 0.9}], _pair("p1", True, (0.6, 0.8)))]
        metrics = {m.name: m.value for m in compute_dedup_check_metrics(outcomes)}
        assert metrics["dedup_score_mae"] == pytest.approx(0.2)

    def test_score_mae_omitted_without_data(self) -> None:
        """Test no MAE is emitted when no pair has both score and range."""
        outcomes = [([{"id": "p1"}], _pair("p1", True, (0.6, 0.8)))]
        names = [m.name for m in compute_dedup_check_metrics(outcomes)]
        assert "dedup_score_mae" not in names


class TestAdjustedRandIndex:
    """Tests for the Adjusted Rand Index."""

    def test_identical_groupings(self) -> None:
        """Test identical groupings score 1."""
        groups = [["a", "b"], ["c", "d"]]
        assert adjusted_rand_index(groups, groups) == pytest.approx(1.0)

    def test_group_order_irrelevant(self) -> None:
        """Test reordering groups and members does not change the score."""
        assert adjusted_rand_index(
            [["d", "c"], ["b", "a"]], [["a", "b"], ["c", "d"]]
        ) == pytest.approx(1.0)

    def test_symmetric(self) -> None:
        """Test swapping predicted and expected gives the same score."""
        x = [["a", "b", "c"], ["d"]]
        y = [["a", "b"], ["c", "d"]]
        assert adjusted_rand_index(x, y) == pytest.approx(adjusted_rand_index(y, x))

    def test_fewer_than_two_items(self) -> None:
        """Test a degenerate grouping scores 1."""
        assert adjusted_rand_index([["a"]], [["a"]]) == 1.0
        assert adjusted_rand_index([], []) == 1.0

    def test_disagreement_below_one(self) -> None:
        """Test differing groupings score below 1."""
        assert adjusted_rand_index([["a", "b", "c", "d"]], [["a", "b"], ["c", "d"]]) < 1.0

    def test_ungrouped_items_are_singletons(self) -> None:
        """Test items missing from the prediction count as singletons."""
        score = adjusted_rand_index([["a", "b"]], [["a", "b"], ["c", "d"]])
        assert score < 1.0


class TestDedupScanMetrics:
    """Tests for scan group extraction from backend responses."""

    def test_member_objects(self) -> None:
        """Test groups listing members as objects with ids."""
        response = [
            {"members": [{"id": "a"}, {"id": "b"}]},
            {"members": [{"id": "c"}, {"id": "d"}]},
        ]
        metric = compute_dedup_scan_metrics(response, [["a", "b"], ["c", "d"]])
        assert metric.name == "dedup_scan_ari"
        assert metric.value == pytest.approx(1.0)

    def test_items_key_and_plain_lists(self) -> None:
        """Test groups under ``items`` and bare id lists are both accepted."""
        response = [{"items": ["a", "b"]}, ["c", "d"]]
        metric = compute_dedup_scan_metrics(response, [["a", "b"], ["c", "d"]])
        assert metric.value == pytest.approx(1.0)

    def test_members_without_id_ignored(self) -> None:
        """Test member objects lacking an id are left out of the grouping."""
        response = [{"members": [{"id": "a"}, {"id": "b"}, {"item_id": "z"}]}]
        metric = compute_dedup_scan_metrics(response, [["a", "b"]])
        assert metric.value == pytest.approx(1.0)


class TestTrigramBaseline:
    """Tests for the local trigram dedup baseline."""

    def test_similarity_has_no_exact_shortcut(self) -> None:
        """Test very short identical texts have no trigrams to share."""
        assert trigram_similarity("ab", "ab") == 0.0
        assert trigram_similarity("same text", "Same text.") == 1.0

    def test_classifies_pairs(self) -> None:
        """Test duplicates above the threshold and distinct pairs below it."""
        pairs = [
            _pair("d1", True, (0.9, 1.0), a="Revenue grew 12%.", b="revenue grew 12%"),
            _pair("n1", False, (0.0, 0.2), a="Revenue grew 12%.", b="Hiring slowed down"),
        ]
        metrics = {m.name: m.value for m in evaluate_trigram_dedup(pairs, threshold=0.75)}
        assert metrics["trigram_tpr"] == 1.0
        assert metrics["trigram_fpr"] == 0.0
        assert metrics["trigram_precision"] == 1.0
        assert metrics["trigram_f1"] == 1.0
        assert metrics["trigram_score_mae"] < 0.2
