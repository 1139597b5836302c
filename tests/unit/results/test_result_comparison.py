"""Unit tests for cross-configuration comparison."""

import pytest

from factly_benchmark.results.comparator import compare_results
from factly_benchmark.results.polarity import is_lower_better


class TestPolarity:
    """Tests for metric polarity."""

    @pytest.mark.parametrize(
        ("name", "lower"),
        [
            ("dedup_fpr", True),
            ("trigram_score_mae", True),
            ("dedup_score_mae", True),
            ("precision", False),
            ("impact_tnr", False),
        ],
    )
    def test_lower_is_better(self, name: str, lower: bool) -> None:
        """Test error-rate metrics are lower-is-better."""
        assert is_lower_better(name) is lower


class TestCompareResults:
    """Tests for compare_results."""

    def test_requires_two_results(self, make_result) -> None:
        """Test a single result cannot be compared."""
        with pytest.raises(ValueError, match="at least 2"):
            compare_results([make_result()])

    def test_best_by_polarity(self, make_result) -> None:
        """Test precision picks the highest and fpr the lowest value."""
        a = make_result("a", suites={"dedup": {"dedup_precision": 0.9, "dedup_fpr": 0.3}})
        b = make_result("b", suites={"dedup": {"dedup_precision": 0.7, "dedup_fpr": 0.1}})

        comparison = compare_results([a, b])
        entries = {e.metric: e for e in comparison.entries}

        assert comparison.configs == ["a", "b"]
        assert entries["dedup/dedup_precision"].best_config_name == "a"
        assert entries["dedup/dedup_fpr"].best_config_name == "b"
        precision_deltas = [v.delta for v in entries["dedup/dedup_precision"].values]
        assert precision_deltas == pytest.approx([0.0, -0.2])
        fpr_deltas = [v.delta for v in entries["dedup/dedup_fpr"].values]
        assert fpr_deltas == pytest.approx([0.2, 0.0])

    def test_missing_metric_counts_as_zero(self, make_result) -> None:
        """Test a metric absent from one result is compared as 0."""
        a = make_result("a", suites={"fact-extraction": {"f1": 0.6}})
        b = make_result("b", suites={"dedup": {"dedup_f1": 0.4}})

        entries = {e.metric: e for e in compare_results([a, b]).entries}

        assert [v.value for v in entries["fact-extraction/f1"].values] == [0.6, 0.0]
        assert [v.value for v in entries["dedup/dedup_f1"].values] == [0.0, 0.4]

    def test_ties_go_to_first(self, make_result) -> None:
        """Test equal values name the earliest result as best."""
        a = make_result("a", suites={"dedup": {"dedup_f1": 0.5}})
        b = make_result("b", suites={"dedup": {"dedup_f1": 0.5}})
        assert compare_results([a, b]).entries[0].best_config_name == "a"

    def test_entries_sorted(self, make_result) -> None:
        """Test entries are sorted by suite/metric key."""
        a = make_result("a", suites={"pipeline": {"x": 1.0}, "dedup": {"z": 1.0, "y": 1.0}})
        b = make_result("b")
        assert [e.metric for e in compare_results([a, b]).entries] == [
            "dedup/y",
            "dedup/z",
            "pipeline/x",
        ]
