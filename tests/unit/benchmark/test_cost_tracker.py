"""Unit tests for token cost estimation."""

import pytest

from factly_benchmark.benchmark.cost import CostTracker
from factly_benchmark.models.results import TokenUsage


class TestCostTracker:
    """Tests for CostTracker."""

    def test_known_model_rate(self) -> None:
        """Test a listed model is priced at its own rate."""
        entry = CostTracker().track(1000, 1000, "gpt-4o")
        assert entry.estimated_usd == pytest.approx(0.0025 + 0.01)
        assert entry.tokens.total_tokens == 2000

    def test_fallback_rate(self) -> None:
        """Test an unknown model uses the fallback rate."""
        entry = CostTracker().track(2000, 1000, "mystery-model")
        assert entry.estimated_usd == pytest.approx(2 * 0.003 + 0.015)

    def test_total_and_reset(self) -> None:
        """Test entries sum into a total and reset clears them."""
        tracker = CostTracker()
        tracker.track(1000, 0, "gpt-4o-mini")
        tracker.track_usage(TokenUsage(input_tokens=0, output_tokens=1000), "gpt-4o-mini")

        total = tracker.total()
        assert total.tokens.input_tokens == 1000
        assert total.tokens.output_tokens == 1000
        assert total.tokens.total_tokens == 2000
        assert total.estimated_usd == pytest.approx(0.00015 + 0.0006)

        tracker.reset()
        assert tracker.entries == []
        assert tracker.total().estimated_usd == 0.0
