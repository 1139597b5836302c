"""Token cost estimation.

Rates are USD per 1K tokens. Models missing from the table are priced at
the fallback rate.
"""

from __future__ import annotations

from factly_benchmark.models.results import CostEstimate, TokenUsage

__all__ = ["COST_PER_1K_TOKENS", "CostTracker", "FALLBACK_RATE"]

# model -> (input, output)
COST_PER_1K_TOKENS: dict[str, tuple[float, float]] = {
    "gpt-4o": (0.0025, 0.01),
    "gpt-4.1": (0.002, 0.008),
    "gpt-4o-mini": (0.00015, 0.0006),
    "claude-sonnet-4-5-20250929": (0.003, 0.015),
    "claude-haiku-3-5": (0.0008, 0.004),
    "text-embedding-3-small": (0.00002, 0.0),
    "text-embedding-3-large": (0.00013, 0.0),
}
FALLBACK_RATE = (0.003, 0.015)


class CostTracker:
    """Accumulates token usage and its estimated cost across a run."""

    def __init__(self) -> None:
        self.entries: list[CostEstimate] = []

    def track(self, input_tokens: int, output_tokens: int, model: str) -> CostEstimate:
        """Record one usage and return its cost estimate."""
        input_rate, output_rate = COST_PER_1K_TOKENS.get(model, FALLBACK_RATE)
        entry = CostEstimate(
            tokens=TokenUsage(
                input_tokens=input_tokens,
                output_tokens=output_tokens,
                total_tokens=input_tokens + output_tokens,
            ),
            estimated_usd=(input_tokens / 1000) * input_rate
            + (output_tokens / 1000) * output_rate,
        )
        self.entries.append(entry)
        return entry

    def track_usage(self, usage: TokenUsage, model: str) -> CostEstimate:
        return self.track(usage.input_tokens, usage.output_tokens, model)

    def total(self) -> CostEstimate:
        """Sum every recorded entry."""
        return CostEstimate(
            tokens=TokenUsage(
                input_tokens=sum(e.tokens.input_tokens for e in self.entries),
                output_tokens=sum(e.tokens.output_tokens for e in self.entries),
                total_tokens=sum(e.tokens.total_tokens for e in self.entries),
            ),
            estimated_usd=sum(e.estimated_usd for e in self.entries),
        )

    def reset(self) -> None:
        self.entries = []
