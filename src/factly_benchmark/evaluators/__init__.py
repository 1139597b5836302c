"""Automated and LLM-judge evaluators."""

from factly_benchmark.evaluators.aggregate import aggregate_metrics, suite_mean

__all__ = ["aggregate_metrics", "suite_mean"]
