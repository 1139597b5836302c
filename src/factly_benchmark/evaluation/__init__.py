"""Suite evaluation orchestration."""

from factly_benchmark.evaluation.orchestrator import evaluate_case, evaluate_suite

__all__ = ["evaluate_case", "evaluate_suite"]
