"""Deterministic metric functions."""

from factly_benchmark.evaluators.automated.dedup import (
    adjusted_rand_index,
    compute_dedup_check_metrics,
    compute_dedup_scan_metrics,
    evaluate_trigram_dedup,
)
from factly_benchmark.evaluators.automated.impact import (
    compute_impact_metrics,
    compute_value_propagation,
)
from factly_benchmark.evaluators.automated.matching import (
    compute_precision_recall_f1,
    compute_source_anchoring,
    precision_recall_f1,
    string_similarity,
)
from factly_benchmark.evaluators.automated.structural import evaluate_markdown_structure
from factly_benchmark.evaluators.automated.traceability import (
    compute_traceability_accuracy,
)

__all__ = [
    "adjusted_rand_index",
    "compute_dedup_check_metrics",
    "compute_dedup_scan_metrics",
    "compute_impact_metrics",
    "compute_precision_recall_f1",
    "compute_source_anchoring",
    "compute_traceability_accuracy",
    "compute_value_propagation",
    "evaluate_markdown_structure",
    "evaluate_trigram_dedup",
    "precision_recall_f1",
    "string_similarity",
]
