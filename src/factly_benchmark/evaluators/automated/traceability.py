"""Traceability accuracy of derived items against their gold parents."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from factly_benchmark.models.results import MetricScore

__all__ = ["compute_traceability_accuracy", "jaccard"]


def jaccard(a: set[str], b: set[str]) -> float:
    union = len(a | b)
    return len(a & b) / union if union else 0.0


def compute_traceability_accuracy(
    extracted: Sequence[dict[str, Any]],
    gold_parents: Sequence[Sequence[int]],
    source_ids: Sequence[str],
) -> MetricScore:
    """Average Jaccard between declared and gold parent-id sets.

    Items are paired by position. An extracted item declares its parents in
    ``related_fact_ids`` or ``related_insight_ids``; gold parents are
    1-based indices into ``source_ids``. Out-of-range indices are ignored.
    Scores 0 when either side is empty.

    Args:
        extracted: Backend suggestions, in order.
        gold_parents: Gold parent indices per item, in order.
        source_ids: Ids of the parent items the backend was given.

    """
    if not extracted or not gold_parents:
        return MetricScore(name="traceability_accuracy", value=0.0)

    count = min(len(extracted), len(gold_parents))
    total = 0.0
    for item, parents in zip(extracted[:count], gold_parents[:count]):
        declared = item.get("related_fact_ids") or item.get("related_insight_ids") or []
        extracted_ids = {str(i) for i in declared}
        gold_ids = {source_ids[n - 1] for n in parents if 1 <= n <= len(source_ids)}
        total += jaccard(extracted_ids, gold_ids)

    return MetricScore(name="traceability_accuracy", value=total / count)
