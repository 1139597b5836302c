"""Dedup metrics: pairwise check classification, scan clustering (ARI)
and the local trigram baseline classifier.
"""

from __future__ import annotations

from collections.abc import Sequence
from itertools import combinations
from typing import Any

from factly_benchmark.config.defaults import DEFAULT_TRIGRAM_DEDUP_THRESHOLD
from factly_benchmark.evaluators.automated.confusion import Confusion
from factly_benchmark.evaluators.automated.matching import normalize, trigrams
from factly_benchmark.models.datasets import DedupPair
from factly_benchmark.models.results import MetricScore

__all__ = [
    "DedupCheckOutcome",
    "adjusted_rand_index",
    "compute_dedup_check_metrics",
    "compute_dedup_scan_metrics",
    "evaluate_trigram_dedup",
    "trigram_similarity",
]

# (backend duplicates list, gold pair)
DedupCheckOutcome = tuple[Sequence[dict[str, Any]], DedupPair]


def _midpoint(score_range: tuple[float, float]) -> float:
    low, high = score_range
    return (low + high) / 2


def compute_dedup_check_metrics(outcomes: Sequence[DedupCheckOutcome]) -> list[MetricScore]:
    """Classification metrics of the backend's duplicate verdicts.

    A pair is predicted duplicate when the backend returned at least one
    duplicate. ``dedup_score_mae`` compares the top reported similarity
    with the midpoint of the gold expected range; it is only emitted when
    at least one pair has both.
    """
    confusion = Confusion()
    errors: list[float] = []

    for duplicates, pair in outcomes:
        predicted = len(duplicates) > 0
        confusion.add(predicted, pair.is_duplicate)

        if predicted and pair.expected_score_range is not None:
            similarity = duplicates[0].get("similarity")
            if isinstance(similarity, (int, float)):
                errors.append(abs(similarity - _midpoint(pair.expected_score_range)))

    metrics = [
        MetricScore(name="dedup_tpr", value=confusion.tpr),
        MetricScore(name="dedup_fpr", value=confusion.fpr),
        MetricScore(name="dedup_precision", value=confusion.precision),
        MetricScore(name="dedup_recall", value=confusion.recall),
        MetricScore(name="dedup_f1", value=confusion.f1),
    ]
    if errors:
        metrics.append(MetricScore(name="dedup_score_mae", value=sum(errors) / len(errors)))
    return metrics


def _labels(groups: Sequence[Sequence[str]], items: Sequence[str]) -> dict[str, int]:
    labels: dict[str, int] = {}
    for index, group in enumerate(groups):
        for item in group:
            labels[item] = index
    # ungrouped items become singletons that match nothing
    next_label = len(groups)
    for item in items:
        if item not in labels:
            labels[item] = next_label
            next_label += 1
    return labels


def adjusted_rand_index(
    predicted_groups: Sequence[Sequence[str]],
    expected_groups: Sequence[Sequence[str]],
) -> float:
    """Adjusted Rand Index between two groupings of the same items.

    Pairs are counted as a (together in both), b (together only in the
    prediction), c (together only in the expectation) and d (apart in
    both). ARI = (a - E) / (max - E) with E = (a+b)(a+c)/N over N pairs
    and max = ((a+b) + (a+c)) / 2. Returns 1.0 when the denominator is 0,
    which covers fewer than two items.
    """
    items: list[str] = []
    seen: set[str] = set()
    for group in [*predicted_groups, *expected_groups]:
        for item in group:
            if item not in seen:
                seen.add(item)
                items.append(item)

    if len(items) < 2:
        return 1.0

    predicted = _labels(predicted_groups, items)
    expected = _labels(expected_groups, items)

    a = b = c = d = 0
    for x, y in combinations(items, 2):
        same_predicted = predicted[x] == predicted[y]
        same_expected = expected[x] == expected[y]
        if same_predicted and same_expected:
            a += 1
        elif same_predicted:
            b += 1
        elif same_expected:
            c += 1
        else:
            d += 1

    total_pairs = a + b + c + d
    expected_index = (a + b) * (a + c) / total_pairs
    max_index = ((a + b) + (a + c)) / 2
    denominator = max_index - expected_index
    if denominator == 0:
        return 1.0
    return (a - expected_index) / denominator


def _group_members(group: Any) -> list[str]:
    if isinstance(group, dict):
        members = group.get("members") or group.get("items") or []
    else:
        members = group
    ids = []
    for member in members:
        if isinstance(member, dict):
            member = member.get("id")
        if member is not None:
            ids.append(str(member))
    return ids


def compute_dedup_scan_metrics(
    response_groups: Sequence[Any],
    expected_groups: Sequence[Sequence[str]],
) -> MetricScore:
    """ARI of the backend's scan groups against the expected groups.

    Backend groups may list ids under ``members`` or ``items``, as plain
    ids or as objects with an ``id``. Members without an id are ignored.
    """
    predicted = [_group_members(group) for group in response_groups]
    return MetricScore(
        name="dedup_scan_ari", value=adjusted_rand_index(predicted, expected_groups)
    )


def trigram_similarity(a: str, b: str) -> float:
    """Plain trigram Jaccard of normalized texts, with no exact-match shortcut."""
    tri_a, tri_b = trigrams(normalize(a)), trigrams(normalize(b))
    union = len(tri_a | tri_b)
    return len(tri_a & tri_b) / union if union else 0.0


def evaluate_trigram_dedup(
    pairs: Sequence[DedupPair],
    threshold: float = DEFAULT_TRIGRAM_DEDUP_THRESHOLD,
) -> list[MetricScore]:
    """Score the local trigram classifier on the dedup pair dataset.

    This is the baseline the backend's dedup check should beat; it makes
    no network calls.
    """
    confusion = Confusion()
    errors: list[float] = []

    for pair in pairs:
        score = trigram_similarity(pair.text_a, pair.text_b)
        confusion.add(score >= threshold, pair.is_duplicate)
        if pair.expected_score_range is not None:
            errors.append(abs(score - _midpoint(pair.expected_score_range)))

    return [
        MetricScore(name="trigram_tpr", value=confusion.tpr),
        MetricScore(name="trigram_fpr", value=confusion.fpr),
        MetricScore(name="trigram_precision", value=confusion.precision),
        MetricScore(name="trigram_f1", value=confusion.f1),
        MetricScore(
            name="trigram_score_mae",
            value=sum(errors) / len(errors) if errors else 0.0,
        ),
    ]
