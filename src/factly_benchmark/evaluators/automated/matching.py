"""Matching-based precision/recall/F1 and source anchoring.

Extracted items are matched one-to-one against gold items by trigram
Jaccard similarity over normalized text, using a greedy assignment: each
extracted item takes the highest-scoring gold item not yet matched, and
counts as a true positive when that score reaches the threshold.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import Any

from factly_benchmark.config.defaults import DEFAULT_MATCHING_THRESHOLD
from factly_benchmark.models.results import MetricScore

__all__ = [
    "compute_precision_recall_f1",
    "compute_source_anchoring",
    "normalize",
    "precision_recall_f1",
    "string_similarity",
    "trigrams",
]

_PUNCTUATION = re.compile(r"[^\w\s]")
_WHITESPACE = re.compile(r"\s+")


def normalize(text: str) -> str:
    """Lowercase, strip punctuation and collapse whitespace."""
    text = _PUNCTUATION.sub("", text.lower())
    return _WHITESPACE.sub(" ", text).strip()


def trigrams(text: str) -> set[str]:
    """Return the set of 3-character shingles of a string."""
    return {text[i : i + 3] for i in range(len(text) - 2)}


def string_similarity(a: str, b: str) -> float:
    """Trigram Jaccard similarity of two texts after normalization.

    Identical normalized texts score 1.0 even when shorter than a trigram.
    """
    na, nb = normalize(a), normalize(b)
    if na == nb:
        return 1.0

    tri_a, tri_b = trigrams(na), trigrams(nb)
    union = len(tri_a | tri_b)
    if union == 0:
        return 0.0
    return len(tri_a & tri_b) / union


def precision_recall_f1(
    extracted: Sequence[str],
    gold: Sequence[str],
    threshold: float = DEFAULT_MATCHING_THRESHOLD,
) -> tuple[float, float, float]:
    """Compute (precision, recall, F1) of extracted items against gold items.

    Special cases:
        both empty: (1, 1, 1)
        extracted empty, gold non-empty: (0, 0, 0)
        gold empty, extracted non-empty: (0, 1, 0)

    """
    if not extracted and not gold:
        return 1.0, 1.0, 1.0
    if not extracted:
        return 0.0, 0.0, 0.0
    if not gold:
        # recall is vacuously complete when nothing was expected
        return 0.0, 1.0, 0.0

    matched: set[int] = set()
    true_positives = 0
    for item in extracted:
        best_score = 0.0
        best_index = -1
        for index, candidate in enumerate(gold):
            if index in matched:
                continue
            score = string_similarity(item, candidate)
            if score > best_score:
                best_score = score
                best_index = index
        if best_index >= 0 and best_score >= threshold:
            true_positives += 1
            matched.add(best_index)

    precision = true_positives / len(extracted)
    recall = true_positives / len(gold)
    f1 = 2 * precision * recall / (precision + recall) if precision + recall > 0 else 0.0
    return precision, recall, f1


def compute_precision_recall_f1(
    extracted: Sequence[str],
    gold: Sequence[str],
    threshold: float = DEFAULT_MATCHING_THRESHOLD,
) -> list[MetricScore]:
    """Return precision, recall and f1 as metric scores."""
    precision, recall, f1 = precision_recall_f1(extracted, gold, threshold)
    return [
        MetricScore(name="precision", value=precision),
        MetricScore(name="recall", value=recall),
        MetricScore(name="f1", value=f1),
    ]


def compute_source_anchoring(
    facts: Sequence[Mapping[str, Any]], input_text: str
) -> MetricScore:
    """Fraction of excerpt-bearing facts whose excerpt occurs in the input.

    Both sides are normalized before the substring test. Scores 1.0 when
    no fact declares an excerpt.
    """
    excerpts = [str(fact["source_excerpt"]) for fact in facts if fact.get("source_excerpt")]
    if not excerpts:
        return MetricScore(name="source_anchoring", value=1.0)

    normalized_input = normalize(input_text)
    anchored = sum(1 for excerpt in excerpts if normalize(excerpt) in normalized_input)
    return MetricScore(name="source_anchoring", value=anchored / len(excerpts))
