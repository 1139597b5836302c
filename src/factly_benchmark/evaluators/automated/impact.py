"""Impact-check and value-propagation metrics."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from factly_benchmark.evaluators.automated.confusion import Confusion
from factly_benchmark.models.datasets import ImpactLabel
from factly_benchmark.models.results import MetricScore

__all__ = ["compute_impact_metrics", "compute_value_propagation"]


def compute_impact_metrics(
    predicted: Sequence[dict[str, Any]],
    expected: Sequence[ImpactLabel],
) -> list[MetricScore]:
    """Classification metrics of predicted impacted flags, matched by id.

    Predictions for ids missing from the expectation are skipped.
    """
    expected_by_id = {label.id: label.impacted for label in expected}
    confusion = Confusion()
    for item in predicted:
        actual = expected_by_id.get(str(item.get("id")))
        if actual is None:
            continue
        confusion.add(bool(item.get("impacted")), actual)

    return [
        MetricScore(name="impact_tpr", value=confusion.tpr),
        MetricScore(name="impact_tnr", value=confusion.tnr),
        MetricScore(name="impact_precision", value=confusion.precision),
        MetricScore(name="impact_f1", value=confusion.f1),
    ]


def compute_value_propagation(
    proposed_text: str,
    expected_present: Sequence[str],
    expected_absent: Sequence[str],
) -> list[MetricScore]:
    """Case-insensitive presence and absence rates of expected values.

    Each rate is 1.0 when its list is empty.
    """
    text = proposed_text.lower()
    present = sum(1 for value in expected_present if value.lower() in text)
    absent = sum(1 for value in expected_absent if value.lower() not in text)

    return [
        MetricScore(
            name="value_present_rate",
            value=present / len(expected_present) if expected_present else 1.0,
        ),
        MetricScore(
            name="value_absent_rate",
            value=absent / len(expected_absent) if expected_absent else 1.0,
        ),
    ]
