"""Metric polarity.

Most metrics are better when higher. False-positive rates and mean
absolute errors are better when lower; they are recognized by name.
"""

__all__ = ["is_lower_better"]

_LOWER_IS_BETTER_MARKERS = ("fpr", "mae")


def is_lower_better(metric_name: str) -> bool:
    """Return True if a lower value of the metric is better."""
    return any(marker in metric_name for marker in _LOWER_IS_BETTER_MARKERS)
