"""Markdown structure heuristics for formulated outputs."""

from __future__ import annotations

import re

from factly_benchmark.models.results import MetricScore

__all__ = ["evaluate_markdown_structure"]

_HEADING = re.compile(r"^#{1,3}\s+.+", re.MULTILINE)
_BLOCKQUOTE = re.compile(r"^>\s+.+", re.MULTILINE)
_BULLET = re.compile(r"^[-*]\s+.+", re.MULTILINE)
_NUMBERED = re.compile(r"^\d+\.\s+.+", re.MULTILINE)


def evaluate_markdown_structure(text: str, output_type: str) -> list[MetricScore]:
    """Score the markdown structure of an output document.

    Emits has_headings, blockquote_count (raw count), has_citations,
    section_count (raw heading count), has_bullets, has_numbered_steps for
    ``action_plan`` outputs only, and structural_score: the fraction of
    {has headings, has citations, at least two headings} that hold.
    """
    heading_count = len(_HEADING.findall(text))
    blockquote_count = len(_BLOCKQUOTE.findall(text))
    has_headings = heading_count > 0
    has_citations = blockquote_count > 0

    metrics = [
        MetricScore(name="has_headings", value=float(has_headings)),
        MetricScore(name="blockquote_count", value=blockquote_count),
        MetricScore(name="has_citations", value=float(has_citations)),
        MetricScore(name="section_count", value=heading_count),
        MetricScore(name="has_bullets", value=float(bool(_BULLET.search(text)))),
    ]
    if output_type == "action_plan":
        metrics.append(
            MetricScore(name="has_numbered_steps", value=float(bool(_NUMBERED.search(text))))
        )

    checks = [has_headings, has_citations, heading_count >= 2]
    metrics.append(MetricScore(name="structural_score", value=sum(checks) / len(checks)))
    return metrics
