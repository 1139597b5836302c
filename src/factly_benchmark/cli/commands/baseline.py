"""Trigram dedup baseline command implementation.

Scores the local trigram classifier on the dedup pair dataset. No
backend or judge call is made.
"""

from __future__ import annotations

from argparse import Namespace

from factly_benchmark.cli.commands.base import BaseCommand, CommandResult
from factly_benchmark.config.defaults import DEFAULT_TRIGRAM_DEDUP_THRESHOLD
from factly_benchmark.datasets.loader import DatasetLoader
from factly_benchmark.evaluators.automated.dedup import evaluate_trigram_dedup
from factly_benchmark.results.reporter import pct

__all__ = ["BaselineCommand"]


class BaselineCommand(BaseCommand):
    """Command to score the trigram dedup baseline."""

    @property
    def name(self) -> str:
        """Get the command name."""
        return "baseline"

    async def execute(self, args: Namespace) -> CommandResult:
        pairs = DatasetLoader(self.datasets_dir(args)).dedup_pairs()
        if not pairs:
            return CommandResult(exit_code=1, message="Error: no dedup pairs found")

        threshold = getattr(args, "threshold", None)
        if threshold is None:
            threshold = DEFAULT_TRIGRAM_DEDUP_THRESHOLD

        lines = ["", f"TRIGRAM DEDUP BASELINE (threshold={threshold}, pairs={len(pairs)})"]
        lines.append("-" * 60)
        for metric in evaluate_trigram_dedup(pairs, threshold):
            lines.append(f"  {metric.name.ljust(20)} {pct(metric.value):>7}")
        lines.append("")
        return CommandResult(exit_code=0, message="\n".join(lines))
