"""Compare results command implementation."""

from __future__ import annotations

from argparse import Namespace

from factly_benchmark.cli.commands.base import BaseCommand, CommandResult
from factly_benchmark.results.comparator import compare_results
from factly_benchmark.results.history import detect_regressions
from factly_benchmark.results.reporter import (
    format_alerts,
    format_comparison_markdown,
    format_comparison_terminal,
)

__all__ = ["CompareCommand"]


class CompareCommand(BaseCommand):
    """Command to compare two or more stored results.

    With exactly two files, the second is also checked for regressions
    against the first.
    """

    @property
    def name(self) -> str:
        """Get the command name."""
        return "compare"

    async def execute(self, args: Namespace) -> CommandResult:
        """Compare the given result files.

        Args:
            args: Parsed arguments with result file paths.

        Returns:
            CommandResult with the comparison table and any alerts.

        """
        if len(args.files) < 2:
            return CommandResult(
                exit_code=1, message="Error: compare requires at least 2 result files"
            )

        store = self.store(args)
        results = [store.load(path) for path in args.files]
        comparison = compare_results(results)

        if getattr(args, "markdown", False):
            output = format_comparison_markdown(comparison)
        else:
            output = format_comparison_terminal(comparison)

        if len(results) == 2:
            alerts = format_alerts(detect_regressions(results[1], results[0]))
            if alerts:
                output += "\n" + alerts

        return CommandResult(exit_code=0, message=output)
