"""Improvement suggestions command implementation."""

from __future__ import annotations

from argparse import Namespace

from factly_benchmark.cli.commands.base import BaseCommand, CommandResult
from factly_benchmark.config.defaults import SUGGESTION_WINDOW
from factly_benchmark.results.reporter import format_suggestions
from factly_benchmark.results.suggestions import generate_suggestions

__all__ = ["SuggestCommand"]


class SuggestCommand(BaseCommand):
    """Command to suggest configurations worth trying next.

    Only the most recent stored results are considered.
    """

    @property
    def name(self) -> str:
        """Get the command name."""
        return "suggest"

    async def execute(self, args: Namespace) -> CommandResult:
        results = [result for _, result in self.store(args).load_all()][:SUGGESTION_WINDOW]
        return CommandResult(
            exit_code=0, message=format_suggestions(generate_suggestions(results))
        )
