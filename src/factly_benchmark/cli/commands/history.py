"""Score history command implementation."""

from __future__ import annotations

from argparse import Namespace

from factly_benchmark.cli.commands.base import BaseCommand, CommandResult
from factly_benchmark.results.history import get_history
from factly_benchmark.results.reporter import format_history

__all__ = ["HistoryCommand"]


class HistoryCommand(BaseCommand):
    """Command to show the score history of stored results."""

    @property
    def name(self) -> str:
        """Get the command name."""
        return "history"

    async def execute(self, args: Namespace) -> CommandResult:
        points = get_history(self.store(args), getattr(args, "suite", None))
        return CommandResult(exit_code=0, message=format_history(points))
