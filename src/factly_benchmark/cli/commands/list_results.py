"""List results command implementation."""

from __future__ import annotations

from argparse import Namespace

from factly_benchmark.cli.commands.base import BaseCommand, CommandResult
from factly_benchmark.results.reporter import format_result_list

__all__ = ["ListCommand"]


class ListCommand(BaseCommand):
    """Command to list stored results, newest first."""

    @property
    def name(self) -> str:
        """Get the command name."""
        return "list"

    async def execute(self, args: Namespace) -> CommandResult:
        summaries = self.store(args).list_results()
        return CommandResult(exit_code=0, message=format_result_list(summaries))
