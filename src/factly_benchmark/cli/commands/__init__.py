"""CLI command implementations.

This module exports the command classes for the CLI.
"""

from factly_benchmark.cli.commands.base import BaseCommand, CommandResult
from factly_benchmark.cli.commands.baseline import BaselineCommand
from factly_benchmark.cli.commands.compare import CompareCommand
from factly_benchmark.cli.commands.history import HistoryCommand
from factly_benchmark.cli.commands.list_results import ListCommand
from factly_benchmark.cli.commands.run import RunCommand
from factly_benchmark.cli.commands.suggest import SuggestCommand

__all__ = [
    "BaseCommand",
    "BaselineCommand",
    "CommandResult",
    "CompareCommand",
    "HistoryCommand",
    "ListCommand",
    "RunCommand",
    "SuggestCommand",
]
