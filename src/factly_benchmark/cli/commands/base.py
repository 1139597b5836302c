"""Command base for the factly-benchmark CLI.

Each subcommand is a BaseCommand that turns parsed arguments into a
CommandResult. Commands share how the results and datasets directories
are resolved from global options and settings.
"""

from abc import ABC, abstractmethod
from argparse import Namespace
from pathlib import Path

from factly_benchmark.config.settings import get_settings
from factly_benchmark.models.base import BaseSchema
from factly_benchmark.results.storage import ResultStore

__all__ = ["BaseCommand", "CommandResult"]


class CommandResult(BaseSchema):
    """Exit code plus the rendered report, printed to stdout on success
    and to stderr otherwise.
    """

    exit_code: int
    message: str | None = None


class BaseCommand(ABC):
    """A CLI subcommand.

    Subclasses provide the subcommand name and an async execute.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Subcommand name as registered with the parser."""
        pass

    @abstractmethod
    async def execute(self, args: Namespace) -> CommandResult:
        """Execute the command.

        Args:
            args: Parsed command-line arguments.

        Returns:
            CommandResult with exit code and output.

        """
        pass

    @staticmethod
    def results_dir(args: Namespace) -> Path:
        """Results directory from --results-dir, else from settings."""
        return Path(getattr(args, "results_dir", None) or get_settings().results_dir)

    @staticmethod
    def datasets_dir(args: Namespace) -> Path:
        """Datasets directory from --datasets-dir, else from settings."""
        return Path(getattr(args, "datasets_dir", None) or get_settings().datasets_dir)

    def store(self, args: Namespace) -> ResultStore:
        return ResultStore(self.results_dir(args))
