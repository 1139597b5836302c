"""Run benchmark command implementation.

This module implements the CLI command that runs a single or matrix
configuration against the backend and stores every result.
"""

from __future__ import annotations

from argparse import Namespace

from factly_benchmark.benchmark.runner import BenchmarkRunner
from factly_benchmark.cli.commands.base import BaseCommand, CommandResult
from factly_benchmark.config.loader import load_configs
from factly_benchmark.datasets.loader import DatasetLoader
from factly_benchmark.logging_config import get_logger
from factly_benchmark.models.config import BenchmarkConfig
from factly_benchmark.models.enums import SuiteName
from factly_benchmark.results.reporter import format_result_terminal

__all__ = ["RunCommand", "parse_suite_filter"]

logger = get_logger(__name__)


def parse_suite_filter(value: str) -> list[SuiteName]:
    """Parse a comma-separated suite list (``fact-extraction,dedup``).

    Raises:
        ValueError: If a name is not a known suite.

    """
    return [SuiteName(name.strip()) for name in value.split(",") if name.strip()]


class RunCommand(BaseCommand):
    """Command to run a benchmark configuration.

    A matrix configuration runs once per parameter combination. Stored
    result names must be unique unless --force is given.
    """

    @property
    def name(self) -> str:
        """Get the command name."""
        return "run"

    async def execute(self, args: Namespace) -> CommandResult:
        """Run the configuration and store the results.

        Args:
            args: Parsed arguments with the config path and run options.

        Returns:
            CommandResult with one rendered report per run.

        """
        configs = [self._apply_overrides(config, args) for config in load_configs(args.config)]

        logger.info(
            "run_command_starting",
            config=args.config,
            runs=len(configs),
            names=[c.name for c in configs],
        )

        runner = BenchmarkRunner(self.store(args), DatasetLoader(self.datasets_dir(args)))
        outcomes = await runner.run_all(
            configs,
            force=getattr(args, "force", False),
            invert_lower_is_better=getattr(args, "invert_lower_is_better", False),
        )

        sections = [
            f"{format_result_terminal(result)}\n\nResult saved to: {path}"
            for result, path in outcomes
        ]
        return CommandResult(exit_code=0, message="\n".join(sections))

    @staticmethod
    def _apply_overrides(config: BenchmarkConfig, args: Namespace) -> BenchmarkConfig:
        updates: dict[str, object] = {}
        suites = getattr(args, "suite", None)
        if suites:
            updates["suites"] = parse_suite_filter(suites)
        concurrency = getattr(args, "concurrency", None)
        if concurrency:
            updates["concurrency"] = concurrency
        return config.model_copy(update=updates) if updates else config
