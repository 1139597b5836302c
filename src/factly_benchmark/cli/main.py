"""CLI main entry point.

This module provides the main entry point for the factly-benchmark CLI.
"""

import argparse
import asyncio
import sys
import traceback

from factly_benchmark.cli.commands import (
    BaseCommand,
    BaselineCommand,
    CompareCommand,
    HistoryCommand,
    ListCommand,
    RunCommand,
    SuggestCommand,
)
from factly_benchmark.cli.exceptions import CommandError
from factly_benchmark.cli.parser import create_parser
from factly_benchmark.cli.validators import validate_args
from factly_benchmark.exceptions import FactlyBenchmarkError
from factly_benchmark.logging_config import configure_logging, get_logger

__all__ = ["CommandDispatcher", "main"]

logger = get_logger(__name__)


class CommandDispatcher:
    """Dispatches CLI commands to their handlers."""

    def __init__(self) -> None:
        """Initialize the dispatcher with all command handlers."""
        commands: list[BaseCommand] = [
            RunCommand(),
            CompareCommand(),
            HistoryCommand(),
            ListCommand(),
            SuggestCommand(),
            BaselineCommand(),
        ]
        self._commands = {command.name: command for command in commands}

    async def dispatch(self, args: argparse.Namespace) -> int:
        """Dispatch to the command named by the arguments.

        Args:
            args: Parsed command-line arguments.

        Returns:
            Exit code (0 for success, non-zero for errors).

        Raises:
            CommandError: If the command is unknown.

        """
        command = self._commands.get(args.command)
        if command is None:
            raise CommandError(f"Unknown command: {args.command}")

        result = await command.execute(args)
        if result.message:
            stream = sys.stdout if result.exit_code == 0 else sys.stderr
            print(result.message, file=stream)
        return result.exit_code


def main(argv: list[str] | None = None) -> int:
    """Run the CLI application.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:]).

    Returns:
        Exit code (0 for success, non-zero for errors).

    """
    parser = create_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=args.verbose, json_output=args.json_logs)

    error = validate_args(args)
    if error:
        print(error, file=sys.stderr)
        return 1

    try:
        dispatcher = CommandDispatcher()
        return asyncio.run(dispatcher.dispatch(args))

    except KeyboardInterrupt:
        print("\nInterrupted by user")
        return 130

    except FactlyBenchmarkError as e:
        logger.error("command_failed", command=args.command, error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except Exception as e:
        logger.exception("fatal_error", error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        if args.verbose:
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
