"""Validation utilities for CLI arguments.

This module provides validation of CLI arguments that argparse cannot
express on its own.
"""

import argparse
from pathlib import Path

from factly_benchmark.models.enums import SuiteName

__all__ = ["validate_args"]


def validate_args(args: argparse.Namespace) -> str | None:
    """Validate CLI arguments for consistency.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Error message if validation fails, None if valid.

    """
    command = getattr(args, "command", None)
    if command is None:
        return "Error: a command is required (run, compare, history, list, suggest, baseline)"

    if command == "run":
        config = Path(args.config)
        if not config.is_file():
            return f"Error: Config file not found: {args.config}"

        suites = getattr(args, "suite", None)
        if suites:
            unknown = [
                name.strip()
                for name in suites.split(",")
                if name.strip() and name.strip() not in SuiteName.values()
            ]
            if unknown:
                return (
                    f"Error: Unknown suite(s): {', '.join(unknown)}. "
                    f"Valid: {', '.join(SuiteName.values())}"
                )

        concurrency = getattr(args, "concurrency", None)
        if concurrency is not None and concurrency < 1:
            return "Error: --concurrency must be at least 1"

    if command == "compare":
        if len(args.files) < 2:
            return "Error: compare requires at least 2 result files"
        missing = [f for f in args.files if not Path(f).is_file()]
        if missing:
            return f"Error: Result file(s) not found: {', '.join(missing)}"

    if command == "history":
        suite = getattr(args, "suite", None)
        if suite and suite not in SuiteName.values():
            return f"Error: Unknown suite: {suite}. Valid: {', '.join(SuiteName.values())}"

    if command == "baseline" and not 0.0 <= args.threshold <= 1.0:
        return "Error: --threshold must be between 0 and 1"

    return None
