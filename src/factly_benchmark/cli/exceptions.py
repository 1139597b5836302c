"""Exceptions for the CLI module.

This module defines exceptions specific to CLI operations.
"""

from factly_benchmark.exceptions import FactlyBenchmarkError

__all__ = [
    "CLIError",
    "CommandError",
]


class CLIError(FactlyBenchmarkError):
    """Base exception for CLI-related errors."""

    pass


class CommandError(CLIError):
    """Raised when a command execution fails."""

    pass
