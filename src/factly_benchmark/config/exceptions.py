"""Exceptions for config module.

This module defines exceptions related to configuration loading,
parsing, and validation errors. Configuration errors are the only
failures that abort a run, and they are raised before any network call.
"""

from factly_benchmark.exceptions import FactlyBenchmarkError

__all__ = ["ConfigError", "NameConflictError"]


class ConfigError(FactlyBenchmarkError):
    """Base exception for configuration-related errors."""

    pass


class NameConflictError(ConfigError):
    """Raised when run names collide with stored results or each other."""

    def __init__(self, conflicts: list[str]) -> None:
        self.conflicts = conflicts
        super().__init__(
            "Config name(s) already used by stored results: " + ", ".join(conflicts)
        )
