"""Exceptions for result storage.

This module defines exceptions raised while persisting, loading or
deleting benchmark result artifacts.
"""

from factly_benchmark.exceptions import FactlyBenchmarkError

__all__ = ["ResultNotFoundError", "StorageError"]


class StorageError(FactlyBenchmarkError):
    """Exception for result storage and loading failures."""

    pass


class ResultNotFoundError(StorageError):
    """Raised when a result file or id does not exist."""

    pass
