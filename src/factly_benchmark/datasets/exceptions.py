"""Exceptions for dataset loading."""

from factly_benchmark.exceptions import FactlyBenchmarkError

__all__ = ["DatasetError"]


class DatasetError(FactlyBenchmarkError):
    """Raised when a dataset fixture file is unreadable or malformed."""

    pass
