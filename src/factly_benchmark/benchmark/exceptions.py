"""Exceptions for benchmark orchestration.

This module defines exceptions raised while orchestrating a run, as
opposed to the per-call failures recorded on runner results.
"""

from factly_benchmark.exceptions import FactlyBenchmarkError

__all__ = ["BenchmarkError"]


class BenchmarkError(FactlyBenchmarkError):
    """Exception for benchmark orchestration errors."""

    pass
