"""Base exceptions for factly-benchmark.

This module defines the root exception hierarchy for the benchmark
harness. All domain-specific exceptions inherit from FactlyBenchmarkError.
"""

__all__ = ["FactlyBenchmarkError"]


class FactlyBenchmarkError(Exception):
    """Base exception for all factly-benchmark errors.

    Provides a common exception type for clients to catch harness errors.
    """

    pass
