"""Benchmark orchestration: runs, cost estimation and overall scoring."""

from factly_benchmark.benchmark.cost import CostTracker
from factly_benchmark.benchmark.exceptions import BenchmarkError
from factly_benchmark.benchmark.runner import (
    BenchmarkRunner,
    compute_overall_score,
    find_name_conflicts,
)

__all__ = [
    "BenchmarkError",
    "BenchmarkRunner",
    "CostTracker",
    "compute_overall_score",
    "find_name_conflicts",
]
