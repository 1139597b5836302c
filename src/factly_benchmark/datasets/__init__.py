"""Dataset fixtures for benchmark suites."""

from factly_benchmark.datasets.exceptions import DatasetError
from factly_benchmark.datasets.loader import DatasetLoader

__all__ = ["DatasetError", "DatasetLoader"]
