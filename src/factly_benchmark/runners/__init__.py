"""Suite runners replaying dataset cases against the backend-under-test."""

from factly_benchmark.runners.base import SuiteRunner
from factly_benchmark.runners.registry import RunnerRegistry

__all__ = ["RunnerRegistry", "SuiteRunner"]
