"""Result storage, comparison, history and reporting."""

from factly_benchmark.results.comparator import compare_results
from factly_benchmark.results.exceptions import ResultNotFoundError, StorageError
from factly_benchmark.results.history import detect_regressions, get_history
from factly_benchmark.results.polarity import is_lower_better
from factly_benchmark.results.storage import ResultStore
from factly_benchmark.results.suggestions import generate_suggestions

__all__ = [
    "ResultNotFoundError",
    "ResultStore",
    "StorageError",
    "compare_results",
    "detect_regressions",
    "generate_suggestions",
    "get_history",
    "is_lower_better",
]
