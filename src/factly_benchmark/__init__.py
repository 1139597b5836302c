"""Factly benchmark: quality evaluation harness for the Factly AI backend.

Runs dataset suites (fact, insight, recommendation and output extraction,
dedup, impact checks, update proposals and the end-to-end pipeline) against
a backend-under-test, scores them with automated metrics and LLM judges,
and stores, compares and tracks results over time.
"""

__version__ = "0.3.0"

__all__ = ["__version__"]
