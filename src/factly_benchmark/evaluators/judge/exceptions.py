"""Judge-specific exceptions.

These are raised inside the judge client only. JudgeClient.judge turns
every one of them into a zero score with diagnostic details, so they
never escape the evaluation pipeline.
"""

from factly_benchmark.exceptions import FactlyBenchmarkError

__all__ = ["JudgeError", "JudgeHTTPError"]


class JudgeError(FactlyBenchmarkError):
    """Base exception for judge call failures."""

    pass


class JudgeHTTPError(JudgeError):
    """Judge provider answered with a non-2xx status.

    Attributes:
        status_code: HTTP status of the provider response.

    """

    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        super().__init__(f"HTTP {status_code}: {body[:300]}")

    @property
    def retryable(self) -> bool:
        return self.status_code == 429 or self.status_code >= 500
