"""Exceptions for the backend client.

A backend error is recorded on the single runner result that caused it;
it never aborts a suite.
"""

import json
from typing import Any

from factly_benchmark.exceptions import FactlyBenchmarkError

__all__ = ["BackendError", "BackendHTTPError", "BackendTimeoutError"]


class BackendError(FactlyBenchmarkError):
    """Base exception for backend-under-test call failures."""

    pass


class BackendTimeoutError(BackendError):
    """Raised when a backend call exceeds its timeout."""

    def __init__(self, method: str, path: str, timeout_ms: int) -> None:
        self.timeout_ms = timeout_ms
        super().__init__(f"{method} {path} timed out after {timeout_ms}ms")


class BackendHTTPError(BackendError):
    """Raised when the backend answers with a non-2xx status."""

    def __init__(self, status_code: int, body: Any) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"HTTP {status_code}: {_render(body)}")


def _render(body: Any) -> str:
    if isinstance(body, str):
        return body
    return json.dumps(body, separators=(",", ":"))
