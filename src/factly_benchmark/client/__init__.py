"""HTTP client for the backend-under-test."""

from factly_benchmark.client.exceptions import (
    BackendError,
    BackendHTTPError,
    BackendTimeoutError,
)
from factly_benchmark.client.http_client import BackendClient, BackendResponse

__all__ = [
    "BackendClient",
    "BackendError",
    "BackendHTTPError",
    "BackendResponse",
    "BackendTimeoutError",
]
