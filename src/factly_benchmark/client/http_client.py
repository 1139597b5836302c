"""Async HTTP client for the backend-under-test.

Each call is bounded by its own timeout; a timeout cancels only that call.
Latency is measured wall-clock around the request and excludes the
caller's handling of the parsed body.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any

import httpx

from factly_benchmark.client.exceptions import (
    BackendError,
    BackendHTTPError,
    BackendTimeoutError,
)
from factly_benchmark.config.defaults import DEFAULT_TIMEOUT_MS
from factly_benchmark.logging_config import get_logger

__all__ = ["BackendClient", "BackendResponse"]

logger = get_logger(__name__)


@dataclass
class BackendResponse:
    """Parsed backend response with its measured latency."""

    status: int
    data: Any
    latency_ms: float


class BackendClient:
    """Client for the backend-under-test HTTP API.

    Example:
        async with BackendClient("http://localhost:3002") as client:
            response = await client.post("/extract/facts", {"input_text": "..."})

    """

    def __init__(
        self,
        base_url: str,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
        transport: httpx.AsyncBaseTransport | None = None,
        max_connections: int = 20,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Base URL of the backend.
            timeout_ms: Per-call timeout in milliseconds.
            transport: Optional httpx transport (tests use httpx.MockTransport).
            max_connections: Connection pool size.

        """
        self.base_url = base_url.rstrip("/")
        self.timeout_ms = timeout_ms
        self._transport = transport
        self._limits = httpx.Limits(max_connections=max_connections)
        self._client: httpx.AsyncClient | None = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout_ms / 1000,
                limits=self._limits,
                transport=self._transport,
                headers={"Content-Type": "application/json"},
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client and release connections."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> BackendClient:
        self._get_client()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def post(self, path: str, body: Any) -> BackendResponse:
        """POST a JSON body and return the parsed response.

        Raises:
            BackendTimeoutError: If the call exceeds the timeout.
            BackendHTTPError: If the status is not 2xx.
            BackendError: On transport failures or a non-JSON success body.

        """
        return await self._request("POST", path, json=body)

    async def get(self, path: str) -> BackendResponse:
        """GET a path and return the parsed response."""
        return await self._request("GET", path)

    async def _request(self, method: str, path: str, **kwargs: Any) -> BackendResponse:
        client = self._get_client()
        start = time.perf_counter()
        try:
            response = await client.request(method, path, **kwargs)
        except httpx.TimeoutException as e:
            logger.warning(
                "backend_call_timeout", method=method, path=path, timeout_ms=self.timeout_ms
            )
            raise BackendTimeoutError(method, path, self.timeout_ms) from e
        except httpx.HTTPError as e:
            logger.warning("backend_call_failed", method=method, path=path, error=str(e))
            raise BackendError(f"{method} {path} failed: {e}") from e
        latency_ms = (time.perf_counter() - start) * 1000

        data = _parse_body(response)
        if not response.is_success:
            raise BackendHTTPError(response.status_code, data)
        if isinstance(data, str):
            raise BackendError(f"{method} {path} returned a non-JSON body: {data[:200]}")

        logger.debug(
            "backend_call_completed",
            method=method,
            path=path,
            status=response.status_code,
            latency_ms=round(latency_ms, 1),
        )
        return BackendResponse(status=response.status_code, data=data, latency_ms=latency_ms)


def _parse_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text
