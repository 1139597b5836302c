"""Unit tests for the backend HTTP client.

Tests request dispatch, latency measurement and error mapping using
httpx.MockTransport.
"""

import json

import httpx
import pytest

from factly_benchmark.client.exceptions import (
    BackendError,
    BackendHTTPError,
    BackendTimeoutError,
)
from factly_benchmark.client.http_client import BackendClient


def _backend(handler) -> BackendClient:
    return BackendClient(
        "http://backend.test/", timeout_ms=1000, transport=httpx.MockTransport(handler)
    )


class TestBackendClientPost:
    """Tests for POST requests."""

    @pytest.mark.asyncio
    async def test_posts_json_and_parses_response(self) -> None:
        """Test the body is sent as JSON and the reply parsed."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"suggestions": [{"text": "a"}]})

        async with _backend(handler) as client:
            response = await client.post("/extract/facts", {"input_text": "x"})

        assert response.status == 200
        assert response.data == {"suggestions": [{"text": "a"}]}
        assert response.latency_ms >= 0
        assert str(seen[0].url) == "http://backend.test/extract/facts"
        assert json.loads(seen[0].content) == {"input_text": "x"}

    @pytest.mark.asyncio
    async def test_http_error_carries_status_and_body(self) -> None:
        """Test a non-2xx reply raises BackendHTTPError."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, json={"error": "boom"})

        async with _backend(handler) as client:
            with pytest.raises(BackendHTTPError) as exc_info:
                await client.post("/extract/facts", {})

        assert exc_info.value.status_code == 500
        assert exc_info.value.body == {"error": "boom"}
        assert str(exc_info.value) == 'HTTP 500: {"error":"boom"}'

    @pytest.mark.asyncio
    async def test_http_error_with_text_body(self) -> None:
        """Test a plain-text error body is kept verbatim."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(502, text="bad gateway")

        async with _backend(handler) as client:
            with pytest.raises(BackendHTTPError, match="HTTP 502: bad gateway"):
                await client.post("/dedup/check", {})

    @pytest.mark.asyncio
    async def test_timeout(self) -> None:
        """Test a transport timeout raises BackendTimeoutError."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("too slow", request=request)

        async with _backend(handler) as client:
            with pytest.raises(BackendTimeoutError, match="timed out after 1000ms"):
                await client.post("/check/impact", {})

    @pytest.mark.asyncio
    async def test_connection_error(self) -> None:
        """Test a connection failure raises BackendError."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        async with _backend(handler) as client:
            with pytest.raises(BackendError, match="failed"):
                await client.post("/propose/update", {})

    @pytest.mark.asyncio
    async def test_non_json_success(self) -> None:
        """Test a 2xx reply that is not JSON raises BackendError."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>ok</html>")

        async with _backend(handler) as client:
            with pytest.raises(BackendError, match="non-JSON"):
                await client.post("/extract/facts", {})

    @pytest.mark.asyncio
    async def test_close_is_idempotent(self) -> None:
        """Test closing twice is harmless."""
        client = _backend(lambda request: httpx.Response(200, json={}))
        await client.get("/health")
        await client.close()
        await client.close()
