"""Provider-agnostic LLM judge client.

The client sends a rubric system prompt and assembled case content to an
OpenAI-compatible chat completions endpoint or to the Anthropic messages
API, always at temperature 0 with a bounded reply length, and parses the
``SCORE:`` / ``REASONING:`` reply into a normalized MetricScore.

judge() never raises. A missing API key, an HTTP failure that survives
the retries or an unparsable reply all produce a zero score whose details
explain what went wrong.
"""

from __future__ import annotations

import asyncio
import re
from typing import Any

import httpx

from factly_benchmark.config.defaults import (
    ANTHROPIC_MESSAGES_URL,
    ANTHROPIC_VERSION,
    DEFAULT_JUDGE_OPENAI_BASE_URL,
    JUDGE_MAX_TOKENS,
    JUDGE_TIMEOUT_SECONDS,
)
from factly_benchmark.config.settings import get_settings
from factly_benchmark.evaluators.judge.exceptions import JudgeError, JudgeHTTPError
from factly_benchmark.logging_config import get_logger
from factly_benchmark.models.config import EvaluatorConfig
from factly_benchmark.models.enums import MetricType
from factly_benchmark.models.results import MetricScore, TokenUsage

__all__ = ["JudgeClient", "parse_judge_response"]

logger = get_logger(__name__)

_SCORE = re.compile(r"SCORE:\s*(\d(?:\.\d+)?)", re.IGNORECASE)
_REASONING = re.compile(r"REASONING:\s*(.+)", re.IGNORECASE | re.DOTALL)


def parse_judge_response(text: str) -> tuple[float | None, str]:
    """Parse a judge reply into (normalized score, reasoning).

    The raw score is clamped to [0, 5] and divided by 5. The score is None
    when the reply carries no ``SCORE:`` line; the reasoning falls back to
    the whole reply.
    """
    reasoning_match = _REASONING.search(text)
    reasoning = reasoning_match.group(1).strip() if reasoning_match else text

    score_match = _SCORE.search(text)
    if score_match is None:
        return None, reasoning
    raw = float(score_match.group(1))
    return min(5.0, max(0.0, raw)) / 5, reasoning


def _first(blocks: Any) -> dict[str, Any]:
    if isinstance(blocks, list) and blocks and isinstance(blocks[0], dict):
        return blocks[0]
    return {}


class JudgeClient:
    """Client scoring rubric dimensions with an external LLM.

    One client is shared by every judge call of a run. A semaphore bounds
    the number of in-flight calls, and rate-limit (429), server (5xx) and
    transport failures are retried with exponential backoff.

    Attributes:
        config: Judge provider configuration.
        api_key: Resolved API key (config, then LLM_API_KEY).
        max_retries: Attempts per call before scoring zero.
        retry_delay: Base backoff delay in seconds.
        usage: Token usage reported by the provider across calls.

    """

    def __init__(
        self,
        config: EvaluatorConfig,
        *,
        max_concurrency: int | None = None,
        max_retries: int | None = None,
        retry_delay: float | None = None,
        timeout: float = JUDGE_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the judge client.

        Args:
            config: Judge provider, model, key and base URL.
            max_concurrency: In-flight call cap (default from settings).
            max_retries: Attempts per call (default from settings).
            retry_delay: Base backoff delay in seconds (default from settings).
            timeout: Per-request timeout in seconds.
            transport: Optional httpx transport (tests use httpx.MockTransport).

        """
        settings = get_settings()
        self.config = config
        self.api_key = config.api_key or settings.llm_api_key
        self.max_concurrency = max_concurrency or settings.judge_max_concurrency
        self.max_retries = max_retries or settings.judge_max_retries
        self.retry_delay = retry_delay if retry_delay is not None else settings.judge_retry_delay
        self.usage: list[TokenUsage] = []

        self._semaphore = asyncio.Semaphore(self.max_concurrency)
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

        logger.debug(
            "judge_client_initialized",
            provider=config.provider,
            model=config.model,
            max_concurrency=self.max_concurrency,
            max_retries=self.max_retries,
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> JudgeClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    @property
    def total_usage(self) -> TokenUsage:
        """Sum of the token usage recorded so far."""
        return TokenUsage(
            input_tokens=sum(u.input_tokens for u in self.usage),
            output_tokens=sum(u.output_tokens for u in self.usage),
            total_tokens=sum(u.total_tokens for u in self.usage),
        )

    async def judge(self, system_prompt: str, user_content: str, metric_name: str) -> MetricScore:
        """Score one rubric dimension.

        Returns:
            A llm-judge MetricScore in [0, 1]; 0 with diagnostic details on
            any failure.

        """
        if not self.api_key:
            return self._zero(metric_name, "No evaluator API key configured")

        try:
            text = await self._call_with_retry(system_prompt, user_content)
        except (JudgeError, httpx.HTTPError, ValueError) as e:
            logger.warning("judge_call_failed", metric=metric_name, error=str(e))
            return self._zero(metric_name, f"Judge error: {e}")

        score, reasoning = parse_judge_response(text)
        if score is None:
            logger.warning("judge_response_unparsable", metric=metric_name)
            return self._zero(metric_name, f"Unparsable judge response: {text[:300]}")

        return MetricScore(
            name=metric_name, value=score, type=MetricType.llm_judge, details=reasoning
        )

    @staticmethod
    def _zero(metric_name: str, details: str) -> MetricScore:
        return MetricScore(name=metric_name, value=0.0, type=MetricType.llm_judge, details=details)

    async def _call_with_retry(self, system: str, user: str) -> str:
        for attempt in range(self.max_retries):
            try:
                async with self._semaphore:
                    return await self._call(system, user)
            except (JudgeHTTPError, httpx.TransportError) as e:
                retryable = not isinstance(e, JudgeHTTPError) or e.retryable
                if not retryable or attempt == self.max_retries - 1:
                    raise
                # Exponential backoff: delay = base * 2^attempt
                delay = self.retry_delay * (2**attempt)
                logger.warning(
                    "judge_retry_backoff",
                    attempt=attempt + 1,
                    max_retries=self.max_retries,
                    delay_seconds=delay,
                    error=str(e),
                )
                await asyncio.sleep(delay)
        raise JudgeError("Judge retries exhausted")

    async def _call(self, system: str, user: str) -> str:
        if self.config.provider == "anthropic":
            return await self._call_anthropic(system, user)
        return await self._call_openai(system, user)

    async def _call_openai(self, system: str, user: str) -> str:
        base_url = (self.config.base_url or DEFAULT_JUDGE_OPENAI_BASE_URL).rstrip("/")
        data = await self._post(
            f"{base_url}/chat/completions",
            headers={"Authorization": f"Bearer {self.api_key}"},
            body={
                "model": self.config.model,
                "temperature": 0.0,
                "max_tokens": JUDGE_MAX_TOKENS,
                "messages": [
                    {"role": "system", "content": system},
                    {"role": "user", "content": user},
                ],
            },
        )
        message = _first(data.get("choices")).get("message")
        return str(message.get("content") or "") if isinstance(message, dict) else ""

    async def _call_anthropic(self, system: str, user: str) -> str:
        data = await self._post(
            ANTHROPIC_MESSAGES_URL,
            headers={"x-api-key": self.api_key or "", "anthropic-version": ANTHROPIC_VERSION},
            body={
                "model": self.config.model,
                "max_tokens": JUDGE_MAX_TOKENS,
                "temperature": 0.0,
                "system": system,
                "messages": [{"role": "user", "content": user}],
            },
        )
        return str(_first(data.get("content")).get("text") or "")

    async def _post(self, url: str, headers: dict[str, str], body: dict[str, Any]) -> dict[str, Any]:
        response = await self._client.post(
            url, json=body, headers={"Content-Type": "application/json", **headers}
        )
        if not response.is_success:
            raise JudgeHTTPError(response.status_code, response.text)

        data = response.json()
        if not isinstance(data, dict):
            raise JudgeError(f"Unexpected judge response type: {type(data).__name__}")
        self._record_usage(data.get("usage"))
        return data

    def _record_usage(self, usage: Any) -> None:
        parsed = TokenUsage.from_usage(usage)
        if parsed is not None:
            self.usage.append(parsed)
