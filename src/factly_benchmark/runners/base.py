"""Base class for suite runners.

A suite runner replays its dataset cases against the backend-under-test
``runs_per_case`` times. Every (case, run) produces exactly one
RunnerResult, successful or not; a failed call is recorded on its own
result and never stops the remaining cases.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from typing import Any, ClassVar

from factly_benchmark.client.exceptions import BackendError
from factly_benchmark.client.http_client import BackendClient, BackendResponse
from factly_benchmark.datasets.loader import DatasetLoader
from factly_benchmark.logging_config import get_logger
from factly_benchmark.models.config import BenchmarkConfig
from factly_benchmark.models.enums import SuiteName
from factly_benchmark.models.results import TokenUsage
from factly_benchmark.models.runner import Expectation, RunnerResult

__all__ = ["SuiteRunner", "extract_usage", "response_dict"]

logger = get_logger(__name__)


class SuiteRunner(ABC):
    """Abstract runner for one suite.

    Subclasses name their ``suite``, list their dataset cases and execute
    a single case run. Cases run concurrently up to ``config.concurrency``;
    with the default of 1 they run strictly one after another.

    Attributes:
        suite: Suite this runner executes.
        datasets: Loader providing the suite's cases.

    """

    suite: ClassVar[SuiteName]

    def __init__(self, datasets: DatasetLoader) -> None:
        self.datasets = datasets

    @abstractmethod
    def load_cases(self) -> list[Any]:
        """Return the dataset cases of this suite."""
        ...

    @abstractmethod
    def expectation(self, case: Any) -> Expectation:
        """Return the gold expectation to pair with results of a case."""
        ...

    @abstractmethod
    async def execute(
        self,
        case: Any,
        run_index: int,
        config: BenchmarkConfig,
        client: BackendClient,
    ) -> RunnerResult:
        """Execute one run of one case.

        Raises:
            BackendError: If the backend call fails; the caller records it.

        """
        ...

    async def run(self, config: BenchmarkConfig, client: BackendClient) -> list[RunnerResult]:
        """Run every case ``runs_per_case`` times.

        Returns:
            One RunnerResult per (case, run index), in case order.

        """
        cases = self.load_cases()
        if not cases:
            logger.warning("suite_no_cases", suite=self.suite.value)
            return []

        logger.info(
            "suite_started",
            suite=self.suite.value,
            cases=len(cases),
            runs_per_case=config.runs_per_case,
            concurrency=config.concurrency,
        )

        semaphore = asyncio.Semaphore(config.concurrency)

        async def bounded(case: Any, run_index: int) -> RunnerResult:
            async with semaphore:
                return await self._run_guarded(case, run_index, config, client)

        results = await asyncio.gather(
            *(
                bounded(case, run_index)
                for case in cases
                for run_index in range(config.runs_per_case)
            )
        )

        errors = sum(1 for r in results if not r.ok)
        logger.info(
            "suite_runs_completed",
            suite=self.suite.value,
            results=len(results),
            errors=errors,
        )
        return list(results)

    async def _run_guarded(
        self,
        case: Any,
        run_index: int,
        config: BenchmarkConfig,
        client: BackendClient,
    ) -> RunnerResult:
        try:
            return await self.execute(case, run_index, config, client)
        except BackendError as e:
            logger.warning(
                "case_failed",
                suite=self.suite.value,
                case_id=case.id,
                run_index=run_index,
                error=str(e),
            )
            return self.failure(case, run_index, str(e))

    def success(
        self,
        case: Any,
        run_index: int,
        response: BackendResponse,
    ) -> RunnerResult:
        """Build a successful result from a backend response."""
        data = response_dict(response)
        return RunnerResult(
            case_id=case.id,
            suite=self.suite.value,
            run_index=run_index,
            raw_response=data,
            latency_ms=response.latency_ms,
            expectation=self.expectation(case),
            usage=extract_usage(data),
        )

    def failure(
        self,
        case: Any,
        run_index: int,
        error: str,
        latency_ms: float = 0.0,
    ) -> RunnerResult:
        """Build an error result carrying no response."""
        return RunnerResult(
            case_id=case.id,
            suite=self.suite.value,
            run_index=run_index,
            raw_response=None,
            latency_ms=latency_ms,
            error=error,
            expectation=self.expectation(case),
        )


def response_dict(response: BackendResponse) -> dict[str, Any]:
    """Return the response body, which must be a JSON object.

    Raises:
        BackendError: If the body is not a JSON object.

    """
    if not isinstance(response.data, dict):
        raise BackendError(
            f"Expected a JSON object response, got {type(response.data).__name__}"
        )
    return response.data


def extract_usage(data: dict[str, Any]) -> TokenUsage | None:
    """Read a provider-style ``usage`` block from a response, if any."""
    return TokenUsage.from_usage(data.get("usage"))
