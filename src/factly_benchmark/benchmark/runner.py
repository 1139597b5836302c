"""Benchmark runner for executing and scoring runs.

This module provides the BenchmarkRunner class that orchestrates one or
more configured runs: dataset preloading, suite execution against the
backend, evaluation, cost estimation and result storage.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from datetime import datetime, timezone
from pathlib import Path
from uuid import uuid4

import httpx

from factly_benchmark.benchmark.cost import CostTracker
from factly_benchmark.benchmark.exceptions import BenchmarkError
from factly_benchmark.client.http_client import BackendClient
from factly_benchmark.config.exceptions import NameConflictError
from factly_benchmark.datasets.loader import DatasetLoader
from factly_benchmark.evaluation.orchestrator import evaluate_suite
from factly_benchmark.evaluators.aggregate import suite_mean
from factly_benchmark.evaluators.judge.client import JudgeClient
from factly_benchmark.logging_config import get_logger, log_context
from factly_benchmark.models.config import BenchmarkConfig
from factly_benchmark.models.results import BenchmarkResult, SuiteEvaluation
from factly_benchmark.models.runner import RunnerResult
from factly_benchmark.results.polarity import is_lower_better
from factly_benchmark.results.storage import ResultStore
from factly_benchmark.runners.registry import RunnerRegistry

__all__ = ["BenchmarkRunner", "compute_overall_score", "find_name_conflicts"]

logger = get_logger(__name__)


def compute_overall_score(
    suites: Sequence[SuiteEvaluation],
    invert_lower_is_better: bool = False,
) -> float:
    """Unweighted mean of per-suite mean-of-metric-means.

    A suite without metrics counts as 0. With ``invert_lower_is_better``,
    each lower-is-better metric mean ``m`` contributes ``1 - m``.
    """
    if not suites:
        return 0.0

    averages = []
    for suite in suites:
        if invert_lower_is_better:
            means = [
                1 - agg.mean if is_lower_better(name) else agg.mean
                for name, agg in suite.aggregated.items()
            ]
            averages.append(sum(means) / len(means) if means else 0.0)
        else:
            averages.append(suite_mean(suite.aggregated) or 0.0)
    return sum(averages) / len(averages)


def find_name_conflicts(names: Sequence[str], existing: set[str]) -> list[str]:
    """Return names already stored or repeated within the batch, sorted."""
    repeated = {name for name, count in Counter(names).items() if count > 1}
    return sorted((set(names) & existing) | repeated)


def _timestamp() -> str:
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class BenchmarkRunner:
    """Executes configured runs and stores their results.

    Attributes:
        store: Result store receiving every completed run.
        datasets: Loader for the dataset fixtures.
        registry: Suite runners keyed by suite name.

    """

    def __init__(
        self,
        store: ResultStore,
        datasets: DatasetLoader,
        registry: RunnerRegistry | None = None,
        *,
        backend_transport: httpx.AsyncBaseTransport | None = None,
        judge_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the benchmark runner.

        Args:
            store: Result store.
            datasets: Dataset loader.
            registry: Suite runners (default: every built-in suite).
            backend_transport: Optional httpx transport for the backend client.
            judge_transport: Optional httpx transport for the judge client.

        """
        self.store = store
        self.datasets = datasets
        self.registry = registry or RunnerRegistry.default(datasets)
        self._backend_transport = backend_transport
        self._judge_transport = judge_transport

    def check_names(self, configs: Sequence[BenchmarkConfig]) -> None:
        """Reject configs whose names are stored already or repeated.

        Raises:
            NameConflictError: Listing every conflicting name.

        """
        conflicts = find_name_conflicts(
            [c.name for c in configs], self.store.existing_names()
        )
        if conflicts:
            raise NameConflictError(conflicts)

    async def run_all(
        self,
        configs: Sequence[BenchmarkConfig],
        *,
        force: bool = False,
        invert_lower_is_better: bool = False,
    ) -> list[tuple[BenchmarkResult, Path]]:
        """Run every config in turn and store each result.

        Names and datasets are validated for all configs before the first
        backend call.

        Args:
            configs: Configurations to run (e.g. an expanded matrix).
            force: Skip the name uniqueness check.
            invert_lower_is_better: Invert lower-is-better metrics in the
                overall score.

        Returns:
            (result, saved path) per config, in order.

        Raises:
            BenchmarkError: If no config is given.
            NameConflictError: If names conflict and force is False.
            DatasetError: If a needed fixture is malformed.

        """
        if not configs:
            raise BenchmarkError("No configurations to run")
        if not force:
            self.check_names(configs)

        for config in configs:
            counts = self.datasets.preload(config.suites)
            logger.debug("datasets_preloaded", config=config.name, cases=counts)

        outcomes = []
        for index, config in enumerate(configs, start=1):
            with log_context(run=config.name, target=config.target.label):
                logger.info("run_starting", index=index, total=len(configs))
                result = await self.run(config, invert_lower_is_better=invert_lower_is_better)
                outcomes.append((result, self.store.save(result)))
        return outcomes

    async def run(
        self,
        config: BenchmarkConfig,
        *,
        invert_lower_is_better: bool = False,
    ) -> BenchmarkResult:
        """Execute every suite of one config and evaluate the results.

        Backend and judge failures never abort the run; they are recorded
        on the affected cases. The result is returned, not stored.
        """
        logger.info(
            "benchmark_starting",
            config=config.name,
            target=config.target.label,
            suites=[s.value for s in config.suites],
            runs_per_case=config.runs_per_case,
        )

        tracker = CostTracker()
        suites: list[SuiteEvaluation] = []
        total_latency_ms = 0.0

        judge = (
            JudgeClient(config.evaluator, transport=self._judge_transport)
            if config.evaluator is not None
            else None
        )
        try:
            async with BackendClient(
                config.backend_url,
                timeout_ms=config.timeout_ms,
                transport=self._backend_transport,
            ) as client:
                for suite in config.suites:
                    if suite not in self.registry:
                        logger.warning("suite_unknown", suite=suite.value)
                        continue

                    results = await self.registry.get(suite).run(config, client)
                    total_latency_ms += sum(r.latency_ms for r in results)
                    self._track_backend_usage(tracker, results, config.target.model)

                    evaluation = await evaluate_suite(suite.value, results, config, judge)
                    suites.append(evaluation)
                    mean = suite_mean(evaluation.aggregated)
                    logger.info(
                        "suite_completed",
                        suite=suite.value,
                        cases=len(results),
                        errors=evaluation.error_count,
                        avg_score=round(mean, 4) if mean is not None else None,
                        latency_s=round(sum(r.latency_ms for r in results) / 1000, 1),
                    )
        finally:
            if judge is not None:
                for usage in judge.usage:
                    tracker.track_usage(usage, judge.config.model)
                await judge.close()

        result = BenchmarkResult(
            id=str(uuid4()),
            timestamp=_timestamp(),
            config=config,
            target=config.target,
            suites=suites,
            overall_score=compute_overall_score(suites, invert_lower_is_better),
            total_latency_ms=total_latency_ms,
            cost=tracker.total() if tracker.entries else None,
        )
        logger.info(
            "benchmark_completed",
            config=config.name,
            overall_score=round(result.overall_score, 4),
            total_latency_ms=round(total_latency_ms, 1),
        )
        return result

    @staticmethod
    def _track_backend_usage(
        tracker: CostTracker, results: Sequence[RunnerResult], model: str
    ) -> None:
        for result in results:
            if result.usage is not None:
                tracker.track_usage(result.usage, model)
