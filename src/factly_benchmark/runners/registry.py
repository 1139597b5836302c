"""Suite runner registry.

Maps suite names to the runner that executes them. A new suite is added
by registering its runner; nothing else dispatches on suite names.
"""

from __future__ import annotations

from factly_benchmark.datasets.loader import DatasetLoader
from factly_benchmark.logging_config import get_logger
from factly_benchmark.models.enums import SuiteName
from factly_benchmark.runners.base import SuiteRunner
from factly_benchmark.runners.dedup import DedupRunner
from factly_benchmark.runners.extraction import (
    FactExtractionRunner,
    InsightExtractionRunner,
    OutputFormulationRunner,
    RecommendationExtractionRunner,
)
from factly_benchmark.runners.impact import ImpactRunner
from factly_benchmark.runners.pipeline import PipelineRunner
from factly_benchmark.runners.update_proposal import UpdateProposalRunner

__all__ = ["DEFAULT_RUNNERS", "RunnerRegistry"]

logger = get_logger(__name__)

DEFAULT_RUNNERS: tuple[type[SuiteRunner], ...] = (
    FactExtractionRunner,
    InsightExtractionRunner,
    RecommendationExtractionRunner,
    OutputFormulationRunner,
    DedupRunner,
    ImpactRunner,
    UpdateProposalRunner,
    PipelineRunner,
)


class RunnerRegistry:
    """Registry of suite runners keyed by suite name."""

    def __init__(self) -> None:
        self._runners: dict[SuiteName, SuiteRunner] = {}

    @classmethod
    def default(cls, datasets: DatasetLoader) -> RunnerRegistry:
        """Create a registry holding a runner for every built-in suite."""
        registry = cls()
        for runner_class in DEFAULT_RUNNERS:
            registry.register(runner_class(datasets))
        return registry

    def register(self, runner: SuiteRunner, *, replace: bool = False) -> None:
        """Register a runner for its suite.

        Raises:
            ValueError: If the suite already has a runner and replace is False.

        """
        if runner.suite in self._runners and not replace:
            raise ValueError(f"Runner for suite '{runner.suite.value}' is already registered")
        self._runners[runner.suite] = runner
        logger.debug(
            "runner_registered", suite=runner.suite.value, runner=type(runner).__name__
        )

    def get(self, suite: SuiteName | str) -> SuiteRunner:
        """Return the runner for a suite.

        Raises:
            KeyError: If no runner is registered for the suite.

        """
        key = SuiteName(suite)
        if key not in self._runners:
            raise KeyError(f"No runner registered for suite '{key.value}'")
        return self._runners[key]

    def __contains__(self, suite: object) -> bool:
        try:
            return SuiteName(suite) in self._runners
        except ValueError:
            return False

    @property
    def suites(self) -> list[SuiteName]:
        return list(self._runners)
