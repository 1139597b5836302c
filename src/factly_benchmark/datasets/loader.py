"""Dataset fixture loading.

Fixtures live under a datasets directory in a fixed layout: one directory
of case files per extraction suite (each file a case or a list of cases)
and single scenario files for dedup, impact and update-proposal suites.
Missing directories and files yield no cases.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from factly_benchmark.datasets.exceptions import DatasetError
from factly_benchmark.logging_config import get_logger
from factly_benchmark.models.datasets import (
    DedupPair,
    DedupScanScenario,
    FactExtractionCase,
    ImpactScenario,
    InsightExtractionCase,
    OutputFormulationCase,
    PipelineCase,
    RecommendationExtractionCase,
    UpdateProposalScenario,
)
from factly_benchmark.models.enums import SuiteName

__all__ = ["DatasetLoader"]

logger = get_logger(__name__)

T = TypeVar("T", bound=BaseModel)


class DatasetLoader:
    """Loads and validates dataset fixtures, caching each file set.

    Attributes:
        datasets_dir: Root directory of the fixtures.

    """

    def __init__(self, datasets_dir: Path | str) -> None:
        self.datasets_dir = Path(datasets_dir)
        self._cache: dict[str, list[Any]] = {}

    def fact_extraction_cases(self) -> list[FactExtractionCase]:
        return self._load_dir("fact-extraction", FactExtractionCase)

    def insight_extraction_cases(self) -> list[InsightExtractionCase]:
        return self._load_dir("insight-extraction", InsightExtractionCase)

    def recommendation_extraction_cases(self) -> list[RecommendationExtractionCase]:
        return self._load_dir("recommendation-extraction", RecommendationExtractionCase)

    def output_formulation_cases(self) -> list[OutputFormulationCase]:
        return self._load_dir("output-formulation", OutputFormulationCase)

    def pipeline_cases(self) -> list[PipelineCase]:
        return self._load_dir("pipeline", PipelineCase)

    def dedup_pairs(self) -> list[DedupPair]:
        return self._load_file("dedup/known-duplicates.json", DedupPair)

    def dedup_scan_scenarios(self) -> list[DedupScanScenario]:
        return self._load_file("dedup/scan-groups.json", DedupScanScenario)

    def impact_scenarios(self) -> list[ImpactScenario]:
        return self._load_file("impact/impact-scenarios.json", ImpactScenario)

    def update_proposal_scenarios(self) -> list[UpdateProposalScenario]:
        return self._load_file("update-proposal/update-scenarios.json", UpdateProposalScenario)

    def preload(self, suites: list[SuiteName]) -> dict[str, int]:
        """Load every fixture the given suites need, returning case counts.

        Used before a run starts so malformed fixtures fail before any
        backend call is made.

        Raises:
            DatasetError: If a fixture file is unreadable or malformed.

        """
        loaders = {
            SuiteName.fact_extraction: [self.fact_extraction_cases],
            SuiteName.insight_extraction: [self.insight_extraction_cases],
            SuiteName.recommendation_extraction: [self.recommendation_extraction_cases],
            SuiteName.output_formulation: [self.output_formulation_cases],
            SuiteName.dedup: [self.dedup_pairs, self.dedup_scan_scenarios],
            SuiteName.impact_check: [self.impact_scenarios],
            SuiteName.update_proposal: [self.update_proposal_scenarios],
            SuiteName.pipeline: [self.pipeline_cases],
        }
        counts = {}
        for suite in suites:
            counts[suite.value] = sum(len(load()) for load in loaders[suite])
        return counts

    def _load_dir(self, subdir: str, model: type[T]) -> list[T]:
        if subdir in self._cache:
            return self._cache[subdir]

        directory = self.datasets_dir / subdir
        cases: list[T] = []
        if directory.is_dir():
            for path in sorted(directory.glob("*.json")):
                cases.extend(self._parse(path, model))
        else:
            logger.debug("dataset_dir_missing", path=str(directory))

        self._cache[subdir] = cases
        return cases

    def _load_file(self, relative: str, model: type[T]) -> list[T]:
        if relative in self._cache:
            return self._cache[relative]

        path = self.datasets_dir / relative
        cases: list[T] = []
        if path.is_file():
            cases = self._parse(path, model)
        else:
            logger.debug("dataset_file_missing", path=str(path))

        self._cache[relative] = cases
        return cases

    def _parse(self, path: Path, model: type[T]) -> list[T]:
        try:
            content = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise DatasetError(f"Failed to read dataset file {path}: {e}") from e

        items = content if isinstance(content, list) else [content]
        try:
            return [model.model_validate(item) for item in items]
        except ValidationError as e:
            raise DatasetError(f"Invalid dataset file {path}: {e}") from e
