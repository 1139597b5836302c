"""Configuration models for benchmark runs.

This module defines Pydantic models for run configurations: the target
backend settings under test, the optional judge, matching parameters and
the parameter matrix that expands into many runs.
"""

from __future__ import annotations

from pydantic import Field

from factly_benchmark.config.defaults import (
    DEFAULT_BACKEND_URL,
    DEFAULT_MATCHING_THRESHOLD,
    DEFAULT_MODEL,
    DEFAULT_PROVIDER,
    DEFAULT_RUNS_PER_CASE,
    DEFAULT_SUITES,
    DEFAULT_TEMP_DEDUP,
    DEFAULT_TEMP_EXTRACTION,
    DEFAULT_TEMP_IMPACT,
    DEFAULT_TEMP_PROPOSAL,
    DEFAULT_TIMEOUT_MS,
)
from factly_benchmark.models.base import BaseSchema, FrozenSchema
from factly_benchmark.models.enums import MatchingMethod, SuiteName

__all__ = [
    "BenchmarkConfig",
    "EvaluatorConfig",
    "MatchingConfig",
    "MatrixAxes",
    "MatrixConfig",
    "TargetConfig",
    "format_number",
]


def format_number(value: float | None) -> str:
    """Render a numeric knob compactly for labels (0.2 -> '0.2', 1.0 -> '1')."""
    if value is None:
        return "none"
    return f"{value:g}"


class TargetConfig(FrozenSchema):
    """Backend configuration being evaluated.

    Attributes:
        provider: LLM provider the backend is configured with.
        model: Model identifier the backend uses.
        temp_extraction: Temperature for fact/insight/recommendation/output extraction.
        temp_dedup: Temperature for dedup checks.
        temp_impact: Temperature for impact checks.
        temp_proposal: Temperature for update proposals.
        embeddings_model: Optional embeddings model used by the backend.
        dedup_threshold: Optional dedup similarity threshold.

    """

    provider: str = DEFAULT_PROVIDER
    model: str = DEFAULT_MODEL
    temp_extraction: float = DEFAULT_TEMP_EXTRACTION
    temp_dedup: float = DEFAULT_TEMP_DEDUP
    temp_impact: float = DEFAULT_TEMP_IMPACT
    temp_proposal: float = DEFAULT_TEMP_PROPOSAL
    embeddings_model: str | None = None
    dedup_threshold: float | None = None

    @property
    def label(self) -> str:
        """Human-readable label used in derived names and artifact filenames."""
        return f"{self.provider}-{self.model}-t{format_number(self.temp_extraction)}"


class EvaluatorConfig(BaseSchema):
    """LLM judge configuration.

    The API key is never written to result artifacts.

    Attributes:
        provider: "anthropic" or any OpenAI-compatible provider.
        model: Judge model identifier.
        api_key: Provider API key (falls back to LLM_API_KEY).
        base_url: Base URL for OpenAI-compatible providers.

    """

    provider: str = "openai"
    model: str = "gpt-4o"
    api_key: str | None = Field(default=None, exclude=True)
    base_url: str | None = None


class MatchingConfig(BaseSchema):
    """How extracted items are matched against gold items.

    Attributes:
        method: Matching method (only string matching is scored today).
        threshold: Minimum trigram similarity to count a match.
        embeddings_model: Embeddings model for embedding matching.

    """

    method: MatchingMethod = MatchingMethod.string
    threshold: float = Field(default=DEFAULT_MATCHING_THRESHOLD, ge=0.0, le=1.0)
    embeddings_model: str | None = None


class BenchmarkConfig(BaseSchema):
    """A single, fully-resolved benchmark run configuration.

    Attributes:
        name: Unique run name (artifact identity and conflict detection).
        description: Free-text description.
        backend_url: Base URL of the backend-under-test.
        suites: Suites to run, in order.
        runs_per_case: Repetitions per dataset case.
        target: Backend configuration under test.
        evaluator: Optional LLM judge configuration.
        matching: Matching configuration.
        timeout_ms: Per-call backend timeout in milliseconds.
        concurrency: Maximum in-flight cases per suite (1 = sequential).

    """

    name: str = Field(..., min_length=1)
    description: str | None = None
    backend_url: str = DEFAULT_BACKEND_URL
    suites: list[SuiteName] = Field(
        default_factory=lambda: [SuiteName(s) for s in DEFAULT_SUITES]
    )
    runs_per_case: int = Field(default=DEFAULT_RUNS_PER_CASE, ge=1)
    target: TargetConfig
    evaluator: EvaluatorConfig | None = None
    matching: MatchingConfig = Field(default_factory=MatchingConfig)
    timeout_ms: int = Field(default=DEFAULT_TIMEOUT_MS, ge=1)
    concurrency: int = Field(default=1, ge=1)


class MatrixAxes(BaseSchema):
    """Parallel value arrays, one per tunable axis.

    An axis left as None collapses to the single value from the base target.
    """

    provider: list[str] | None = None
    model: list[str] | None = None
    temp_extraction: list[float] | None = None
    temp_dedup: list[float] | None = None
    temp_impact: list[float] | None = None
    temp_proposal: list[float] | None = None
    embeddings_model: list[str | None] | None = None
    dedup_threshold: list[float | None] | None = None


class MatrixConfig(BaseSchema):
    """Benchmark configuration with a parameter matrix instead of a target.

    Attributes:
        matrix: Axis values to combine.
        base_target: Target supplying every axis the matrix leaves out.

    """

    name: str = Field(..., min_length=1)
    description: str | None = None
    backend_url: str | None = None
    suites: list[SuiteName] | None = None
    runs_per_case: int | None = Field(default=None, ge=1)
    evaluator: EvaluatorConfig | None = None
    matching: MatchingConfig | None = None
    timeout_ms: int | None = Field(default=None, ge=1)
    concurrency: int | None = Field(default=None, ge=1)
    matrix: MatrixAxes
    base_target: TargetConfig
