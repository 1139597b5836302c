"""Parameter matrix expansion.

A matrix configuration lists candidate values per tunable axis. Expansion
produces the full cartesian product as standalone BenchmarkConfigs. The
number of runs is the product of the axis sizes and no cap is applied, so
callers should check matrix_size() before running a large matrix.
"""

from __future__ import annotations

import itertools
import math
from typing import Any

from factly_benchmark.config.defaults import (
    DEFAULT_BACKEND_URL,
    DEFAULT_RUNS_PER_CASE,
    DEFAULT_SUITES,
    DEFAULT_TIMEOUT_MS,
    LARGE_MATRIX_WARNING,
)
from factly_benchmark.config.settings import get_settings
from factly_benchmark.logging_config import get_logger
from factly_benchmark.models.config import (
    BenchmarkConfig,
    MatchingConfig,
    MatrixConfig,
    TargetConfig,
    format_number,
)
from factly_benchmark.models.enums import SuiteName

__all__ = ["AXES", "expand_matrix", "matrix_size"]

logger = get_logger(__name__)

# Axis order of the product; the first three make up the target label.
AXES = (
    "provider",
    "model",
    "temp_extraction",
    "temp_dedup",
    "temp_impact",
    "temp_proposal",
    "embeddings_model",
    "dedup_threshold",
)

# Name suffixes for varying axes outside the target label.
_SUFFIXES = {
    "temp_dedup": "td",
    "temp_impact": "ti",
    "temp_proposal": "tp",
    "embeddings_model": "emb-",
    "dedup_threshold": "dt",
}


def _axis_values(config: MatrixConfig) -> dict[str, list[Any]]:
    values = {}
    for axis in AXES:
        listed = getattr(config.matrix, axis)
        values[axis] = list(listed) if listed else [getattr(config.base_target, axis)]
    return values


def matrix_size(config: MatrixConfig) -> int:
    """Return the number of configurations the matrix expands into."""
    return math.prod(len(v) for v in _axis_values(config).values())


def expand_matrix(config: MatrixConfig) -> list[BenchmarkConfig]:
    """Expand a matrix configuration into one BenchmarkConfig per combination.

    Each result inherits the shared fields of the matrix config (defaulted
    when absent) and is named ``<name>-<provider>-<model>-t<tempExtraction>``.
    Axes outside that label that take more than one value append their own
    suffix so every derived name stays distinct.

    Args:
        config: The matrix configuration to expand.

    Returns:
        The concrete run configurations, in axis-major order.

    """
    values = _axis_values(config)
    varying = [axis for axis in _SUFFIXES if len(values[axis]) > 1]

    size = matrix_size(config)
    if size > LARGE_MATRIX_WARNING:
        logger.warning("large_matrix", name=config.name, combinations=size)

    configs = []
    for combo in itertools.product(*(values[axis] for axis in AXES)):
        target = TargetConfig(**dict(zip(AXES, combo)))
        name = f"{config.name}-{target.label}"
        for axis in varying:
            name += f"-{_SUFFIXES[axis]}{_format_axis(getattr(target, axis))}"

        configs.append(
            BenchmarkConfig(
                name=name,
                description=config.description,
                backend_url=config.backend_url or DEFAULT_BACKEND_URL,
                suites=config.suites or [SuiteName(s) for s in DEFAULT_SUITES],
                runs_per_case=config.runs_per_case or DEFAULT_RUNS_PER_CASE,
                target=target,
                evaluator=config.evaluator,
                matching=config.matching or MatchingConfig(),
                timeout_ms=config.timeout_ms or DEFAULT_TIMEOUT_MS,
                concurrency=config.concurrency or get_settings().concurrency or 1,
            )
        )

    logger.info("matrix_expanded", name=config.name, combinations=len(configs))
    return configs


def _format_axis(value: Any) -> str:
    if value is None or isinstance(value, (int, float)):
        return format_number(value)
    return str(value)
