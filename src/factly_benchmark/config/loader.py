"""Run configuration loader.

This module loads run configurations from JSON or YAML files and parses
them into strongly-typed models. A file holding both ``matrix`` and
``baseTarget`` is a matrix configuration and expands into one run per
parameter combination; anything else is a single run.

Every validation failure raises ConfigError naming the offending field,
before any network call is made.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from factly_benchmark.config.defaults import (
    DEFAULT_BACKEND_URL,
    DEFAULT_MATCHING_METHOD,
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
from factly_benchmark.config.exceptions import ConfigError
from factly_benchmark.config.matrix import expand_matrix
from factly_benchmark.config.settings import get_settings
from factly_benchmark.config.validators import FieldValidator
from factly_benchmark.logging_config import get_logger
from factly_benchmark.models.config import (
    BenchmarkConfig,
    EvaluatorConfig,
    MatchingConfig,
    MatrixAxes,
    MatrixConfig,
    TargetConfig,
)
from factly_benchmark.models.enums import MatchingMethod, SuiteName

__all__ = [
    "is_matrix_config",
    "load_config",
    "load_configs",
    "load_raw_config",
    "parse_config",
    "parse_matrix_config",
]

logger = get_logger(__name__)

_YAML_SUFFIXES = (".yaml", ".yml")


def load_raw_config(path: Path | str) -> dict[str, Any]:
    """Read a JSON or YAML configuration file into a dictionary.

    Raises:
        ConfigError: If the file is missing, unparsable, empty or not a mapping.

    """
    path = Path(path)
    if not path.exists():
        raise ConfigError(f"Config file not found: {path.resolve()}")

    try:
        with path.open("r", encoding="utf-8") as f:
            if path.suffix.lower() in _YAML_SUFFIXES:
                data = yaml.safe_load(f)
            else:
                data = json.load(f)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigError(f"Failed to parse config file {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config file {path}: {e}") from e

    if data is None:
        raise ConfigError(f"Empty config file: {path}")
    if not isinstance(data, dict):
        raise ConfigError(
            f"Invalid config structure: expected mapping, got {type(data).__name__}"
        )
    return data


def is_matrix_config(data: dict[str, Any]) -> bool:
    """Return True if a raw config carries both a matrix and a base target."""
    v = FieldValidator(data, "config")
    return v.has("matrix") and v.has("base_target")


def load_config(path: Path | str) -> BenchmarkConfig | MatrixConfig:
    """Load a single run or matrix configuration from a file.

    Example:
        >>> config = load_config("configs/default.json")
        >>> config.target.model
        'gpt-4o'

    """
    path = Path(path)
    data = load_raw_config(path)
    context = f"config: {path}"
    if is_matrix_config(data):
        return parse_matrix_config(data, context)
    return parse_config(data, context)


def load_configs(path: Path | str) -> list[BenchmarkConfig]:
    """Load a configuration file and return the concrete runs it describes."""
    config = load_config(path)
    if isinstance(config, MatrixConfig):
        return expand_matrix(config)
    return [config]


def parse_config(data: dict[str, Any], context: str = "config") -> BenchmarkConfig:
    """Parse a raw dictionary into a BenchmarkConfig, applying defaults.

    Raises:
        ConfigError: If name or target is missing, a suite name is unknown,
            or any field has an invalid type or range.

    """
    v = FieldValidator(data, context)
    v.require_mapping()

    name = v.require("name", str, transform=str.strip, empty_check=True)
    shared = _parse_shared(v)

    target_v = v.optional_mapping("target")
    if target_v is None:
        raise ConfigError(f"Missing required field 'target' in {context}")

    return _build(
        BenchmarkConfig,
        context,
        name=name,
        target=_parse_target(target_v),
        backend_url=shared["backend_url"] or DEFAULT_BACKEND_URL,
        suites=shared["suites"] or [SuiteName(s) for s in DEFAULT_SUITES],
        runs_per_case=shared["runs_per_case"] or DEFAULT_RUNS_PER_CASE,
        matching=shared["matching"] or MatchingConfig(),
        timeout_ms=shared["timeout_ms"] or DEFAULT_TIMEOUT_MS,
        concurrency=shared["concurrency"] or get_settings().concurrency or 1,
        description=shared["description"],
        evaluator=shared["evaluator"],
    )


def parse_matrix_config(data: dict[str, Any], context: str = "config") -> MatrixConfig:
    """Parse a raw dictionary into a MatrixConfig.

    Shared fields left out stay None here and are defaulted on expansion.
    """
    v = FieldValidator(data, context)
    v.require_mapping()

    name = v.require("name", str, transform=str.strip, empty_check=True)
    shared = _parse_shared(v)

    matrix_v = v.optional_mapping("matrix")
    base_v = v.optional_mapping("base_target")
    if matrix_v is None or base_v is None:
        raise ConfigError(f"Matrix config requires 'matrix' and 'baseTarget' in {context}")

    return _build(
        MatrixConfig,
        context,
        name=name,
        matrix=_parse_axes(matrix_v),
        base_target=_parse_target(base_v),
        **shared,
    )


def _parse_shared(v: FieldValidator) -> dict[str, Any]:
    suites = v.optional_list("suites", str)
    if suites is not None:
        suites = [SuiteName(v.require_choice("suite", s, SuiteName.values())) for s in suites]

    evaluator = None
    evaluator_v = v.optional_mapping("evaluator")
    if evaluator_v is not None:
        evaluator = EvaluatorConfig(
            provider=evaluator_v.optional("provider", str, default="openai"),
            model=evaluator_v.optional("model", str, default=DEFAULT_MODEL),
            api_key=evaluator_v.optional("api_key", str),
            base_url=evaluator_v.optional("base_url", str),
        )

    matching = None
    matching_v = v.optional_mapping("matching")
    if matching_v is not None:
        method = matching_v.optional("method", str, default=DEFAULT_MATCHING_METHOD)
        matching = MatchingConfig(
            method=MatchingMethod(
                matching_v.require_choice(
                    "matching method", method, [m.value for m in MatchingMethod]
                )
            ),
            threshold=matching_v.optional_number(
                "threshold", default=DEFAULT_MATCHING_THRESHOLD, minimum=0.0, maximum=1.0
            ),
            embeddings_model=matching_v.optional("embeddings_model", str),
        )

    return {
        "description": v.optional("description", str),
        "backend_url": v.optional("backend_url", str, transform=str.strip),
        "suites": suites,
        "runs_per_case": v.optional_int("runs_per_case", minimum=1),
        "evaluator": evaluator,
        "matching": matching,
        "timeout_ms": v.optional_int("timeout_ms", minimum=1),
        "concurrency": v.optional_int("concurrency", minimum=1),
    }


def _parse_target(v: FieldValidator) -> TargetConfig:
    # each knob defaults independently
    return TargetConfig(
        provider=v.optional("provider", str, default=DEFAULT_PROVIDER),
        model=v.optional("model", str, default=DEFAULT_MODEL),
        temp_extraction=v.optional_number("temp_extraction", default=DEFAULT_TEMP_EXTRACTION),
        temp_dedup=v.optional_number("temp_dedup", default=DEFAULT_TEMP_DEDUP),
        temp_impact=v.optional_number("temp_impact", default=DEFAULT_TEMP_IMPACT),
        temp_proposal=v.optional_number("temp_proposal", default=DEFAULT_TEMP_PROPOSAL),
        embeddings_model=v.optional("embeddings_model", str),
        dedup_threshold=v.optional_number("dedup_threshold", minimum=0.0, maximum=1.0),
    )


def _parse_axes(v: FieldValidator) -> MatrixAxes:
    numbers = (int, float)
    return _build(
        MatrixAxes,
        v.context,
        provider=v.optional_list("provider", str, non_empty=True),
        model=v.optional_list("model", str, non_empty=True),
        temp_extraction=v.optional_list("temp_extraction", numbers, non_empty=True),
        temp_dedup=v.optional_list("temp_dedup", numbers, non_empty=True),
        temp_impact=v.optional_list("temp_impact", numbers, non_empty=True),
        temp_proposal=v.optional_list("temp_proposal", numbers, non_empty=True),
        embeddings_model=v.optional_list(
            "embeddings_model", (str, type(None)), non_empty=True
        ),
        dedup_threshold=v.optional_list(
            "dedup_threshold", (int, float, type(None)), non_empty=True
        ),
    )


def _build(model: type, context: str, /, **fields: Any) -> Any:
    try:
        return model(**fields)
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"])
        raise ConfigError(f"Invalid '{field}': {first['msg']} in {context}") from e
