"""Unit tests for configuration loading.

Tests JSON and YAML parsing, camelCase and snake_case keys, defaults,
validation errors and matrix detection.
"""

import json
from pathlib import Path

import pytest
import yaml

from factly_benchmark.config import ConfigError, get_settings
from factly_benchmark.config.loader import (
    is_matrix_config,
    load_config,
    load_configs,
    load_raw_config,
    parse_config,
)
from factly_benchmark.models.config import BenchmarkConfig, MatrixConfig
from factly_benchmark.models.enums import SuiteName


def _write_json(path: Path, data: object) -> Path:
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestLoadRawConfig:
    """Tests for reading config files."""

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test a missing file raises ConfigError."""
        with pytest.raises(ConfigError, match="Config file not found"):
            load_raw_config(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path: Path) -> None:
        """Test malformed JSON raises ConfigError."""
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigError, match="Failed to parse"):
            load_raw_config(path)

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        """Test malformed YAML raises ConfigError."""
        path = tmp_path / "bad.yaml"
        path.write_text("name: [unclosed", encoding="utf-8")
        with pytest.raises(ConfigError, match="Failed to parse"):
            load_raw_config(path)

    def test_empty_yaml(self, tmp_path: Path) -> None:
        """Test an empty YAML file raises ConfigError."""
        path = tmp_path / "empty.yml"
        path.write_text("", encoding="utf-8")
        with pytest.raises(ConfigError, match="Empty config file"):
            load_raw_config(path)

    def test_non_mapping(self, tmp_path: Path) -> None:
        """Test a top-level list raises ConfigError."""
        path = _write_json(tmp_path / "list.json", [1, 2])
        with pytest.raises(ConfigError, match="expected mapping"):
            load_raw_config(path)


class TestParseConfig:
    """Tests for single-run configurations."""

    def test_camel_case_keys(self) -> None:
        """Test camelCase keys as written in config files."""
        config = parse_config(
            {
                "name": " nightly ",
                "backendUrl": "http://backend:3002",
                "suites": ["fact-extraction", "dedup"],
                "runsPerCase": 3,
                "target": {"provider": "anthropic", "model": "claude", "tempExtraction": 0},
                "evaluator": {"provider": "anthropic", "model": "judge", "apiKey": "k"},
                "matching": {"threshold": 0.7},
                "timeoutMs": 5000,
                "concurrency": 4,
            }
        )
        assert config.name == "nightly"
        assert config.backend_url == "http://backend:3002"
        assert config.suites == [SuiteName.fact_extraction, SuiteName.dedup]
        assert config.runs_per_case == 3
        assert config.target.provider == "anthropic"
        assert config.target.temp_extraction == 0
        assert config.evaluator is not None
        assert config.evaluator.api_key == "k"
        assert config.matching.threshold == 0.7
        assert config.timeout_ms == 5000
        assert config.concurrency == 4

    def test_snake_case_keys(self) -> None:
        """Test snake_case keys are accepted too."""
        config = parse_config(
            {"name": "x", "runs_per_case": 2, "target": {"temp_dedup": 0.4}}
        )
        assert config.runs_per_case == 2
        assert config.target.temp_dedup == 0.4

    def test_defaults(self) -> None:
        """Test omitted fields take their defaults."""
        config = parse_config({"name": "x", "target": {}})
        assert config.backend_url == "http://localhost:3002"
        assert config.suites == [SuiteName.fact_extraction]
        assert config.runs_per_case == 1
        assert config.target.model == "gpt-4o"
        assert config.target.temp_extraction == 0.2
        assert config.evaluator is None
        assert config.matching.threshold == 0.5
        assert config.timeout_ms == 60000
        assert config.concurrency == 1

    def test_concurrency_from_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test the environment supplies concurrency when the file omits it."""
        monkeypatch.setenv("FACTLY_BENCH_CONCURRENCY", "6")
        get_settings.cache_clear()
        assert parse_config({"name": "x", "target": {}}).concurrency == 6

    def test_missing_name(self) -> None:
        """Test a config without a name is rejected."""
        with pytest.raises(ConfigError, match="'name'"):
            parse_config({"target": {}})

    def test_blank_name(self) -> None:
        """Test a whitespace-only name is rejected."""
        with pytest.raises(ConfigError, match="non-empty"):
            parse_config({"name": "   ", "target": {}})

    def test_missing_target(self) -> None:
        """Test a config without a target is rejected."""
        with pytest.raises(ConfigError, match="'target'"):
            parse_config({"name": "x"})

    def test_unknown_suite(self) -> None:
        """Test an unknown suite name is rejected."""
        with pytest.raises(ConfigError, match="not-a-suite"):
            parse_config({"name": "x", "target": {}, "suites": ["not-a-suite"]})

    def test_invalid_runs_per_case(self) -> None:
        """Test a runs-per-case below one is rejected."""
        with pytest.raises(ConfigError):
            parse_config({"name": "x", "target": {}, "runsPerCase": 0})

    def test_wrong_type(self) -> None:
        """Test a non-numeric temperature is rejected."""
        with pytest.raises(ConfigError):
            parse_config({"name": "x", "target": {"tempExtraction": "hot"}})

    def test_api_key_not_serialized(self) -> None:
        """Test the judge API key never reaches artifacts."""
        config = parse_config(
            {"name": "x", "target": {}, "evaluator": {"apiKey": "secret"}}
        )
        assert "secret" not in json.dumps(config.to_json_dict())


class TestLoadConfig:
    """Tests for loading files of either kind."""

    def test_single_json(self, tmp_path: Path) -> None:
        """Test a single-run JSON file."""
        path = _write_json(tmp_path / "run.json", {"name": "solo", "target": {}})
        config = load_config(path)
        assert isinstance(config, BenchmarkConfig)
        assert load_configs(path) == [config]

    def test_single_yaml(self, tmp_path: Path) -> None:
        """Test a single-run YAML file."""
        path = tmp_path / "run.yaml"
        path.write_text(
            yaml.safe_dump({"name": "solo", "target": {"model": "gpt-4o-mini"}}),
            encoding="utf-8",
        )
        config = load_config(path)
        assert isinstance(config, BenchmarkConfig)
        assert config.target.model == "gpt-4o-mini"

    def test_matrix_detected(self, tmp_path: Path) -> None:
        """Test a file with matrix and baseTarget is a matrix config."""
        path = _write_json(
            tmp_path / "matrix.json",
            {
                "name": "sweep",
                "matrix": {"tempExtraction": [0.0, 0.5]},
                "baseTarget": {"model": "gpt-4o"},
            },
        )
        assert isinstance(load_config(path), MatrixConfig)
        assert [c.name for c in load_configs(path)] == [
            "sweep-openai-gpt-4o-t0",
            "sweep-openai-gpt-4o-t0.5",
        ]

    def test_matrix_without_base_target_is_single(self) -> None:
        """Test a matrix key alone does not make a matrix config."""
        assert is_matrix_config({"matrix": {}, "baseTarget": {}})
        assert is_matrix_config({"matrix": {}, "base_target": {}})
        assert not is_matrix_config({"matrix": {}, "target": {}})

    def test_empty_matrix_axis(self, tmp_path: Path) -> None:
        """Test an empty axis list is rejected."""
        path = _write_json(
            tmp_path / "matrix.json",
            {"name": "sweep", "matrix": {"model": []}, "baseTarget": {}},
        )
        with pytest.raises(ConfigError):
            load_config(path)
