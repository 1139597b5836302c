"""Unit tests for configuration and runner models.

Tests camelCase aliases, defaults, validation bounds, secret exclusion and
the tagged expectation union.
"""

import pytest
from pydantic import ValidationError

from factly_benchmark.models.config import BenchmarkConfig, EvaluatorConfig, TargetConfig
from factly_benchmark.models.runner import DedupCheckExpectation, RunnerResult


class TestTargetConfig:
    """Tests for TargetConfig model."""

    def test_defaults(self) -> None:
        """Test every knob has a default."""
        target = TargetConfig()
        assert target.provider == "openai"
        assert target.model == "gpt-4o"
        assert target.temp_extraction == 0.2
        assert target.temp_dedup == 0.1
        assert target.temp_proposal == 0.3
        assert target.embeddings_model is None

    def test_accepts_camel_case(self) -> None:
        """Test artifact keys populate snake_case fields."""
        target = TargetConfig.model_validate({"tempExtraction": 0.7, "embeddingsModel": "e"})
        assert target.temp_extraction == 0.7
        assert target.embeddings_model == "e"

    def test_label(self) -> None:
        """Test the label uses compact numbers."""
        assert TargetConfig(temp_extraction=1.0).label == "openai-gpt-4o-t1"

    def test_frozen(self) -> None:
        """Test a target cannot change during a run."""
        target = TargetConfig()
        with pytest.raises(ValidationError):
            target.model = "other"


class TestBenchmarkConfig:
    """Tests for BenchmarkConfig model."""

    def test_defaults(self) -> None:
        """Test defaults for a minimal config."""
        config = BenchmarkConfig(name="run", target=TargetConfig())
        assert config.runs_per_case == 1
        assert [s.value for s in config.suites] == ["fact-extraction"]
        assert config.matching.threshold == 0.5
        assert config.timeout_ms == 60000
        assert config.concurrency == 1

    def test_runs_per_case_must_be_positive(self) -> None:
        """Test runs per case is at least 1."""
        with pytest.raises(ValidationError):
            BenchmarkConfig(name="run", target=TargetConfig(), runs_per_case=0)

    def test_name_required(self) -> None:
        """Test the name cannot be empty."""
        with pytest.raises(ValidationError):
            BenchmarkConfig(name="", target=TargetConfig())

    def test_api_key_never_dumped(self) -> None:
        """Test the judge key stays out of serialized configs."""
        config = BenchmarkConfig(
            name="run",
            target=TargetConfig(),
            evaluator=EvaluatorConfig(api_key="secret"),
        )

        dumped = config.to_json_dict()

        assert dumped["evaluator"] == {"provider": "openai", "model": "gpt-4o"}
        assert "secret" not in str(dumped)
        assert dumped["runsPerCase"] == 1
        assert dumped["backendUrl"] == "http://localhost:3002"


class TestRunnerResult:
    """Tests for RunnerResult model."""

    def _data(self, **overrides) -> dict:
        data = {
            "caseId": "d1",
            "suite": "dedup",
            "rawResponse": {"isDuplicate": True},
            "latencyMs": 12.5,
            "expectation": {
                "kind": "dedup-check",
                "case": {"id": "d1", "textA": "a", "textB": "b", "isDuplicate": True},
            },
        }
        data.update(overrides)
        return data

    def test_expectation_selected_by_kind(self) -> None:
        """Test the kind tag picks the expectation model."""
        result = RunnerResult.model_validate(self._data())
        assert isinstance(result.expectation, DedupCheckExpectation)
        assert result.expectation.case.is_duplicate is True

    def test_unknown_kind_rejected(self) -> None:
        """Test an unknown expectation kind fails validation."""
        data = self._data()
        data["expectation"]["kind"] = "mystery"
        with pytest.raises(ValidationError):
            RunnerResult.model_validate(data)

    def test_ok(self) -> None:
        """Test ok requires a response and no error."""
        assert RunnerResult.model_validate(self._data()).ok is True
        failed = RunnerResult.model_validate(self._data(rawResponse=None, error="HTTP 500"))
        assert failed.ok is False
