"""Unit tests for parameter matrix expansion."""

import pytest

from factly_benchmark.config.matrix import expand_matrix, matrix_size
from factly_benchmark.models.config import (
    EvaluatorConfig,
    MatrixAxes,
    MatrixConfig,
    TargetConfig,
)
from factly_benchmark.models.enums import SuiteName


def _matrix(name: str = "sweep", **axes) -> MatrixConfig:
    return MatrixConfig(
        name=name,
        matrix=MatrixAxes(**axes),
        base_target=TargetConfig(provider="openai", model="gpt-4o", temp_extraction=0.2),
    )


class TestExpandMatrix:
    """Tests for expand_matrix."""

    def test_no_axes_yields_base_target(self) -> None:
        """Test an empty matrix expands to the base target alone."""
        configs = expand_matrix(_matrix())
        assert len(configs) == 1
        assert configs[0].name == "sweep-openai-gpt-4o-t0.2"
        assert configs[0].target == TargetConfig(
            provider="openai", model="gpt-4o", temp_extraction=0.2
        )

    def test_cartesian_product(self) -> None:
        """Test two models and three temperatures give six distinct runs."""
        config = _matrix(model=["gpt-4o", "gpt-4o-mini"], temp_extraction=[0.0, 0.3, 0.7])
        configs = expand_matrix(config)

        assert matrix_size(config) == 6
        assert len(configs) == 6
        assert len({c.name for c in configs}) == 6
        assert configs[0].name == "sweep-openai-gpt-4o-t0"
        assert configs[-1].name == "sweep-openai-gpt-4o-mini-t0.7"
        assert {(c.target.model, c.target.temp_extraction) for c in configs} == {
            (model, temp)
            for model in ("gpt-4o", "gpt-4o-mini")
            for temp in (0.0, 0.3, 0.7)
        }

    def test_unlabelled_axes_get_suffixes(self) -> None:
        """Test axes outside the label keep derived names distinct."""
        configs = expand_matrix(_matrix(temp_dedup=[0.1, 0.5], dedup_threshold=[None, 0.8]))
        names = [c.name for c in configs]
        assert len(set(names)) == 4
        assert "sweep-openai-gpt-4o-t0.2-td0.1-dtnone" in names
        assert "sweep-openai-gpt-4o-t0.2-td0.5-dt0.8" in names

    def test_embeddings_suffix(self) -> None:
        """Test the embeddings axis suffix carries the model name."""
        configs = expand_matrix(_matrix(embeddings_model=["small", "large"]))
        assert [c.name for c in configs] == [
            "sweep-openai-gpt-4o-t0.2-emb-small",
            "sweep-openai-gpt-4o-t0.2-emb-large",
        ]

    def test_shared_fields_inherited(self) -> None:
        """Test every derived config inherits the shared settings."""
        evaluator = EvaluatorConfig(provider="anthropic", model="judge")
        config = MatrixConfig(
            name="sweep",
            backend_url="http://backend.test",
            suites=[SuiteName.dedup],
            runs_per_case=2,
            evaluator=evaluator,
            timeout_ms=1000,
            matrix=MatrixAxes(model=["a", "b"]),
            base_target=TargetConfig(),
        )
        for derived in expand_matrix(config):
            assert derived.backend_url == "http://backend.test"
            assert derived.suites == [SuiteName.dedup]
            assert derived.runs_per_case == 2
            assert derived.evaluator == evaluator
            assert derived.timeout_ms == 1000

    def test_defaults_applied(self) -> None:
        """Test omitted shared fields fall back to defaults."""
        derived = expand_matrix(_matrix())[0]
        assert derived.backend_url == "http://localhost:3002"
        assert derived.suites == [SuiteName.fact_extraction]
        assert derived.runs_per_case == 1
        assert derived.concurrency == 1

    @pytest.mark.parametrize("count", [1, 3, 5])
    def test_size_is_product(self, count: int) -> None:
        """Test the size is the product of the axis lengths."""
        config = _matrix(
            provider=["openai", "anthropic"], temp_proposal=[i / 10 for i in range(count)]
        )
        assert matrix_size(config) == 2 * count
        assert len(expand_matrix(config)) == 2 * count
