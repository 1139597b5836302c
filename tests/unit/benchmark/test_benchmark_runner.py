"""Unit tests for the benchmark runner.

Tests overall scoring, name conflicts and complete runs against a mocked
backend and judge.
"""

import json
from pathlib import Path

import httpx
import pytest

from factly_benchmark.benchmark.exceptions import BenchmarkError
from factly_benchmark.benchmark.runner import (
    BenchmarkRunner,
    compute_overall_score,
    find_name_conflicts,
)
from factly_benchmark.config.exceptions import NameConflictError
from factly_benchmark.datasets.exceptions import DatasetError
from factly_benchmark.datasets.loader import DatasetLoader
from factly_benchmark.models.config import EvaluatorConfig, TargetConfig
from factly_benchmark.models.enums import SuiteName
from factly_benchmark.models.results import MetricAggregate, SuiteEvaluation
from factly_benchmark.results.storage import ResultStore


def _suite(name: str, **means: float) -> SuiteEvaluation:
    return SuiteEvaluation(
        suite=name,
        aggregated={
            metric: MetricAggregate(mean=mean, stddev=0.0, min=mean, max=mean, count=1)
            for metric, mean in means.items()
        },
    )


class TestComputeOverallScore:
    """Tests for compute_overall_score."""

    def test_no_suites(self) -> None:
        """Test a run without suites scores 0."""
        assert compute_overall_score([]) == 0.0

    def test_mean_of_suite_means(self) -> None:
        """Test suites are weighted equally regardless of metric count."""
        suites = [_suite("a", x=1.0, y=0.5), _suite("b", z=0.25)]
        assert compute_overall_score(suites) == pytest.approx((0.75 + 0.25) / 2)

    def test_empty_suite_counts_as_zero(self) -> None:
        """Test a suite without metrics contributes 0."""
        assert compute_overall_score([_suite("a", x=1.0), _suite("b")]) == pytest.approx(0.5)

    def test_inversion_of_lower_is_better(self) -> None:
        """Test inversion turns an error rate into a goodness score."""
        suites = [_suite("dedup", dedup_f1=0.8, dedup_fpr=0.2)]
        assert compute_overall_score(suites) == pytest.approx(0.5)
        assert compute_overall_score(suites, invert_lower_is_better=True) == pytest.approx(0.8)


class TestFindNameConflicts:
    """Tests for find_name_conflicts."""

    def test_stored_and_repeated_names(self) -> None:
        """Test names already stored or repeated in the batch conflict."""
        assert find_name_conflicts(["b", "a", "c", "c"], {"a", "z"}) == ["a", "c"]

    def test_no_conflicts(self) -> None:
        """Test distinct new names pass."""
        assert find_name_conflicts(["a", "b"], {"c"}) == []


def _fact_backend(calls: list[str]):
    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request.url.path)
        body = json.loads(request.content)
        assert body["input_id"].startswith("benchmark-")
        return httpx.Response(
            200,
            json={
                "suggestions": [{"text": "Revenue grew 12% in 2024"}],
                "usage": {"input_tokens": 1000, "output_tokens": 0},
            },
        )

    return handler


@pytest.fixture
def fact_dataset(write_dataset, datasets_dir: Path) -> Path:
    """Write a one-case fact extraction dataset."""
    write_dataset(
        "fact-extraction/c1.json",
        {
            "id": "c1",
            "input_text": "Revenue grew 12% in 2024.",
            "gold_facts": [{"text": "Revenue grew 12% in 2024"}],
        },
    )
    return datasets_dir


class TestBenchmarkRunner:
    """Tests for complete runs."""

    @pytest.mark.asyncio
    async def test_run_all_saves_each_result(
        self, tmp_path: Path, fact_dataset: Path, make_config
    ) -> None:
        """Test every config is run, scored, costed and stored."""
        calls: list[str] = []
        store = ResultStore(tmp_path / "results")
        runner = BenchmarkRunner(
            store,
            DatasetLoader(fact_dataset),
            backend_transport=httpx.MockTransport(_fact_backend(calls)),
        )
        configs = [
            make_config("one", target=TargetConfig(model="gpt-4o")),
            make_config("two", target=TargetConfig(model="gpt-4o-mini")),
        ]

        outcomes = await runner.run_all(configs)

        assert [result.config.name for result, _ in outcomes] == ["one", "two"]
        assert calls == ["/extract/facts", "/extract/facts"]
        result, path = outcomes[0]
        assert path.exists()
        assert result.overall_score == pytest.approx(1.0)
        assert result.timestamp.endswith("Z")
        assert result.suites[0].suite == "fact-extraction"
        assert result.cost is not None
        assert result.cost.tokens.input_tokens == 1000
        assert result.cost.estimated_usd == pytest.approx(0.0025)
        assert store.existing_names() == {"one", "two"}

    @pytest.mark.asyncio
    async def test_name_conflict_blocks_run(
        self, tmp_path: Path, fact_dataset: Path, make_config
    ) -> None:
        """Test a stored name stops the run before any backend call."""
        calls: list[str] = []
        store = ResultStore(tmp_path / "results")
        runner = BenchmarkRunner(
            store,
            DatasetLoader(fact_dataset),
            backend_transport=httpx.MockTransport(_fact_backend(calls)),
        )
        await runner.run_all([make_config("taken")])
        calls.clear()

        with pytest.raises(NameConflictError) as exc_info:
            await runner.run_all([make_config("taken"), make_config("fresh")])

        assert exc_info.value.conflicts == ["taken"]
        assert calls == []

    @pytest.mark.asyncio
    async def test_force_allows_reuse(
        self, tmp_path: Path, fact_dataset: Path, make_config
    ) -> None:
        """Test force skips the name check."""
        store = ResultStore(tmp_path / "results")
        runner = BenchmarkRunner(
            store,
            DatasetLoader(fact_dataset),
            backend_transport=httpx.MockTransport(_fact_backend([])),
        )
        await runner.run_all([make_config("same")])
        outcomes = await runner.run_all([make_config("same")], force=True)
        assert outcomes[0][0].config.name == "same"

    @pytest.mark.asyncio
    async def test_no_configs(self, tmp_path: Path, make_config) -> None:
        """Test an empty batch is rejected."""
        runner = BenchmarkRunner(ResultStore(tmp_path), DatasetLoader(tmp_path))
        with pytest.raises(BenchmarkError):
            await runner.run_all([])

    @pytest.mark.asyncio
    async def test_malformed_dataset_fails_before_calls(
        self, tmp_path: Path, write_dataset, datasets_dir: Path, make_config
    ) -> None:
        """Test fixtures are validated before the backend is called."""
        write_dataset("dedup/known-duplicates.json", [{"id": "d1"}])
        calls: list[str] = []
        runner = BenchmarkRunner(
            ResultStore(tmp_path / "results"),
            DatasetLoader(datasets_dir),
            backend_transport=httpx.MockTransport(_fact_backend(calls)),
        )

        with pytest.raises(DatasetError):
            await runner.run_all(
                [make_config(suites=[SuiteName.fact_extraction, SuiteName.dedup])]
            )
        assert calls == []

    @pytest.mark.asyncio
    async def test_judge_usage_costed_with_judge_model(
        self, tmp_path: Path, fact_dataset: Path, make_config
    ) -> None:
        """Test judge metrics are added and judge tokens priced."""

        def judge_handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200,
                json={
                    "choices": [{"message": {"content": "SCORE: 4\nREASONING: ok"}}],
                    "usage": {"prompt_tokens": 1000, "completion_tokens": 0},
                },
            )

        runner = BenchmarkRunner(
            ResultStore(tmp_path / "results"),
            DatasetLoader(fact_dataset),
            backend_transport=httpx.MockTransport(_fact_backend([])),
            judge_transport=httpx.MockTransport(judge_handler),
        )
        config = make_config(
            evaluator=EvaluatorConfig(provider="openai", model="gpt-4o-mini", api_key="k")
        )

        result = await runner.run(config)

        aggregated = result.suites[0].aggregated
        assert aggregated["fact_atomicity"].mean == pytest.approx(0.8)
        assert aggregated["non_fact_rate"].mean == pytest.approx(0.8)
        # backend: 1000 input tokens on gpt-4o; judge: 2 x 1000 on gpt-4o-mini
        assert result.cost.tokens.input_tokens == 3000
        assert result.cost.estimated_usd == pytest.approx(0.0025 + 2 * 0.00015)

    @pytest.mark.asyncio
    async def test_malformed_replies_do_not_abort_run(
        self, tmp_path: Path, fact_dataset: Path, write_dataset, make_config
    ) -> None:
        """Test odd 2xx replies degrade to scores instead of failing the run."""
        write_dataset(
            "dedup/scan-groups.json",
            [{"id": "s1", "items": [{"id": "a", "text": "A"}], "expected_groups": [["a"]]}],
        )

        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/dedup/scan":
                return httpx.Response(200, json={"groups": [{"members": [{"item_id": "a"}]}]})
            return httpx.Response(
                200,
                json={
                    "suggestions": [{"text": "Revenue grew 12% in 2024"}],
                    "usage": {"input_tokens": "n/a", "output_tokens": None},
                },
            )

        store = ResultStore(tmp_path / "results")
        runner = BenchmarkRunner(
            store,
            DatasetLoader(fact_dataset),
            backend_transport=httpx.MockTransport(handler),
        )

        outcomes = await runner.run_all(
            [make_config(suites=[SuiteName.fact_extraction, SuiteName.dedup])]
        )

        result, path = outcomes[0]
        assert path.exists()
        assert [s.suite for s in result.suites] == ["fact-extraction", "dedup"]
        assert result.suites[1].error_count == 0
        assert "dedup_scan_ari" in result.suites[1].aggregated
        assert result.cost.tokens.total_tokens == 0
