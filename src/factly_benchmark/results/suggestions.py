"""Improvement suggestions derived from stored results.

Each rule inspects the recent results (newest first) and may emit
suggestions pointing at a configuration worth trying next. Rules are
independent; generate_suggestions() concatenates their output.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

from pydantic.alias_generators import to_camel

from factly_benchmark.config.defaults import (
    BEST_CONFIG_MARGIN,
    LOW_SCORE_THRESHOLD,
    MAX_TEMPERATURE,
    SIGNIFICANT_GAP,
    SUGGESTION_GAP_MARGIN,
    TEMPERATURE_STEP,
)
from factly_benchmark.evaluators.aggregate import suite_mean
from factly_benchmark.models.config import TargetConfig, format_number
from factly_benchmark.models.results import (
    BenchmarkResult,
    GapPoint,
    Suggestion,
    SuggestionGap,
)
from factly_benchmark.results.polarity import is_lower_better

__all__ = ["generate_suggestions"]

Rule = Callable[[Sequence[BenchmarkResult]], list[Suggestion]]

_TEMPERATURE_KNOBS: tuple[tuple[str, str, str], ...] = (
    (
        "temp_extraction",
        "extraction",
        "Extraction temperature controls how freely the model identifies facts. "
        "Lower is stricter and more factual; higher explores more interpretations.",
    ),
    (
        "temp_dedup",
        "dedup",
        "Dedup temperature controls how the model decides whether two items are "
        "the same. Lower is more conservative; higher merges more aggressively.",
    ),
    (
        "temp_impact",
        "impact",
        "Impact temperature controls how changes are judged to affect children. "
        "Lower is predictable; higher is more nuanced but more variable.",
    ),
    (
        "temp_proposal",
        "proposal",
        "Proposal temperature controls update generation. Lower is conventional "
        "and reliable; higher is more creative with more risk of errors.",
    ),
)


def _pct(value: float) -> str:
    return f"{value * 100:.1f}"


def _gap(
    latest_label: str, latest: float, reference_label: str, reference: float, delta: float
) -> SuggestionGap:
    return SuggestionGap(
        latest=GapPoint(label=latest_label, value=latest),
        reference=GapPoint(label=reference_label, value=reference),
        delta=delta,
    )


def _target_config(target: TargetConfig, **overrides: Any) -> dict[str, Any]:
    data = target.to_json_dict()
    for key, value in overrides.items():
        data[to_camel(key)] = value
    return {"target": data}


def _low_scores(results: Sequence[BenchmarkResult]) -> list[Suggestion]:
    latest = results[0]
    name = latest.config.name
    suggestions: list[Suggestion] = []

    for evaluation in latest.suites:
        for metric, aggregate in evaluation.aggregated.items():
            value = aggregate.mean
            # a small error rate is a good score
            if is_lower_better(metric) or value >= LOW_SCORE_THRESHOLD:
                continue

            reference: tuple[BenchmarkResult, float] | None = None
            for other in results[1:]:
                other_suite = other.suite(evaluation.suite)
                if other_suite is None or metric not in other_suite.aggregated:
                    continue
                other_value = other_suite.aggregated[metric].mean
                if reference is None or other_value > reference[1]:
                    reference = (other, other_value)

            intro = (
                f'On the latest benchmark ({name}), metric "{metric}" in suite '
                f'"{evaluation.suite}" is only at {_pct(value)}%. '
            )
            if reference is not None and reference[1] > value:
                other, other_value = reference
                gap = other_value - value
                suggestions.append(
                    Suggestion(
                        type="low_score",
                        title=f"Low {metric} on {evaluation.suite}",
                        message=intro
                        + f"A previous benchmark ({other.config.name}, model "
                        f"{other.target.model}, temp "
                        f"{format_number(other.target.temp_extraction)}) scored "
                        f"{_pct(other_value)}% on the same metric. "
                        f"Gap: +{_pct(gap)} pts in favor of the previous run.",
                        detail=f'Benchmark "{other.config.name}" shows a better score is '
                        f"achievable with a different configuration. Try its parameters "
                        f"to close the {_pct(gap)} pts gap.",
                        gap=_gap(name, value, other.config.name, other_value, gap),
                        suggested_config=_target_config(other.target),
                    )
                )
            else:
                suggestions.append(
                    Suggestion(
                        type="low_score",
                        title=f"Low {metric} on {evaluation.suite}",
                        message=intro
                        + "Below 50% means the model fails more often than it succeeds "
                        "on this task.",
                        detail="Consider a more capable model, a lower temperature for "
                        "more deterministic outputs, or prompt changes.",
                    )
                )
    return suggestions


def _best_config(results: Sequence[BenchmarkResult]) -> list[Suggestion]:
    if len(results) < 2:
        return []
    latest = results[0]
    best = latest
    for result in results[1:]:
        if result.overall_score > best.overall_score:
            best = result

    delta = best.overall_score - latest.overall_score
    if best.id == latest.id or delta <= BEST_CONFIG_MARGIN:
        return []

    return [
        Suggestion(
            type="best_config",
            title="Latest run is not the best",
            message=f"Latest benchmark ({latest.config.name}) scored "
            f"{_pct(latest.overall_score)}%, but \"{best.config.name}\" reached "
            f"{_pct(best.overall_score)}%. Gap: {_pct(delta)} pts. "
            f'"{best.config.name}" used model {best.target.model} '
            f"({best.target.provider}) with extraction temperature "
            f"{format_number(best.target.temp_extraction)}.",
            detail="Recent parameter changes may have degraded quality. Re-running with "
            "the best known config separates a config issue from a system regression.",
            gap=_gap(
                latest.config.name,
                latest.overall_score,
                best.config.name,
                best.overall_score,
                delta,
            ),
            suggested_config=_target_config(best.target),
        )
    ]


@dataclass
class _Group:
    scores: list[float] = field(default_factory=list)
    best_score: float = 0.0
    best: BenchmarkResult | None = None

    @property
    def average(self) -> float:
        return sum(self.scores) / len(self.scores)


def _group_by(
    results: Sequence[BenchmarkResult], key: Callable[[BenchmarkResult], str]
) -> list[tuple[str, _Group]]:
    groups: dict[str, _Group] = {}
    for result in results:
        group = groups.setdefault(key(result), _Group())
        group.scores.append(result.overall_score)
        if group.best is None or result.overall_score > group.best_score:
            group.best_score = result.overall_score
            group.best = result
    return sorted(groups.items(), key=lambda item: item[1].best_score, reverse=True)


def _group_comparison(
    results: Sequence[BenchmarkResult],
    kind: str,
    key: Callable[[BenchmarkResult], str],
) -> list[Suggestion]:
    if len(results) < 2:
        return []
    groups = _group_by(results, key)
    if len(groups) < 2:
        return []

    best_name, best = groups[0]
    worst_name, worst = groups[-1]
    delta = best.best_score - worst.best_score
    if delta <= SUGGESTION_GAP_MARGIN:
        return []

    noun = "models" if kind == "model" else "providers"
    return [
        Suggestion(
            type=f"{kind}_comparison",
            title=f"{best_name} outperforms {worst_name}",
            message=f"Across {len(groups)} {noun} tested, {best_name} peaks at "
            f"{_pct(best.best_score)}% (avg over {len(best.scores)} run(s): "
            f"{_pct(best.average)}%), while {worst_name} peaks at "
            f"{_pct(worst.best_score)}% (avg over {len(worst.scores)} run(s): "
            f"{_pct(worst.average)}%). Gap: {_pct(delta)} pts.",
            detail=f"A {_pct(delta)} pts gap indicates {best_name} handles these "
            f"benchmark tasks better. If {worst_name} is cheaper, weigh the quality "
            f"gap against the cost savings.",
            gap=_gap(worst_name, worst.best_score, best_name, best.best_score, delta),
            suggested_config=_target_config(best.best.target) if best.best else None,
        )
    ]


def _model_comparison(results: Sequence[BenchmarkResult]) -> list[Suggestion]:
    return _group_comparison(results, "model", lambda r: r.target.model)


def _provider_comparison(results: Sequence[BenchmarkResult]) -> list[Suggestion]:
    return _group_comparison(results, "provider", lambda r: r.target.provider)


def _temperature_sweet_spots(results: Sequence[BenchmarkResult]) -> list[Suggestion]:
    if len(results) < 2:
        return []
    latest = results[0]
    suggestions: list[Suggestion] = []

    for knob, label, explanation in _TEMPERATURE_KNOBS:
        best_by_temp: dict[float, float] = {}
        for result in results:
            temp = getattr(result.target, knob)
            if temp not in best_by_temp or result.overall_score > best_by_temp[temp]:
                best_by_temp[temp] = result.overall_score
        if len(best_by_temp) < 2:
            continue

        ranked = sorted(best_by_temp.items(), key=lambda item: item[1], reverse=True)
        best_temp, best_score = ranked[0]
        worst_temp, worst_score = ranked[-1]
        delta = best_score - worst_score
        if delta <= SUGGESTION_GAP_MARGIN:
            continue

        tested = ", ".join(f"{format_number(t)} ({_pct(s)}%)" for t, s in ranked)
        impact = (
            f"The {_pct(delta)} pts gap is very significant: this temperature has a real "
            "impact on quality."
            if delta > SIGNIFICANT_GAP
            else f"The {_pct(delta)} pts gap is moderate: other parameters may matter more."
        )
        suggestions.append(
            Suggestion(
                type="temperature_sweet_spot",
                title=f"Optimal {label} temperature: {format_number(best_temp)}",
                message=f"Among tested {label} temperatures [{tested}], "
                f"{format_number(best_temp)} gives the best result at {_pct(best_score)}%, "
                f"vs {_pct(worst_score)}% for {format_number(worst_temp)}. "
                f"Gap: {_pct(delta)} pts.",
                detail=f"{explanation} {impact}",
                gap=_gap(
                    f"temp={format_number(worst_temp)}",
                    worst_score,
                    f"temp={format_number(best_temp)}",
                    best_score,
                    delta,
                ),
                suggested_config=_target_config(latest.target, **{knob: best_temp}),
            )
        )

        neighbors = (
            round(best_temp - TEMPERATURE_STEP, 2),
            round(best_temp + TEMPERATURE_STEP, 2),
        )
        untested = [
            t for t in neighbors if t not in best_by_temp and 0 <= t <= MAX_TEMPERATURE
        ]
        if untested:
            values = ", ".join(format_number(t) for t in untested)
            suggestions.append(
                Suggestion(
                    type="neighborhood_exploration",
                    title=f"Refine {label} temperature",
                    message=f"Best tested {label} temperature is "
                    f"{format_number(best_temp)}, but nearby values ({values}) have "
                    "never been tested. A neighbor may score higher.",
                    detail="Small steps around the best known point can gain a few "
                    "more points.",
                    suggested_config={
                        "matrix": {to_camel(knob): untested},
                        "baseTarget": _target_config(latest.target, **{knob: best_temp})[
                            "target"
                        ],
                    },
                )
            )
    return suggestions


_TARGET_DIFFS: tuple[tuple[str, str], ...] = (
    ("model", "model"),
    ("provider", "provider"),
    ("temp_extraction", "temp extraction"),
    ("temp_dedup", "temp dedup"),
    ("temp_impact", "temp impact"),
    ("temp_proposal", "temp proposal"),
)


def _regression(results: Sequence[BenchmarkResult]) -> list[Suggestion]:
    if len(results) < 2:
        return []
    latest = results[0]
    best = results[1]
    for result in results[2:]:
        if result.overall_score > best.overall_score:
            best = result

    delta = best.overall_score - latest.overall_score
    if delta <= SUGGESTION_GAP_MARGIN:
        return []

    diffs = [
        f"{label}: {getattr(latest.target, attr)} -> {getattr(best.target, attr)}"
        for attr, label in _TARGET_DIFFS
        if getattr(latest.target, attr) != getattr(best.target, attr)
    ]
    diff_text = (
        f"Config differences: {'; '.join(diffs)}."
        if diffs
        else "Both runs used identical parameters, pointing to a change in the system itself."
    )

    return [
        Suggestion(
            type="regression",
            title=f"Regression detected: -{_pct(delta)} pts",
            message=f"Latest benchmark ({latest.config.name}) scored "
            f"{_pct(latest.overall_score)}%, {_pct(delta)} pts below the best historical "
            f'result "{best.config.name}" at {_pct(best.overall_score)}%. {diff_text}',
            detail="Parameter changes, backend code changes or a shift in the LLM's "
            f'behavior can cause this. Re-run with the "{best.config.name}" config to '
            "tell a config issue from a system regression.",
            gap=_gap(
                latest.config.name,
                latest.overall_score,
                best.config.name,
                best.overall_score,
                delta,
            ),
            suggested_config=_target_config(best.target),
        )
    ]


def _declining_suites(results: Sequence[BenchmarkResult]) -> list[Suggestion]:
    if len(results) < 3:
        return []

    suite_names: list[str] = []
    for result in results:
        for evaluation in result.suites:
            if evaluation.suite not in suite_names:
                suite_names.append(evaluation.suite)

    suggestions: list[Suggestion] = []
    for suite in suite_names:
        series: list[tuple[float, BenchmarkResult]] = []
        for result in reversed(results):
            evaluation = result.suite(suite)
            mean = suite_mean(evaluation.aggregated) if evaluation else None
            if mean is not None:
                series.append((mean, result))
        if len(series) < 3:
            continue

        (first, first_run), (second, second_run), (third, third_run) = series[-3:]
        drop = first - third
        if not (third < second < first) or drop <= SUGGESTION_GAP_MARGIN:
            continue

        suggestions.append(
            Suggestion(
                type="suite_declining",
                title=f"{suite} declining steadily",
                message=f'Suite "{suite}" has dropped over the last 3 benchmarks: '
                f"{first_run.config.name} at {_pct(first)}%, then "
                f"{second_run.config.name} at {_pct(second)}%, then "
                f"{third_run.config.name} at {_pct(third)}%. Total loss: {_pct(drop)} pts.",
                detail="Three drops in a row are unlikely to be noise. Compare the "
                "parameters that changed across these runs.",
                gap=_gap(third_run.config.name, third, first_run.config.name, first, drop),
                suggested_config=_target_config(first_run.target),
            )
        )
    return suggestions


_RULES: tuple[Rule, ...] = (
    _low_scores,
    _best_config,
    _model_comparison,
    _temperature_sweet_spots,
    _regression,
    _declining_suites,
    _provider_comparison,
)


def generate_suggestions(results: Sequence[BenchmarkResult]) -> list[Suggestion]:
    """Derive improvement suggestions from results ordered newest first."""
    if not results:
        return []
    suggestions: list[Suggestion] = []
    for rule in _RULES:
        suggestions.extend(rule(results))
    return suggestions
