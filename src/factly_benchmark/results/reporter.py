"""Terminal and markdown rendering of results.

This module provides functions formatting benchmark results, comparisons,
history, regression alerts, result listings and suggestions for output.
"""

from __future__ import annotations

from collections.abc import Sequence

from factly_benchmark.models.config import format_number
from factly_benchmark.models.results import (
    BenchmarkResult,
    ComparisonResult,
    HistoryPoint,
    RegressionAlert,
    ResultSummary,
    Suggestion,
)

__all__ = [
    "format_alerts",
    "format_comparison_markdown",
    "format_comparison_terminal",
    "format_history",
    "format_result_list",
    "format_result_markdown",
    "format_result_terminal",
    "format_suggestions",
]

WIDTH = 70
METRIC_COLUMN = 35
CONFIG_COLUMN = 16


def pct(value: float) -> str:
    """Format a [0, 1] value as a percentage with one decimal."""
    return f"{value * 100:.1f}%"


def _seconds(latency_ms: float) -> str:
    return f"{latency_ms / 1000:.1f}s"


def _temperatures(result: BenchmarkResult) -> str:
    target = result.target
    return (
        f"extraction={format_number(target.temp_extraction)} "
        f"dedup={format_number(target.temp_dedup)} "
        f"impact={format_number(target.temp_impact)} "
        f"proposal={format_number(target.temp_proposal)}"
    )


def format_result_terminal(result: BenchmarkResult) -> str:
    """Format a benchmark result for the terminal.

    Args:
        result: The result to format.

    Returns:
        Multi-line report with one bar per aggregated metric.

    """
    lines = []
    lines.append("")
    lines.append("=" * WIDTH)
    lines.append(f"  BENCHMARK RESULT: {result.config.name}")
    lines.append("=" * WIDTH)
    lines.append(f"  Timestamp: {result.timestamp}")
    lines.append(f"  Model: {result.target.provider}/{result.target.model}")
    lines.append(f"  Temps: {_temperatures(result)}")
    if result.target.embeddings_model:
        lines.append(f"  Embeddings: {result.target.embeddings_model}")
    lines.append(f"  Overall Score: {pct(result.overall_score)}")
    lines.append(f"  Total Latency: {_seconds(result.total_latency_ms)}")
    if result.cost:
        lines.append(
            f"  Estimated Cost: ${result.cost.estimated_usd:.4f} "
            f"({result.cost.tokens.total_tokens} tokens)"
        )
    lines.append("-" * WIDTH)

    for suite in result.suites:
        lines.append("")
        header = f"  [{suite.suite}]"
        if suite.error_count:
            header += f"  {suite.error_count}/{len(suite.cases)} cases errored"
        lines.append(header)

        if not suite.aggregated:
            lines.append("    No metrics")
            continue

        name_width = max(len(name) for name in suite.aggregated) + 2
        for name, agg in suite.aggregated.items():
            bar = "|" * round(agg.mean * 20)
            lines.append(
                f"    {name.ljust(name_width)} {pct(agg.mean):>7}  {bar}  "
                f"(stddev={pct(agg.stddev)}, n={agg.count})"
            )

    lines.append("")
    lines.append("=" * WIDTH)
    return "\n".join(lines)


def format_result_markdown(result: BenchmarkResult) -> str:
    """Format a benchmark result as markdown tables."""
    target = result.target
    lines = []
    lines.append(f"# Benchmark Result: {result.config.name}")
    lines.append("")
    lines.append("| Property | Value |")
    lines.append("|----------|-------|")
    lines.append(f"| Timestamp | {result.timestamp} |")
    lines.append(f"| Model | {target.provider}/{target.model} |")
    lines.append(f"| Temp (extraction) | {format_number(target.temp_extraction)} |")
    lines.append(f"| Temp (dedup) | {format_number(target.temp_dedup)} |")
    lines.append(f"| Temp (impact) | {format_number(target.temp_impact)} |")
    lines.append(f"| Temp (proposal) | {format_number(target.temp_proposal)} |")
    lines.append(f"| Overall Score | {pct(result.overall_score)} |")
    lines.append(f"| Total Latency | {_seconds(result.total_latency_ms)} |")
    lines.append("")

    for suite in result.suites:
        lines.append(f"## {suite.suite}")
        lines.append("")
        lines.append("| Metric | Mean | StdDev | Min | Max | N |")
        lines.append("|--------|------|--------|-----|-----|---|")
        for name, agg in suite.aggregated.items():
            lines.append(
                f"| {name} | {pct(agg.mean)} | {pct(agg.stddev)} | {pct(agg.min)} "
                f"| {pct(agg.max)} | {agg.count} |"
            )
        lines.append("")

    return "\n".join(lines)


def format_comparison_terminal(comparison: ComparisonResult) -> str:
    """Format a comparison table for the terminal; ``*`` marks the best value."""
    lines = []
    lines.append("")
    lines.append("=" * WIDTH)
    lines.append("  BENCHMARK COMPARISON")
    lines.append("=" * WIDTH)

    header = "Metric".ljust(METRIC_COLUMN) + "".join(
        config[: CONFIG_COLUMN - 1].ljust(CONFIG_COLUMN) for config in comparison.configs
    )
    lines.append(f"  {header}")
    lines.append("  " + "-" * len(header))

    current_suite = ""
    for entry in comparison.entries:
        suite, _, metric = entry.metric.partition("/")
        if suite != current_suite:
            current_suite = suite
            lines.append("")
            lines.append(f"  [{suite}]")

        cells = []
        for value in entry.values:
            marker = "*" if value.config_name == entry.best_config_name else " "
            cells.append(f"{marker}{pct(value.value)}".ljust(CONFIG_COLUMN))
        lines.append(f"  {metric.ljust(METRIC_COLUMN)}{''.join(cells)}")

    lines.append("")
    lines.append("  * = best")
    lines.append("=" * WIDTH)
    return "\n".join(lines)


def format_comparison_markdown(comparison: ComparisonResult) -> str:
    """Format a comparison as a markdown table; the best value is bold."""
    lines = []
    lines.append("# Benchmark Comparison")
    lines.append("")
    lines.append(f"| Metric | {' | '.join(comparison.configs)} | Best |")
    lines.append(f"|--------|{'|'.join('------' for _ in comparison.configs)}|------|")

    for entry in comparison.entries:
        cells = [
            f"**{pct(v.value)}**" if v.config_name == entry.best_config_name else pct(v.value)
            for v in entry.values
        ]
        lines.append(f"| {entry.metric} | {' | '.join(cells)} | {entry.best_config_name} |")

    lines.append("")
    return "\n".join(lines)


def format_history(points: Sequence[HistoryPoint]) -> str:
    """Format score history, oldest first, with one bar per run."""
    if not points:
        return "No history data found."

    lines = []
    lines.append("")
    lines.append("SCORE HISTORY")
    lines.append("-" * 60)
    for point in points:
        bar = "|" * round(point.score * 40)
        lines.append(
            f"  {point.timestamp[:19]}  {point.config_name.ljust(25)}  "
            f"{pct(point.score)}  {bar}"
        )
    lines.append("")
    return "\n".join(lines)


def format_alerts(alerts: Sequence[RegressionAlert]) -> str:
    """Format regression alerts, or an empty string when there are none."""
    if not alerts:
        return ""

    lines = []
    lines.append("")
    lines.append("REGRESSION ALERTS:")
    for alert in alerts:
        lines.append(
            f"  [{alert.suite}] {alert.metric}: {pct(alert.previous_value)} -> "
            f"{pct(alert.current_value)} ({alert.delta * 100:.1f}%)"
        )
    return "\n".join(lines)


def format_result_list(summaries: Sequence[ResultSummary]) -> str:
    """Format stored result summaries, newest first."""
    if not summaries:
        return "No benchmark results found."

    lines = []
    lines.append("")
    lines.append("Benchmark Results:")
    lines.append("-" * 80)
    for summary in summaries:
        status = f"  [{summary.status}]" if summary.status != "success" else ""
        lines.append(
            f"  {summary.timestamp[:19]}  {summary.config_name.ljust(30)}  "
            f"{pct(summary.overall_score)}  {summary.file_path}{status}"
        )
    lines.append("")
    return "\n".join(lines)


def format_suggestions(suggestions: Sequence[Suggestion]) -> str:
    """Format improvement suggestions."""
    if not suggestions:
        return "No suggestions: not enough results, or nothing stands out."

    lines = []
    lines.append("")
    lines.append("SUGGESTIONS")
    lines.append("-" * WIDTH)
    for suggestion in suggestions:
        lines.append("")
        lines.append(f"  [{suggestion.type}] {suggestion.title}")
        lines.append(f"    {suggestion.message}")
        lines.append(f"    {suggestion.detail}")
    lines.append("")
    return "\n".join(lines)
