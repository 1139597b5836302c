"""CLI argument parser configuration.

This module provides the argument parser for the factly-benchmark CLI.
"""

import argparse

from factly_benchmark import __version__
from factly_benchmark.config.defaults import (
    DEFAULT_DATASETS_DIR,
    DEFAULT_RESULTS_DIR,
    DEFAULT_TRIGRAM_DEDUP_THRESHOLD,
)
from factly_benchmark.models.enums import SuiteName

__all__ = ["create_parser"]


def create_parser() -> argparse.ArgumentParser:
    """Create the CLI argument parser.

    Returns:
        An ArgumentParser configured with all commands and options.

    """
    parser = argparse.ArgumentParser(
        prog="factly-benchmark",
        description="Factly AI quality benchmark - score the Factly backend against "
        "gold-standard datasets.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run a benchmark config (JSON or YAML; matrix configs expand to N runs)
  factly-benchmark run --config configs/default.json

  # Run only some suites, 4 cases in flight
  factly-benchmark run --config configs/default.json --suite fact-extraction,dedup --concurrency 4

  # Compare two or more results (two files also prints regression alerts)
  factly-benchmark compare results/a.json results/b.json

  # Score history for one suite
  factly-benchmark history --suite dedup

  # List stored results, get suggestions, score the trigram dedup baseline
  factly-benchmark list
  factly-benchmark suggest
  factly-benchmark baseline --threshold 0.7
""",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--results-dir",
        type=str,
        metavar="DIR",
        dest="results_dir",
        help=f"Directory for result files (default: ./{DEFAULT_RESULTS_DIR})",
    )
    parser.add_argument(
        "--datasets-dir",
        type=str,
        metavar="DIR",
        dest="datasets_dir",
        help=f"Directory holding dataset fixtures (default: ./{DEFAULT_DATASETS_DIR})",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        dest="json_logs",
        help="Emit logs as JSON lines on stderr",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    run = subparsers.add_parser("run", help="Run a benchmark with the given config")
    run.add_argument(
        "--config",
        "-c",
        type=str,
        required=True,
        metavar="FILE",
        help="Path to a JSON or YAML run/matrix config",
    )
    run.add_argument(
        "--suite",
        type=str,
        metavar="NAMES",
        help=f"Comma-separated suites to run instead of the config's ({', '.join(SuiteName.values())})",
    )
    run.add_argument(
        "--force",
        action="store_true",
        help="Run even if a config name is already used by a stored result",
    )
    run.add_argument(
        "--invert-lower-is-better",
        action="store_true",
        dest="invert_lower_is_better",
        help="Count lower-is-better metrics (fpr, mae) as 1 - value in the overall score",
    )
    run.add_argument(
        "--concurrency",
        type=int,
        metavar="N",
        help="Cases in flight per suite (default: config value, else 1)",
    )

    compare = subparsers.add_parser("compare", help="Compare two or more benchmark results")
    compare.add_argument("files", nargs="+", metavar="FILE", help="Result files to compare")
    compare.add_argument(
        "--markdown",
        action="store_true",
        help="Render the comparison as a markdown table",
    )

    history = subparsers.add_parser("history", help="Show score history over time")
    history.add_argument("--suite", type=str, metavar="NAME", help="Only show this suite's metrics")

    subparsers.add_parser("list", help="List all saved benchmark results")
    subparsers.add_parser("suggest", help="Suggest configurations to try from stored results")

    baseline = subparsers.add_parser(
        "baseline", help="Score the local trigram dedup classifier on the dedup pairs"
    )
    baseline.add_argument(
        "--threshold",
        type=float,
        metavar="T",
        default=DEFAULT_TRIGRAM_DEDUP_THRESHOLD,
        help=f"Similarity threshold for a duplicate (default: {DEFAULT_TRIGRAM_DEDUP_THRESHOLD})",
    )

    return parser
