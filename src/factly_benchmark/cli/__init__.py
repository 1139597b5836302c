"""Command-line interface for factly-benchmark."""

from factly_benchmark.cli.main import main

__all__ = ["main"]
