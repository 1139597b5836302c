"""Application settings using pydantic-settings.

This module provides environment variable support for the harness
settings that do not belong to a single run configuration.

Environment Variables:
    FACTLY_BENCH_RESULTS_DIR: Directory holding result artifacts
    FACTLY_BENCH_DATASETS_DIR: Directory holding dataset fixtures
    FACTLY_BENCH_CONCURRENCY: Default in-flight cases per suite
    FACTLY_BENCH_JUDGE_MAX_CONCURRENCY: In-flight judge calls per run
    FACTLY_BENCH_JUDGE_MAX_RETRIES: Judge attempts before scoring zero
    FACTLY_BENCH_JUDGE_RETRY_DELAY: Base backoff delay in seconds
    LLM_API_KEY: Judge API key used when the run config carries none
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from factly_benchmark.config.defaults import (
    DEFAULT_DATASETS_DIR,
    DEFAULT_JUDGE_MAX_CONCURRENCY,
    DEFAULT_JUDGE_MAX_RETRIES,
    DEFAULT_JUDGE_RETRY_DELAY,
    DEFAULT_RESULTS_DIR,
)

__all__ = ["Settings", "get_settings"]


class Settings(BaseSettings):
    """Harness-wide settings.

    Use get_settings() to access the cached singleton instance.

    Attributes:
        results_dir: Directory holding result artifacts.
        datasets_dir: Directory holding dataset fixtures.
        concurrency: Default in-flight cases per suite when a config omits it.
        judge_max_concurrency: Maximum in-flight judge calls per run.
        judge_max_retries: Judge attempts before the score falls back to zero.
        judge_retry_delay: Base delay for exponential judge backoff.
        llm_api_key: Fallback judge API key.

    """

    model_config = SettingsConfigDict(
        env_prefix="FACTLY_BENCH_",
        extra="ignore",
        populate_by_name=True,
    )

    results_dir: str = Field(
        default=DEFAULT_RESULTS_DIR,
        description="Directory holding result artifacts",
    )
    datasets_dir: str = Field(
        default=DEFAULT_DATASETS_DIR,
        description="Directory holding dataset fixtures",
    )
    concurrency: int | None = Field(
        default=None,
        ge=1,
        description="Default in-flight cases per suite",
    )
    judge_max_concurrency: int = Field(
        default=DEFAULT_JUDGE_MAX_CONCURRENCY,
        ge=1,
        le=64,
        description="Maximum in-flight judge calls per run",
    )
    judge_max_retries: int = Field(
        default=DEFAULT_JUDGE_MAX_RETRIES,
        ge=1,
        le=10,
        description="Judge attempts before scoring zero",
    )
    judge_retry_delay: float = Field(
        default=DEFAULT_JUDGE_RETRY_DELAY,
        ge=0.0,
        description="Base delay in seconds for exponential judge backoff",
    )
    llm_api_key: str | None = Field(
        default=None,
        validation_alias="LLM_API_KEY",
        description="Judge API key used when the run config carries none",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the cached settings singleton.

    Returns:
        The Settings instance with values from environment variables.

    """
    return Settings()
