"""Configuration module for benchmark runs.

This module provides the configuration exceptions and centralized
settings via pydantic-settings. Run configurations are loaded with
``factly_benchmark.config.loader`` and matrices expanded with
``factly_benchmark.config.matrix``.
"""

from factly_benchmark.config.exceptions import ConfigError, NameConflictError
from factly_benchmark.config.settings import Settings, get_settings

__all__ = [
    "ConfigError",
    "get_settings",
    "NameConflictError",
    "Settings",
]
