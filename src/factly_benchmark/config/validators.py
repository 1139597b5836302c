"""Field validation utilities for run configuration parsing.

This module provides a fluent API for validating and extracting fields
from raw configuration dictionaries. Configuration files written for the
original tool use camelCase keys, so every lookup accepts the snake_case
field name and its camelCase spelling.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any, TypeVar

from pydantic.alias_generators import to_camel

from factly_benchmark.config.exceptions import ConfigError

__all__ = ["FieldValidator"]

T = TypeVar("T")


class FieldValidator:
    """Fluent validator for configuration dictionary fields.

    Example:
        v = FieldValidator(data, "config: runs/nightly.json")
        name = v.require("name", str, transform=str.strip, empty_check=True)
        runs = v.optional("runs_per_case", int, default=1)
        suites = v.optional_list("suites", str)

    """

    def __init__(self, data: Any, context: str) -> None:
        """Initialize the validator with data and context.

        Args:
            data: Dictionary containing fields to validate.
            context: Context string for error messages (e.g., "target in x.json").

        """
        self._data = data
        self._context = context

    @property
    def data(self) -> dict[str, Any]:
        """Get the underlying data dictionary."""
        return self._data

    @property
    def context(self) -> str:
        """Get the context string for error messages."""
        return self._context

    def has(self, field: str) -> bool:
        """Return True if the field is present under either spelling."""
        return self._key(field) is not None

    def get(self, field: str) -> Any:
        """Return the raw value of a field, or None when absent."""
        key = self._key(field)
        return None if key is None else self._data[key]

    def require(
        self,
        field: str,
        expected_type: type[T],
        *,
        transform: Callable[[Any], Any] | None = None,
        empty_check: bool = False,
    ) -> T:
        """Validate and extract a required field.

        Raises:
            ConfigError: If the field is missing, has the wrong type, or is an
                empty string when empty_check is True.

        """
        if not self.has(field):
            raise ConfigError(f"Missing required field '{field}' in {self._context}")

        value = self._check_type(field, self.get(field), expected_type)
        if transform is not None:
            value = transform(value)

        if empty_check and isinstance(value, str) and not value.strip():
            raise ConfigError(
                f"Invalid '{field}': must be a non-empty string in {self._context}"
            )

        return value

    def optional(
        self,
        field: str,
        expected_type: type[T],
        *,
        default: T | None = None,
        transform: Callable[[Any], Any] | None = None,
    ) -> T | None:
        """Validate and extract an optional field, returning default when absent."""
        value = self.get(field)
        if value is None:
            return default

        value = self._check_type(field, value, expected_type)
        if transform is not None:
            value = transform(value)
        return value

    def optional_number(
        self,
        field: str,
        *,
        default: float | None = None,
        minimum: float | None = None,
        maximum: float | None = None,
    ) -> float | None:
        """Validate and extract an optional number, optionally range-checked."""
        value = self.get(field)
        if value is None:
            return default

        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ConfigError(f"Invalid '{field}': expected number in {self._context}")

        if minimum is not None and value < minimum:
            raise ConfigError(
                f"Invalid '{field}': must be >= {minimum} in {self._context}"
            )
        if maximum is not None and value > maximum:
            raise ConfigError(
                f"Invalid '{field}': must be <= {maximum} in {self._context}"
            )

        return float(value)

    def optional_int(
        self,
        field: str,
        *,
        default: int | None = None,
        minimum: int | None = None,
    ) -> int | None:
        """Validate and extract an optional integer with a lower bound."""
        value = self.optional(field, int, default=None)
        if value is None:
            return default
        if minimum is not None and value < minimum:
            raise ConfigError(
                f"Invalid '{field}': must be >= {minimum} in {self._context}"
            )
        return value

    def optional_list(
        self,
        field: str,
        item_type: type | tuple[type, ...] | None = None,
        *,
        non_empty: bool = False,
    ) -> list[Any] | None:
        """Validate and extract an optional list field.

        Raises:
            ConfigError: If the field is present but not a list, is empty when
                non_empty is True, or contains items of the wrong type.

        """
        value = self.get(field)
        if value is None:
            return None

        if not isinstance(value, list):
            raise ConfigError(f"Invalid '{field}': expected list in {self._context}")

        if non_empty and not value:
            raise ConfigError(f"Empty '{field}' list in {self._context}")

        if item_type is not None and not all(
            _is_instance(item, item_type) for item in value
        ):
            raise ConfigError(
                f"Invalid '{field}': all items must be {_type_name(item_type)} "
                f"in {self._context}"
            )

        return value

    def optional_mapping(self, field: str) -> FieldValidator | None:
        """Return a nested validator for an optional mapping field."""
        value = self.get(field)
        if value is None:
            return None
        nested = FieldValidator(value, f"{field} in {self._context}")
        nested.require_mapping()
        return nested

    def require_mapping(self) -> dict[str, Any]:
        """Validate that the data is a dictionary/mapping.

        Raises:
            ConfigError: If data is not a dict.

        """
        if not isinstance(self._data, dict):
            raise ConfigError(
                f"Invalid structure: expected mapping, "
                f"got {type(self._data).__name__} in {self._context}"
            )
        return self._data

    def require_choice(self, field: str, value: str, choices: Iterable[str]) -> str:
        """Validate that a value belongs to a closed set of choices."""
        allowed = list(choices)
        if value not in allowed:
            raise ConfigError(
                f"Invalid {field}: '{value}' in {self._context}. "
                f"Valid: {', '.join(allowed)}"
            )
        return value

    def _key(self, field: str) -> str | None:
        if not isinstance(self._data, dict):
            return None
        for key in (field, to_camel(field)):
            if key in self._data:
                return key
        return None

    def _check_type(self, field: str, value: Any, expected_type: type) -> Any:
        if not _is_instance(value, expected_type):
            raise ConfigError(
                f"Invalid '{field}': expected {_type_name(expected_type)}, "
                f"got {type(value).__name__} in {self._context}"
            )
        return value


def _is_instance(value: Any, expected: type | tuple[type, ...]) -> bool:
    # bool is an int subclass; never accept it where a number is expected
    if isinstance(value, bool):
        types = expected if isinstance(expected, tuple) else (expected,)
        return bool in types
    return isinstance(value, expected)


def _type_name(expected: type | tuple[type, ...]) -> str:
    if isinstance(expected, tuple):
        return " or ".join(t.__name__ for t in expected)
    return expected.__name__
