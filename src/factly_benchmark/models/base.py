"""Base Pydantic schema for the project.

Provides a common base class for all Pydantic models in factly-benchmark
with shared configuration and validation behavior. Stored artifacts use
camelCase keys, so every model gets camelCase aliases and accepts either
spelling on input.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

__all__ = ["BaseSchema", "FrozenSchema"]


class BaseSchema(BaseModel):
    """Base model for all Pydantic schemas.

    Provides common configuration for all models in the project:
    - alias_generator: camelCase aliases matching the JSON artifact format
    - populate_by_name: Accept snake_case field names as well
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_json_dict(self) -> dict[str, Any]:
        """Dump to a JSON-compatible dict using camelCase keys."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class FrozenSchema(BaseSchema):
    """Immutable variant for values that must not change during a run."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )
