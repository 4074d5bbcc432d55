"""
Base model for camelCase JSON payloads.

The frontend speaks camelCase; Python code uses snake_case attributes.
Models accept either spelling on input and dump camelCase with by_alias.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """BaseModel with camelCase aliases and population by field name."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_payload(self) -> dict:
        """Dump to a camelCase dict, dropping unset optional fields."""
        return self.model_dump(by_alias=True, exclude_none=True)
