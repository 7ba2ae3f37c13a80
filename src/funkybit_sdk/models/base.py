"""Shared pydantic configuration for backend payload models."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class FunkybitModel(BaseModel):
    """Base model accepting both camelCase wire names and snake_case field names."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        arbitrary_types_allowed=True,
    )
