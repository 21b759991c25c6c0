"""Shared schema configuration."""

from datetime import datetime, timezone
from typing import Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema that reads ORM objects and speaks camelCase JSON."""

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to naive stored timestamps."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
