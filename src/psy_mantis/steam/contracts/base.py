"""
Shared base for normalized Steam records.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator


class SteamRecord(BaseModel):
    """
    Immutable record built from a raw upstream dict.

    Upstream names map onto fields through validation aliases, numeric
    identifiers become strings, and a null value counts as missing so
    the field default applies.
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        coerce_numbers_to_str=True,
        extra="ignore",
    )

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, Mapping):
            return {key: value for key, value in data.items() if value is not None}
        return data


def only_mappings(items: Any) -> Any:
    """Keep the dict entries of an upstream list, dropping anything else."""
    if isinstance(items, list | tuple):
        return [item for item in items if isinstance(item, Mapping)]
    return items


def only_present(items: Any) -> Any:
    """Drop null entries from an upstream list of scalars."""
    if isinstance(items, list | tuple):
        return [item for item in items if item is not None]
    return items
