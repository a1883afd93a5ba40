"""Pydantic models for loot tables and their die size.

The serialized form is the one the editor stores and exports:

    {"die": 6, "items": [{"roll": "1-3", "name": "Gold", "weight": 3}, ...],
     "columns": [{"key": "roll", "label": "Roll"}, ...]}

Models use Pythonic field names with the serialized names as aliases; either
is accepted on input. All models are frozen, so every change produces a new
Table.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from lootroll.config import settings
from lootroll.ranges import sanitize_weight_input

logger = logging.getLogger(__name__)


class Entry(BaseModel):
    """One row of a table: what is rolled, its range text, and its weight.

    Keys the engine does not know about (description, linkedItem, ...) are kept
    as extras and written back out untouched.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    range_text: str = Field(default="", alias="roll")
    label: str = Field(default="", alias="name")
    weight: int = 1

    @field_validator("weight", mode="before")
    @classmethod
    def _positive_weight(cls, value: Any) -> int:
        if value is None:
            return 1
        if isinstance(value, float):
            if not math.isfinite(value) or not value.is_integer():
                raise ValueError(f"Weight must be a whole number, got {value!r}")
            value = int(value)
        if isinstance(value, int):
            return value if value > 0 else 1
        return sanitize_weight_input(str(value))


class Column(BaseModel):
    """Display column. Opaque to the engine, passed through as-is."""

    model_config = ConfigDict(frozen=True, extra="allow")

    key: str
    label: str = ""


def total_weight(entries: Iterable[Entry]) -> int:
    return sum(entry.weight for entry in entries)


class Table(BaseModel):
    """An ordered list of entries and the die rolled against them.

    die_size is always the total weight of the entries. It is computed, never
    stored, so a "die" key in input is ignored and written back recomputed.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    entries: tuple[Entry, ...] = Field(default=(), alias="items")
    columns: tuple[Column, ...] = ()

    @computed_field(alias="die")
    @property
    def die_size(self) -> int:
        return total_weight(self.entries)


# ---------------------------------------------------------------------------
# Boundary form
# ---------------------------------------------------------------------------


def default_columns() -> tuple[Column, ...]:
    return (
        Column(key="roll", label=settings.roll_column_label),
        Column(key="name", label=settings.name_column_label),
        Column(key="weight", label=settings.weight_column_label),
    )


def new_table(columns: Iterable[Column] | None = None) -> Table:
    """Create an empty table, with the default roll/name/weight columns unless given."""
    return Table(
        entries=(),
        columns=tuple(columns) if columns is not None else default_columns(),
    )


def load_table(data: Mapping[str, Any]) -> Table:
    """Validate a serialized table.

    Args:
        data: Mapping in the stored form ("die", "items", "columns").

    Returns:
        A Table whose die_size equals its total weight.

    Raises:
        pydantic.ValidationError: If the mapping does not describe a table.
    """
    table = Table.model_validate(data)
    stored_die = data.get("die")
    if stored_die is not None and stored_die != table.die_size:
        logger.debug(
            "Stored die %r disagrees with total weight %d, using total weight",
            stored_die,
            table.die_size,
        )
    return table


def dump_table(table: Table) -> dict[str, Any]:
    """Return the JSON-ready stored form of table."""
    return table.model_dump(mode="json", by_alias=True)
