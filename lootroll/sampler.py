"""Rolling against a table.

A roll draws a uniform integer in [1, die_size] and picks the first entry whose
range text contains it. The draw function is injectable so rolls can be made
deterministic; it is called as draw(1, die_size) with both ends inclusive,
matching random.randint.
"""

from __future__ import annotations

import functools
import logging
import random
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from lootroll.config import settings
from lootroll.ranges import parse_roll_range
from lootroll.tables import Entry, Table

logger = logging.getLogger(__name__)

DrawFn = Callable[[int, int], int]


@dataclass(frozen=True)
class RollResult:
    """Outcome of a roll.

    value is None when no roll was made (empty table). matched_index is None
    when nothing was rolled or when the rolled value fell in no entry's range.
    """

    value: int | None = None
    matched_index: int | None = None

    @property
    def performed(self) -> bool:
        return self.value is not None

    @property
    def matched(self) -> bool:
        return self.matched_index is not None


@functools.lru_cache(maxsize=None)
def _seeded_rng(seed: int) -> random.Random:
    return random.Random(seed)


def seeded_draw(seed: int) -> DrawFn:
    """Return a fresh deterministic draw function for seed."""
    return random.Random(seed).randint


def default_draw() -> DrawFn:
    """Return the draw function used when roll() is not given one.

    With settings.roll_seed set, one generator per seed is shared for the life
    of the process, so successive rolls differ but the sequence is repeatable.
    """
    if settings.roll_seed is None:
        return random.randint
    return _seeded_rng(settings.roll_seed).randint


def roll_matches(range_text: str, value: int) -> bool:
    """Return True if value falls inside range_text. Unparsable text never matches."""
    parsed = parse_roll_range(range_text)
    return parsed is not None and parsed.contains(value)


def find_match(entries: Sequence[Entry], value: int) -> int | None:
    """Return the index of the first entry whose range contains value."""
    for i, entry in enumerate(entries):
        if roll_matches(entry.range_text, value):
            return i
    return None


def roll(table: Table, draw: DrawFn | None = None) -> RollResult:
    """Roll the table's die and find the entry it lands on.

    Args:
        table: Table to roll against.
        draw: Uniform integer function, called as draw(1, die_size).
            Defaults to default_draw().

    Returns:
        A RollResult. No draw is made when die_size is not positive.
    """
    if table.die_size <= 0:
        logger.debug("Die size is %d, not rolling", table.die_size)
        return RollResult()
    value = (draw or default_draw())(1, table.die_size)
    matched_index = find_match(table.entries, value)
    if matched_index is None:
        logger.warning(
            "Rolled %d on a d%d but no entry covers it; ranges are not contiguous",
            value,
            table.die_size,
        )
    return RollResult(value=value, matched_index=matched_index)
