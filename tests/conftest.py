"""Shared fixtures for the lootroll test suite.

No test here touches real randomness unless it says so: rolls take a scripted
draw function, or patch random.randint.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

import pytest

from lootroll.config import settings
from lootroll.store import add_entry
from lootroll.tables import Table, new_table


def _build_table(rows: Iterable[tuple[str, int]]) -> Table:
    """Build a table by adding (label, weight) rows one at a time."""
    table = new_table()
    for label, weight in rows:
        table = add_entry(table, label, weight)
    return table


@pytest.fixture
def abc_table() -> Table:
    """A:3, B:2, C:1, giving ranges 1-3, 4-5, 6-6 on a d6."""
    return _build_table([("A", 3), ("B", 2), ("C", 1)])


@pytest.fixture
def scripted_draw() -> Callable[[Iterable[int]], Callable[[int, int], int]]:
    """Factory for a draw function that returns the given values in order.

    Each call is recorded on the returned function's .calls list.
    """

    def _make(values: Iterable[int]) -> Callable[[int, int], int]:
        remaining = iter(values)
        calls: list[tuple[int, int]] = []

        def _draw(low: int, high: int) -> int:
            calls.append((low, high))
            return next(remaining)

        _draw.calls = calls  # type: ignore[attr-defined]
        return _draw

    return _make


@pytest.fixture(autouse=True)
def no_roll_seed(monkeypatch):
    """Keep a LOOTROLL_ROLL_SEED from the environment out of the tests."""
    monkeypatch.setattr(settings, "roll_seed", None)


@pytest.fixture
def make_table() -> Callable[[Iterable[tuple[str, int]]], Table]:
    """Factory building a table from (label, weight) rows."""
    return _build_table
