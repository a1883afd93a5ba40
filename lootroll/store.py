"""Entry editing operations on a Table.

Each operation takes a Table and returns a new one; the caller keeps whichever
Table it gets back. Structural changes (add, delete, move, weight edit) run a
full reflow, a committed range edit runs a forward reflow, and every change
that can move the total weight changes the die size with it.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, replace

from lootroll.ranges import (
    format_roll_range,
    parse_roll_range,
    sanitize_roll_input,
    sanitize_weight_input,
)
from lootroll.reflow import forward_reflow, reflow_entries
from lootroll.tables import Entry, Table

logger = logging.getLogger(__name__)


class EntryIndexError(IndexError):
    """Raised when an operation targets an index outside the table."""


def _check_index(table: Table, idx: int) -> None:
    if not 0 <= idx < len(table.entries):
        raise EntryIndexError(f"No entry at index {idx} (table has {len(table.entries)})")


def _finish(table: Table, entries: Sequence[Entry], *, full_reflow: bool) -> Table:
    """Store entries on table, repacking every range first when full_reflow is set.

    The die size follows from the stored weights, so nothing else needs updating.
    """
    if full_reflow:
        entries = reflow_entries(entries)
    return table.model_copy(update={"entries": tuple(entries)})


# ---------------------------------------------------------------------------
# Structural edits (full reflow)
# ---------------------------------------------------------------------------


def add_entry(table: Table, label: str, weight: int = 1) -> Table:
    """Append an entry and reflow the whole table.

    An empty label or a non-positive weight declines the add and returns the
    table unchanged.
    """
    if not label or weight <= 0:
        logger.debug("Declining add: label=%r weight=%d", label, weight)
        return table
    entries = [*table.entries, Entry(label=label, weight=weight)]
    return _finish(table, entries, full_reflow=True)


def delete_entry(table: Table, idx: int) -> Table:
    _check_index(table, idx)
    entries = [entry for i, entry in enumerate(table.entries) if i != idx]
    return _finish(table, entries, full_reflow=True)


def move_entry(table: Table, idx: int, direction: int) -> Table:
    """Swap the entry at idx with its neighbour above (-1) or below (+1).

    Moving the first entry up or the last entry down is a no-op.

    Raises:
        EntryIndexError: If idx is outside the table.
        ValueError: If direction is not -1 or +1.
    """
    if direction not in (-1, 1):
        raise ValueError(f"Invalid move direction: {direction!r}")
    _check_index(table, idx)
    target = idx + direction
    if not 0 <= target < len(table.entries):
        return table
    entries = list(table.entries)
    entries[idx], entries[target] = entries[target], entries[idx]
    return _finish(table, entries, full_reflow=True)


def edit_weight(table: Table, idx: int, raw_text: str | int) -> Table:
    _check_index(table, idx)
    entries = list(table.entries)
    entries[idx] = entries[idx].model_copy(update={"weight": sanitize_weight_input(str(raw_text))})
    return _finish(table, entries, full_reflow=True)


# ---------------------------------------------------------------------------
# Range-text edits
# ---------------------------------------------------------------------------


def edit_range(table: Table, idx: int, raw_text: str) -> Table:
    """Keystroke edit of a range text: sanitize and store, nothing else.

    Weights and the other ranges only change once the text is committed with
    edit_range_on_blur.
    """
    _check_index(table, idx)
    entries = list(table.entries)
    entries[idx] = entries[idx].model_copy(update={"range_text": sanitize_roll_input(raw_text)})
    return table.model_copy(update={"entries": tuple(entries)})


def edit_range_on_blur(table: Table, idx: int, raw_text: str) -> Table:
    """Commit a range text at idx and push the following ranges forward.

    Entries before idx are not adjusted, even if the committed range no longer
    starts right after the previous one.
    """
    _check_index(table, idx)
    return _finish(table, forward_reflow(table.entries, idx, raw_text), full_reflow=False)


def edit_label(table: Table, idx: int, text: str) -> Table:
    _check_index(table, idx)
    entries = list(table.entries)
    entries[idx] = entries[idx].model_copy(update={"label": text})
    return table.model_copy(update={"entries": tuple(entries)})


# ---------------------------------------------------------------------------
# New-entry draft
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class EntryDraft:
    """The row being typed in before it is added.

    Typing a range sets the weight to the range's width; typing a weight
    stretches the typed range from its low end. The draft's range text is only
    a preview: adding the draft reflows the table from weights.
    """

    range_text: str = ""
    label: str = ""
    weight: int = 1

    def with_range_text(self, raw_text: str) -> EntryDraft:
        clean = sanitize_roll_input(raw_text)
        parsed = parse_roll_range(clean)
        if parsed is None:
            return replace(self, range_text=clean)
        return replace(self, range_text=clean, weight=parsed.width)

    def with_weight(self, raw_text: str | int) -> EntryDraft:
        weight = sanitize_weight_input(str(raw_text))
        parsed = parse_roll_range(self.range_text)
        range_text = self.range_text
        # A low end of 0 is treated as "no range typed yet".
        if parsed is not None and parsed.low:
            range_text = format_roll_range(parsed.low, parsed.low + weight - 1)
        return replace(self, weight=weight, range_text=range_text)

    def with_label(self, label: str) -> EntryDraft:
        return replace(self, label=label)


def add_draft(table: Table, draft: EntryDraft) -> Table:
    return add_entry(table, draft.label, draft.weight)
