"""Range reflow: keeping range texts in step with entry weights.

Two flavors exist and they are deliberately different:

Full reflow
    Rebuilds every range text from the weight sequence alone, packing the
    ranges end to end from 1. Used after any structural change (add, delete,
    move, weight edit). Any previously stored range text is ignored.

Forward reflow
    Used when a range text is typed directly and committed. The edited entry
    takes its weight from the committed range, and only the entries after it
    are repacked, each keeping its own weight. Entries before the edited one
    are never touched, so a committed range whose low end does not follow the
    previous entry can leave a gap or an overlap behind it.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from lootroll.ranges import format_roll_range, parse_roll_range
from lootroll.tables import Entry

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Full reflow
# ---------------------------------------------------------------------------


def weights_to_range_texts(weights: Iterable[int]) -> list[str]:
    """Partition 1..sum(weights) into consecutive ranges, one per weight.

    Args:
        weights: Positive integer weights, in table order.

    Returns:
        One "low-high" range text per weight. A weight of 1 still renders as
        two numbers, e.g. "5-5".
    """
    range_texts: list[str] = []
    start = 1
    for weight in weights:
        end = start + weight - 1
        range_texts.append(format_roll_range(start, end))
        start = end + 1
    return range_texts


def reflow_entries(entries: Sequence[Entry]) -> tuple[Entry, ...]:
    """Rewrite every entry's range text from the weight sequence."""
    range_texts = weights_to_range_texts(entry.weight for entry in entries)
    return tuple(
        entry if entry.range_text == text else entry.model_copy(update={"range_text": text})
        for entry, text in zip(entries, range_texts)
    )


# ---------------------------------------------------------------------------
# Forward reflow
# ---------------------------------------------------------------------------


def forward_reflow(entries: Sequence[Entry], idx: int, committed_text: str) -> tuple[Entry, ...]:
    """Apply a committed range text at idx and repack the entries after it.

    Args:
        entries: Current entries, in table order.
        idx: Index of the entry whose range text was committed.
        committed_text: The text as committed. It is stored verbatim, so
            "6-4" stays "6-4" even though it reads as 4..6.

    Returns:
        The updated entries. If committed_text does not parse, only the text at
        idx changes and nothing is recomputed.
    """
    updated = list(entries)
    edited = updated[idx].model_copy(update={"range_text": committed_text})
    parsed = parse_roll_range(committed_text)
    if parsed is None:
        logger.debug("Range %r at index %d does not parse yet, skipping reflow", committed_text, idx)
        updated[idx] = edited
        return tuple(updated)

    updated[idx] = edited.model_copy(update={"weight": parsed.width})
    previous_high = parsed.high
    for i in range(idx + 1, len(updated)):
        low = previous_high + 1
        high = low + updated[i].weight - 1
        updated[i] = updated[i].model_copy(update={"range_text": format_roll_range(low, high)})
        previous_high = high
    return tuple(updated)
