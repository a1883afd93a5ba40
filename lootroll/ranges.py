"""Roll-range text parsing and input sanitizing.

A range text is either a single integer ("7") or two integers joined by a
dash ("4-6"). The two ends may be typed in either order; "10-3" means 3..10.
Text that does not (yet) describe a range parses to None rather than raising,
since half-typed values are an everyday state in the editor.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

_NOT_ROLL_CHARS_RE = re.compile(r"[^0-9-]")
_DASH_RUN_RE = re.compile(r"-+")
_NOT_DIGITS_RE = re.compile(r"[^0-9]")
# Longer digit runs are not treated as numbers. This stays under CPython's
# default int/str conversion limit, and leaves room for reflow sums.
_MAX_DIGITS = 4000
_NUMBER_RE = re.compile(r"[0-9]{1,%d}" % _MAX_DIGITS)


@dataclass(frozen=True)
class RollRange:
    """Inclusive integer interval selected by a range text."""

    low: int
    high: int

    @property
    def width(self) -> int:
        """Count of integers covered, i.e. the weight this range implies."""
        return self.high - self.low + 1

    def contains(self, value: int) -> bool:
        return self.low <= value <= self.high


def sanitize_roll_input(text: str) -> str:
    """Drop everything but digits and dashes, collapsing runs of dashes."""
    return _DASH_RUN_RE.sub("-", _NOT_ROLL_CHARS_RE.sub("", text))


def sanitize_weight_input(text: str) -> int:
    """Reduce raw weight input to a positive integer.

    Non-digits are stripped first, so "-5" reads as 5. Empty input, zero and
    numbers too long to convert fall back to 1.
    """
    digits = _NOT_DIGITS_RE.sub("", str(text))
    if not digits or len(digits) > _MAX_DIGITS:
        return 1
    try:
        weight = int(digits)
    except ValueError:
        return 1
    return weight if weight > 0 else 1


def parse_roll_range(text: str) -> RollRange | None:
    """Parse range text into a RollRange.

    Args:
        text: Range text such as "7", "4-6" or "10-3".

    Returns:
        The interval with ends ordered low to high, or None when the text is
        empty, has a non-numeric token, has more than two tokens, or has a
        number too long to convert.
    """
    tokens = [token.strip() for token in text.split("-")]
    if len(tokens) > 2 or not all(_NUMBER_RE.fullmatch(token) for token in tokens):
        return None
    try:
        numbers = [int(token) for token in tokens]
    except ValueError:
        return None
    return RollRange(low=min(numbers), high=max(numbers))


def format_roll_range(low: int, high: int) -> str:
    """Render an interval the way reflow writes it, always as "low-high"."""
    return f"{low}-{high}"
