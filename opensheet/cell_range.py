"""Rectangular cell ranges and column-letter conversion."""

from __future__ import annotations

import re
from dataclasses import dataclass

_RANGE_RE = re.compile(r"^([A-Z]+)([0-9]+)(?::([A-Z]+)([0-9]+))?$")


def col_letter_to_index(letters: str) -> int:
    """Convert column letters to a 1-based index: A -> 1, Z -> 26, AA -> 27."""
    text = letters.upper()
    if not text or not all("A" <= ch <= "Z" for ch in text):
        raise ValueError(f"invalid column letters: {letters!r}")
    index = 0
    for ch in text:
        index = index * 26 + (ord(ch) - ord("A") + 1)
    return index


def index_to_col_letter(index: int) -> str:
    """Convert a 1-based column index to its letters: 1 -> A, 27 -> AA."""
    if index < 1:
        raise ValueError(f"column index must be positive, got {index}")
    letters = ""
    while index > 0:
        index, rem = divmod(index - 1, 26)
        letters = chr(ord("A") + rem) + letters
    return letters


@dataclass(frozen=True)
class CellRange:
    """An inclusive block of cells; rows and columns are 1-based."""

    top: int = 0
    left: int = 0
    bottom: int = 0
    right: int = 0

    @property
    def row_count(self) -> int:
        return self.bottom - self.top + 1

    @property
    def col_count(self) -> int:
        return self.right - self.left + 1

    @property
    def is_valid(self) -> bool:
        return (
            self.top <= self.bottom
            and self.left <= self.right
            and self.top > 0
            and self.left > 0
        )

    def contains(self, row: int, col: int) -> bool:
        return self.top <= row <= self.bottom and self.left <= col <= self.right

    @classmethod
    def from_string(cls, text: str) -> CellRange:
        """Parse ``"A1:C5"`` or ``"A1"``; unparsable text gives an invalid range."""
        match = _RANGE_RE.match(text.strip().upper())
        if not match:
            return cls()
        c1 = col_letter_to_index(match.group(1))
        r1 = int(match.group(2))
        if match.group(3) is None:
            return cls(r1, c1, r1, c1)
        c2 = col_letter_to_index(match.group(3))
        r2 = int(match.group(4))
        return cls(min(r1, r2), min(c1, c2), max(r1, r2), max(c1, c2))

    def to_string(self) -> str:
        """Render as ``"A1:C5"``, ``"A1"`` for one cell, or ``""`` if invalid."""
        if not self.is_valid:
            return ""
        top_left = f"{index_to_col_letter(self.left)}{self.top}"
        bottom_right = f"{index_to_col_letter(self.right)}{self.bottom}"
        if top_left == bottom_right:
            return top_left
        return f"{top_left}:{bottom_right}"

    def __str__(self) -> str:
        return self.to_string()