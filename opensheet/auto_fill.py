"""Spreadsheet-style auto fill: numeric, named and text+number series,
formula fill with shifted references, and plain copying."""

from __future__ import annotations

import re
from enum import Enum
from typing import Sequence

from opensheet.cell_range import CellRange, col_letter_to_index, index_to_col_letter
from opensheet.sheet import Sheet

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
MONTH_SHORT = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
               "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
DAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
DAY_SHORT = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

_NAME_LISTS = (MONTH_NAMES, MONTH_SHORT, DAY_NAMES, DAY_SHORT)
_NAME_SET = {name.lower() for names in _NAME_LISTS for name in names}

_NUMBER_RE = re.compile(r"^\s*[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?\s*$")
_DETECT_TEXT_NUM_RE = re.compile(r"^(.+?)([0-9]+)$")
_TEXT_NUM_RE = re.compile(r"^(.*?)([0-9]+)$")
_REF_RE = re.compile(r"(\$?)([A-Za-z]{1,3})(\$?)([0-9]{1,7})")


class FillType(Enum):
    AUTO_DETECT = "auto_detect"
    COPY = "copy"
    SERIES = "series"
    FORMULA_FILL = "formula_fill"
    FLASH_FILL = "flash_fill"


def _to_number(text: str) -> float | None:
    if _NUMBER_RE.match(text):
        return float(text)
    return None


def detect_type(seeds: Sequence[str]) -> FillType:
    """Decide what kind of series the seed values represent."""
    if not seeds:
        return FillType.COPY
    if seeds[0].startswith("="):
        return FillType.FORMULA_FILL
    if all(_to_number(s) is not None for s in seeds):
        return FillType.SERIES
    if any(s.lower() in _NAME_SET for s in seeds):
        return FillType.SERIES
    if _DETECT_TEXT_NUM_RE.match(seeds[0]):
        return FillType.SERIES
    return FillType.COPY


def detect_step(values: Sequence[float]) -> float:
    """Average difference between consecutive values; 1.0 for fewer than two."""
    if len(values) < 2:
        return 1.0
    total = sum(b - a for a, b in zip(values, values[1:]))
    return total / (len(values) - 1)


def shift_formula(formula: str, dr: int, dc: int) -> str:
    """Move the relative cell references of ``formula`` by dr rows and dc columns."""
    if not formula.startswith("="):
        return formula

    def replace(match: re.Match[str]) -> str:
        abs_col = match.group(1) == "$"
        abs_row = match.group(3) == "$"
        col = col_letter_to_index(match.group(2))
        row = int(match.group(4))
        new_row = row if abs_row else max(1, row + dr)
        new_col = col if abs_col else max(1, col + dc)
        return (
            ("$" if abs_col else "")
            + index_to_col_letter(new_col)
            + ("$" if abs_row else "")
            + str(new_row)
        )

    return _REF_RE.sub(replace, formula)


def _numeric_series(seeds: Sequence[float], count: int) -> list[str]:
    step = detect_step(seeds)
    last = seeds[-1] if seeds else 0.0
    result = []
    for i in range(1, count + 1):
        value = last + step * i
        if value.is_integer() and abs(value) < 1e15:
            result.append(str(int(value)))
        else:
            result.append(format(value, ".10g"))
    return result


def _copy_series(seeds: Sequence[str], count: int) -> list[str]:
    return [seeds[i % len(seeds)] for i in range(count)]


def _text_series(seeds: Sequence[str], count: int) -> list[str]:
    last = seeds[-1]
    lowered = last.lower()
    for names in _NAME_LISTS:
        idx = next((i for i, name in enumerate(names) if name.lower() == lowered), None)
        if idx is not None:
            return [names[(idx + i) % len(names)] for i in range(1, count + 1)]

    match = _TEXT_NUM_RE.match(last)
    if match:
        prefix, number = match.group(1), int(match.group(2))
        return [f"{prefix}{number + i}" for i in range(1, count + 1)]

    return _copy_series(seeds, count)


def _formula_series(seeds: Sequence[str], count: int, dr: int, dc: int) -> list[str]:
    return [
        shift_formula(seeds[(i - 1) % len(seeds)], dr * i, dc * i)
        for i in range(1, count + 1)
    ]


class AutoFill:
    """Extends a block of seed cells into a fill range."""

    def fill(
        self,
        sheet: Sheet,
        seed_range: CellRange,
        fill_range: CellRange,
        fill_type: FillType = FillType.AUTO_DETECT,
    ) -> None:
        """Write generated values into ``fill_range`` based on ``seed_range``."""
        if sheet is None or not seed_range.is_valid or not fill_range.is_valid:
            return

        fill_down = fill_range.left >= seed_range.left and fill_range.top > seed_range.bottom
        fill_right = fill_range.top >= seed_range.top and fill_range.left > seed_range.right

        if fill_down or fill_range.top > seed_range.top:
            seeds = [
                sheet.peek(r, seed_range.left).raw
                for r in range(seed_range.top, seed_range.bottom + 1)
            ]
        else:
            seeds = [
                sheet.peek(seed_range.top, c).raw
                for c in range(seed_range.left, seed_range.right + 1)
            ]
        if not seeds:
            return

        if fill_type is FillType.AUTO_DETECT:
            fill_type = detect_type(seeds)

        dr = 1 if fill_down else 0
        dc = 1 if fill_right else 0
        count = fill_range.row_count if fill_down else fill_range.col_count

        if fill_type is FillType.SERIES:
            numbers = [_to_number(s) for s in seeds]
            if all(n is not None for n in numbers):
                generated = _numeric_series(numbers, count)  # type: ignore[arg-type]
            else:
                generated = _text_series(seeds, count)
        elif fill_type is FillType.FORMULA_FILL:
            generated = _formula_series(seeds, count, dr, dc)
        else:
            generated = _copy_series(seeds, count)

        for i, value in enumerate(generated):
            row = fill_range.top + (i if fill_down else 0)
            col = fill_range.left + (i if fill_right else 0)
            if row <= fill_range.bottom and col <= fill_range.right:
                sheet.set_cell(row, col, value)