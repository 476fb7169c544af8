"""Pivot tables: aggregate a source range by row and column keys and
write the summary grid onto a sheet."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Sequence

from opensheet.cell_range import CellRange
from opensheet.events import Signal
from opensheet.sheet import Sheet

_NUMBER_RE = re.compile(r"^\s*[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?\s*$")


class AggFunc(Enum):
    SUM = "sum"
    COUNT = "count"
    AVERAGE = "average"
    MIN = "min"
    MAX = "max"
    COUNT_A = "count_a"


@dataclass(frozen=True)
class FieldDef:
    """A grouping field; ``source_col`` is 1-based within the source range, 0 for none."""

    source_col: int = 0
    label: str = ""


@dataclass(frozen=True)
class ValueField:
    """The column whose numbers are aggregated, and how."""

    source_col: int = 0
    label: str = ""
    func: AggFunc = AggFunc.SUM


@dataclass
class PivotResult:
    """Distinct keys and the aggregated value for each present (row, column) pair."""

    row_keys: list[str] = field(default_factory=list)
    col_keys: list[str] = field(default_factory=list)
    data: dict[str, dict[str, float]] = field(default_factory=dict)


class PivotError(Exception):
    """Raised when a pivot table cannot be built from its configuration."""


def aggregate(values: Sequence[float], func: AggFunc) -> float:
    """Reduce ``values`` with ``func``; 0.0 for no values."""
    if not values:
        return 0.0
    if func is AggFunc.SUM:
        return float(sum(values))
    if func in (AggFunc.COUNT, AggFunc.COUNT_A):
        return float(len(values))
    if func is AggFunc.AVERAGE:
        return float(sum(values)) / len(values)
    if func is AggFunc.MIN:
        return float(min(values))
    if func is AggFunc.MAX:
        return float(max(values))
    return 0.0


def _to_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer() and abs(value) < 1e15:
            return str(int(value))
        return repr(value)
    if isinstance(value, datetime):
        return value.isoformat(timespec="milliseconds")
    return str(value)


def _to_double(value: Any) -> float | None:
    if isinstance(value, (bool, int, float)):
        return float(value)
    if isinstance(value, str) and _NUMBER_RE.match(value):
        return float(value)
    return None


def _format_number(value: float) -> str:
    decimals = 0 if math.isfinite(value) and value.is_integer() else 2
    return f"{value:.{decimals}f}"


class PivotTable:
    """Summarises a block of rows by a row field and a column field."""

    def __init__(self) -> None:
        self._source_sheet: Sheet | None = None
        self._source_range = CellRange()
        self._row_field = FieldDef()
        self._col_field = FieldDef()
        self._value_fields: list[ValueField] = []
        self._has_header = True
        self._row_total = True
        self._col_total = True
        self._result = PivotResult()
        self.build_complete = Signal()

    @property
    def result(self) -> PivotResult:
        return self._result

    def set_source_range(self, sheet: Sheet, cell_range: CellRange) -> None:
        self._source_sheet = sheet
        self._source_range = cell_range

    def set_row_field(self, field: FieldDef) -> None:
        self._row_field = field

    def set_col_field(self, field: FieldDef) -> None:
        self._col_field = field

    def add_value_field(self, field: ValueField) -> None:
        self._value_fields.append(field)

    def set_has_header_row(self, has_header: bool) -> None:
        self._has_header = has_header

    def set_grand_totals(self, rows: bool, cols: bool) -> None:
        """Enable the grand-total row and the per-row total column."""
        self._row_total = rows
        self._col_total = cols

    def _extract_data(self) -> list[list[Any]]:
        assert self._source_sheet is not None
        rng = self._source_range
        start = rng.top + (1 if self._has_header else 0)
        rows = []
        for r in range(start, rng.bottom + 1):
            row = []
            has_data = False
            for c in range(rng.left, rng.right + 1):
                cell = self._source_sheet.peek(r, c)
                row.append(cell.value if cell.value is not None else cell.raw)
                if not cell.is_empty():
                    has_data = True
            if has_data:
                rows.append(row)
        return rows

    @staticmethod
    def _key(row: list[Any], fld: FieldDef) -> str | None:
        if 0 < fld.source_col <= len(row):
            return _to_text(row[fld.source_col - 1])
        return None

    def build(self, dest_sheet: Sheet, dest_row: int, dest_col: int) -> PivotResult:
        """Compute the pivot and write it with its top-left at (dest_row, dest_col)."""
        if self._source_sheet is None or dest_sheet is None:
            raise PivotError("Source or destination sheet is null")
        if not self._source_range.is_valid:
            raise PivotError("Source range is invalid")
        if not self._value_fields:
            raise PivotError("No value fields defined")

        rows = self._extract_data()
        if not rows:
            raise PivotError("Source range contains no data")

        row_seen: dict[str, None] = {}
        col_seen: dict[str, None] = {}
        for row in rows:
            rk = self._key(row, self._row_field)
            if rk is not None:
                row_seen[rk] = None
            ck = self._key(row, self._col_field)
            if ck is not None:
                col_seen[ck] = None
        row_keys = sorted(row_seen)
        col_keys = sorted(col_seen)

        vf = self._value_fields[0]
        raw: dict[str, dict[str, list[float]]] = {}
        for row in rows:
            rk = self._key(row, self._row_field) or ""
            ck = self._key(row, self._col_field) or ""
            if 0 < vf.source_col <= len(row):
                number = _to_double(row[vf.source_col - 1])
                if number is not None:
                    raw.setdefault(rk, {}).setdefault(ck, []).append(number)

        result = PivotResult(row_keys=row_keys, col_keys=col_keys)
        for rk in row_keys:
            for ck in col_keys:
                values = raw.get(rk, {}).get(ck)
                if values is not None:
                    result.data.setdefault(rk, {})[ck] = aggregate(values, vf.func)
        self._result = result

        r, c = dest_row, dest_col
        total_col = c + 1 + len(col_keys)

        dest_sheet.set_cell(r, c, self._row_field.label or "Row")
        for offset, ck in enumerate(col_keys):
            dest_sheet.set_cell(r, c + 1 + offset, ck)
        if self._col_total:
            dest_sheet.set_cell(r, total_col, "Total")
        r += 1

        for rk in row_keys:
            dest_sheet.set_cell(r, c, rk)
            row_sum = 0.0
            for offset, ck in enumerate(col_keys):
                value = result.data.get(rk, {}).get(ck)
                if value is not None:
                    row_sum += value
                    dest_sheet.set_cell(r, c + 1 + offset, _format_number(value))
            if self._col_total:
                dest_sheet.set_cell(r, total_col, _format_number(row_sum))
            r += 1

        if self._row_total:
            dest_sheet.set_cell(r, c, "Grand Total")
            grand_total = 0.0
            for offset, ck in enumerate(col_keys):
                col_sum = sum(
                    result.data[rk][ck]
                    for rk in row_keys
                    if ck in result.data.get(rk, {})
                )
                grand_total += col_sum
                dest_sheet.set_cell(r, c + 1 + offset, _format_number(col_sum))
            if self._col_total:
                dest_sheet.set_cell(r, total_col, _format_number(grand_total))

        self.build_complete.emit()
        return result