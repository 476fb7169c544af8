"""A worksheet: a sparse grid of cells with row/column properties,
sorting, filtering and conditional formatting."""

from __future__ import annotations

import copy
import functools
import re
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Iterator

from opensheet.cell import Cell, CellFormat
from opensheet.cell_range import CellRange
from opensheet.events import Signal

_NUMBER_RE = re.compile(r"^\s*[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?\s*$")


@dataclass(frozen=True)
class CellAddress:
    """A 1-based (row, column) position on a sheet."""

    row: int = 0
    col: int = 0


@dataclass
class RowProps:
    height: float = 20.0
    hidden: bool = False


@dataclass
class ColProps:
    width: float = 80.0
    hidden: bool = False


class ConditionalType(Enum):
    GREATER_THAN = "greater_than"
    LESS_THAN = "less_than"
    BETWEEN = "between"
    EQUAL = "equal"
    CONTAINS_TEXT = "contains_text"
    TOP10 = "top10"


@dataclass
class ConditionalRule:
    """Applies ``apply_format`` to cells in ``range`` that meet the condition."""

    type: ConditionalType
    value1: float = 0.0
    value2: float = 0.0
    text: str = ""
    apply_format: CellFormat = field(default_factory=CellFormat)
    range: CellRange = field(default_factory=CellRange)


@dataclass
class AutoFilter:
    """Shows only rows whose value in ``col`` is one of ``allowed_values``."""

    active: bool = False
    col: int = 0
    allowed_values: list[str] = field(default_factory=list)


def _to_double(value: Any) -> float:
    if isinstance(value, (bool, int, float)):
        return float(value)
    if isinstance(value, str) and _NUMBER_RE.match(value):
        return float(value)
    return 0.0


def _variant_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if value.is_integer() and abs(value) < 1e15:
            return str(int(value))
        return repr(value)
    if isinstance(value, datetime):
        return value.isoformat(timespec="milliseconds")
    return str(value)


def _fuzzy_equal(a: float, b: float) -> bool:
    return abs(a - b) * 1e12 <= min(abs(a), abs(b))


class Sheet:
    """A named grid of cells; missing cells are treated as empty."""

    def __init__(self, name: str) -> None:
        self._name = name
        self.visible = True
        self.freeze_row = 0
        self.freeze_col = 0
        self._cells: dict[CellAddress, Cell] = {}
        self._row_props: dict[int, RowProps] = {}
        self._col_props: dict[int, ColProps] = {}
        self._cond_rules: list[ConditionalRule] = []
        self._auto_filter = AutoFilter()
        self.name_changed = Signal()
        self.cell_changed = Signal()
        self.structure_changed = Signal()

    # --- identity ---------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, value: str) -> None:
        self._name = value
        self.name_changed.emit(value)

    # --- cell access ------------------------------------------------------

    def cell(self, row: int, col: int) -> Cell:
        """The cell at (row, col), created empty if it does not exist yet."""
        address = CellAddress(row, col)
        found = self._cells.get(address)
        if found is None:
            found = self._cells[address] = Cell()
        return found

    def peek(self, row: int, col: int) -> Cell:
        """The cell at (row, col) without creating it; an empty cell if missing."""
        found = self._cells.get(CellAddress(row, col))
        return found if found is not None else Cell()

    def set_cell(self, row: int, col: int, raw: str) -> None:
        """Set the raw text of a cell; empty text removes the cell."""
        if not raw:
            self._cells.pop(CellAddress(row, col), None)
        else:
            self.cell(row, col).set_raw(raw)
        self.cell_changed.emit(row, col)

    def clear_cell(self, row: int, col: int) -> None:
        self._cells.pop(CellAddress(row, col), None)
        self.cell_changed.emit(row, col)

    def has_cell(self, row: int, col: int) -> bool:
        return CellAddress(row, col) in self._cells

    # --- range operations -------------------------------------------------

    def clear_range(self, cell_range: CellRange) -> None:
        for row in range(cell_range.top, cell_range.bottom + 1):
            for col in range(cell_range.left, cell_range.right + 1):
                self._cells.pop(CellAddress(row, col), None)
        self.structure_changed.emit()

    def copy_range(self, src: CellRange, dest: CellAddress) -> None:
        """Copy the existing cells of ``src`` so its top-left lands on ``dest``."""
        dr = dest.row - src.top
        dc = dest.col - src.left
        copied = {
            CellAddress(address.row + dr, address.col + dc): copy.deepcopy(cell)
            for address, cell in self._cells.items()
            if src.contains(address.row, address.col)
        }
        self._cells.update(copied)
        self.structure_changed.emit()

    # --- row / column properties ------------------------------------------

    def row_props(self, row: int) -> RowProps:
        return self._row_props.setdefault(row, RowProps())

    def col_props(self, col: int) -> ColProps:
        return self._col_props.setdefault(col, ColProps())

    def _remap(self, move) -> None:
        updated: dict[CellAddress, Cell] = {}
        for address, cell in self._cells.items():
            target = move(address)
            if target is not None:
                updated[target] = cell
        self._cells = updated
        self.structure_changed.emit()

    def insert_row(self, before: int) -> None:
        self._remap(
            lambda a: CellAddress(a.row + 1, a.col) if a.row >= before else a
        )

    def delete_row(self, row: int) -> None:
        def move(a: CellAddress) -> CellAddress | None:
            if a.row == row:
                return None
            return CellAddress(a.row - 1, a.col) if a.row > row else a

        self._remap(move)

    def insert_col(self, before: int) -> None:
        self._remap(
            lambda a: CellAddress(a.row, a.col + 1) if a.col >= before else a
        )

    def delete_col(self, col: int) -> None:
        def move(a: CellAddress) -> CellAddress | None:
            if a.col == col:
                return None
            return CellAddress(a.row, a.col - 1) if a.col > col else a

        self._remap(move)

    # --- dimensions -------------------------------------------------------

    def max_row(self) -> int:
        return max((a.row for a in self._cells), default=0)

    def max_col(self) -> int:
        return max((a.col for a in self._cells), default=0)

    def used_range(self) -> tuple[int, int]:
        """``(max_row, max_col)`` of the cells present."""
        return self.max_row(), self.max_col()

    # --- sorting ----------------------------------------------------------

    def sort_range(self, cell_range: CellRange, by_col: int, ascending: bool = True) -> None:
        """Stable-sort the rows of ``cell_range`` by the values in column ``by_col``."""
        rows = [
            [
                copy.deepcopy(self._cells.get(CellAddress(r, c), Cell()))
                for c in range(cell_range.left, cell_range.right + 1)
            ]
            for r in range(cell_range.top, cell_range.bottom + 1)
        ]
        key_idx = by_col - cell_range.left

        def less(a: list[Cell], b: list[Cell]) -> bool:
            if key_idx < 0 or key_idx >= len(a):
                return False
            av, bv = a[key_idx].value, b[key_idx].value
            if isinstance(av, float) and isinstance(bv, float):
                return av < bv if ascending else av > bv
            at, bt = _variant_text(av), _variant_text(bv)
            return at < bt if ascending else at > bt

        def compare(a: list[Cell], b: list[Cell]) -> int:
            if less(a, b):
                return -1
            if less(b, a):
                return 1
            return 0

        rows.sort(key=functools.cmp_to_key(compare))
        for row_offset, row in enumerate(rows):
            for col_offset, cell in enumerate(row):
                address = CellAddress(cell_range.top + row_offset, cell_range.left + col_offset)
                self._cells[address] = cell
        self.structure_changed.emit()

    # --- filtering --------------------------------------------------------

    @property
    def auto_filter(self) -> AutoFilter:
        return self._auto_filter

    def set_auto_filter(self, auto_filter: AutoFilter) -> None:
        self._auto_filter = auto_filter
        self.structure_changed.emit()

    def clear_auto_filter(self) -> None:
        self._auto_filter = AutoFilter()
        self.structure_changed.emit()

    def is_row_hidden(self, row: int) -> bool:
        flt = self._auto_filter
        if not flt.active:
            props = self._row_props.get(row)
            return props.hidden if props is not None else False
        if not self.has_cell(row, flt.col):
            return bool(flt.allowed_values)
        text = self._cells[CellAddress(row, flt.col)].display_text()
        return bool(flt.allowed_values) and text not in flt.allowed_values

    # --- conditional formatting -------------------------------------------

    @property
    def conditional_rules(self) -> list[ConditionalRule]:
        return list(self._cond_rules)

    def add_conditional_rule(self, rule: ConditionalRule) -> None:
        self._cond_rules.append(rule)

    def eval_conditional_format(self, row: int, col: int) -> CellFormat | None:
        """The format of the first matching rule covering (row, col), or None."""
        for rule in self._cond_rules:
            if not rule.range.contains(row, col):
                continue
            cell = self.peek(row, col)
            number = _to_double(cell.value)
            kind = rule.type
            if kind is ConditionalType.GREATER_THAN:
                matched = number > rule.value1
            elif kind is ConditionalType.LESS_THAN:
                matched = number < rule.value1
            elif kind is ConditionalType.BETWEEN:
                matched = rule.value1 <= number <= rule.value2
            elif kind is ConditionalType.EQUAL:
                matched = _fuzzy_equal(number, rule.value1)
            elif kind is ConditionalType.CONTAINS_TEXT:
                matched = rule.text.lower() in cell.display_text().lower()
            else:
                matched = False
            if matched:
                return rule.apply_format
        return None

    # --- iteration --------------------------------------------------------

    def iter_cells(self) -> Iterator[tuple[int, int, Cell]]:
        """Yield ``(row, col, cell)`` for every stored cell."""
        for address, cell in list(self._cells.items()):
            yield address.row, address.col, cell

    def __repr__(self) -> str:
        return f"Sheet(name={self._name!r}, cells={len(self._cells)})"