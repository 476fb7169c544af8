"""A single spreadsheet cell: raw text, computed value, format and metadata."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class CellType(Enum):
    EMPTY = "empty"
    TEXT = "text"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"
    FORMULA = "formula"
    ERROR = "error"


class CellError(Enum):
    NONE = "none"
    DIV_ZERO = "div_zero"
    NAME = "name"
    VALUE = "value"
    REF = "ref"
    NA = "na"
    NULL = "null"
    CIRCULAR = "circular"
    NUM = "num"


_ERROR_STRINGS = {
    CellError.DIV_ZERO: "#DIV/0!",
    CellError.NAME: "#NAME?",
    CellError.VALUE: "#VALUE!",
    CellError.REF: "#REF!",
    CellError.NA: "#N/A",
    CellError.NULL: "#NULL!",
    CellError.CIRCULAR: "#CIRC!",
    CellError.NUM: "#NUM!",
}


def error_string(error: CellError) -> str:
    """The text shown for an error, such as ``#DIV/0!``; empty for NONE."""
    return _ERROR_STRINGS.get(error, "")


@dataclass
class CellFormat:
    """Visual formatting of a cell."""

    font: str = ""
    foreground: str = "#000000"
    background: str = "transparent"
    alignment: str = "left|vcenter"
    bold: bool = False
    italic: bool = False
    underline: bool = False
    strikethrough: bool = False
    wrap_text: bool = False
    indent: int = 0
    number_format: str = "General"
    border_top: int = 0
    border_bottom: int = 0
    border_left: int = 0
    border_right: int = 0
    border_color: str = "#000000"


_NUMBER_RE = re.compile(r"^\s*[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?\s*$")
_DATE_RE = re.compile(r"^[0-9]{1,4}[/\-.][0-9]{1,2}[/\-.][0-9]{2,4}$")
_ISO_DATE_RE = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$")


def _parse_number(text: str) -> float | None:
    if _NUMBER_RE.match(text):
        return float(text)
    return None


def _parse_date(text: str) -> datetime | None:
    if not _DATE_RE.match(text):
        return None
    if _ISO_DATE_RE.match(text):
        try:
            return datetime.strptime(text, "%Y-%m-%d")
        except ValueError:
            pass
    try:
        return datetime.strptime(text, "%d/%m/%Y")
    except ValueError:
        return None


def _value_to_string(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer() and abs(value) < 1e15:
            return str(int(value))
        return repr(value)
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


class Cell:
    """Holds what the user typed and what it evaluates to."""

    def __init__(self, raw: str = "") -> None:
        self._raw = ""
        self._value: Any = None
        self._type = CellType.EMPTY
        self._error = CellError.NONE
        self.format = CellFormat()
        self.comment = ""
        self.hyperlink = ""
        self.merged = False
        self.merge_span_rows = 1
        self.merge_span_cols = 1
        if raw:
            self.set_raw(raw)

    @property
    def raw(self) -> str:
        return self._raw

    @property
    def value(self) -> Any:
        return self._value

    @property
    def cell_type(self) -> CellType:
        return self._type

    @property
    def error(self) -> CellError:
        return self._error

    @property
    def has_formula(self) -> bool:
        return self._raw.startswith("=")

    def set_raw(self, raw: str) -> None:
        """Store the typed text and infer the cell's type and value from it."""
        self._raw = raw
        self._error = CellError.NONE
        if not raw:
            self._type, self._value = CellType.EMPTY, None
        elif raw.startswith("="):
            self._type, self._value = CellType.FORMULA, None
        else:
            self._detect_type()

    def _detect_type(self) -> None:
        raw = self._raw
        upper = raw.upper()
        if upper in ("TRUE", "FALSE"):
            self._type, self._value = CellType.BOOLEAN, upper == "TRUE"
            return
        number = _parse_number(raw)
        if number is not None:
            self._type, self._value = CellType.NUMBER, number
            return
        date = _parse_date(raw)
        if date is not None:
            self._type, self._value = CellType.DATE, date
            return
        self._type, self._value = CellType.TEXT, raw

    def set_value(self, value: Any, cell_type: CellType = CellType.NUMBER) -> None:
        """Store a computed value, clearing any error."""
        self._value = value
        self._type = cell_type
        self._error = CellError.NONE

    def set_error(self, error: CellError) -> None:
        self._error = error
        self._type = CellType.ERROR
        self._value = error_string(error)

    def display_text(self) -> str:
        """The text shown in the grid for this cell."""
        if self._type is CellType.EMPTY:
            return ""
        if self._type is CellType.ERROR:
            return error_string(self._error)
        if self._type is CellType.BOOLEAN:
            return "TRUE" if self._value else "FALSE"
        if self.format.number_format in ("", "General"):
            if self._type is CellType.NUMBER:
                number = float(self._value)
                if math.isfinite(number) and number.is_integer() and abs(number) < 1e15:
                    return str(int(number))
                return format(number, ".10g")
            if self._type is CellType.DATE:
                return self._value.strftime("%d/%m/%Y")
        return _value_to_string(self._value)

    def is_empty(self) -> bool:
        return self._type is CellType.EMPTY or (
            self._type is CellType.TEXT and not self._raw.strip()
        )

    def set_merge_span(self, rows: int, cols: int) -> None:
        self.merge_span_rows = rows
        self.merge_span_cols = cols

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Cell):
            return NotImplemented
        return (
            self._raw == other._raw
            and self._value == other._value
            and self._type == other._type
            and self._error == other._error
            and self.format == other.format
            and self.comment == other.comment
            and self.hyperlink == other.hyperlink
            and self.merged == other.merged
            and self.merge_span_rows == other.merge_span_rows
            and self.merge_span_cols == other.merge_span_cols
        )

    def __repr__(self) -> str:
        return f"Cell(raw={self._raw!r}, type={self._type.name})"