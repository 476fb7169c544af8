"""Data validation rules attached to cell ranges and the validator that checks them."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from datetime import date, datetime, time
from enum import Enum
from typing import Any

from opensheet.cell_range import CellRange

_NUMBER_RE = re.compile(r"^\s*[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?\s*$")
_DMY_RE = re.compile(r"^([0-9]{2})/([0-9]{2})/([0-9]{4})$")
_ISO_RE = re.compile(r"^([0-9]{4})-([0-9]{2})-([0-9]{2})$")
_HMS_RE = re.compile(r"^([0-9]{2}):([0-9]{2}):([0-9]{2})$")
_HM_RE = re.compile(r"^([0-9]{2}):([0-9]{2})$")


class ValidationType(Enum):
    ANY = "any"
    WHOLE_NUMBER = "whole_number"
    DECIMAL = "decimal"
    LIST = "list"
    DATE = "date"
    TIME = "time"
    TEXT_LENGTH = "text_length"
    CUSTOM = "custom"


class ValidationOperator(Enum):
    BETWEEN = "between"
    NOT_BETWEEN = "not_between"
    EQUAL = "equal"
    NOT_EQUAL = "not_equal"
    GREATER_THAN = "greater_than"
    LESS_THAN = "less_than"
    GREATER_OR_EQUAL = "greater_or_equal"
    LESS_OR_EQUAL = "less_or_equal"


class AlertStyle(Enum):
    STOP = "stop"
    WARNING = "warning"
    INFORMATION = "information"


@dataclass
class ValidationRule:
    """A restriction on the values that may be entered into ``range``."""

    type: ValidationType = ValidationType.ANY
    op: ValidationOperator = ValidationOperator.BETWEEN
    value1: Any = None
    value2: Any = None
    list_values: list[str] = field(default_factory=list)
    formula: str = ""
    ignore_blank: bool = True
    show_dropdown: bool = True
    show_input_msg: bool = False
    input_title: str = ""
    input_message: str = ""
    show_error: bool = True
    alert_style: AlertStyle = AlertStyle.STOP
    error_title: str = ""
    error_message: str = ""
    range: CellRange = field(default_factory=CellRange)


class ValidationFailed(ValueError):
    """Raised when a value breaks a validation rule."""

    def __init__(self, message: str, rule: ValidationRule) -> None:
        super().__init__(message)
        self.message = message
        self.rule = rule


def _parse_number(text: str) -> float | None:
    if _NUMBER_RE.match(text):
        return float(text)
    return None


def _to_double(value: Any) -> float:
    if isinstance(value, (bool, int, float)):
        return float(value)
    if isinstance(value, str):
        number = _parse_number(value)
        return number if number is not None else 0.0
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
    return str(value)


def _fuzzy_equal(a: float, b: float) -> bool:
    return abs(a - b) * 1e12 <= min(abs(a), abs(b))


def _compare(op: ValidationOperator, v: float, v1: float, v2: float) -> bool:
    if op is ValidationOperator.BETWEEN:
        return v1 <= v <= v2
    if op is ValidationOperator.NOT_BETWEEN:
        return v < v1 or v > v2
    if op is ValidationOperator.EQUAL:
        return _fuzzy_equal(v, v1)
    if op is ValidationOperator.NOT_EQUAL:
        return not _fuzzy_equal(v, v1)
    if op is ValidationOperator.GREATER_THAN:
        return v > v1
    if op is ValidationOperator.LESS_THAN:
        return v < v1
    if op is ValidationOperator.GREATER_OR_EQUAL:
        return v >= v1
    if op is ValidationOperator.LESS_OR_EQUAL:
        return v <= v1
    return True


def _is_valid_date(text: str) -> bool:
    match = _DMY_RE.match(text)
    if match:
        day, month, year = (int(g) for g in match.groups())
    else:
        match = _ISO_RE.match(text)
        if not match:
            return False
        year, month, day = (int(g) for g in match.groups())
    try:
        date(year, month, day)
    except ValueError:
        return False
    return True


def _is_valid_time(text: str) -> bool:
    match = _HMS_RE.match(text) or _HM_RE.match(text)
    if not match:
        return False
    parts = [int(g) for g in match.groups()]
    try:
        time(*parts)
    except ValueError:
        return False
    return True


def _check_rule(rule: ValidationRule, raw: str) -> None:
    """Raise ValidationFailed if ``raw`` breaks ``rule``."""
    kind = rule.type
    if kind is ValidationType.ANY:
        return

    def fail(default: str) -> ValidationFailed:
        return ValidationFailed(rule.error_message or default, rule)

    if not raw.strip():
        if rule.ignore_blank:
            return
        raise ValidationFailed(rule.error_message, rule)

    number = _parse_number(raw)
    v1, v2 = _to_double(rule.value1), _to_double(rule.value2)
    bounds = (_to_text(rule.value1), _to_text(rule.value2))

    if kind is ValidationType.WHOLE_NUMBER:
        if number is None or not math.isfinite(number) or number != math.floor(number):
            raise fail("Value must be a whole number.")
        if not _compare(rule.op, number, v1, v2):
            raise ValidationFailed(rule.error_message, rule)
    elif kind is ValidationType.DECIMAL:
        if number is None:
            raise fail("Value must be a number.")
        if not _compare(rule.op, number, v1, v2):
            raise fail("Value must be between %s and %s." % bounds)
    elif kind is ValidationType.LIST:
        wanted = raw.casefold()
        if not any(item.casefold() == wanted for item in rule.list_values):
            raise fail("Value must be one of: %s." % ", ".join(rule.list_values))
    elif kind is ValidationType.DATE:
        if not _is_valid_date(raw):
            raise fail("Value must be a valid date.")
    elif kind is ValidationType.TIME:
        if not _is_valid_time(raw):
            raise fail("Value must be a valid time.")
    elif kind is ValidationType.TEXT_LENGTH:
        if not _compare(rule.op, float(len(raw)), v1, v2):
            raise fail("Text length must be between %s and %s characters." % bounds)
    # CUSTOM rules are formula-based and always pass here.


class DataValidator:
    """Holds validation rules for a sheet and checks proposed values."""

    def __init__(self) -> None:
        self._rules: list[ValidationRule] = []

    @property
    def all_rules(self) -> list[ValidationRule]:
        return list(self._rules)

    def add_rule(self, rule: ValidationRule) -> None:
        self._rules.append(rule)

    def remove_rules_for_range(self, cell_range: CellRange) -> None:
        """Remove every rule whose range equals ``cell_range``."""
        self._rules = [r for r in self._rules if r.range != cell_range]

    def clear_all(self) -> None:
        self._rules.clear()

    def rules_for_cell(self, row: int, col: int) -> list[ValidationRule]:
        return [r for r in self._rules if r.range.contains(row, col)]

    def has_rule(self, row: int, col: int) -> bool:
        return any(r.range.contains(row, col) for r in self._rules)

    def validate(self, row: int, col: int, raw: str) -> None:
        """Check ``raw`` against the rules covering (row, col); raise ValidationFailed on the first breach."""
        for rule in self.rules_for_cell(row, col):
            _check_rule(rule, raw)

    def is_valid(self, row: int, col: int, raw: str) -> bool:
        """True if ``raw`` passes every rule covering (row, col)."""
        try:
            self.validate(row, col, raw)
        except ValidationFailed:
            return False
        return True