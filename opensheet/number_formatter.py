"""Renders values using spreadsheet-style number format codes.

Supported codes include ``General``, ``0``, ``0.00``, ``#,##0``,
``#,##0.00``, ``0%``, ``0.00%``, ``$#,##0.00``, ``dd/MM/yyyy``,
``dd MMM yyyy``, ``hh:mm:ss``, ``@`` and colour prefixes like ``[Red]0.00``.
"""

from __future__ import annotations

import math
import re
from datetime import date, datetime, time, timedelta
from typing import Any

_COLOR_RE = re.compile(r"\[(\w+)\]", re.IGNORECASE)
_CURRENCY_RE = re.compile(r"^(?:\$|€|£|¥)")
_DATE_CODE_RE = re.compile(r"\b(d{1,4}|M{1,4}|y{2,4}|h{1,2}|s{1,2})\b", re.IGNORECASE)
_DATE_LIKE_RE = re.compile(r"[0-9]{1,4}[/\-.][0-9]{1,2}[/\-.][0-9]{2,4}")
_NUMBER_RE = re.compile(r"^\s*[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?\s*$")

_BASE_DATE = date(1899, 12, 30)
_MONTHS = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]
_DAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]


def _to_double(value: Any) -> float | None:
    if isinstance(value, (bool, int, float)):
        return float(value)
    if isinstance(value, str) and _NUMBER_RE.match(value):
        return float(value)
    return None


def _to_string(value: Any) -> str:
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


def _general(value: Any) -> str:
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer() and abs(value) < 1e15:
            return str(int(value))
        return format(value, ".10g")
    return _to_string(value)


def format_with_color(value: Any, format_code: str) -> tuple[str, str]:
    """Format ``value``; also return the lower-case colour name the code names, or ``""``."""
    if not format_code or format_code == "General":
        return _general(value), ""
    if format_code == "@":
        return _to_string(value), ""
    if is_date_format(format_code):
        serial = _to_double(value)
        return _apply_date_format(serial if serial is not None else 0.0, format_code), ""
    if is_numeric_format(format_code):
        number = _to_double(value)
        if number is None:
            return _to_string(value), ""
        return _apply_numeric_format(number, format_code)
    return _to_string(value), ""


def format_value(value: Any, format_code: str) -> str:
    """Format ``value`` for display using ``format_code``."""
    return format_with_color(value, format_code)[0]


def _extract_color(code: str) -> tuple[str, str]:
    match = _COLOR_RE.search(code)
    if not match:
        return "", code
    stripped = (code[: match.start()] + code[match.end():]).strip()
    return match.group(1).lower(), stripped


def _count_decimals(code: str) -> int:
    dot = code.find(".")
    if dot < 0:
        return 0
    count = 0
    for ch in code[dot + 1:]:
        if ch not in "0#":
            break
        count += 1
    return count


def _format_with_thousands(value: float, decimals: int) -> str:
    sign = "-" if value < 0 else ""
    return f"{sign}{abs(value):,.{decimals}f}"


def _apply_numeric_format(value: float, code: str) -> tuple[str, str]:
    color, stripped = _extract_color(code)

    if "%" in stripped:
        decimals = _count_decimals(stripped)
        return f"{value * 100.0:.{decimals}f}%", color

    prefix = ""
    currency = _CURRENCY_RE.match(stripped)
    if currency:
        prefix = currency.group(0)
        stripped = stripped[len(prefix):]

    decimals = _count_decimals(stripped)
    if "," in stripped:
        body = _format_with_thousands(value, decimals)
    else:
        body = f"{value:.{decimals}f}"
    return prefix + body, color


def _apply_date_format(serial: float, code: str) -> str:
    if not math.isfinite(serial):
        return format(serial, ".6g")
    days = int(serial)
    if days > 59:
        days -= 1
    try:
        day = _BASE_DATE + timedelta(days=days)
    except OverflowError:
        return format(serial, ".6g")
    fraction = serial - math.floor(serial)
    total_sec = min(int(math.floor(fraction * 86400 + 0.5)), 86399)
    moment = datetime.combine(
        day, time(total_sec // 3600, (total_sec % 3600) // 60, total_sec % 60)
    )
    return _render_datetime(moment, code)


def _render_datetime(moment: datetime, fmt: str) -> str:
    """Render ``moment`` using d/M/y/h/H/m/s/z/AP pattern letters and '...' quoting."""
    twelve_hour = "a" in fmt.lower()
    out: list[str] = []
    i, n = 0, len(fmt)
    while i < n:
        ch = fmt[i]
        if ch == "'":
            end = fmt.find("'", i + 1)
            if end == i + 1:
                out.append("'")
                i += 2
            elif end < 0:
                out.append(fmt[i + 1:])
                i = n
            else:
                out.append(fmt[i + 1:end])
                i = end + 1
            continue
        run = 1
        while i + run < n and fmt[i + run] == ch:
            run += 1
        take = 1
        if ch in "dM":
            take = min(run, 4)
            number = moment.day if ch == "d" else moment.month
            if take == 1:
                out.append(str(number))
            elif take == 2:
                out.append(f"{number:02d}")
            else:
                name = _DAYS[moment.weekday()] if ch == "d" else _MONTHS[moment.month - 1]
                out.append(name if take == 4 else name[:3])
        elif ch == "y":
            if run >= 4:
                take = 4
                out.append(f"{moment.year:04d}")
            elif run >= 2:
                take = 2
                out.append(f"{moment.year % 100:02d}")
            else:
                out.append(ch)
        elif ch in "hH":
            take = min(run, 2)
            hour = moment.hour
            if ch == "h" and twelve_hour:
                hour = hour % 12 or 12
            out.append(f"{hour:02d}" if take == 2 else str(hour))
        elif ch in "ms":
            take = min(run, 2)
            number = moment.minute if ch == "m" else moment.second
            out.append(f"{number:02d}" if take == 2 else str(number))
        elif ch == "z":
            millis = moment.microsecond // 1000
            if run >= 3:
                take = 3
                out.append(f"{millis:03d}")
            else:
                out.append(str(millis))
        elif ch in "aA":
            if i + 1 < n and fmt[i + 1] in "pP":
                take = 2
            marker = "am" if moment.hour < 12 else "pm"
            out.append(marker.upper() if ch == "A" else marker)
        else:
            out.append(ch)
        i += take
    return "".join(out)


def is_date_format(format_code: str) -> bool:
    """True if the code contains date or time pattern letters."""
    return _DATE_CODE_RE.search(format_code) is not None


def is_numeric_format(format_code: str) -> bool:
    """True if the code contains ``0``, ``#`` or ``%``."""
    return any(ch in format_code for ch in "0#%")


def guess_format(raw: str) -> str:
    """Suggest a format code for text as typed into a cell."""
    if not raw:
        return "General"
    if "%" in raw:
        return "0.00%"
    number = _to_double(raw)
    if number is not None:
        if math.isfinite(number) and number == math.floor(number):
            return "General"
        if "." in raw:
            return "0.00"
        if abs(number) >= 1000:
            return "#,##0"
    if _DATE_LIKE_RE.search(raw):
        return "dd/MM/yyyy"
    return "@"