"""Registry of workbook-level range names."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from opensheet.cell_range import CellRange


@dataclass
class NamedRange:
    """A name bound to a range on a particular sheet."""

    name: str
    sheet: Any = None
    range: CellRange = field(default_factory=CellRange)
    comment: str = ""


class NamedRanges:
    """Case-insensitive mapping of names to (sheet index, range)."""

    def __init__(self) -> None:
        self._ranges: dict[str, tuple[int, CellRange]] = {}

    def define(self, name: str, sheet_index: int, cell_range: CellRange) -> None:
        self._ranges[name.upper()] = (sheet_index, cell_range)

    def remove(self, name: str) -> None:
        self._ranges.pop(name.upper(), None)

    def resolve(self, name: str) -> tuple[int, CellRange]:
        """Return ``(sheet_index, range)``; raises KeyError for unknown names."""
        try:
            return self._ranges[name.upper()]
        except KeyError:
            raise KeyError(f"no named range {name!r}") from None

    def exists(self, name: str) -> bool:
        return name.upper() in self._ranges

    def names(self) -> list[str]:
        return list(self._ranges)

    def to_json(self) -> list[dict[str, Any]]:
        """Serialise to a JSON-ready list of objects."""
        return [
            {"name": name, "sheetIndex": sheet_index, "range": cell_range.to_string()}
            for name, (sheet_index, cell_range) in self._ranges.items()
        ]

    def from_json(self, entries: list[dict[str, Any]]) -> None:
        """Replace the contents with entries produced by ``to_json``."""
        self._ranges.clear()
        for entry in entries:
            sheet_index = int(entry.get("sheetIndex", 0))
            cell_range = CellRange.from_string(str(entry.get("range", "")))
            self._ranges[str(entry.get("name", ""))] = (sheet_index, cell_range)

    def clear(self) -> None:
        self._ranges.clear()

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.exists(name)

    def __len__(self) -> int:
        return len(self._ranges)