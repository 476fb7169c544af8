"""A workbook: an ordered collection of sheets with named ranges,
modification tracking and an undo history."""

from __future__ import annotations

from pathlib import PurePath

from opensheet.cell_range import CellRange
from opensheet.events import Signal
from opensheet.sheet import Sheet
from opensheet.undo_commands import UndoStack

UNDO_LIMIT = 100


class Workbook:
    """Owns the sheets of one document."""

    def __init__(self) -> None:
        self._sheets: list[Sheet] = []
        self._active_idx = 0
        self._modified = False
        self._named_ranges: dict[str, tuple[Sheet, CellRange]] = {}
        self.file_path = ""
        self.auto_save_path = ""
        self.undo_stack = UndoStack(UNDO_LIMIT)

        self.sheet_added = Signal()
        self.sheet_removed = Signal()
        self.sheet_renamed = Signal()
        self.active_sheet_changed = Signal()
        self.modified_changed = Signal()
        self.structure_changed = Signal()
        self.recalc_complete = Signal()

    # --- sheets -----------------------------------------------------------

    def add_sheet(self, name: str = "") -> Sheet:
        """Append a new sheet; the name is made unique if already taken."""
        return self.insert_sheet(len(self._sheets), name)

    def insert_sheet(self, index: int, name: str = "") -> Sheet:
        """Insert a new sheet at ``index`` (clamped to the valid range)."""
        sheet = Sheet(self._unique_sheet_name(name or "Sheet"))
        sheet.cell_changed.connect(self._on_cell_changed)

        index = max(0, min(index, len(self._sheets)))
        self._sheets.insert(index, sheet)
        if self._active_idx >= index and len(self._sheets) > 1:
            self._active_idx += 1

        self.set_modified(True)
        self.sheet_added.emit(index)
        return sheet

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._sheets):
            raise IndexError(f"sheet index {index} out of range")

    def remove_sheet(self, index: int) -> None:
        """Remove the sheet at ``index``; the last remaining sheet cannot be removed."""
        self._check_index(index)
        if len(self._sheets) == 1:
            raise ValueError("a workbook must keep at least one sheet")
        sheet = self._sheets.pop(index)
        sheet.cell_changed.disconnect(self._on_cell_changed)
        if self._active_idx >= len(self._sheets):
            self._active_idx = len(self._sheets) - 1
        self.set_modified(True)
        self.sheet_removed.emit(index)

    def move_sheet(self, source: int, target: int) -> None:
        """Move the sheet at ``source`` so it ends up at ``target``."""
        self._check_index(source)
        self._check_index(target)
        if source == target:
            return
        self._sheets.insert(target, self._sheets.pop(source))

        active = self._active_idx
        if active == source:
            self._active_idx = target
        elif source < active <= target:
            self._active_idx -= 1
        elif target <= active < source:
            self._active_idx += 1

        self.set_modified(True)
        self.structure_changed.emit()

    def sheet(self, key: int | str) -> Sheet | None:
        """The sheet at an index, or with a name (case-insensitive); None if absent."""
        if isinstance(key, str):
            wanted = key.casefold()
            return next((s for s in self._sheets if s.name.casefold() == wanted), None)
        if 0 <= key < len(self._sheets):
            return self._sheets[key]
        return None

    @property
    def sheet_count(self) -> int:
        return len(self._sheets)

    def __len__(self) -> int:
        return len(self._sheets)

    def __iter__(self):
        return iter(list(self._sheets))

    @property
    def active_sheet_index(self) -> int:
        return self._active_idx

    @property
    def active_sheet(self) -> Sheet | None:
        return self.sheet(self._active_idx)

    def set_active_sheet(self, index: int) -> None:
        self._check_index(index)
        if index == self._active_idx:
            return
        self._active_idx = index
        self.active_sheet_changed.emit(index)

    def sheet_names(self) -> list[str]:
        return [s.name for s in self._sheets]

    # --- file info --------------------------------------------------------

    @property
    def modified(self) -> bool:
        return self._modified

    def set_modified(self, modified: bool) -> None:
        if modified == self._modified:
            return
        self._modified = modified
        self.modified_changed.emit(modified)

    @property
    def title(self) -> str:
        """The file name up to its first dot, or ``Untitled`` when unsaved."""
        if self.file_path:
            return PurePath(self.file_path).name.split(".", 1)[0]
        return "Untitled"

    # --- named ranges -----------------------------------------------------

    def set_named_range(self, name: str, sheet: Sheet, cell_range: CellRange) -> None:
        self._named_ranges[name.upper()] = (sheet, cell_range)
        self.set_modified(True)

    def resolve_named_range(self, name: str) -> tuple[Sheet, CellRange]:
        """Return ``(sheet, range)``; raises KeyError for unknown names."""
        try:
            return self._named_ranges[name.upper()]
        except KeyError:
            raise KeyError(f"no named range {name!r}") from None

    # --- helpers ----------------------------------------------------------

    def _unique_sheet_name(self, base: str) -> str:
        existing = {n.casefold() for n in self.sheet_names()}
        if base.casefold() not in existing:
            return base
        n = 2
        while f"{base}{n}".casefold() in existing:
            n += 1
        return f"{base}{n}"

    def _on_cell_changed(self, row: int, col: int) -> None:
        self.set_modified(True)