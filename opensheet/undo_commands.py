"""Undoable edit commands for sheets and a stack that runs them."""

from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Sequence

from opensheet.cell import Cell, CellFormat
from opensheet.cell_range import index_to_col_letter
from opensheet.sheet import Sheet

DEFAULT_UNDO_LIMIT = 100
_DELETE_ROW_SNAPSHOT_COLS = 50


class UndoCommand(ABC):
    """An action that can be applied (redo) and reverted (undo)."""

    #: Commands with the same non-negative id may be merged on push.
    merge_id: int = -1

    def __init__(self, text: str = "") -> None:
        self.text = text

    @abstractmethod
    def undo(self) -> None:
        """Revert the action."""

    @abstractmethod
    def redo(self) -> None:
        """Apply the action."""

    def merge_with(self, other: UndoCommand) -> bool:
        """Absorb ``other`` into this command; True if it did."""
        return False


class CellEditCommand(UndoCommand):
    """Changes the raw text of one cell."""

    merge_id = 1001

    def __init__(self, sheet: Sheet, row: int, col: int, old_raw: str, new_raw: str) -> None:
        super().__init__(f"Edit {index_to_col_letter(col)}{row}")
        self.sheet = sheet
        self.row = row
        self.col = col
        self.old_raw = old_raw
        self.new_raw = new_raw

    def undo(self) -> None:
        self.sheet.set_cell(self.row, self.col, self.old_raw)

    def redo(self) -> None:
        self.sheet.set_cell(self.row, self.col, self.new_raw)

    def merge_with(self, other: UndoCommand) -> bool:
        if (
            not isinstance(other, CellEditCommand)
            or other.sheet is not self.sheet
            or other.row != self.row
            or other.col != self.col
        ):
            return False
        self.new_raw = other.new_raw
        return True


@dataclass(frozen=True)
class CellState:
    row: int
    col: int
    raw: str


class RangeEditCommand(UndoCommand):
    """Sets many cells at once, as a paste or fill does."""

    def __init__(
        self,
        sheet: Sheet,
        before: Sequence[CellState],
        after: Sequence[CellState],
        label: str,
    ) -> None:
        super().__init__(label)
        self.sheet = sheet
        self.before = list(before)
        self.after = list(after)

    def _apply(self, states: Sequence[CellState]) -> None:
        for state in states:
            self.sheet.set_cell(state.row, state.col, state.raw)

    def undo(self) -> None:
        self._apply(self.before)

    def redo(self) -> None:
        self._apply(self.after)


class InsertRowCommand(UndoCommand):
    def __init__(self, sheet: Sheet, row: int) -> None:
        super().__init__(f"Insert Row {row}")
        self.sheet = sheet
        self.row = row

    def redo(self) -> None:
        self.sheet.insert_row(self.row)

    def undo(self) -> None:
        self.sheet.delete_row(self.row)


class DeleteRowCommand(UndoCommand):
    """Deletes a row; undo restores the cells of its first 50 columns."""

    def __init__(self, sheet: Sheet, row: int) -> None:
        super().__init__(f"Delete Row {row}")
        self.sheet = sheet
        self.row = row
        self._snapshot: list[tuple[int, Cell]] = [
            (col, copy.deepcopy(sheet.cell(row, col)))
            for col in range(1, _DELETE_ROW_SNAPSHOT_COLS + 1)
            if sheet.has_cell(row, col)
        ]

    def redo(self) -> None:
        self.sheet.delete_row(self.row)

    def undo(self) -> None:
        self.sheet.insert_row(self.row)
        for col, saved in self._snapshot:
            target = self.sheet.cell(self.row, col)
            # Overwrite the freshly created cell with the saved state.
            vars(target).update(vars(copy.deepcopy(saved)))


class InsertColCommand(UndoCommand):
    def __init__(self, sheet: Sheet, col: int) -> None:
        super().__init__(f"Insert Column {index_to_col_letter(col)}")
        self.sheet = sheet
        self.col = col

    def redo(self) -> None:
        self.sheet.insert_col(self.col)

    def undo(self) -> None:
        self.sheet.delete_col(self.col)


class FormatCommand(UndoCommand):
    """Changes the format of one cell."""

    def __init__(
        self, sheet: Sheet, row: int, col: int, old_format: CellFormat, new_format: CellFormat
    ) -> None:
        super().__init__("Format Cell")
        self.sheet = sheet
        self.row = row
        self.col = col
        self.old_format = copy.deepcopy(old_format)
        self.new_format = copy.deepcopy(new_format)

    def undo(self) -> None:
        self.sheet.cell(self.row, self.col).format = copy.deepcopy(self.old_format)

    def redo(self) -> None:
        self.sheet.cell(self.row, self.col).format = copy.deepcopy(self.new_format)


class UndoStack:
    """History of executed commands with an undo position."""

    def __init__(self, undo_limit: int = DEFAULT_UNDO_LIMIT) -> None:
        self.undo_limit = undo_limit
        self._commands: list[UndoCommand] = []
        self._index = 0

    @property
    def count(self) -> int:
        return len(self._commands)

    @property
    def index(self) -> int:
        return self._index

    @property
    def undo_text(self) -> str:
        return self._commands[self._index - 1].text if self.can_undo() else ""

    @property
    def redo_text(self) -> str:
        return self._commands[self._index].text if self.can_redo() else ""

    def push(self, command: UndoCommand) -> None:
        """Run ``command`` and record it, merging with the top one when possible."""
        del self._commands[self._index:]
        command.redo()
        if self._commands:
            top = self._commands[-1]
            if (
                command.merge_id != -1
                and top.merge_id == command.merge_id
                and top.merge_with(command)
            ):
                return
        self._commands.append(command)
        if self.undo_limit > 0 and len(self._commands) > self.undo_limit:
            del self._commands[: len(self._commands) - self.undo_limit]
        self._index = len(self._commands)

    def can_undo(self) -> bool:
        return self._index > 0

    def can_redo(self) -> bool:
        return self._index < len(self._commands)

    def undo(self) -> None:
        if not self.can_undo():
            raise IndexError("nothing to undo")
        self._index -= 1
        self._commands[self._index].undo()

    def redo(self) -> None:
        if not self.can_redo():
            raise IndexError("nothing to redo")
        self._commands[self._index].redo()
        self._index += 1

    def clear(self) -> None:
        self._commands.clear()
        self._index = 0