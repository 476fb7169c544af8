import pytest

from opensheet.auto_fill import (
    AutoFill,
    FillType,
    detect_step,
    detect_type,
    shift_formula,
)
from opensheet.cell_range import CellRange
from opensheet.sheet import Sheet


def _column(sheet, col, rows):
    return [sheet.peek(r, col).raw for r in rows]


def _row(sheet, row, cols):
    return [sheet.peek(row, c).raw for c in cols]


@pytest.mark.parametrize(
    "seeds, expected",
    [
        (["1", "2"], FillType.SERIES),
        (["=A1"], FillType.FORMULA_FILL),
        (["Jan"], FillType.SERIES),
        (["monday"], FillType.SERIES),
        (["Item1"], FillType.SERIES),
        (["hello"], FillType.COPY),
        ([], FillType.COPY),
    ],
)
def test_detect_type(seeds, expected):
    assert detect_type(seeds) is expected


def test_detect_step_single_value_defaults_to_one():
    assert detect_step([7.0]) == 1.0


def test_detect_step_two_values_is_difference():
    assert detect_step([10.0, 13.0]) == pytest.approx(13.0 - 10.0)


def test_shift_formula_round_trip():
    formula = "=SUM(C5:D9)+E7"
    moved = shift_formula(formula, 2, 3)
    assert moved != formula
    assert shift_formula(moved, -2, -3) == formula


def test_shift_formula_keeps_absolute_refs():
    assert shift_formula("=$A$1", 5, 5) == "=$A$1"


def test_shift_formula_clamps_to_first_cell():
    assert shift_formula("=A1", -5, -5) == "=A1"


def test_shift_formula_ignores_plain_text():
    assert shift_formula("A1", 3, 3) == "A1"


def test_shift_formula_down_one_row():
    assert shift_formula("=B1*2", 1, 0) == "=B2*2"


def test_fill_down_numeric_series():
    sheet = Sheet("S")
    for r, v in enumerate(["1", "2", "3"], start=1):
        sheet.set_cell(r, 1, v)
    AutoFill().fill(sheet, CellRange(1, 1, 3, 1), CellRange(4, 1, 6, 1))
    assert _column(sheet, 1, range(4, 7)) == ["4", "5", "6"]


def test_fill_numeric_steps_are_constant():
    sheet = Sheet("S")
    sheet.set_cell(1, 1, "1.5")
    sheet.set_cell(2, 1, "2")
    AutoFill().fill(sheet, CellRange(1, 1, 2, 1), CellRange(3, 1, 6, 1))
    values = [float(v) for v in _column(sheet, 1, range(1, 7))]
    diffs = {round(b - a, 9) for a, b in zip(values, values[1:])}
    assert len(diffs) == 1


def test_fill_right_month_names():
    sheet = Sheet("S")
    sheet.set_cell(1, 1, "Jan")
    sheet.set_cell(1, 2, "Feb")
    AutoFill().fill(sheet, CellRange(1, 1, 1, 2), CellRange(1, 3, 1, 4))
    assert _row(sheet, 1, range(3, 5)) == ["Mar", "Apr"]


def test_fill_day_names_wrap_around():
    sheet = Sheet("S")
    sheet.set_cell(1, 1, "Sun")
    AutoFill().fill(sheet, CellRange(1, 1, 1, 1), CellRange(2, 1, 2, 1))
    assert sheet.peek(2, 1).raw == "Mon"


def test_fill_text_with_trailing_number():
    sheet = Sheet("S")
    sheet.set_cell(1, 1, "Item1")
    sheet.set_cell(2, 1, "Item2")
    AutoFill().fill(sheet, CellRange(1, 1, 2, 1), CellRange(3, 1, 3, 1))
    assert sheet.peek(3, 1).raw == "Item3"


def test_fill_copy_repeats_seeds():
    sheet = Sheet("S")
    sheet.set_cell(1, 1, "hello")
    sheet.set_cell(2, 1, "world")
    AutoFill().fill(sheet, CellRange(1, 1, 2, 1), CellRange(3, 1, 6, 1))
    assert _column(sheet, 1, range(3, 7)) == ["hello", "world", "hello", "world"]


def test_explicit_copy_overrides_numeric_series():
    sheet = Sheet("S")
    sheet.set_cell(1, 1, "5")
    AutoFill().fill(sheet, CellRange(1, 1, 1, 1), CellRange(2, 1, 4, 1), FillType.COPY)
    assert _column(sheet, 1, range(2, 5)) == ["5", "5", "5"]


def test_fill_formula_down_shifts_references():
    sheet = Sheet("S")
    sheet.set_cell(1, 1, "=B1*2")
    AutoFill().fill(sheet, CellRange(1, 1, 1, 1), CellRange(2, 1, 3, 1))
    assert sheet.peek(2, 1).raw == shift_formula("=B1*2", 1, 0)
    assert sheet.peek(3, 1).raw == shift_formula("=B1*2", 2, 0)


def test_fill_formula_right_shifts_columns():
    sheet = Sheet("S")
    sheet.set_cell(1, 1, "=A2")
    AutoFill().fill(sheet, CellRange(1, 1, 1, 1), CellRange(1, 2, 1, 3))
    assert sheet.peek(1, 3).raw == shift_formula("=A2", 0, 2)
    assert shift_formula(sheet.peek(1, 3).raw, 0, -2) == "=A2"


def test_invalid_range_writes_nothing():
    sheet = Sheet("S")
    sheet.set_cell(1, 1, "1")
    AutoFill().fill(sheet, CellRange(), CellRange(2, 1, 3, 1))
    assert not sheet.has_cell(2, 1)
    assert sheet.max_row() == 1