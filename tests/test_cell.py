from datetime import datetime

import pytest

from opensheet.cell import Cell, CellError, CellFormat, CellType, error_string


def test_empty_cell():
    cell = Cell()
    assert cell.cell_type is CellType.EMPTY
    assert cell.value is None
    assert cell.display_text() == ""
    assert cell.is_empty()


def test_formula_cell_has_no_value_until_evaluated():
    cell = Cell("=A1+1")
    assert cell.cell_type is CellType.FORMULA
    assert cell.has_formula
    assert cell.value is None


@pytest.mark.parametrize("raw, expected", [("TRUE", True), ("true", True), ("False", False)])
def test_boolean_detection(raw, expected):
    cell = Cell(raw)
    assert cell.cell_type is CellType.BOOLEAN
    assert cell.value is expected
    assert cell.display_text() == raw.upper()


def test_integer_number_displays_without_decimals():
    cell = Cell("42")
    assert cell.cell_type is CellType.NUMBER
    assert cell.value == 42.0
    assert cell.display_text() == "42"


def test_decimal_number_display():
    cell = Cell("3.5")
    assert cell.value == 3.5
    assert cell.display_text() == "3.5"


def test_iso_date_detection():
    cell = Cell("2024-01-05")
    assert cell.cell_type is CellType.DATE
    assert cell.value == datetime(2024, 1, 5)
    assert cell.display_text() == "05/01/2024"


def test_day_month_year_date_round_trips_display():
    cell = Cell("05/01/2024")
    assert cell.cell_type is CellType.DATE
    assert cell.display_text() == "05/01/2024"


def test_date_like_but_invalid_is_text():
    cell = Cell("2024.13.45")
    assert cell.cell_type is CellType.TEXT
    assert cell.value == "2024.13.45"


def test_text_cell():
    cell = Cell("hello")
    assert cell.cell_type is CellType.TEXT
    assert cell.display_text() == "hello"
    assert not cell.is_empty()


def test_whitespace_text_counts_as_empty():
    cell = Cell("   ")
    assert cell.cell_type is CellType.TEXT
    assert cell.is_empty()


def test_set_raw_to_empty_resets_type():
    cell = Cell("12")
    cell.set_raw("")
    assert cell.cell_type is CellType.EMPTY
    assert cell.value is None


@pytest.mark.parametrize(
    "error, text",
    [
        (CellError.DIV_ZERO, "#DIV/0!"),
        (CellError.NAME, "#NAME?"),
        (CellError.VALUE, "#VALUE!"),
        (CellError.REF, "#REF!"),
        (CellError.NA, "#N/A"),
        (CellError.NULL, "#NULL!"),
        (CellError.CIRCULAR, "#CIRC!"),
        (CellError.NUM, "#NUM!"),
        (CellError.NONE, ""),
    ],
)
def test_error_strings(error, text):
    assert error_string(error) == text


def test_set_error_then_set_value_clears_error():
    cell = Cell("=1/0")
    cell.set_error(CellError.DIV_ZERO)
    assert cell.cell_type is CellType.ERROR
    assert cell.value == "#DIV/0!"
    assert cell.display_text() == "#DIV/0!"
    cell.set_value(7.0)
    assert cell.error is CellError.NONE
    assert cell.cell_type is CellType.NUMBER
    assert cell.display_text() == "7"


def test_set_value_with_explicit_type():
    cell = Cell("=UPPER(A1)")
    cell.set_value("ABC", CellType.TEXT)
    assert cell.display_text() == "ABC"


def test_non_general_format_shows_plain_value():
    cell = Cell("3.5")
    cell.format.number_format = "0.00"
    assert cell.display_text() == "3.5"


def test_format_defaults_and_equality():
    fmt = CellFormat()
    assert fmt.number_format == "General"
    assert fmt == CellFormat()
    assert fmt != CellFormat(bold=True)


def test_merge_span():
    cell = Cell("x")
    assert (cell.merge_span_rows, cell.merge_span_cols) == (1, 1)
    cell.set_merge_span(2, 3)
    assert (cell.merge_span_rows, cell.merge_span_cols) == (2, 3)


def test_cells_compare_by_content():
    assert Cell("abc") == Cell("abc")
    assert Cell("abc") != Cell("abd")