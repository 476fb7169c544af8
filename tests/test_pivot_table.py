import pytest

from opensheet.cell_range import CellRange
from opensheet.pivot_table import (
    AggFunc,
    FieldDef,
    PivotError,
    PivotTable,
    ValueField,
    aggregate,
)
from opensheet.sheet import Sheet

ROWS = [
    ("Region", "Product", "Sales"),
    ("East", "Widget", "100"),
    ("West", "Widget", "180"),
    ("East", "Widget", "150"),
]


def _sheet(rows):
    sheet = Sheet("Data")
    for r, row in enumerate(rows, start=1):
        for c, value in enumerate(row, start=1):
            sheet.set_cell(r, c, value)
    return sheet


def _pivot(rows, func=AggFunc.SUM, row_label="Product"):
    src = _sheet(rows)
    pivot = PivotTable()
    pivot.set_source_range(src, CellRange(1, 1, len(rows), 3))
    pivot.set_row_field(FieldDef(2, row_label))
    pivot.set_col_field(FieldDef(1, "Region"))
    pivot.add_value_field(ValueField(3, "Sales", func))
    return pivot


def _row(sheet, row, width):
    return [sheet.peek(row, c).raw for c in range(1, width + 1)]


def test_documented_example_output():
    dest = Sheet("Out")
    _pivot(ROWS).build(dest, 1, 1)
    assert _row(dest, 1, 4) == ["Product", "East", "West", "Total"]
    assert _row(dest, 2, 4) == ["Widget", "250", "180", "430"]
    assert _row(dest, 3, 4) == ["Grand Total", "250", "180", "430"]


def test_result_data_and_keys():
    pivot = _pivot(ROWS)
    result = pivot.build(Sheet("Out"), 1, 1)
    assert result.row_keys == ["Widget"]
    assert result.col_keys == ["East", "West"]
    assert result.data == {"Widget": {"East": 250.0, "West": 180.0}}
    assert pivot.result == result


def test_count_sums_to_number_of_data_rows():
    result = _pivot(ROWS, AggFunc.COUNT).build(Sheet("Out"), 1, 1)
    assert sum(result.data["Widget"].values()) == len(ROWS) - 1


def test_missing_combination_is_left_blank():
    rows = ROWS + [("West", "Gadget", "220")]
    dest = Sheet("Out")
    result = _pivot(rows).build(dest, 1, 1)
    assert result.row_keys == ["Gadget", "Widget"]
    assert dest.has_cell(2, 2) is False
    assert dest.peek(2, 3).raw == "220"
    assert dest.peek(2, 4).raw == "220"


def test_non_numeric_values_are_ignored():
    rows = ROWS + [("East", "Widget", "n/a")]
    result = _pivot(rows).build(Sheet("Out"), 1, 1)
    assert result.data["Widget"]["East"] == 250.0


def test_totals_can_be_disabled():
    pivot = _pivot(ROWS)
    pivot.set_grand_totals(False, False)
    dest = Sheet("Out")
    pivot.build(dest, 1, 1)
    assert dest.has_cell(1, 4) is False
    assert dest.has_cell(3, 1) is False
    assert dest.peek(2, 2).raw == "250"


def test_output_offset_and_default_label():
    dest = Sheet("Out")
    _pivot(ROWS, row_label="").build(dest, 5, 3)
    assert dest.peek(5, 3).raw == "Row"
    assert dest.peek(6, 3).raw == "Widget"


def test_without_header_row_the_header_becomes_data():
    pivot = _pivot(ROWS)
    pivot.set_has_header_row(False)
    result = pivot.build(Sheet("Out"), 1, 1)
    assert result.row_keys == ["Product", "Widget"]
    assert "Product" not in result.data


def test_build_complete_signal():
    pivot = _pivot(ROWS)
    calls = []
    pivot.build_complete.connect(lambda: calls.append(True))
    pivot.build(Sheet("Out"), 1, 1)
    assert calls == [True]


def test_missing_source_raises():
    pivot = PivotTable()
    pivot.add_value_field(ValueField(1))
    with pytest.raises(PivotError, match="null"):
        pivot.build(Sheet("Out"), 1, 1)


def test_invalid_range_raises():
    pivot = PivotTable()
    pivot.set_source_range(_sheet(ROWS), CellRange())
    pivot.add_value_field(ValueField(1))
    with pytest.raises(PivotError, match="invalid"):
        pivot.build(Sheet("Out"), 1, 1)


def test_no_value_fields_raises():
    pivot = PivotTable()
    pivot.set_source_range(_sheet(ROWS), CellRange(1, 1, 4, 3))
    with pytest.raises(PivotError, match="value fields"):
        pivot.build(Sheet("Out"), 1, 1)


def test_empty_source_raises():
    pivot = _pivot(ROWS[:1])
    with pytest.raises(PivotError, match="no data"):
        pivot.build(Sheet("Out"), 1, 1)


@pytest.mark.parametrize("func", list(AggFunc))
def test_aggregate_of_nothing_is_zero(func):
    assert aggregate([], func) == 0.0


def test_aggregate_invariants():
    values = [4.0, -2.0, 7.5]
    assert aggregate(values, AggFunc.SUM) == sum(values)
    assert aggregate(values, AggFunc.MIN) == min(values)
    assert aggregate(values, AggFunc.MAX) == max(values)
    assert aggregate(values, AggFunc.COUNT) == len(values)
    assert aggregate(values, AggFunc.COUNT_A) == len(values)
    assert aggregate(values, AggFunc.AVERAGE) == sum(values) / len(values)