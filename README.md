# opensheet

A pure-Python spreadsheet engine with no third-party dependencies. It models
cells, sheets and workbooks and provides the building blocks a spreadsheet
application needs.

## Modules

- `opensheet.cell_range` — `CellRange` (1-based `top`, `left`, `bottom`,
  `right`) with `from_string("A1:C5")`, `to_string()`, `contains()`,
  `row_count`, `col_count` and `is_valid`; plus `col_letter_to_index` and
  `index_to_col_letter`.
- `opensheet.cell` — `Cell`, `CellType`, `CellError`, `CellFormat` and
  `error_string`. Raw text is classified as empty, formula (starts with `=`),
  boolean, number, date (`yyyy-mm-dd` or `dd/mm/yyyy`) or text.
- `opensheet.sheet` — `Sheet` with sparse cell storage (`cell`, `peek`,
  `set_cell`, `clear_cell`), `clear_range`, `copy_range`, row/column insert and
  delete, `sort_range`, `AutoFilter`, `ConditionalRule` and `iter_cells`.
  Changes are announced through `opensheet.events.Signal` attributes
  (`cell_changed`, `structure_changed`, `name_changed`).
- `opensheet.workbook` — `Workbook`: ordered sheets with unique names, the
  active sheet, named ranges, a modified flag, `title` and an `undo_stack`.
- `opensheet.named_ranges` — `NamedRanges`, a case-insensitive name registry
  that serialises to and from JSON-ready lists.
- `opensheet.dependency_graph` — `DependencyGraph` and `CellKey`:
  transitive dependents, topological order and circular-reference detection.
- `opensheet.number_formatter` — `format_value`, `format_with_color`,
  `guess_format`, `is_date_format`, `is_numeric_format` for codes such as
  `General`, `0.00`, `#,##0`, `0%`, `$#,##0.00`, `dd/MM/yyyy`, `hh:mm:ss`,
  `@` and `[Red]0.00`. Dates are spreadsheet serial numbers.
- `opensheet.auto_fill` — `AutoFill.fill` plus `detect_type`,
  `shift_formula` and `detect_step`: numeric, month/day name, text+number
  and formula series, or plain copying.
- `opensheet.pivot_table` — `PivotTable`, `FieldDef`, `ValueField`,
  `AggFunc`, `aggregate`; `build` writes the summary grid to a sheet and
  raises `PivotError` on a bad configuration.
- `opensheet.data_validation` — `DataValidator` and `ValidationRule`;
  `validate` raises `ValidationFailed`, `is_valid` returns a bool.
- `opensheet.undo_commands` — `CellEditCommand`, `RangeEditCommand`,
  `InsertRowCommand`, `DeleteRowCommand`, `InsertColCommand`,
  `FormatCommand` and `UndoStack` (consecutive edits of one cell merge).
- `opensheet.formula_registry` — `FormulaRegistry`, a searchable catalogue
  of `FunctionMeta` entries for the built-in functions.

## Installation

```
pip install .
```

## Examples

```python
from opensheet.workbook import Workbook
from opensheet.cell_range import CellRange
from opensheet.auto_fill import AutoFill
from opensheet.number_formatter import format_value, format_with_color

wb = Workbook()
sheet = wb.add_sheet("Data")
sheet.set_cell(1, 1, "1")
sheet.set_cell(2, 1, "2")

AutoFill().fill(sheet, CellRange.from_string("A1:A2"), CellRange.from_string("A3:A5"))
print([sheet.peek(r, 1).raw for r in range(1, 6)])   # ['1', '2', '3', '4', '5']

print(format_value(1234567.891, "#,##0.00"))         # 1,234,567.89
print(format_with_color(-3.5, "[Red]0.00"))          # ('-3.50', 'red')
```

Validation:

```python
from opensheet.cell_range import CellRange
from opensheet.data_validation import (
    DataValidator, ValidationRule, ValidationType, ValidationFailed,
)

validator = DataValidator()
validator.add_rule(ValidationRule(
    type=ValidationType.WHOLE_NUMBER, value1=1, value2=10,
    range=CellRange.from_string("A1:A10"),
))
print(validator.is_valid(1, 1, "5"))     # True
try:
    validator.validate(1, 1, "5.5")
except ValidationFailed as exc:
    print(exc.message)                   # Value must be a whole number.
```

## What the package does not do

- It does not evaluate formulas. A cell whose raw text starts with `=` is
  typed as a formula and keeps no computed value until one is stored with
  `Cell.set_value` or `Cell.set_error`. `DependencyGraph` gives the order in
  which formulas would be recalculated, but nothing here performs the
  recalculation.
- It does not read or write spreadsheet files, and it has no user interface
  or command-line program.

## Running the tests

```
pip install .[test]
pytest
```