"""Catalogue of built-in spreadsheet functions with their syntax and help text."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FunctionMeta:
    """Description of one spreadsheet function."""

    name: str
    category: str
    syntax: str
    description: str
    arg_names: tuple[str, ...] = ()
    arg_descriptions: tuple[str, ...] = ()


def _meta(name, category, syntax, description, arg_names=(), arg_descriptions=()):
    return FunctionMeta(name, category, syntax, description,
                        tuple(arg_names), tuple(arg_descriptions))


_CATALOG: tuple[FunctionMeta, ...] = (
    # Math & Trig
    _meta("SUM", "Math", "SUM(number1, [number2], …)",
          "Returns the sum of all numbers in the argument list.",
          ["number1", "number2"],
          ["The first number or range to add.", "Additional numbers or ranges (optional)."]),
    _meta("ROUND", "Math", "ROUND(number, num_digits)",
          "Rounds a number to a specified number of digits.",
          ["number", "num_digits"],
          ["The value to round.", "Number of decimal places (0 = integer)."]),
    _meta("ABS", "Math", "ABS(number)",
          "Returns the absolute value of a number.",
          ["number"], ["The number whose absolute value you want."]),
    _meta("MOD", "Math", "MOD(number, divisor)",
          "Returns the remainder after dividing number by divisor.",
          ["number", "divisor"], ["The number to divide.", "The divisor."]),
    _meta("POWER", "Math", "POWER(number, power)",
          "Returns the result of a number raised to a power.",
          ["number", "power"], ["The base number.", "The exponent."]),
    _meta("SQRT", "Math", "SQRT(number)",
          "Returns the positive square root of a number.",
          ["number"], ["A positive number."]),
    # Statistical
    _meta("AVERAGE", "Statistical", "AVERAGE(number1, [number2], …)",
          "Returns the arithmetic mean of its arguments.",
          ["number1", "number2"],
          ["The first number or range.", "Additional numbers or ranges (optional)."]),
    _meta("COUNT", "Statistical", "COUNT(value1, [value2], …)",
          "Counts the number of cells that contain numbers.",
          ["value1", "value2"],
          ["The first item or range.", "Additional items (optional)."]),
    _meta("COUNTA", "Statistical", "COUNTA(value1, [value2], …)",
          "Counts the number of non-empty cells.",
          ["value1", "value2"],
          ["The first item or range.", "Additional items (optional)."]),
    _meta("MIN", "Statistical", "MIN(number1, [number2], …)",
          "Returns the smallest value in a set of values.",
          ["number1", "number2"],
          ["The first value or range.", "Additional values (optional)."]),
    _meta("MAX", "Statistical", "MAX(number1, [number2], …)",
          "Returns the largest value in a set of values.",
          ["number1", "number2"],
          ["The first value or range.", "Additional values (optional)."]),
    _meta("SUMIF", "Statistical", "SUMIF(range, criteria, [sum_range])",
          "Adds the cells specified by a given condition or criteria.",
          ["range", "criteria", "sum_range"],
          ["The range to evaluate.", "The condition.",
           "The range to sum (optional, defaults to range)."]),
    _meta("COUNTIF", "Statistical", "COUNTIF(range, criteria)",
          "Counts the number of cells that meet a condition.",
          ["range", "criteria"], ["The range to evaluate.", "The condition."]),
    # Logical
    _meta("IF", "Logical", "IF(logical_test, value_if_true, [value_if_false])",
          "Returns one value if condition is true, another if false.",
          ["logical_test", "value_if_true", "value_if_false"],
          ["The condition to test.", "Value returned if TRUE.",
           "Value returned if FALSE (optional)."]),
    _meta("AND", "Logical", "AND(logical1, [logical2], …)",
          "Returns TRUE if all arguments are TRUE.",
          ["logical1", "logical2"],
          ["The first condition.", "Additional conditions (optional)."]),
    _meta("OR", "Logical", "OR(logical1, [logical2], …)",
          "Returns TRUE if any argument is TRUE.",
          ["logical1", "logical2"],
          ["The first condition.", "Additional conditions (optional)."]),
    _meta("NOT", "Logical", "NOT(logical)",
          "Reverses the logic of its argument.",
          ["logical"], ["A value or expression that can be TRUE or FALSE."]),
    _meta("IFERROR", "Logical", "IFERROR(value, value_if_error)",
          "Returns value_if_error if value evaluates to an error; otherwise value.",
          ["value", "value_if_error"],
          ["The expression to evaluate.", "Value to return on error."]),
    # Text
    _meta("CONCATENATE", "Text", "CONCATENATE(text1, [text2], …)",
          "Joins several text strings into one text string.",
          ["text1", "text2"],
          ["The first text item.", "Additional text items (optional)."]),
    _meta("LEN", "Text", "LEN(text)",
          "Returns the number of characters in a text string.",
          ["text"], ["The text whose length you want."]),
    _meta("UPPER", "Text", "UPPER(text)",
          "Converts text to uppercase.",
          ["text"], ["The text to convert."]),
    _meta("LOWER", "Text", "LOWER(text)",
          "Converts text to lowercase.",
          ["text"], ["The text to convert."]),
    _meta("LEFT", "Text", "LEFT(text, [num_chars])",
          "Returns the leftmost characters from a text value.",
          ["text", "num_chars"],
          ["The text string.", "Number of characters (default 1)."]),
    _meta("RIGHT", "Text", "RIGHT(text, [num_chars])",
          "Returns the rightmost characters from a text value.",
          ["text", "num_chars"],
          ["The text string.", "Number of characters (default 1)."]),
    _meta("MID", "Text", "MID(text, start_num, num_chars)",
          "Returns a specific number of characters from a text string, "
          "starting at the position you specify.",
          ["text", "start_num", "num_chars"],
          ["The text string.", "Starting position (1-based).",
           "Number of characters to return."]),
    _meta("TRIM", "Text", "TRIM(text)",
          "Removes extra spaces from text.",
          ["text"], ["The text from which to remove spaces."]),
    # Date & Time
    _meta("TODAY", "Date & Time", "TODAY()",
          "Returns the serial number of today's date."),
    _meta("NOW", "Date & Time", "NOW()",
          "Returns the serial number of the current date and time."),
    _meta("YEAR", "Date & Time", "YEAR(serial_number)",
          "Returns the year corresponding to a date.",
          ["serial_number"], ["A date value."]),
    _meta("MONTH", "Date & Time", "MONTH(serial_number)",
          "Returns the month as an integer (1–12).",
          ["serial_number"], ["A date value."]),
    _meta("DAY", "Date & Time", "DAY(serial_number)",
          "Returns the day of the month (1–31).",
          ["serial_number"], ["A date value."]),
    # Lookup & Reference
    _meta("VLOOKUP", "Lookup",
          "VLOOKUP(lookup_value, table_array, col_index_num, [range_lookup])",
          "Looks up a value in the first column of a table and returns a value "
          "in the same row from another column.",
          ["lookup_value", "table_array", "col_index_num", "range_lookup"],
          ["The value to look for.", "The table range.", "Column number to return.",
           "FALSE for exact match (default)."]),
    _meta("HLOOKUP", "Lookup",
          "HLOOKUP(lookup_value, table_array, row_index_num, [range_lookup])",
          "Looks up a value in the first row of a table and returns from another row.",
          ["lookup_value", "table_array", "row_index_num", "range_lookup"],
          ["The value to look for.", "The table range.", "Row number to return.",
           "FALSE for exact match."]),
    _meta("INDEX", "Lookup", "INDEX(array, row_num, [col_num])",
          "Returns a value or the reference to a value from within a range.",
          ["array", "row_num", "col_num"],
          ["The range.", "Row number.", "Column number (optional)."]),
    _meta("MATCH", "Lookup", "MATCH(lookup_value, lookup_array, [match_type])",
          "Returns the relative position of a value in an array.",
          ["lookup_value", "lookup_array", "match_type"],
          ["The value to find.", "The range to search.", "0 for exact match."]),
)


class FormulaRegistry:
    """Searchable catalogue of the built-in functions."""

    def __init__(self) -> None:
        self._catalog: list[FunctionMeta] = list(_CATALOG)

    def all_functions(self) -> list[FunctionMeta]:
        return list(self._catalog)

    def by_category(self, category: str) -> list[FunctionMeta]:
        """Functions whose category matches, ignoring case."""
        wanted = category.casefold()
        return [f for f in self._catalog if f.category.casefold() == wanted]

    def search(self, query: str) -> list[FunctionMeta]:
        """Functions whose name or description contains ``query``, ignoring case."""
        needle = query.casefold()
        return [
            f for f in self._catalog
            if needle in f.name.casefold() or needle in f.description.casefold()
        ]

    def find(self, name: str) -> FunctionMeta | None:
        """The function called ``name`` (ignoring case), or None."""
        wanted = name.casefold()
        return next((f for f in self._catalog if f.name.casefold() == wanted), None)

    def categories(self) -> list[str]:
        """Distinct categories, sorted."""
        return sorted({f.category for f in self._catalog})