import pytest

from opensheet.number_formatter import (
    format_value,
    format_with_color,
    guess_format,
    is_date_format,
    is_numeric_format,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("", "General"),
        ("50%", "0.00%"),
        ("42", "General"),
        ("3.14", "0.00"),
        ("15/03/2024", "dd/MM/yyyy"),
        ("2024-03-15", "dd/MM/yyyy"),
        ("hello", "@"),
    ],
)
def test_guess_format(raw, expected):
    assert guess_format(raw) == expected


@pytest.mark.parametrize("code", ["dd/MM/yyyy", "dd MMM yyyy", "hh:mm:ss"])
def test_is_date_format_true(code):
    assert is_date_format(code) is True


@pytest.mark.parametrize("code", ["0.00", "#,##0", "[Red]0.00", "$#,##0.00", "@"])
def test_is_date_format_false(code):
    assert is_date_format(code) is False


def test_is_numeric_format():
    assert is_numeric_format("0.00%") is True
    assert is_numeric_format("#,##0") is True
    assert is_numeric_format("@") is False


def test_general_integer_float_drops_fraction():
    assert format_value(42.0, "General") == "42"
    assert format_value(42.0, "") == "42"


def test_general_fraction_round_trips():
    assert float(format_value(3.25, "General")) == 3.25


def test_general_none_is_empty():
    assert format_value(None, "General") == ""


def test_text_passthrough():
    assert format_value("abc", "@") == "abc"


def test_fixed_decimals():
    result = format_value(2.0, "0.000")
    integer, fraction = result.split(".")
    assert len(fraction) == 3
    assert float(result) == 2.0


def test_thousands_grouping_round_trip():
    value = 1234567.891
    result = format_value(value, "#,##0.00")
    integer, fraction = result.split(".")
    groups = integer.split(",")
    assert all(len(group) == 3 for group in groups[1:])
    assert 1 <= len(groups[0]) <= 3
    assert len(fraction) == 2
    assert float(result.replace(",", "")) == pytest.approx(value, abs=0.005)


def test_thousands_negative_keeps_sign():
    result = format_value(-9876543.0, "#,##0")
    assert result.startswith("-")
    assert "." not in result
    assert float(result.replace(",", "")) == -9876543.0


def test_percentage():
    result = format_value(0.25, "0%")
    assert result.endswith("%")
    assert float(result[:-1]) == pytest.approx(0.25 * 100)


def test_percentage_with_decimals():
    result = format_value(0.1234, "0.00%")
    assert len(result[:-1].split(".")[1]) == 2
    assert float(result[:-1]) == pytest.approx(12.34, abs=0.005)


def test_currency_prefix():
    result = format_value(1500.5, "$#,##0.00")
    assert result.startswith("$")
    assert float(result[1:].replace(",", "")) == pytest.approx(1500.5)


def test_color_is_extracted():
    text, color = format_with_color(1.5, "[Red]0.00")
    assert color == "red"
    assert float(text) == 1.5
    assert len(text.split(".")[1]) == 2


def test_no_color_when_absent():
    assert format_with_color(1.5, "0.00")[1] == ""


def test_non_numeric_value_with_numeric_format_passes_through():
    assert format_value("n/a", "0.00") == "n/a"


def test_numeric_string_is_formatted():
    assert float(format_value("7", "0.00")) == 7.0


def test_date_serial_zero_is_base_date():
    assert format_value(0.0, "yyyy-MM-dd") == "1899-12-30"


def test_date_leap_year_adjustment():
    assert format_value(59.0, "yyyy-MM-dd") == format_value(60.0, "yyyy-MM-dd")
    assert format_value(60.0, "yyyy-MM-dd") != format_value(61.0, "yyyy-MM-dd")


def test_consecutive_serials_are_consecutive_days():
    first = format_value(45000.0, "yyyy-MM-dd")
    second = format_value(45001.0, "yyyy-MM-dd")
    assert first < second
    assert first[:7] == second[:7] or first[5:7] != second[5:7]


def test_time_fraction():
    assert format_value(0.5, "hh:mm:ss") == "12:00:00"


def test_short_month_name():
    assert format_value(0.0, "MMM") == "Dec"


def test_quoted_literal_and_full_month():
    assert format_value(0.0, "dd 'of' MMMM") == "30 of December"