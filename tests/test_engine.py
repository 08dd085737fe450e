import pytest

from converter.engine import (
    ZERO_DISPLAY,
    convert,
    cross_rate,
    parse_amount,
    sanitize_amount_input,
    swap,
)


def test_end_to_end_examples(table):
    assert convert("10", "USD", "PKR", table) == "2785.00"
    assert convert("10", "EUR", "USD", table) == "10.87"
    assert convert("0", "USD", "PKR", table) == "0.00"
    assert convert("abc", "USD", "PKR", table) == "0.00"


def test_cross_multiplication_matches_formula(table):
    for amount in (1, 2.5, 99.99, 12345):
        for a in ("USD", "PKR", "EUR"):
            for b in ("USD", "PKR", "EUR"):
                expected = amount * table[b] / table[a]
                assert float(convert(amount, a, b, table)) == pytest.approx(expected, abs=0.0051)


@pytest.mark.parametrize("code", ["USD", "PKR", "EUR"])
def test_same_currency_is_identity(table, code):
    assert convert("42.5", code, code, table) == "42.50"


@pytest.mark.parametrize("amount", ["", "  ", "abc", "-5", "0", "0.0", ".", None, True, "nan", "inf"])
def test_invalid_amounts_give_zero(table, amount):
    assert convert(amount, "USD", "PKR", table) == ZERO_DISPLAY


def test_unknown_codes_give_zero(table):
    assert convert("10", "XXX", "PKR", table) == ZERO_DISPLAY
    assert convert("10", "USD", "XXX", table) == ZERO_DISPLAY
    assert convert("10", "USD", "PKR", {}) == ZERO_DISPLAY


def test_numeric_and_partial_amounts(table):
    assert convert(10, "USD", "PKR", table) == "2785.00"
    assert convert("5.", "USD", "USD", table) == "5.00"
    assert convert(".5", "USD", "PKR", table) == "139.25"
    assert convert(" 10 ", "USD", "PKR", table) == "2785.00"


def test_swap_is_an_involution():
    assert swap("USD", "PKR") == ("PKR", "USD")
    assert swap(*swap("USD", "PKR")) == ("USD", "PKR")


@pytest.mark.parametrize("raw", ["", "5", "5.", ".5", "5.25", "000", "."])
def test_sanitizer_accepts_decimal_in_progress(raw):
    assert sanitize_amount_input(raw) == raw


@pytest.mark.parametrize("raw", ["12.3.4", "-5", "abc", "5a", "1e3", " 5", "5,0", "٣", None])
def test_sanitizer_rejects_everything_else(raw):
    assert sanitize_amount_input(raw) is None


def test_cross_rate(table):
    assert cross_rate("USD", "PKR", table) == pytest.approx(278.5)
    assert cross_rate("EUR", "EUR", table) == pytest.approx(1.0)
    assert cross_rate("USD", "XXX", table) is None


def test_parse_amount():
    assert parse_amount("5.") == 5.0
    assert parse_amount(3) == 3.0
    assert parse_amount("") is None
    assert parse_amount(float("inf")) is None


def test_overflowing_result_gives_zero(table):
    # accepted by the input filter, but too large once divided by 0.92
    assert sanitize_amount_input("9" * 308) is not None
    assert convert("9" * 308, "EUR", "PKR", table) == ZERO_DISPLAY
    assert convert(10 ** 400, "USD", "PKR", table) == ZERO_DISPLAY


@pytest.mark.parametrize("amount", ["1_000", "1e3", "٣", "0x10", "+5", "5 0"])
def test_non_decimal_strings_give_zero(table, amount):
    assert parse_amount(amount) is None
    assert convert(amount, "USD", "PKR", table) == ZERO_DISPLAY
