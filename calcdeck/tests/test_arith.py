"""Tests for number parsing/formatting, operators, fractions and statistics."""

import math

import pytest

from calcdeck.arith import (
    apply_operator,
    calculate_fraction,
    calculate_percentage,
    calculate_percentage_change,
    calculate_statistics,
    format_number,
    gcd,
    parse_fraction,
    parse_number,
    parse_operator,
)
from calcdeck.errors import DivisionByZero, InvalidInput
from calcdeck.models import FractionResult, Operator


# --- Parsing and formatting ---

@pytest.mark.parametrize("text, expected", [
    ("42", 42.0),
    ("12.5abc", 12.5),
    ("1.2.3", 1.2),
    ("  7", 7.0),
    ("-3.5", -3.5),
    ("1e3", 1000.0),
    ("Infinity", math.inf),
    ("-Infinity", -math.inf),
])
def test_parse_number(text, expected):
    assert parse_number(text) == expected


@pytest.mark.parametrize("text", [".", "", "NaN", "abc"])
def test_parse_number_without_digits_is_nan(text):
    assert math.isnan(parse_number(text))


@pytest.mark.parametrize("value, expected", [
    (8.0, "8"),
    (2.5, "2.5"),
    (-12.0, "-12"),
    (0.1 + 0.2, "0.30000000000000004"),
    (-0.0, "0"),
    (1e21, "1e+21"),
    (1e-7, "1e-7"),
    (math.nan, "NaN"),
    (math.inf, "Infinity"),
    (-math.inf, "-Infinity"),
])
def test_format_number(value, expected):
    assert format_number(value) == expected


def test_parse_operator_aliases():
    assert parse_operator("*") is Operator.MULTIPLY
    assert parse_operator("/") is Operator.DIVIDE
    assert parse_operator("%") is Operator.MOD
    assert parse_operator("MOD") is Operator.MOD
    assert parse_operator("×") is Operator.MULTIPLY


def test_parse_operator_unknown():
    with pytest.raises(InvalidInput):
        parse_operator("&")


def test_parse_fraction():
    assert parse_fraction("3/4") == (3, 4)
    assert parse_fraction(" -1 / 2 ") == (-1, 2)
    assert parse_fraction("5") == (5, 1)
    with pytest.raises(InvalidInput):
        parse_fraction("three quarters")


# --- Binary operators ---

@pytest.mark.parametrize("left, op, right, expected", [
    (2, "+", 3, 5.0),
    (10, "-", 4, 6.0),
    (3, "×", 7, 21.0),
    (15, "÷", 4, 3.75),
    (2, "^", 10, 1024.0),
    (7, "mod", 3, 1.0),
    (-7, "mod", 3, -1.0),
])
def test_apply_operator(left, op, right, expected):
    assert apply_operator(left, right, op) == pytest.approx(expected)


def test_divide_by_zero_is_permissive():
    assert apply_operator(1, 0, "÷") == math.inf
    assert apply_operator(-1, 0, "÷") == -math.inf
    assert math.isnan(apply_operator(0, 0, "÷"))
    assert math.isnan(apply_operator(7, 0, "mod"))


def test_divide_by_zero_strict():
    with pytest.raises(DivisionByZero):
        apply_operator(1, 0, "/", strict=True)
    # Also catchable as the builtin
    with pytest.raises(ZeroDivisionError):
        apply_operator(1, 0, "mod", strict=True)


def test_power_edge_cases():
    assert apply_operator(10, 400, "^") == math.inf
    assert apply_operator(-2, 1025, "^") == -math.inf
    assert apply_operator(-2, 1024, "^") == math.inf
    assert apply_operator(-10, 400.0, "^") == math.inf
    assert apply_operator(0, -1, "^") == math.inf
    assert math.isnan(apply_operator(-8, 1 / 3, "^"))
    with pytest.raises(InvalidInput):
        apply_operator(-8, 0.5, "^", strict=True)


# --- Percentages ---

def test_percentage():
    assert calculate_percentage(200, 15) == pytest.approx(30.0)


def test_percentage_change():
    assert calculate_percentage_change(50, 75) == pytest.approx(50.0)
    assert calculate_percentage_change(80, 60) == pytest.approx(-25.0)


def test_percentage_change_from_zero():
    assert calculate_percentage_change(0, 10) == math.inf
    with pytest.raises(DivisionByZero):
        calculate_percentage_change(0, 10, strict=True)


# --- Fractions ---

def test_gcd():
    assert gcd(12, 18) == 6
    assert gcd(12, 0) == 12
    assert gcd(0, 0) == 0


@pytest.mark.parametrize("op, expected", [
    ("add", (5, 6)),
    ("subtract", (1, 6)),
    ("multiply", (1, 6)),
    ("divide", (3, 2)),
])
def test_fraction_operations(op, expected):
    result = calculate_fraction(1, 2, 1, 3, op)
    assert (result.numerator, result.denominator) == expected


def test_fraction_reduces_to_lowest_terms():
    result = calculate_fraction(2, 4, 2, 3, "multiply")
    assert (result.numerator, result.denominator) == (1, 3)

    result = calculate_fraction(1, 2, 3, 4, "subtract")
    assert (result.numerator, result.denominator) == (-1, 4)


def test_fraction_results_are_coprime():
    samples = [(1, 2), (2, 4), (3, 9), (-5, 10), (7, 3), (6, 8)]
    for n1, d1 in samples:
        for n2, d2 in samples:
            for op in ("add", "subtract", "multiply", "divide"):
                r = calculate_fraction(n1, d1, n2, d2, op)
                assert r.denominator != 0
                assert math.gcd(abs(r.numerator), abs(r.denominator)) == 1


def test_fraction_divide_by_zero_numerator_is_unsimplified():
    result = calculate_fraction(1, 2, 0, 5, "divide")
    assert (result.numerator, result.denominator) == (5, 0)
    assert result.value == math.inf

    with pytest.raises(DivisionByZero):
        calculate_fraction(1, 2, 0, 5, "divide", strict=True)


def test_fraction_unknown_operation():
    result = calculate_fraction(1, 2, 1, 3, "modulo")
    assert (result.numerator, result.denominator) == (0, 1)
    with pytest.raises(InvalidInput):
        calculate_fraction(1, 2, 1, 3, "modulo", strict=True)


def test_fraction_result_text():
    assert str(FractionResult(numerator=5, denominator=6)) == "5/6"
    assert FractionResult(numerator=3, denominator=4).value == pytest.approx(0.75)


# --- Statistics ---

def test_median_even_count():
    assert calculate_statistics([1, 2, 3, 4]).median == pytest.approx(2.5)


def test_median_odd_count_unsorted_input():
    assert calculate_statistics([9, 1, 5]).median == 5


def test_multimodal():
    assert set(calculate_statistics([1, 1, 2, 2, 3]).mode) == {1, 2}


def test_variance_is_population():
    data = [2, 4, 4, 4, 5, 5, 7, 9]
    result = calculate_statistics(data)
    assert result.mean == pytest.approx(5.0)
    assert result.variance == pytest.approx(4.0)
    assert result.standard_deviation == pytest.approx(2.0)
    assert result.mode == [4]


def test_variance_matches_definition():
    data = [3.5, -1.25, 8.0, 0.0, 2.75]
    result = calculate_statistics(data)
    mean = sum(data) / len(data)
    assert result.variance == pytest.approx(sum((x - mean) ** 2 for x in data) / len(data))
    assert result.standard_deviation == pytest.approx(math.sqrt(result.variance))


def test_statistics_extras():
    result = calculate_statistics([4, 10, 1])
    assert result.count == 3
    assert result.minimum == 1
    assert result.maximum == 10
    assert result.range == 9


def test_single_value():
    result = calculate_statistics([5])
    assert result.mean == 5
    assert result.median == 5
    assert result.mode == [5]
    assert result.variance == 0


def test_empty_statistics():
    result = calculate_statistics([])
    assert math.isnan(result.mean)
    assert math.isnan(result.median)
    assert result.mode == []
    with pytest.raises(InvalidInput):
        calculate_statistics([], strict=True)
