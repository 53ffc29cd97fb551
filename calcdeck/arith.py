"""Arithmetic helpers shared by the formulas and the chained evaluator.

Covers binary-operator application, number parsing and display formatting
(loose, calculator-style: ``"12.5abc"`` parses as 12.5, 8.0 prints as ``"8"``),
percentages, fraction arithmetic and descriptive statistics.

Degenerate input yields nan/inf unless ``strict=True`` is passed.
"""

from __future__ import annotations

import math
import re
from collections import Counter
from typing import Sequence, Union

from calcdeck.errors import DivisionByZero, InvalidInput
from calcdeck.models import (
    OPERATOR_ALIASES,
    FractionOp,
    FractionResult,
    Operator,
    StatisticsResult,
)

Number = Union[int, float]

# Leading numeric prefix, the way a keypad display string is read back.
_NUMBER_PREFIX_RE = re.compile(
    r"\s*([+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?))"
)
_FRACTION_RE = re.compile(r"^\s*([+-]?\d+)\s*/\s*([+-]?\d+)\s*$")


# ---------------------------------------------------------------------------
# Parsing and formatting
# ---------------------------------------------------------------------------

def parse_number(text: str) -> float:
    """Parse the leading number in ``text``; nan if there is none.

    '12.5abc' → 12.5, '1.2.3' → 1.2, '.' → nan, '-Infinity' → -inf
    """
    m = _NUMBER_PREFIX_RE.match(text)
    if not m:
        return float("nan")
    token = m.group(1)
    if token.lstrip("+-") == "Infinity":
        return float("-inf") if token.startswith("-") else float("inf")
    return float(token)


def format_number(value: Number) -> str:
    """Render a number for a calculator display.

    Integral values drop the fractional part, everything else uses the
    shortest repr that round-trips.
    """
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    text = repr(value)
    if "e" in text:
        mantissa, exponent = text.split("e")
        sign, digits = exponent[0], exponent[1:].lstrip("0")
        text = f"{mantissa}e{sign}{digits}"
    return text


def parse_operator(symbol: Union[str, Operator]) -> Operator:
    """Resolve an operator symbol or alias. Raises InvalidInput if unknown."""
    if isinstance(symbol, Operator):
        return symbol
    s = symbol.strip()
    if s in OPERATOR_ALIASES:
        return OPERATOR_ALIASES[s]
    try:
        return Operator(s.lower())
    except ValueError:
        raise InvalidInput(f"Unknown operator: {symbol!r}") from None


def parse_fraction(text: str) -> tuple[int, int]:
    """Parse 'n/d' (or a bare integer 'n') into a (numerator, denominator) pair."""
    m = _FRACTION_RE.match(text)
    if m:
        return int(m.group(1)), int(m.group(2))
    try:
        return int(text.strip()), 1
    except ValueError:
        raise InvalidInput(f"Not a fraction: {text!r} (expected n/d)") from None


# ---------------------------------------------------------------------------
# Binary operators
# ---------------------------------------------------------------------------

def quotient_by_zero(left: float) -> float:
    """Quotient of ``left / 0``: signed infinity, or nan for 0/0 and nan/0."""
    if left == 0 or math.isnan(left):
        return float("nan")
    return math.copysign(float("inf"), left)


def power(base: float, exponent: float) -> float:
    """``base ** exponent`` that overflows to a signed infinity instead of raising.

    The result is negative only for a negative base and an odd integer
    exponent.  A negative base with a fractional exponent still raises
    ValueError.
    """
    try:
        return math.pow(base, exponent)
    except OverflowError:
        if base < 0 and float(exponent).is_integer() and exponent % 2 == 1:
            return float("-inf")
        return float("inf")


def apply_operator(
    left: Number,
    right: Number,
    op: Union[str, Operator],
    strict: bool = False,
) -> float:
    """Apply one binary operator to two operands.

    Args:
        left: Left operand.
        right: Right operand.
        op: Operator or symbol ('+', '-', '×', '÷', '^', 'mod', or an alias).
        strict: Raise DivisionByZero instead of returning nan/inf.

    Returns:
        The result as a float.  ``mod`` keeps the sign of the dividend.
    """
    operator = parse_operator(op)
    left, right = float(left), float(right)

    if operator is Operator.ADD:
        return left + right
    if operator is Operator.SUBTRACT:
        return left - right
    if operator is Operator.MULTIPLY:
        return left * right
    if operator is Operator.DIVIDE:
        if right == 0:
            if strict:
                raise DivisionByZero(f"{format_number(left)} ÷ 0")
            return quotient_by_zero(left)
        return left / right
    if operator is Operator.MOD:
        if right == 0:
            if strict:
                raise DivisionByZero(f"{format_number(left)} mod 0")
            return float("nan")
        try:
            return math.fmod(left, right)
        except ValueError:
            return float("nan")

    # Operator.POWER
    if left == 0 and right < 0:
        if strict:
            raise DivisionByZero(f"0 ^ {format_number(right)}")
        return float("inf")
    try:
        return power(left, right)
    except ValueError:
        # Negative base with a fractional exponent has no real result
        if strict:
            raise InvalidInput(
                f"{format_number(left)} ^ {format_number(right)} is not a real number"
            ) from None
        return float("nan")


# ---------------------------------------------------------------------------
# Percentages
# ---------------------------------------------------------------------------

def calculate_percentage(value: Number, percentage: Number) -> float:
    """``percentage`` percent of ``value``."""
    return (value * percentage) / 100


def calculate_percentage_change(
    old_value: Number, new_value: Number, strict: bool = False
) -> float:
    """Relative change from ``old_value`` to ``new_value``, in percent."""
    if old_value == 0:
        if strict:
            raise DivisionByZero("Percentage change from zero is undefined")
        return quotient_by_zero(float(new_value - old_value))
    return ((new_value - old_value) / old_value) * 100


# ---------------------------------------------------------------------------
# Fractions
# ---------------------------------------------------------------------------

def gcd(a: Number, b: Number) -> Number:
    """Greatest common divisor by the Euclidean algorithm; gcd(x, 0) == x."""
    while b != 0:
        a, b = b, a % b
    return a


def _reduce(value: Number, divisor: Number) -> Number:
    if isinstance(value, int) and isinstance(divisor, int):
        return value // divisor
    return value / divisor


def calculate_fraction(
    num1: Number,
    den1: Number,
    num2: Number,
    den2: Number,
    operation: Union[str, FractionOp],
    strict: bool = False,
) -> FractionResult:
    """Combine two fractions and reduce the result to lowest terms.

    A result with a zero denominator (dividing by a fraction whose numerator
    is zero) is returned unsimplified.  An unknown operation returns 0/1.
    """
    try:
        op = FractionOp(operation)
    except ValueError:
        if strict:
            raise InvalidInput(f"Unknown fraction operation: {operation!r}") from None
        return FractionResult(numerator=0, denominator=1)

    if op is FractionOp.ADD:
        num, den = num1 * den2 + num2 * den1, den1 * den2
    elif op is FractionOp.SUBTRACT:
        num, den = num1 * den2 - num2 * den1, den1 * den2
    elif op is FractionOp.MULTIPLY:
        num, den = num1 * num2, den1 * den2
    else:
        num, den = num1 * den2, den1 * num2

    if den == 0:
        if strict:
            raise DivisionByZero("Fraction result has a zero denominator")
        return FractionResult(numerator=num, denominator=den)

    divisor = gcd(abs(num), abs(den))
    return FractionResult(
        numerator=_reduce(num, divisor),
        denominator=_reduce(den, divisor),
    )


# ---------------------------------------------------------------------------
# Statistics
# ---------------------------------------------------------------------------

def calculate_statistics(numbers: Sequence[Number], strict: bool = False) -> StatisticsResult:
    """Mean, median, mode(s), population variance and standard deviation.

    An empty sequence yields nan for every measure and an empty mode list.
    """
    n = len(numbers)
    if n == 0:
        if strict:
            raise InvalidInput("Statistics need at least one number")
        nan = float("nan")
        return StatisticsResult(
            mean=nan, median=nan, mode=[], variance=nan, standard_deviation=nan
        )

    ordered = sorted(numbers)
    mean = sum(numbers) / n

    if n % 2 == 0:
        median = (ordered[n // 2 - 1] + ordered[n // 2]) / 2
    else:
        median = ordered[n // 2]

    frequency = Counter(numbers)
    max_freq = max(frequency.values())
    mode = sorted(value for value, count in frequency.items() if count == max_freq)

    variance = sum((x - mean) ** 2 for x in numbers) / n

    return StatisticsResult(
        mean=mean,
        median=median,
        mode=mode,
        variance=variance,
        standard_deviation=math.sqrt(variance),
        count=n,
        minimum=ordered[0],
        maximum=ordered[-1],
    )
