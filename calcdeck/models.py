"""Data models for calcdeck.

Enums for the small closed vocabularies (units, sex, activity level,
operators) and the flat result records every formula returns. Records
serialize with ``to_dict()`` so the CLI and callers can dump them as JSON.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date
from enum import Enum
from typing import Optional


class UnitSystem(str, Enum):
    """Measurement system for body metrics."""

    METRIC = "metric"
    IMPERIAL = "imperial"


class Sex(str, Enum):
    """Sex category used by the BMR and body-fat formulas."""

    MALE = "male"
    FEMALE = "female"


class ActivityLevel(str, Enum):
    """Activity level for daily calorie needs."""

    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"
    VERY_ACTIVE = "veryActive"


class Operator(str, Enum):
    """Binary operators understood by the chained evaluator."""

    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "×"
    DIVIDE = "÷"
    POWER = "^"
    MOD = "mod"


# Keyboard-friendly spellings accepted wherever an Operator is parsed.
OPERATOR_ALIASES: dict[str, Operator] = {
    "*": Operator.MULTIPLY,
    "x": Operator.MULTIPLY,
    "/": Operator.DIVIDE,
    "%": Operator.MOD,
    "**": Operator.POWER,
}


class FractionOp(str, Enum):
    """Operations for fraction arithmetic."""

    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    DIVIDE = "divide"


@dataclass
class AmortizationResult:
    """Fixed-payment loan summary."""

    monthly_payment: float
    total_payments: float
    total_interest: float
    principal: float

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class ScheduleEntry:
    """One period of an amortization schedule."""

    period: int
    payment: float
    principal_paid: float
    interest_paid: float
    balance: float


@dataclass
class InvestmentGrowth:
    """Future value of a lump sum plus a monthly contribution stream."""

    total_value: float
    future_value_initial: float
    future_value_contributions: float
    total_contributions: float
    total_gains: float
    principal: float
    monthly_contribution: float = 0.0

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class BMIResult:
    """Body mass index with its category label."""

    bmi: float
    category: str
    weight: float
    height: float
    unit: UnitSystem = UnitSystem.METRIC

    def to_dict(self) -> dict:
        d = asdict(self)
        d["unit"] = self.unit.value
        return d


@dataclass
class CalorieResult:
    """Basal metabolic rate and the calorie targets derived from it."""

    bmr: float
    daily_calories: float
    maintenance_calories: float
    weight_loss_calories: float
    weight_gain_calories: float

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class FractionResult:
    """A fraction as a (numerator, denominator) pair."""

    numerator: int
    denominator: int

    @property
    def value(self) -> float:
        if self.denominator == 0:
            if self.numerator == 0:
                return float("nan")
            return float("inf") if self.numerator > 0 else float("-inf")
        return self.numerator / self.denominator

    def __str__(self) -> str:
        return f"{self.numerator}/{self.denominator}"

    def to_dict(self) -> dict:
        return {"numerator": self.numerator, "denominator": self.denominator}


@dataclass
class StatisticsResult:
    """Descriptive statistics over a sequence of numbers.

    Variance is the population variance (divisor N). ``mode`` holds every
    value tied for the highest frequency, sorted ascending.
    """

    mean: float
    median: float
    mode: list[float]
    variance: float
    standard_deviation: float
    count: int = 0
    minimum: float = float("nan")
    maximum: float = float("nan")

    @property
    def range(self) -> float:
        return self.maximum - self.minimum

    def to_dict(self) -> dict:
        d = asdict(self)
        d["range"] = self.range
        return d


@dataclass
class DateInterval:
    """Calendar-aware interval: years, months, days plus raw elapsed days."""

    years: int
    months: int
    days: int
    total_days: int

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class NextBirthday:
    """Date of the next birthday and how many days away it is."""

    date: date
    days_until: int

    def to_dict(self) -> dict:
        return {"date": self.date.isoformat(), "days_until": self.days_until}


@dataclass
class AgeDetails:
    """Age broken down several ways, plus the next birthday."""

    years: int
    months: int
    days: int
    total_days: int
    total_weeks: int
    total_months: int
    next_birthday: Optional[NextBirthday] = None

    def to_dict(self) -> dict:
        d = {
            "years": self.years,
            "months": self.months,
            "days": self.days,
            "total_days": self.total_days,
            "total_weeks": self.total_weeks,
            "total_months": self.total_months,
        }
        if self.next_birthday:
            d["next_birthday"] = self.next_birthday.to_dict()
        return d


@dataclass
class Course:
    """A graded course: letter grade and credit hours."""

    grade: str
    credits: float


@dataclass
class GPAResult:
    """Credit-weighted GPA with supporting totals."""

    gpa: float
    total_credits: float
    quality_points: float
    course_count: int
    grade_distribution: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class HistoryEntry:
    """One binary evaluation performed by the chained evaluator."""

    left: float
    operator: Operator
    right: float
    result: float

    def __str__(self) -> str:
        from calcdeck.arith import format_number

        return (
            f"{format_number(self.left)} {self.operator.value} "
            f"{format_number(self.right)} = {format_number(self.result)}"
        )
