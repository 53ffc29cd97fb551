"""Body metric formulas: BMI, BMR (Mifflin-St Jeor), calories, body fat."""

from __future__ import annotations

from typing import Union

from calcdeck.errors import InvalidInput
from calcdeck.models import ActivityLevel, BMIResult, CalorieResult, Sex, UnitSystem

LB_TO_KG = 0.453592
IN_TO_CM = 2.54

# Calorie offsets for weight change goals (roughly 0.5 kg per week)
CALORIE_GOAL_OFFSET = 500

ACTIVITY_MULTIPLIERS: dict[ActivityLevel, float] = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHT: 1.375,
    ActivityLevel.MODERATE: 1.55,
    ActivityLevel.ACTIVE: 1.725,
    ActivityLevel.VERY_ACTIVE: 1.9,
}
_BASELINE_MULTIPLIER = ACTIVITY_MULTIPLIERS[ActivityLevel.SEDENTARY]


def _unit(unit: Union[str, UnitSystem]) -> UnitSystem:
    """Anything other than imperial is treated as metric."""
    return UnitSystem.IMPERIAL if unit == UnitSystem.IMPERIAL else UnitSystem.METRIC


def _to_kg_cm(weight: float, height: float, unit: Union[str, UnitSystem]) -> tuple[float, float]:
    """Convert (weight, height) to kilograms and centimetres."""
    if _unit(unit) is UnitSystem.IMPERIAL:
        return weight * LB_TO_KG, height * IN_TO_CM
    return weight, height


def calculate_bmi(
    weight: float, height: float, unit: Union[str, UnitSystem] = UnitSystem.METRIC
) -> float:
    """Body mass index, kg/m².

    Metric takes kilograms and centimetres, imperial takes pounds and inches.
    """
    weight_kg, height_cm = _to_kg_cm(weight, height, unit)
    height_m = height_cm / 100
    try:
        return weight_kg / (height_m * height_m)
    except ZeroDivisionError:
        return float("inf") if weight_kg else float("nan")


def get_bmi_category(bmi: float) -> str:
    """WHO adult category label for a BMI value."""
    if bmi < 18.5:
        return "Underweight"
    if bmi < 25:
        return "Normal weight"
    if bmi < 30:
        return "Overweight"
    return "Obese"


def calculate_bmi_details(
    weight: float, height: float, unit: Union[str, UnitSystem] = UnitSystem.METRIC
) -> BMIResult:
    bmi = calculate_bmi(weight, height, unit)
    return BMIResult(
        bmi=bmi,
        category=get_bmi_category(bmi),
        weight=weight,
        height=height,
        unit=_unit(unit),
    )


def calculate_bmr(
    weight: float,
    height: float,
    age: float,
    sex: Union[str, Sex],
    unit: Union[str, UnitSystem] = UnitSystem.METRIC,
) -> float:
    """Basal metabolic rate in kcal/day (Mifflin-St Jeor).

    ``10·kg + 6.25·cm − 5·age`` then +5 for male, −161 otherwise.
    """
    weight_kg, height_cm = _to_kg_cm(weight, height, unit)
    base = 10 * weight_kg + 6.25 * height_cm - 5 * age
    if sex == Sex.MALE:
        return base + 5
    return base - 161


def calculate_calories(
    bmr: float, activity_level: Union[str, ActivityLevel], strict: bool = False
) -> float:
    """Daily calorie need: BMR scaled by the activity multiplier.

    Unknown activity levels fall back to the sedentary multiplier.
    """
    try:
        multiplier = ACTIVITY_MULTIPLIERS[ActivityLevel(activity_level)]
    except ValueError:
        if strict:
            raise InvalidInput(f"Unknown activity level: {activity_level!r}") from None
        multiplier = _BASELINE_MULTIPLIER
    return bmr * multiplier


def calculate_daily_calories(
    weight: float,
    height: float,
    age: float,
    sex: Union[str, Sex],
    activity_level: Union[str, ActivityLevel],
    unit: Union[str, UnitSystem] = UnitSystem.METRIC,
    strict: bool = False,
) -> CalorieResult:
    bmr = calculate_bmr(weight, height, age, sex, unit)
    daily = calculate_calories(bmr, activity_level, strict=strict)
    return CalorieResult(
        bmr=bmr,
        daily_calories=daily,
        maintenance_calories=daily,
        weight_loss_calories=daily - CALORIE_GOAL_OFFSET,
        weight_gain_calories=daily + CALORIE_GOAL_OFFSET,
    )


def calculate_body_fat(sex: Union[str, Sex], age: float, bmi: float) -> float:
    """Estimated body-fat percentage from BMI and age (Deurenberg)."""
    if sex == Sex.MALE:
        return 1.20 * bmi + 0.23 * age - 16.2
    return 1.20 * bmi + 0.23 * age - 5.4
