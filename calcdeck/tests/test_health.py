"""Tests for BMI, BMR, calorie and body-fat formulas."""

import math

import pytest

from calcdeck.errors import InvalidInput
from calcdeck.health import (
    calculate_bmi,
    calculate_bmi_details,
    calculate_bmr,
    calculate_body_fat,
    calculate_calories,
    calculate_daily_calories,
    get_bmi_category,
)
from calcdeck.models import ActivityLevel, Sex, UnitSystem


# --- BMI ---

def test_metric_bmi():
    assert calculate_bmi(70, 175, "metric") == pytest.approx(22.86, abs=0.01)


def test_imperial_bmi():
    assert calculate_bmi(150, 68, UnitSystem.IMPERIAL) == pytest.approx(22.81, abs=0.01)


def test_unknown_unit_is_metric():
    assert calculate_bmi(70, 175, "stone") == calculate_bmi(70, 175)


def test_zero_height():
    assert calculate_bmi(70, 0) == math.inf


@pytest.mark.parametrize("bmi, category", [
    (16.0, "Underweight"),
    (18.49, "Underweight"),
    (18.5, "Normal weight"),
    (24.99, "Normal weight"),
    (25.0, "Overweight"),
    (29.99, "Overweight"),
    (30.0, "Obese"),
])
def test_bmi_categories(bmi, category):
    assert get_bmi_category(bmi) == category


def test_bmi_details():
    result = calculate_bmi_details(70, 175)
    assert result.category == "Normal weight"
    assert result.unit is UnitSystem.METRIC
    assert calculate_bmi_details(150, 68, "imperial").to_dict()["unit"] == "imperial"


# --- BMR and calories ---

def test_bmr_male_and_female():
    assert calculate_bmr(70, 175, 30, Sex.MALE) == pytest.approx(1648.75)
    assert calculate_bmr(70, 175, 30, "female") == pytest.approx(1482.75)


def test_bmr_imperial_converts():
    metric = calculate_bmr(70, 177.8, 30, "male")
    imperial = calculate_bmr(70 / 0.453592, 70, 30, "male", "imperial")
    assert imperial == pytest.approx(metric)


def test_calories_multiplier():
    assert calculate_calories(1648.75, ActivityLevel.MODERATE) == pytest.approx(2555.5625)
    assert calculate_calories(1000, "veryActive") == pytest.approx(1900)


def test_unknown_activity_defaults_to_sedentary():
    assert calculate_calories(1648.75, "couch") == pytest.approx(1978.5)
    with pytest.raises(InvalidInput):
        calculate_calories(1648.75, "couch", strict=True)


def test_daily_calorie_targets():
    result = calculate_daily_calories(70, 175, 30, "male", "light")
    assert result.bmr == pytest.approx(1648.75)
    assert result.maintenance_calories == result.daily_calories
    assert result.weight_loss_calories == pytest.approx(result.daily_calories - 500)
    assert result.weight_gain_calories == pytest.approx(result.daily_calories + 500)


# --- Body fat ---

def test_body_fat():
    assert calculate_body_fat("male", 40, 25) == pytest.approx(23.0)
    assert calculate_body_fat(Sex.FEMALE, 40, 25) == pytest.approx(33.8)
