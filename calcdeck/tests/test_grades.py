"""Tests for GPA calculation."""

import pytest

from calcdeck.errors import InvalidInput, UnknownGrade
from calcdeck.grades import calculate_gpa, calculate_gpa_details, parse_course
from calcdeck.models import Course


def test_weighted_gpa():
    grades = [{"grade": "A", "credits": 3}, {"grade": "B", "credits": 2}]
    assert calculate_gpa(grades) == pytest.approx(3.6)


def test_plus_minus_grades():
    courses = [Course("A-", 4), Course("B+", 4), Course("C", 2)]
    assert calculate_gpa(courses) == pytest.approx((3.7 * 4 + 3.3 * 4 + 2.0 * 2) / 10)


def test_unknown_grade_counts_credits_with_zero_points():
    courses = [Course("A", 3), Course("Z", 1)]
    assert calculate_gpa(courses) == pytest.approx(3.0)


def test_unknown_grade_strict():
    with pytest.raises(UnknownGrade) as exc_info:
        calculate_gpa([Course("A", 3), Course("Z", 1)], strict=True)
    assert exc_info.value.grade == "Z"
    assert isinstance(exc_info.value, InvalidInput)


def test_no_credits():
    assert calculate_gpa([]) == 0
    assert calculate_gpa([Course("A", 0)]) == 0


def test_gpa_details():
    result = calculate_gpa_details([Course("A", 3), Course("B", 2), Course("A", 1)])
    assert result.gpa == pytest.approx((12 + 6 + 4) / 6)
    assert result.total_credits == 6
    assert result.quality_points == pytest.approx(22.0)
    assert result.course_count == 3
    assert result.grade_distribution == {"A": 2, "B": 1}


def test_parse_course():
    assert parse_course("b+:3") == Course("B+", 3.0)
    with pytest.raises(InvalidInput):
        parse_course("A")
    with pytest.raises(InvalidInput):
        parse_course("A:three")
