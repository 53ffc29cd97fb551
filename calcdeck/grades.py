"""Grade point average on the standard 4.0 scale."""

from __future__ import annotations

from collections import Counter
from typing import Iterable, Mapping, Union

from calcdeck.errors import InvalidInput, UnknownGrade
from calcdeck.models import Course, GPAResult

GRADE_POINTS: dict[str, float] = {
    "A+": 4.0, "A": 4.0, "A-": 3.7,
    "B+": 3.3, "B": 3.0, "B-": 2.7,
    "C+": 2.3, "C": 2.0, "C-": 1.7,
    "D+": 1.3, "D": 1.0, "D-": 0.7,
    "F": 0.0,
}

CourseLike = Union[Course, Mapping]


def _as_course(item: CourseLike) -> Course:
    if isinstance(item, Course):
        return item
    return Course(grade=item["grade"], credits=item["credits"])


def parse_course(text: str) -> Course:
    """Parse 'GRADE:CREDITS' (e.g. 'B+:3') into a Course."""
    grade, sep, credits = text.partition(":")
    if not sep:
        raise InvalidInput(f"Not a course: {text!r} (expected GRADE:CREDITS)")
    try:
        return Course(grade=grade.strip().upper(), credits=float(credits))
    except ValueError:
        raise InvalidInput(f"Bad credit hours in {text!r}") from None


def calculate_gpa(courses: Iterable[CourseLike], strict: bool = False) -> float:
    """Credit-weighted GPA.

    A letter missing from GRADE_POINTS is worth 0 points but its credits
    still count, which drags the average down.  Pass ``strict=True`` to
    reject such letters instead.  No credits at all gives a GPA of 0.
    """
    total_points = 0.0
    total_credits = 0.0

    for course in map(_as_course, courses):
        if course.grade not in GRADE_POINTS and strict:
            raise UnknownGrade(course.grade)
        total_points += GRADE_POINTS.get(course.grade, 0.0) * course.credits
        total_credits += course.credits

    return total_points / total_credits if total_credits > 0 else 0.0


def calculate_gpa_details(courses: Iterable[CourseLike], strict: bool = False) -> GPAResult:
    items = [_as_course(c) for c in courses]
    gpa = calculate_gpa(items, strict=strict)
    total_credits = sum(c.credits for c in items)
    return GPAResult(
        gpa=gpa,
        total_credits=total_credits,
        quality_points=gpa * total_credits,
        course_count=len(items),
        grade_distribution=dict(Counter(c.grade for c in items)),
    )
