"""Error kinds for calcdeck.

The formulas are permissive by default: degenerate input turns into nan/inf
rather than an exception. These errors are raised only when a caller opts in
with ``strict=True``, or when the CLI cannot make sense of an argument at all.
"""

from __future__ import annotations


class CalcError(Exception):
    """Base class for every calcdeck error."""


class InvalidInput(CalcError, ValueError):
    """Input is outside the domain of the requested calculation."""


class DivisionByZero(CalcError, ZeroDivisionError):
    """A calculation would divide by zero."""


class UnknownGrade(InvalidInput):
    """A letter grade is not in the grade-point table."""

    def __init__(self, grade: str) -> None:
        super().__init__(f"Unknown letter grade: {grade!r}")
        self.grade = grade
