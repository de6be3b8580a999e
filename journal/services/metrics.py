"""Attendance and average-grade metrics.

Pure functions over marks already loaded from the store; nothing here reads
or writes the database.

Attendance counts only unexcused absences as missed. Excused absences,
presence and numeric grades all count as attended, and NO_DATA is ignored.
"""

from collections.abc import Iterable, Mapping
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from journal.models.grade_value import GradeValue, encode, is_numeric_grade
from journal.schemas.metrics import MetricsSummary, StudentSheetRow


def _round_half_up(value: Decimal, places: str) -> float:
    # Halves round away from zero: 6.25 -> 6.3, 3.125 -> 3.13
    return float(value.quantize(Decimal(places), rounding=ROUND_HALF_UP))


def _require_collection(grades: Any) -> None:
    if grades is None:
        raise TypeError("grades must be a collection of GradeValue, not None")


def attendance_percentage(grades: Iterable[GradeValue]) -> float | None:
    """Share of attended lessons, in percent with one decimal.

    None when there is no relevant mark at all.
    """
    _require_collection(grades)
    attended = 0
    missed = 0
    for value in grades:
        if value is GradeValue.NO_DATA:
            continue
        if value is GradeValue.ABSENCE_UNEXCUSED:
            missed += 1
        else:
            attended += 1

    total = attended + missed
    if total == 0:
        return None
    percentage = Decimal(attended) * 100 / Decimal(total)
    return _round_half_up(percentage, "0.1")


def average_grade(grades: Iterable[GradeValue]) -> float | None:
    """Mean of the numeric grades (2 to 5) with two decimals, or None."""
    _require_collection(grades)
    codes = [encode(value) for value in grades if is_numeric_grade(value)]
    if not codes:
        return None
    return _round_half_up(Decimal(sum(codes)) / Decimal(len(codes)), "0.01")


def summarize(grades: Iterable[GradeValue]) -> MetricsSummary:
    """Both metrics for one pool of marks."""
    _require_collection(grades)
    values = list(grades)
    return MetricsSummary(
        attendance_percentage=attendance_percentage(values),
        average_grade=average_grade(values),
    )


def _row_values(row: Any) -> Iterable[GradeValue]:
    if isinstance(row, StudentSheetRow):
        return row.grades.values()
    _, grades = row
    if isinstance(grades, Mapping):
        return grades.values()
    return grades


def group_metrics(rows: Iterable[Any]) -> MetricsSummary:
    """Metrics over every mark of every student pooled together.

    ``rows`` holds StudentSheetRow objects or ``(student, grades_by_lesson)``
    pairs. This is not an average of per-student averages.
    """
    _require_collection(rows)
    pooled: list[GradeValue] = []
    for row in rows:
        pooled.extend(_row_values(row))
    return summarize(pooled)
