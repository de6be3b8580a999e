"""Grade and attendance mark values.

A mark is one of eight closed values. The integer code is the only thing
that is persisted; labels and short symbols are for display and for
spreadsheet feeds.
"""

import enum
from typing import Any

from journal.core.exceptions import InvalidGradeCodeError


class GradeValue(enum.Enum):
    """Grade/attendance mark. The member value is the persisted code."""

    NO_DATA = 0
    ABSENCE_UNEXCUSED = 1
    GRADE_2 = 2
    GRADE_3 = 3
    GRADE_4 = 4
    GRADE_5 = 5
    ABSENCE_EXCUSED = 6
    PRESENT = 7


_DISPLAY_NAMES = {
    GradeValue.NO_DATA: "No data",
    GradeValue.ABSENCE_UNEXCUSED: "Absent (unexcused)",
    GradeValue.GRADE_2: "2",
    GradeValue.GRADE_3: "3",
    GradeValue.GRADE_4: "4",
    GradeValue.GRADE_5: "5",
    GradeValue.ABSENCE_EXCUSED: "Absent (excused)",
    GradeValue.PRESENT: "Present",
}

_SHORT_SYMBOLS = {
    GradeValue.NO_DATA: " ",
    GradeValue.ABSENCE_UNEXCUSED: "A",
    GradeValue.GRADE_2: "2",
    GradeValue.GRADE_3: "3",
    GradeValue.GRADE_4: "4",
    GradeValue.GRADE_5: "5",
    GradeValue.ABSENCE_EXCUSED: "E",
    GradeValue.PRESENT: "+",
}

_NUMERIC_GRADES = frozenset(
    {GradeValue.GRADE_2, GradeValue.GRADE_3, GradeValue.GRADE_4, GradeValue.GRADE_5}
)
_ABSENCES = frozenset({GradeValue.ABSENCE_UNEXCUSED, GradeValue.ABSENCE_EXCUSED})


def encode(value: GradeValue) -> int:
    """Integer code stored for a mark."""
    return value.value


def decode(code: Any) -> GradeValue:
    """Convert a stored code back to a mark.

    Anything that is not an integer in 0..7 raises InvalidGradeCodeError,
    including 8..10 which the grades table still accepts.
    """
    if isinstance(code, bool) or not isinstance(code, int):
        raise InvalidGradeCodeError(code)
    try:
        return GradeValue(code)
    except ValueError:
        raise InvalidGradeCodeError(code) from None


def display_name(value: GradeValue) -> str:
    return _DISPLAY_NAMES[value]


def short_symbol(value: GradeValue) -> str:
    return _SHORT_SYMBOLS[value]


def is_numeric_grade(value: GradeValue) -> bool:
    """True only for the numeric grades 2 to 5."""
    return value in _NUMERIC_GRADES


def is_absence(value: GradeValue) -> bool:
    """True for excused and unexcused absences."""
    return value in _ABSENCES


def from_symbol(text: str) -> GradeValue:
    """Parse a mark typed by a user or read from a spreadsheet cell.

    Accepts a short symbol, a display name, a member name or a code.
    A blank cell is NO_DATA.
    """
    if text is None:
        raise InvalidGradeCodeError(text)
    if text.strip() == "":
        return GradeValue.NO_DATA

    normalized = text.strip().upper()
    for value in GradeValue:
        if normalized in (
            short_symbol(value).upper(),
            display_name(value).upper(),
            value.name,
        ):
            return value

    if normalized.lstrip("-").isdigit():
        return decode(int(normalized))
    raise InvalidGradeCodeError(text)
