"""Grade schemas."""

from datetime import date

from pydantic import Field

from journal.models.grade_value import GradeValue
from journal.schemas.common import BaseSchema


class GradeRecord(BaseSchema):
    """A mark for one student at one lesson."""

    id: int | None = None
    student_id: int
    lesson_id: int
    value: GradeValue
    date_recorded: date = Field(default_factory=date.today)
