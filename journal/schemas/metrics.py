"""Metrics and grading sheet schemas."""

from pydantic import Field

from journal.models.grade_value import GradeValue
from journal.schemas.common import BaseSchema
from journal.schemas.group import GroupRecord
from journal.schemas.student import StudentRecord
from journal.schemas.subject import LessonRecord, SubjectRecord

# Shown instead of a number when there is nothing to compute from
NO_DATA_PLACEHOLDER = "—"


class MetricsSummary(BaseSchema):
    """Attendance percentage and average grade; None means no data."""

    attendance_percentage: float | None = None
    average_grade: float | None = None

    @property
    def attendance_display(self) -> str:
        if self.attendance_percentage is None:
            return NO_DATA_PLACEHOLDER
        return f"{self.attendance_percentage:.1f}%"

    @property
    def average_display(self) -> str:
        if self.average_grade is None:
            return NO_DATA_PLACEHOLDER
        return f"{self.average_grade:.2f}"


class StudentSheetRow(BaseSchema):
    """One student's marks on a grading sheet, keyed by lesson id."""

    student: StudentRecord
    grades: dict[int, GradeValue] = Field(default_factory=dict)
    metrics: MetricsSummary = Field(default_factory=MetricsSummary)

    @property
    def full_name(self) -> str:
        return self.student.full_name

    def grade_for_lesson(self, lesson_id: int) -> GradeValue:
        return self.grades.get(lesson_id, GradeValue.NO_DATA)


class GradeSheet(BaseSchema):
    """Marks of one group for one subject."""

    group: GroupRecord
    subject: SubjectRecord
    lessons: list[LessonRecord] = []
    rows: list[StudentSheetRow] = []
    metrics: MetricsSummary = Field(default_factory=MetricsSummary)
