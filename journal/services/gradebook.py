"""Grading sheet service: the marks grid of one group for one subject."""

import logging

from journal.core.exceptions import NotFoundError
from journal.models.grade_value import GradeValue
from journal.schemas.common import OperationResult
from journal.schemas.metrics import GradeSheet, StudentSheetRow
from journal.services import metrics
from journal.services.store import RecordsStore

logger = logging.getLogger(__name__)


class GradebookService:
    """Builds grading sheets and records marks on them."""

    def __init__(self, store: RecordsStore):
        self.store = store

    def build_sheet(self, group_id: int, subject_id: int) -> GradeSheet:
        """Load the grid for a group and a subject.

        Students are sorted by full name (case-insensitive), lessons by id.
        Lessons without a stored mark show NO_DATA.
        """
        group = self.store.groups.find_by_id(group_id)
        if group is None:
            raise NotFoundError("Group", str(group_id))
        subject = self.store.subjects.find_by_id(subject_id)
        if subject is None:
            raise NotFoundError("Subject", str(subject_id))

        students = self.store.students.find_by_group_id(group_id)
        lessons = self.store.lessons.find_by_subject_id(subject_id)

        # (student_id, lesson_id) -> mark; the first row wins if there are several
        marks: dict[tuple[int, int], GradeValue] = {}
        grades = self.store.grades.find_by_students_and_lessons(
            [s.id for s in students],
            [lesson.id for lesson in lessons],
        )
        for grade in grades:
            marks.setdefault((grade.student_id, grade.lesson_id), grade.value)

        rows = []
        for student in students:
            row_grades = {
                lesson.id: marks.get((student.id, lesson.id), GradeValue.NO_DATA)
                for lesson in lessons
            }
            rows.append(
                StudentSheetRow(
                    student=student,
                    grades=row_grades,
                    metrics=metrics.summarize(row_grades.values()),
                )
            )
        rows.sort(key=lambda r: r.full_name.casefold())

        return GradeSheet(
            group=group,
            subject=subject,
            lessons=lessons,
            rows=rows,
            metrics=metrics.group_metrics(rows),
        )

    def record_grade(
        self,
        student_id: int,
        lesson_id: int,
        value: GradeValue,
    ) -> OperationResult[int]:
        """Save a mark, updating the existing one for the pair if any."""
        result = self.store.grades.upsert(student_id, lesson_id, value)
        if result:
            logger.info(
                f"Saved grade: student={student_id}, lesson={lesson_id}, value={value.name}"
            )
        else:
            logger.warning(
                f"Could not save grade: student={student_id}, lesson={lesson_id}: "
                f"{result.error.message if result.error else 'unknown error'}"
            )
        return result
