"""Grade records service."""

import logging
from datetime import date
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from journal.models.grade import Grade
from journal.models.grade_value import GradeValue, encode
from journal.schemas.common import OperationResult
from journal.schemas.grade import GradeRecord
from journal.services.base import RecordService

logger = logging.getLogger(__name__)


class GradeService(RecordService[Grade, GradeRecord]):
    """Marks per student per lesson.

    ``insert`` does not look for an existing mark of the same student at the
    same lesson; callers that want one current mark use ``upsert``. Reading a
    row whose code is outside 0..7 raises InvalidGradeCodeError.
    """

    model = Grade
    resource = "Grade"

    def _to_record(self, row: Grade) -> GradeRecord:
        return GradeRecord(
            id=row.id,
            student_id=row.student_id,
            lesson_id=row.lesson_id,
            value=row.grade_value,
            date_recorded=row.date_recorded,
        )

    def _values(self, record: GradeRecord) -> dict[str, Any]:
        return {
            "student_id": record.student_id,
            "lesson_id": record.lesson_id,
            "grade": encode(record.value),
            "date_recorded": record.date_recorded,
        }

    def find_by_student_id(self, student_id: int) -> list[GradeRecord]:
        return self._find_where(Grade.student_id == student_id)

    def find_by_lesson_id(self, lesson_id: int) -> list[GradeRecord]:
        return self._find_where(Grade.lesson_id == lesson_id)

    def find_by_student_and_lesson(self, student_id: int, lesson_id: int) -> GradeRecord | None:
        """The mark of a student at a lesson (lowest id if several rows exist)."""
        return self._first_where(Grade.student_id == student_id, Grade.lesson_id == lesson_id)

    def find_by_students_and_lessons(
        self, student_ids: list[int], lesson_ids: list[int]
    ) -> list[GradeRecord]:
        """All marks of the given students at the given lessons."""
        if not student_ids or not lesson_ids:
            return []
        return self._find_where(
            Grade.student_id.in_(student_ids),
            Grade.lesson_id.in_(lesson_ids),
        )

    def delete_by_student_id(self, student_id: int) -> OperationResult[int]:
        return self._delete_where(Grade.student_id == student_id)

    def delete_by_lesson_id(self, lesson_id: int) -> OperationResult[int]:
        return self._delete_where(Grade.lesson_id == lesson_id)

    def upsert(
        self,
        student_id: int,
        lesson_id: int,
        value: GradeValue,
        date_recorded: date | None = None,
    ) -> OperationResult[int]:
        """Set the current mark of a student at a lesson.

        Updates the existing row for the pair or inserts one, in a single
        transaction. The value is the id of the row written.
        """
        recorded = date_recorded or date.today()
        try:
            with self.db.session() as session:
                row = session.execute(
                    select(Grade)
                    .where(Grade.student_id == student_id, Grade.lesson_id == lesson_id)
                    .order_by(Grade.id)
                    .limit(1)
                ).scalar_one_or_none()
                if row is None:
                    row = Grade(
                        student_id=student_id,
                        lesson_id=lesson_id,
                        grade=encode(value),
                        date_recorded=recorded,
                    )
                    session.add(row)
                else:
                    row.grade = encode(value)
                    row.date_recorded = recorded
                session.flush()
                grade_id = row.id
        except SQLAlchemyError as e:
            return self._fail("upsert", e)

        logger.debug(
            f"Saved grade id={grade_id}: student={student_id}, lesson={lesson_id}, value={value.name}"
        )
        return OperationResult.ok(grade_id)
