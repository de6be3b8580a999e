"""Lesson records service."""

from typing import Any

from journal.models.lesson import Lesson
from journal.schemas.common import OperationResult
from journal.schemas.subject import LessonRecord
from journal.services.base import RecordService


class LessonService(RecordService[Lesson, LessonRecord]):
    model = Lesson
    resource = "Lesson"

    def _to_record(self, row: Lesson) -> LessonRecord:
        return LessonRecord.model_validate(row)

    def _values(self, record: LessonRecord) -> dict[str, Any]:
        return {"name": record.name, "subject_id": record.subject_id}

    def find_by_subject_id(self, subject_id: int) -> list[LessonRecord]:
        return self._find_where(Lesson.subject_id == subject_id)

    def delete_by_subject_id(self, subject_id: int) -> OperationResult[int]:
        return self._delete_where(Lesson.subject_id == subject_id)
