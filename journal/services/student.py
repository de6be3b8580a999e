"""Student records service."""

from typing import Any

from journal.models.student import Student
from journal.schemas.common import OperationResult
from journal.schemas.student import StudentRecord
from journal.services.base import RecordService


class StudentService(RecordService[Student, StudentRecord]):
    """Student management service."""

    model = Student
    resource = "Student"

    def _to_record(self, row: Student) -> StudentRecord:
        return StudentRecord.model_validate(row)

    def _values(self, record: StudentRecord) -> dict[str, Any]:
        return {"full_name": record.full_name, "group_id": record.group_id}

    def find_by_group_id(self, group_id: int) -> list[StudentRecord]:
        """Students of a group, in id order."""
        return self._find_where(Student.group_id == group_id)

    def delete_by_group_id(self, group_id: int) -> OperationResult[int]:
        """Remove every student of a group together with their grades."""
        return self._delete_where(Student.group_id == group_id)
