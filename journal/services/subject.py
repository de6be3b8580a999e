"""Subject records service."""

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from journal.models.subject import Subject
from journal.models.subject_group_link import SubjectGroupLink
from journal.schemas.subject import SubjectRecord
from journal.services.base import RecordService

logger = logging.getLogger(__name__)


class SubjectService(RecordService[Subject, SubjectRecord]):
    """Subjects. Deleting a subject removes its lessons, their grades and
    its group links."""

    model = Subject
    resource = "Subject"

    def _to_record(self, row: Subject) -> SubjectRecord:
        return SubjectRecord.model_validate(row)

    def _values(self, record: SubjectRecord) -> dict[str, Any]:
        return {"name": record.name}

    def find_by_name(self, name: str) -> SubjectRecord | None:
        """Subject with exactly this name, used to avoid duplicates on import."""
        return self._first_where(Subject.name == name)

    def find_by_group_id(self, group_id: int) -> list[SubjectRecord]:
        """Subjects linked to a group."""
        query = (
            select(Subject)
            .join(SubjectGroupLink, SubjectGroupLink.subject_id == Subject.id)
            .where(SubjectGroupLink.group_id == group_id)
            .distinct()
            .order_by(Subject.id)
        )
        try:
            with self.db.session() as session:
                rows = session.execute(query).scalars().all()
                return [self._to_record(row) for row in rows]
        except SQLAlchemyError as e:
            logger.error(f"Subjects of group {group_id} query failed: {e}", exc_info=e)
            return []
