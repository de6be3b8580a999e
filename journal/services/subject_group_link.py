"""Subject to group link service."""

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from journal.models.subject_group_link import SubjectGroupLink
from journal.schemas.common import ErrorKind, OperationResult
from journal.schemas.subject import SubjectGroupLinkRecord
from journal.services.base import RecordService

logger = logging.getLogger(__name__)


class SubjectGroupLinkService(RecordService[SubjectGroupLink, SubjectGroupLinkRecord]):
    """Many-to-many links between subjects and groups.

    At most one link may exist per (subject, group) pair. The check runs in
    the same transaction as the write, so it does not depend on a unique
    index in the backing database.
    """

    model = SubjectGroupLink
    resource = "Subject link"

    def _to_record(self, row: SubjectGroupLink) -> SubjectGroupLinkRecord:
        return SubjectGroupLinkRecord.model_validate(row)

    def _values(self, record: SubjectGroupLinkRecord) -> dict[str, Any]:
        return {"subject_id": record.subject_id, "group_id": record.group_id}

    @staticmethod
    def _pair_exists(
        session: Session,
        subject_id: int,
        group_id: int,
        exclude_id: int | None = None,
    ) -> bool:
        criteria = [
            SubjectGroupLink.subject_id == subject_id,
            SubjectGroupLink.group_id == group_id,
        ]
        if exclude_id is not None:
            criteria.append(SubjectGroupLink.id != exclude_id)
        query = select(SubjectGroupLink.id).where(*criteria).limit(1)
        return session.execute(query).first() is not None

    def _already_linked(self, record: SubjectGroupLinkRecord) -> OperationResult:
        logger.info(
            f"Subject {record.subject_id} is already linked to group {record.group_id}"
        )
        return OperationResult.fail(
            ErrorKind.ALREADY_EXISTS,
            "Subject is already linked to this group",
            details={"subject_id": record.subject_id, "group_id": record.group_id},
        )

    def _before_insert(
        self, session: Session, record: SubjectGroupLinkRecord
    ) -> OperationResult | None:
        if self._pair_exists(session, record.subject_id, record.group_id):
            return self._already_linked(record)
        return None

    def _before_update(
        self, session: Session, record: SubjectGroupLinkRecord
    ) -> OperationResult | None:
        if self._pair_exists(session, record.subject_id, record.group_id, exclude_id=record.id):
            return self._already_linked(record)
        return None

    def exists(self, subject_id: int, group_id: int) -> bool:
        """Whether the subject is linked to the group."""
        try:
            with self.db.session() as session:
                return self._pair_exists(session, subject_id, group_id)
        except SQLAlchemyError as e:
            logger.error(
                f"Link lookup subject={subject_id} group={group_id} failed: {e}",
                exc_info=e,
            )
            return False

    def find_by_group_id(self, group_id: int) -> list[SubjectGroupLinkRecord]:
        return self._find_where(SubjectGroupLink.group_id == group_id)

    def find_by_subject_id(self, subject_id: int) -> list[SubjectGroupLinkRecord]:
        return self._find_where(SubjectGroupLink.subject_id == subject_id)

    def find_subject_ids_by_group_id(self, group_id: int) -> list[int]:
        return [link.subject_id for link in self.find_by_group_id(group_id)]

    def find_group_ids_by_subject_id(self, subject_id: int) -> list[int]:
        return [link.group_id for link in self.find_by_subject_id(subject_id)]

    def delete_by_group_id(self, group_id: int) -> OperationResult[int]:
        return self._delete_where(SubjectGroupLink.group_id == group_id)

    def delete_by_subject_id(self, subject_id: int) -> OperationResult[int]:
        return self._delete_where(SubjectGroupLink.subject_id == subject_id)

    def delete_by_group_and_subject(self, group_id: int, subject_id: int) -> OperationResult[int]:
        """Unlink one subject from one group."""
        return self._delete_where(
            SubjectGroupLink.group_id == group_id,
            SubjectGroupLink.subject_id == subject_id,
        )
