"""Shared CRUD plumbing for the record services.

Every public operation opens its own session, runs one unit of work and
closes the session before returning. SQLAlchemy errors are logged and turned
into failed OperationResults (or None / empty lists for finders); they never
reach the caller.
"""

import logging
from typing import Any, Generic, TypeVar

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from journal.core.database import Base, Database
from journal.schemas.common import ErrorKind, OperationResult

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)
RecordT = TypeVar("RecordT")


class RecordService(Generic[ModelT, RecordT]):
    """CRUD over one table, exchanging pydantic records with callers."""

    model: type[ModelT]
    resource: str = "Record"

    def __init__(self, db: Database):
        self.db = db

    # ------------------------------------------------------------------
    # Mapping hooks
    # ------------------------------------------------------------------

    def _to_record(self, row: ModelT) -> RecordT:
        raise NotImplementedError

    def _values(self, record: RecordT) -> dict[str, Any]:
        """Column values written by insert and update (everything but id)."""
        raise NotImplementedError

    def _before_insert(self, session: Session, record: RecordT) -> OperationResult | None:
        """Return a failed result to refuse the insert."""
        return None

    def _before_update(self, session: Session, record: RecordT) -> OperationResult | None:
        """Return a failed result to refuse the update."""
        return None

    # ------------------------------------------------------------------
    # Failure handling
    # ------------------------------------------------------------------

    def _fail(self, operation: str, exc: SQLAlchemyError) -> OperationResult:
        if isinstance(exc, IntegrityError):
            kind = ErrorKind.CONSTRAINT_VIOLATION
        else:
            kind = ErrorKind.IO_FAILURE
        logger.error(
            f"{self.resource} {operation} failed ({kind.value}): {exc}",
            exc_info=exc,
        )
        return OperationResult.fail(
            kind,
            f"{self.resource} {operation} failed",
            details={"error": str(getattr(exc, "orig", None) or exc)},
        )

    def _not_found(self, record_id: Any) -> OperationResult:
        return OperationResult.fail(
            ErrorKind.NOT_FOUND,
            f"{self.resource} not found",
            details={"identifier": str(record_id)},
        )

    # ------------------------------------------------------------------
    # Uniform operations
    # ------------------------------------------------------------------

    def insert(self, record: RecordT) -> OperationResult[int]:
        """Persist a new row and return its id."""
        try:
            with self.db.session() as session:
                refusal = self._before_insert(session, record)
                if refusal is not None:
                    return refusal
                row = self.model(**self._values(record))
                session.add(row)
                session.flush()
                new_id = row.id
        except SQLAlchemyError as e:
            return self._fail("insert", e)

        logger.debug(f"Inserted {self.resource} id={new_id}")
        return OperationResult.ok(new_id)

    def find_by_id(self, record_id: int) -> RecordT | None:
        """Get a record by id, or None when there is no such row."""
        try:
            with self.db.session() as session:
                row = session.get(self.model, record_id)
                return self._to_record(row) if row is not None else None
        except SQLAlchemyError as e:
            logger.error(f"{self.resource} lookup id={record_id} failed: {e}", exc_info=e)
            return None

    def find_all(self) -> list[RecordT]:
        """All records, in id order."""
        return self._find_where()

    def update(self, record: RecordT) -> OperationResult[bool]:
        """Replace the stored fields of the row with the record's id."""
        record_id = getattr(record, "id", None)
        if record_id is None:
            return self._not_found(record_id)

        try:
            with self.db.session() as session:
                refusal = self._before_update(session, record)
                if refusal is not None:
                    return refusal
                result = session.execute(
                    update(self.model)
                    .where(self.model.id == record_id)
                    .values(**self._values(record))
                )
                matched = result.rowcount
        except SQLAlchemyError as e:
            return self._fail("update", e)

        if not matched:
            return self._not_found(record_id)
        return OperationResult.ok(True)

    def delete_by_id(self, record_id: int) -> OperationResult[bool]:
        """Delete one row; dependent rows go with it (ON DELETE CASCADE)."""
        result = self._delete_where(self.model.id == record_id)
        if not result:
            return result
        if result.value == 0:
            return self._not_found(record_id)
        logger.info(f"Deleted {self.resource} id={record_id}")
        return OperationResult.ok(True)

    # ------------------------------------------------------------------
    # Helpers for scoped finders and deleters
    # ------------------------------------------------------------------

    def _find_where(self, *criteria: Any) -> list[RecordT]:
        query = select(self.model)
        if criteria:
            query = query.where(*criteria)
        query = query.order_by(self.model.id)
        try:
            with self.db.session() as session:
                rows = session.execute(query).scalars().all()
                return [self._to_record(row) for row in rows]
        except SQLAlchemyError as e:
            logger.error(f"{self.resource} query failed: {e}", exc_info=e)
            return []

    def _first_where(self, *criteria: Any) -> RecordT | None:
        query = select(self.model).where(*criteria).order_by(self.model.id).limit(1)
        try:
            with self.db.session() as session:
                row = session.execute(query).scalar_one_or_none()
                return self._to_record(row) if row is not None else None
        except SQLAlchemyError as e:
            logger.error(f"{self.resource} query failed: {e}", exc_info=e)
            return None

    def _delete_where(self, *criteria: Any) -> OperationResult[int]:
        """Bulk delete; the value is the number of rows removed."""
        try:
            with self.db.session() as session:
                result = session.execute(
                    delete(self.model)
                    .where(*criteria)
                    .execution_options(synchronize_session=False)
                )
                count = result.rowcount
        except SQLAlchemyError as e:
            return self._fail("delete", e)
        return OperationResult.ok(count)
