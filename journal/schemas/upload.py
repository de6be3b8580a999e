"""Import (upload) schemas."""

import enum

from journal.schemas.common import BaseSchema


class ImportStatus(str, enum.Enum):
    """Import status enumeration."""

    SUCCESS = "success"
    FAILED = "failed"
    PARTIAL = "partial"


class ImportRowError(BaseSchema):
    """A feed row that could not be imported."""

    row_number: int
    column_name: str | None = None
    error_message: str
    raw_value: str | None = None


class ImportResult(BaseSchema):
    """Result of an import operation."""

    status: ImportStatus
    total_rows: int
    groups_created: int = 0
    subjects_created: int = 0
    lessons_created: int = 0
    students_created: int = 0
    links_created: int = 0
    skipped_rows: int = 0
    errors: list[ImportRowError] = []
    message: str


class SubjectFeed(BaseSchema):
    """A subject with its lessons, as read from a subject feed."""

    subject_name: str
    lesson_names: list[str] = []
