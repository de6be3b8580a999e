"""Import service: turns feed rows into groups, students, subjects,
lessons and links.

Rows that resolve to entities which already exist are skipped without
error. A row whose insert fails is reported in the result and the import
carries on with the next row.
"""

import logging
from collections.abc import Iterable

from journal.core.exceptions import NotFoundError
from journal.schemas.group import GroupRecord
from journal.schemas.student import StudentRecord
from journal.schemas.subject import LessonRecord, SubjectGroupLinkRecord, SubjectRecord
from journal.schemas.upload import ImportResult, ImportRowError, ImportStatus
from journal.services.store import RecordsStore

logger = logging.getLogger(__name__)


def _status(successful: int, errors: list[ImportRowError]) -> ImportStatus:
    if not errors:
        return ImportStatus.SUCCESS
    return ImportStatus.PARTIAL if successful > 0 else ImportStatus.FAILED


class ImportService:
    """Find-or-create import of rosters, subjects and group subjects."""

    def __init__(self, store: RecordsStore):
        self.store = store

    def _find_or_create_subject(self, name: str) -> tuple[SubjectRecord | None, bool]:
        """Return (subject, created); subject is None if the insert failed."""
        subject = self.store.subjects.find_by_name(name)
        if subject is not None:
            return subject, False
        result = self.store.subjects.insert(SubjectRecord(name=name))
        if not result:
            return None, False
        return SubjectRecord(id=result.value, name=name), True

    def import_roster(self, rows: Iterable[tuple[str, str]]) -> ImportResult:
        """Import ``(full_name, group_name)`` rows.

        Groups are matched by exact name and created when missing. A student
        whose full name already exists in the group is skipped.
        """
        group_ids: dict[str, int] = {}
        errors: list[ImportRowError] = []
        total = 0
        skipped = 0
        groups_created = 0
        students_created = 0

        for row_num, (full_name, group_name) in enumerate(rows, start=1):
            total += 1
            full_name = (full_name or "").strip()
            group_name = (group_name or "").strip()
            if not full_name or not group_name:
                logger.debug(f"[ROSTER IMPORT] Row {row_num} skipped: blank field")
                skipped += 1
                continue

            # 1. Make sure the group exists
            group_id = group_ids.get(group_name)
            if group_id is None:
                group = self.store.groups.find_by_name(group_name)
                if group is None:
                    result = self.store.groups.insert(GroupRecord(name=group_name))
                    if not result:
                        logger.warning(f"[ROSTER IMPORT] Row {row_num}: could not create group {group_name!r}")
                        errors.append(
                            ImportRowError(
                                row_number=row_num,
                                column_name="group_name",
                                error_message="Could not create group",
                                raw_value=group_name,
                            )
                        )
                        continue
                    group_id = result.value
                    groups_created += 1
                else:
                    group_id = group.id
                group_ids[group_name] = group_id

            # 2. Add the student unless the group already has one with that name
            existing = self.store.students.find_by_group_id(group_id)
            if any(s.full_name == full_name for s in existing):
                logger.debug(f"[ROSTER IMPORT] Row {row_num} skipped: {full_name!r} already in {group_name!r}")
                skipped += 1
                continue

            result = self.store.students.insert(StudentRecord(full_name=full_name, group_id=group_id))
            if not result:
                errors.append(
                    ImportRowError(
                        row_number=row_num,
                        column_name="full_name",
                        error_message="Could not create student",
                        raw_value=full_name,
                    )
                )
                continue
            students_created += 1

        message = f"Added {groups_created} groups and {students_created} students from {total} rows."
        if errors:
            message += f" {len(errors)} rows failed."
        logger.info(f"[ROSTER IMPORT] {message}")

        return ImportResult(
            status=_status(groups_created + students_created + skipped, errors),
            total_rows=total,
            groups_created=groups_created,
            students_created=students_created,
            skipped_rows=skipped,
            errors=errors,
            message=message,
        )

    def import_subject_with_lessons(
        self,
        subject_name: str,
        lesson_names: Iterable[str],
    ) -> ImportResult:
        """Create a subject and its lessons.

        Nothing is created when a subject with that name already exists.
        """
        subject_name = (subject_name or "").strip()
        names = [n.strip() for n in lesson_names if n and n.strip()]

        if not subject_name:
            return ImportResult(
                status=ImportStatus.FAILED,
                total_rows=len(names),
                errors=[ImportRowError(row_number=1, column_name="subject_name", error_message="Subject name is empty")],
                message="Subject name is empty.",
            )

        existing = self.store.subjects.find_by_name(subject_name)
        if existing is not None:
            logger.info(f"[SUBJECT IMPORT] Subject {subject_name!r} already exists")
            return ImportResult(
                status=ImportStatus.SUCCESS,
                total_rows=len(names) + 1,
                skipped_rows=len(names) + 1,
                message=f"Subject {subject_name!r} already exists.",
            )

        result = self.store.subjects.insert(SubjectRecord(name=subject_name))
        if not result:
            logger.error(f"[SUBJECT IMPORT] Could not add subject {subject_name!r}")
            return ImportResult(
                status=ImportStatus.FAILED,
                total_rows=len(names) + 1,
                errors=[
                    ImportRowError(
                        row_number=1,
                        column_name="subject_name",
                        error_message="Could not create subject",
                        raw_value=subject_name,
                    )
                ],
                message=f"Could not add subject {subject_name!r}.",
            )
        subject_id = result.value

        errors: list[ImportRowError] = []
        lessons_created = 0
        # Row 1 is the subject itself
        for row_num, name in enumerate(names, start=2):
            if self.store.lessons.insert(LessonRecord(name=name, subject_id=subject_id)):
                lessons_created += 1
            else:
                errors.append(
                    ImportRowError(
                        row_number=row_num,
                        column_name="lesson_name",
                        error_message="Could not create lesson",
                        raw_value=name,
                    )
                )

        message = f"Added subject {subject_name!r} with {lessons_created} lessons."
        logger.info(f"[SUBJECT IMPORT] {message}")
        return ImportResult(
            status=_status(lessons_created + 1, errors),
            total_rows=len(names) + 1,
            subjects_created=1,
            lessons_created=lessons_created,
            errors=errors,
            message=message,
        )

    def import_group_subjects(self, group_id: int, subject_names: Iterable[str]) -> ImportResult:
        """Link a group to each named subject, creating subjects as needed."""
        if self.store.groups.find_by_id(group_id) is None:
            raise NotFoundError("Group", str(group_id))

        # Unique names, first occurrence order
        names = list(dict.fromkeys(n.strip() for n in subject_names if n and n.strip()))

        errors: list[ImportRowError] = []
        subjects_created = 0
        links_created = 0
        skipped = 0

        for row_num, name in enumerate(names, start=1):
            subject, created = self._find_or_create_subject(name)
            if subject is None:
                errors.append(
                    ImportRowError(
                        row_number=row_num,
                        column_name="subject_name",
                        error_message="Could not create subject",
                        raw_value=name,
                    )
                )
                continue
            if created:
                subjects_created += 1

            if self.store.links.exists(subject.id, group_id):
                skipped += 1
                continue
            if self.store.links.insert(SubjectGroupLinkRecord(subject_id=subject.id, group_id=group_id)):
                links_created += 1
            else:
                errors.append(
                    ImportRowError(
                        row_number=row_num,
                        column_name="subject_name",
                        error_message="Could not link subject",
                        raw_value=name,
                    )
                )

        message = f"Added {links_created} new subject links to group {group_id}."
        logger.info(f"[GROUP SUBJECTS IMPORT] {message}")
        return ImportResult(
            status=_status(links_created + skipped, errors),
            total_rows=len(names),
            subjects_created=subjects_created,
            links_created=links_created,
            skipped_rows=skipped,
            errors=errors,
            message=message,
        )
