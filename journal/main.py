"""Command line entry point."""

import argparse
import logging
import sys

from journal.core.config import get_settings
from journal.core.database import Database
from journal.core.exceptions import AppException
from journal.core.logging import configure_logging
from journal.models.grade_value import from_symbol, short_symbol
from journal.schemas.common import OperationResult
from journal.schemas.subject import SubjectGroupLinkRecord
from journal.schemas.upload import ImportResult, ImportStatus
from journal.services.gradebook import GradebookService
from journal.services.importer import ImportService
from journal.services.store import RecordsStore
from journal.services.upload import FeedReader, generate_roster_template

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="journal", description="Academic records journal")
    parser.add_argument("--database-url", help="override DATABASE_URL")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("init-db", help="create tables if absent")

    p = sub.add_parser("import-roster", help="import (full name, group) rows")
    p.add_argument("path")

    p = sub.add_parser("import-subject", help="import a subject with its lessons")
    p.add_argument("path")

    p = sub.add_parser("import-group-subjects", help="link a group to subjects listed in a file")
    p.add_argument("group_id", type=int)
    p.add_argument("path")

    sub.add_parser("list-groups")

    p = sub.add_parser("list-subjects")
    p.add_argument("--group-id", type=int)

    p = sub.add_parser("sheet", help="print the grading sheet")
    p.add_argument("group_id", type=int)
    p.add_argument("subject_id", type=int)

    p = sub.add_parser("set-grade", help="record a mark (2-5, +, A, E or blank)")
    p.add_argument("student_id", type=int)
    p.add_argument("lesson_id", type=int)
    p.add_argument("symbol")

    p = sub.add_parser("link-subject", help="offer an existing subject to a group")
    p.add_argument("group_id", type=int)
    p.add_argument("subject_id", type=int)

    p = sub.add_parser("unlink-subject", help="remove a subject from a group")
    p.add_argument("group_id", type=int)
    p.add_argument("subject_id", type=int)

    p = sub.add_parser("roster-template", help="write an .xlsx roster template")
    p.add_argument("path")

    p = sub.add_parser("delete-group")
    p.add_argument("group_id", type=int)

    p = sub.add_parser("delete-subject")
    p.add_argument("subject_id", type=int)

    return parser


def _report(result: ImportResult) -> int:
    print(result.message)
    for error in result.errors:
        print(f"  row {error.row_number}: {error.error_message} ({error.raw_value})")
    return 0 if result.status != ImportStatus.FAILED else 1


def _check(result: OperationResult) -> int:
    if result:
        return 0
    print(f"Failed: {result.error.message if result.error else 'unknown error'}", file=sys.stderr)
    return 1


def print_sheet(gradebook: GradebookService, group_id: int, subject_id: int) -> None:
    sheet = gradebook.build_sheet(group_id, subject_id)
    print(f"Grades | Group: {sheet.group.name} | Subject: {sheet.subject.name}")
    header = ["Student"] + [f"L{i}" for i in range(1, len(sheet.lessons) + 1)] + ["Attendance", "Average"]
    print("\t".join(header))
    for row in sheet.rows:
        cells = [row.full_name]
        cells += [short_symbol(row.grade_for_lesson(lesson.id)) for lesson in sheet.lessons]
        cells += [row.metrics.attendance_display, row.metrics.average_display]
        print("\t".join(cells))
    print(f"Group average: {sheet.metrics.average_display}")
    print(f"Group attendance: {sheet.metrics.attendance_display}")


def write_roster_template(path: str) -> int:
    try:
        with open(path, "wb") as f:
            f.write(generate_roster_template())
    except OSError as e:
        logger.error(f"Cannot write template {path}: {e}")
        print(f"Failed: {e}", file=sys.stderr)
        return 1
    print(f"Roster template written to {path}")
    return 0


def run(args: argparse.Namespace) -> int:
    settings = get_settings()
    if args.command == "roster-template":
        return write_roster_template(args.path)

    db = Database(args.database_url, echo=settings.DB_ECHO) if args.database_url else Database.from_settings(settings)
    store = RecordsStore(db)
    try:
        store.create_schema()
        if args.command == "init-db":
            return 0

        reader = FeedReader(settings)
        importer = ImportService(store)
        gradebook = GradebookService(store)

        if args.command == "import-roster":
            return _report(importer.import_roster(reader.read_roster_file(args.path)))
        if args.command == "import-subject":
            feed = reader.read_subject_file(args.path)
            return _report(importer.import_subject_with_lessons(feed.subject_name, feed.lesson_names))
        if args.command == "import-group-subjects":
            return _report(importer.import_group_subjects(args.group_id, reader.read_name_list(args.path)))
        if args.command == "list-groups":
            for group in store.groups.find_all():
                print(f"{group.id}\t{group.name}")
            return 0
        if args.command == "list-subjects":
            if args.group_id is not None:
                subjects = store.subjects.find_by_group_id(args.group_id)
            else:
                subjects = store.subjects.find_all()
            for subject in subjects:
                print(f"{subject.id}\t{subject.name}")
            return 0
        if args.command == "sheet":
            print_sheet(gradebook, args.group_id, args.subject_id)
            return 0
        if args.command == "set-grade":
            return _check(gradebook.record_grade(args.student_id, args.lesson_id, from_symbol(args.symbol)))
        if args.command == "link-subject":
            return _check(
                store.links.insert(SubjectGroupLinkRecord(subject_id=args.subject_id, group_id=args.group_id))
            )
        if args.command == "unlink-subject":
            result = store.links.delete_by_group_and_subject(args.group_id, args.subject_id)
            if result and result.value == 0:
                print(f"Subject {args.subject_id} is not linked to group {args.group_id}", file=sys.stderr)
                return 1
            return _check(result)
        if args.command == "delete-group":
            return _check(store.groups.delete_by_id(args.group_id))
        if args.command == "delete-subject":
            return _check(store.subjects.delete_by_id(args.subject_id))
        return 2
    except AppException as e:
        logger.error(f"{e.code}: {e.message}")
        print(e.message, file=sys.stderr)
        return 1
    finally:
        db.dispose()


def main(argv: list[str] | None = None) -> int:
    args = create_parser().parse_args(argv)
    configure_logging(get_settings())
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
