"""Records store: one handle, one service per entity."""

from journal.core.database import Database
from journal.services.grade import GradeService
from journal.services.group import GroupService
from journal.services.lesson import LessonService
from journal.services.student import StudentService
from journal.services.subject import SubjectService
from journal.services.subject_group_link import SubjectGroupLinkService


class RecordsStore:
    """All record services sharing one storage handle."""

    def __init__(self, db: Database):
        self.db = db
        self.groups = GroupService(db)
        self.subjects = SubjectService(db)
        self.lessons = LessonService(db)
        self.students = StudentService(db)
        self.links = SubjectGroupLinkService(db)
        self.grades = GradeService(db)

    def create_schema(self) -> None:
        """Create the tables if they do not exist."""
        self.db.create_all()
