"""Database models package."""

from journal.models.grade import Grade
from journal.models.grade_value import GradeValue
from journal.models.group import Group
from journal.models.lesson import Lesson
from journal.models.student import Student
from journal.models.subject import Subject
from journal.models.subject_group_link import SubjectGroupLink

__all__ = [
    # Group
    "Group",
    # Subject
    "Subject",
    "Lesson",
    "SubjectGroupLink",
    # Student
    "Student",
    # Grade
    "Grade",
    "GradeValue",
]
