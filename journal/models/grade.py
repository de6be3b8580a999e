"""Grade (mark) model."""

from datetime import date

from sqlalchemy import CheckConstraint, Date, ForeignKey, Integer, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from journal.core.database import Base
from journal.models.base import IDMixin
from journal.models.grade_value import GradeValue, decode


class Grade(Base, IDMixin):
    """A student's mark for one lesson.

    The table does not forbid several rows for one (student, lesson) pair;
    GradeService.upsert is the way to write a single current mark.
    """

    __tablename__ = "grades"

    student_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("students.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    lesson_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("lessons.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    # Range is wider than GradeValue (0..7) for compatibility with existing files
    grade: Mapped[int] = mapped_column(Integer, nullable=False)
    date_recorded: Mapped[date] = mapped_column(
        Date,
        nullable=False,
        default=date.today,
        server_default=text("CURRENT_DATE"),
    )

    # Relationships
    student: Mapped["Student"] = relationship(
        "Student",
        back_populates="grades",
    )
    lesson: Mapped["Lesson"] = relationship(
        "Lesson",
        back_populates="grades",
    )

    __table_args__ = (
        CheckConstraint("grade >= 0 AND grade <= 10", name="ck_grades_grade_range"),
        {"sqlite_autoincrement": True},
    )

    @property
    def grade_value(self) -> GradeValue:
        """Decoded mark; raises InvalidGradeCodeError for codes outside 0..7."""
        return decode(self.grade)

    def __repr__(self) -> str:
        return f"<Grade(student_id={self.student_id}, lesson_id={self.lesson_id}, grade={self.grade})>"
