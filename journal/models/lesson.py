"""Lesson model."""

from sqlalchemy import ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from journal.core.database import Base
from journal.models.base import IDMixin, NamedMixin


class Lesson(Base, IDMixin, NamedMixin):
    """One class session of a subject; grades are recorded per lesson."""

    __tablename__ = "lessons"
    __table_args__ = {"sqlite_autoincrement": True}

    name: Mapped[str] = mapped_column(Text, nullable=False)
    subject_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("subjects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Relationships
    subject: Mapped["Subject"] = relationship(
        "Subject",
        back_populates="lessons",
    )
    grades: Mapped[list["Grade"]] = relationship(
        "Grade",
        back_populates="lesson",
        passive_deletes=True,
    )
