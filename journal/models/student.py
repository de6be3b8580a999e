"""Student model."""

from sqlalchemy import ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from journal.core.database import Base
from journal.models.base import IDMixin


class Student(Base, IDMixin):
    """Student model; every student belongs to exactly one group."""

    __tablename__ = "students"
    __table_args__ = {"sqlite_autoincrement": True}

    full_name: Mapped[str] = mapped_column(Text, nullable=False)
    group_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("groups.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Relationships
    group: Mapped["Group"] = relationship(
        "Group",
        back_populates="students",
    )
    grades: Mapped[list["Grade"]] = relationship(
        "Grade",
        back_populates="student",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Student(id={self.id}, name={self.full_name}, group_id={self.group_id})>"
