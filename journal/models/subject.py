"""Subject model."""

from sqlalchemy import Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from journal.core.database import Base
from journal.models.base import IDMixin, NamedMixin


class Subject(Base, IDMixin, NamedMixin):
    """A course offered to one or more groups."""

    __tablename__ = "subjects"
    __table_args__ = {"sqlite_autoincrement": True}

    name: Mapped[str] = mapped_column(Text, nullable=False)

    # Relationships
    lessons: Mapped[list["Lesson"]] = relationship(
        "Lesson",
        back_populates="subject",
        passive_deletes=True,
    )
    group_links: Mapped[list["SubjectGroupLink"]] = relationship(
        "SubjectGroupLink",
        back_populates="subject",
        passive_deletes=True,
    )
