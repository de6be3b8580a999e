"""Group (class cohort) model."""

from sqlalchemy import Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from journal.core.database import Base
from journal.models.base import IDMixin, NamedMixin


class Group(Base, IDMixin, NamedMixin):
    """A cohort of students."""

    __tablename__ = "groups"
    __table_args__ = {"sqlite_autoincrement": True}

    name: Mapped[str] = mapped_column(Text, nullable=False)

    # Relationships
    students: Mapped[list["Student"]] = relationship(
        "Student",
        back_populates="group",
        passive_deletes=True,
    )
    subject_links: Mapped[list["SubjectGroupLink"]] = relationship(
        "SubjectGroupLink",
        back_populates="group",
        passive_deletes=True,
    )
