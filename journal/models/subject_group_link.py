"""Subject to group association model."""

from sqlalchemy import ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship

from journal.core.database import Base
from journal.models.base import IDMixin


class SubjectGroupLink(Base, IDMixin):
    """Marks a subject as offered to a group.

    The table has no unique constraint on the pair; duplicates are refused
    by SubjectGroupLinkService.
    """

    __tablename__ = "subject_to_group"
    __table_args__ = {"sqlite_autoincrement": True}

    subject_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("subjects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    group_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("groups.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Relationships
    subject: Mapped["Subject"] = relationship(
        "Subject",
        back_populates="group_links",
    )
    group: Mapped["Group"] = relationship(
        "Group",
        back_populates="subject_links",
    )

    def __repr__(self) -> str:
        return f"<SubjectGroupLink(subject_id={self.subject_id}, group_id={self.group_id})>"
