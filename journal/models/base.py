"""Base model utilities and mixins."""

from sqlalchemy import Integer
from sqlalchemy.orm import Mapped, mapped_column


class IDMixin:
    """Mixin providing an INTEGER AUTOINCREMENT primary key.

    Tables using it must also set ``sqlite_autoincrement`` so SQLite never
    reuses the id of a deleted row.
    """

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )


class NamedMixin:
    """Mixin for tables with a required ``name`` column."""

    def __repr__(self) -> str:
        return f"<{type(self).__name__}(id={self.id}, name={self.name})>"
