"""Subject and lesson schemas."""

from pydantic import Field

from journal.schemas.common import BaseSchema


class SubjectRecord(BaseSchema):
    """Subject as stored; ``id`` is None until inserted."""

    id: int | None = None
    name: str = Field(..., min_length=1)


class LessonRecord(BaseSchema):
    """Lesson of a subject.

    Two lesson records are the same lesson when their ids match, whatever
    the other fields say.
    """

    id: int | None = None
    name: str = Field(..., min_length=1)
    subject_id: int

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LessonRecord):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)


class SubjectGroupLinkRecord(BaseSchema):
    """Subject offered to a group.

    Links are compared by the (subject_id, group_id) pair; the row id is
    ignored.
    """

    id: int | None = None
    subject_id: int
    group_id: int

    @property
    def key(self) -> tuple[int, int]:
        return (self.subject_id, self.group_id)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SubjectGroupLinkRecord):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)
