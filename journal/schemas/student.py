"""Student schemas."""

from pydantic import Field

from journal.schemas.common import BaseSchema


class StudentRecord(BaseSchema):
    """Student as stored; equality is by ``id`` only."""

    id: int | None = None
    full_name: str = Field(..., min_length=1)
    group_id: int

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StudentRecord):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
