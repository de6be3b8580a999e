"""Group schemas."""

from pydantic import Field

from journal.schemas.common import BaseSchema


class GroupRecord(BaseSchema):
    """Group as stored; ``id`` is None until inserted."""

    id: int | None = None
    name: str = Field(..., min_length=1)
