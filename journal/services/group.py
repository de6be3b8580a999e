"""Group records service."""

from typing import Any

from journal.models.group import Group
from journal.schemas.group import GroupRecord
from journal.services.base import RecordService


class GroupService(RecordService[Group, GroupRecord]):
    """Groups. Deleting a group removes its students, their grades and its
    subject links."""

    model = Group
    resource = "Group"

    def _to_record(self, row: Group) -> GroupRecord:
        return GroupRecord.model_validate(row)

    def _values(self, record: GroupRecord) -> dict[str, Any]:
        return {"name": record.name}

    def find_by_name(self, name: str) -> GroupRecord | None:
        """First group with exactly this name; names are not unique."""
        return self._first_where(Group.name == name)
