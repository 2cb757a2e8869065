"""Shared fields for records stored in the hive database."""

from datetime import UTC, datetime
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field


def utc_now() -> datetime:
    return datetime.now(UTC)


class BaseEntity(BaseModel):
    """A stored record: meeting, action item, cycle or highlight.

    Every row carries its own UUID and creation/modification times. Rows
    read back from libSQL hold ISO strings, which pydantic parses on the
    way in; ``stamps`` gives the strings to write on the way out.
    """

    model_config = ConfigDict(
        str_strip_whitespace=True,
        validate_default=True,
        from_attributes=True,
    )

    id: UUID = Field(default_factory=uuid4, description="Record id")
    created_at: datetime = Field(default_factory=utc_now, description="Row creation time")
    updated_at: datetime = Field(default_factory=utc_now, description="Last modification time")

    def touch(self) -> None:
        """Mark the record as modified now."""
        self.updated_at = utc_now()

    def stamps(self) -> tuple[str, str]:
        """ISO ``(created_at, updated_at)`` for an INSERT."""
        return self.created_at.isoformat(), self.updated_at.isoformat()
