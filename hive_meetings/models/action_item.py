"""ActionItem model for tasks extracted from meeting summaries."""

from datetime import date, datetime
from uuid import UUID

from pydantic import Field

from hive_meetings.models.base import BaseEntity, utc_now
from hive_meetings.summarization.schemas import ACTION_ITEM_MAX_LENGTH


class ActionItem(BaseEntity):
    """An action item extracted from a meeting.

    Action items carry:
    - A description of what needs to be done
    - An optional assignee resolved against the group roster
    - An optional due date
    - A completion flag with the time it was set
    """

    meeting_id: UUID = Field(description="Meeting this action item was extracted from")
    group_id: UUID = Field(description="Group that owns the meeting")
    description: str = Field(
        min_length=1,
        max_length=ACTION_ITEM_MAX_LENGTH,
        description="What needs to be done",
    )
    assignee_id: UUID | None = Field(
        default=None,
        description="Resolved member ID (None when unassigned)",
    )
    due_date: date | None = Field(
        default=None,
        description="When the action item is due",
    )
    completed: bool = Field(default=False, description="Whether the item is done")
    completed_at: datetime | None = Field(
        default=None,
        description="When the item was marked complete",
    )

    @property
    def is_assigned(self) -> bool:
        """Check if action item has an assignee."""
        return self.assignee_id is not None

    def set_completed(self, completed: bool) -> None:
        """Set the completion flag, keeping completed_at consistent."""
        self.completed = completed
        self.completed_at = utc_now() if completed else None
        self.touch()
