"""Subject cycle and highlight models.

A subject cycle is the period during which one member holds the rotating
spotlight role (the "Queen Bee" month). Highlights are short progress
notes about that member's project, extracted from meeting summaries.
"""

from enum import Enum
from uuid import UUID

from pydantic import Field

from hive_meetings.models.base import BaseEntity


class CycleStatus(str, Enum):
    """Lifecycle of a subject cycle."""

    UPCOMING = "upcoming"
    ACTIVE = "active"
    COMPLETED = "completed"


class SubjectCycle(BaseEntity):
    """A member's turn holding the rotating spotlight role."""

    group_id: UUID = Field(description="Group the cycle belongs to")
    holder_id: UUID = Field(description="Member currently holding the role")
    period: str = Field(description="Cycle period label, e.g. '2025-03'")
    title: str = Field(min_length=1, description="Project the holder is working on")
    status: CycleStatus = Field(default=CycleStatus.UPCOMING)


class Highlight(BaseEntity):
    """A progress highlight tied to a subject cycle and its source meeting."""

    cycle_id: UUID = Field(description="Subject cycle the highlight is about")
    meeting_id: UUID = Field(description="Meeting the highlight was extracted from")
    group_id: UUID = Field(description="Group that owns the meeting")
    content: str = Field(min_length=1, description="Highlight text")
    display_order: int = Field(default=0, ge=0, description="Stable sort key")
