"""Domain models for the meeting pipeline.

- BaseEntity: Base class with id, timestamps
- MeetingRecord / ProcessingState: recorded meeting and its stage
- ActionItem: Tasks extracted from a meeting summary
- SubjectCycle / Highlight: spotlight rotation and its progress notes
- Member: read-only roster entry
"""

from hive_meetings.models.action_item import ActionItem
from hive_meetings.models.base import BaseEntity
from hive_meetings.models.highlight import CycleStatus, Highlight, SubjectCycle
from hive_meetings.models.meeting import (
    InvalidStateTransitionError,
    MeetingNotFoundError,
    MeetingRecord,
    ProcessingState,
)
from hive_meetings.models.member import Member

__all__ = [
    # Base
    "BaseEntity",
    # Meeting
    "MeetingRecord",
    "ProcessingState",
    "InvalidStateTransitionError",
    "MeetingNotFoundError",
    # Derived records
    "ActionItem",
    "CycleStatus",
    "Highlight",
    "SubjectCycle",
    # Roster
    "Member",
]
