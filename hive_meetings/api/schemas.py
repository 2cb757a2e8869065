"""API response models shared by the meeting endpoints."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, Field

from hive_meetings.models.action_item import ActionItem
from hive_meetings.models.highlight import Highlight
from hive_meetings.models.meeting import MeetingRecord
from hive_meetings.summarization.schemas import MeetingAnalysis


class MeetingResponse(BaseModel):
    """Meeting list entry."""

    id: UUID
    group_id: UUID
    meeting_date: date
    title: str | None
    processing_state: str
    has_transcript: bool
    has_summary: bool
    speakers_resolved: bool
    created_at: datetime

    @classmethod
    def from_record(cls, meeting: MeetingRecord) -> "MeetingResponse":
        """Convert a MeetingRecord to a list entry."""
        return cls(
            id=meeting.id,
            group_id=meeting.group_id,
            meeting_date=meeting.meeting_date,
            title=meeting.title,
            processing_state=meeting.processing_state.value,
            has_transcript=bool(meeting.transcript_raw),
            has_summary=meeting.summary is not None,
            speakers_resolved=meeting.speakers_resolved,
            created_at=meeting.created_at,
        )


class MeetingDetailResponse(MeetingResponse):
    """Meeting with transcript and summary."""

    audio_path: str | None
    recorded_by: UUID | None
    transcript_raw: str | None
    transcript_attributed: str | None
    summary: MeetingAnalysis | None

    @classmethod
    def from_record(cls, meeting: MeetingRecord) -> "MeetingDetailResponse":
        """Convert a MeetingRecord to a detail response."""
        base = MeetingResponse.from_record(meeting).model_dump()
        return cls(
            **base,
            audio_path=meeting.audio_path,
            recorded_by=meeting.recorded_by,
            transcript_raw=meeting.transcript_raw,
            transcript_attributed=meeting.transcript_attributed,
            summary=meeting.summary,
        )


class ActionItemResponse(BaseModel):
    """Action item as returned by the API."""

    id: UUID
    meeting_id: UUID
    description: str
    assignee_id: UUID | None
    due_date: date | None
    completed: bool
    completed_at: datetime | None

    @classmethod
    def from_item(cls, item: ActionItem) -> "ActionItemResponse":
        """Convert an ActionItem to a response."""
        return cls.model_validate(item, from_attributes=True)


class HighlightResponse(BaseModel):
    """Highlight as returned by the API."""

    id: UUID
    cycle_id: UUID
    meeting_id: UUID
    content: str
    display_order: int = Field(ge=0)

    @classmethod
    def from_highlight(cls, highlight: Highlight) -> "HighlightResponse":
        """Convert a Highlight to a response."""
        return cls.model_validate(highlight, from_attributes=True)
