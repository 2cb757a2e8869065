"""Meeting record and its processing state machine."""

from datetime import date
from enum import Enum
from uuid import UUID

from pydantic import Field

from hive_meetings.attribution.labels import is_resolved
from hive_meetings.models.base import BaseEntity
from hive_meetings.summarization.schemas import MeetingAnalysis


class InvalidStateTransitionError(Exception):
    """Raised when a meeting is asked to move to a state it cannot reach."""

    def __init__(self, current: "ProcessingState", target: "ProcessingState"):
        self.current = current
        self.target = target
        super().__init__(
            f"Cannot move meeting from '{current.value}' to '{target.value}'"
        )


class MeetingNotFoundError(Exception):
    """Raised when a meeting lookup finds nothing."""

    pass


class ProcessingState(str, Enum):
    """Processing stage of a meeting recording.

    pending -> transcribing -> summarizing -> complete, with any
    unfinished stage able to drop to failed. Failed is terminal for the
    automatic pipeline; it only moves on through an operator action
    (re-submission back to transcribing, or marking complete).
    """

    PENDING = "pending"
    TRANSCRIBING = "transcribing"
    SUMMARIZING = "summarizing"
    COMPLETE = "complete"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        """Complete and failed meetings need no further polling."""
        return self in (ProcessingState.COMPLETE, ProcessingState.FAILED)

    @property
    def rank(self) -> int | None:
        """Position along the happy path (None for failed)."""
        return _STAGE_ORDER.get(self)

    def can_transition_to(self, target: "ProcessingState") -> bool:
        """Check whether ``target`` is reachable in one step."""
        return target in _TRANSITIONS[self]


_STAGE_ORDER = {
    ProcessingState.PENDING: 0,
    ProcessingState.TRANSCRIBING: 1,
    ProcessingState.SUMMARIZING: 2,
    ProcessingState.COMPLETE: 3,
}

_TRANSITIONS: dict[ProcessingState, frozenset[ProcessingState]] = {
    ProcessingState.PENDING: frozenset(
        {ProcessingState.TRANSCRIBING, ProcessingState.COMPLETE, ProcessingState.FAILED}
    ),
    ProcessingState.TRANSCRIBING: frozenset(
        {ProcessingState.SUMMARIZING, ProcessingState.COMPLETE, ProcessingState.FAILED}
    ),
    ProcessingState.SUMMARIZING: frozenset(
        {ProcessingState.COMPLETE, ProcessingState.FAILED}
    ),
    ProcessingState.COMPLETE: frozenset(),
    # Re-submission and manual completion are operator actions
    ProcessingState.FAILED: frozenset(
        {ProcessingState.FAILED, ProcessingState.TRANSCRIBING, ProcessingState.COMPLETE}
    ),
}


class MeetingRecord(BaseEntity):
    """A recorded meeting moving through transcription and summarization.

    Created by the recording ingest in ``pending`` and only updated after
    that. Transcript fields stay empty until the transcriber calls back;
    the summary is filled in by the derived-record persister.
    """

    group_id: UUID = Field(description="Group (community) that owns the meeting")
    meeting_date: date = Field(description="When the meeting took place")
    title: str | None = Field(default=None, max_length=500)
    audio_path: str | None = Field(
        default=None,
        description="Object storage path of the recording",
    )
    recorded_by: UUID | None = Field(
        default=None,
        description="Member who made the recording",
    )
    transcript_raw: str | None = Field(
        default=None,
        description="Speaker-labeled transcript as produced by the transcriber",
    )
    transcript_attributed: str | None = Field(
        default=None,
        description="Transcript with speaker labels replaced by member names",
    )
    summary: MeetingAnalysis | None = Field(default=None)
    processing_state: ProcessingState = Field(default=ProcessingState.PENDING)
    provider_job_id: str | None = Field(
        default=None,
        description="Transcriber job identifier, set once on submission",
    )

    @property
    def effective_transcript(self) -> str | None:
        """Attributed transcript when present, otherwise the raw one."""
        return self.transcript_attributed or self.transcript_raw

    @property
    def speakers_resolved(self) -> bool:
        """Whether every speaker label has been mapped to a member."""
        return is_resolved(self.transcript_raw, self.transcript_attributed)

    def transition_to(self, target: ProcessingState) -> None:
        """Move to ``target``, enforcing the state machine.

        Raises:
            InvalidStateTransitionError: If the move is not allowed
        """
        if not self.processing_state.can_transition_to(target):
            raise InvalidStateTransitionError(self.processing_state, target)
        self.processing_state = target
        self.touch()
