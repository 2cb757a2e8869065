"""Webhook handler driving the meeting processing state machine.

pending -(submit)-> transcribing -(webhook: completed)-> summarizing
-(summary persisted)-> complete

The completion webhook runs transcript formatting, summarization and
persistence in a single invocation. Any exception raised once the meeting
has been matched moves it to failed and propagates; there is no automatic
retry, recovery is an operator re-submission.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any
from uuid import UUID

import structlog

from hive_meetings.adapters.assemblyai_adapter import (
    AssemblyAIAdapter,
    TranscriptionProviderError,
)
from hive_meetings.models.meeting import (
    InvalidStateTransitionError,
    MeetingNotFoundError,
    MeetingRecord,
    ProcessingState,
)
from hive_meetings.repositories.meeting_repo import MeetingRepository
from hive_meetings.repositories.member_repo import MemberRepository
from hive_meetings.services.callbacks import (
    CompletionNotice,
    ProviderErrorNotice,
    SubmissionRequest,
    parse_callback,
)
from hive_meetings.services.persister import DerivedRecordPersister, PersistResult
from hive_meetings.services.transcript_formatter import format_transcript
from hive_meetings.services.transcription import TranscriptionSubmitter
from hive_meetings.summarization.engine import SummarizationEngine

logger = structlog.get_logger()


class CallbackOutcome(str, Enum):
    """What handling a callback did."""

    SUBMITTED = "submitted"
    COMPLETED = "completed"
    NOT_FOUND = "not_found"
    FAILED = "failed"


@dataclass
class CallbackResult:
    """Result of handling one inbound callback."""

    outcome: CallbackOutcome
    meeting_id: UUID | None = None
    transcript_id: str | None = None
    persisted: PersistResult | None = None


class MeetingPipeline:
    """Routes inbound callbacks and runs the synchronous processing tail."""

    def __init__(
        self,
        meeting_repo: MeetingRepository,
        member_repo: MemberRepository,
        transcriber: AssemblyAIAdapter,
        submitter: TranscriptionSubmitter,
        engine: SummarizationEngine,
        persister: DerivedRecordPersister,
    ):
        """Initialize pipeline with its collaborators.

        Args:
            meeting_repo: Meeting persistence
            member_repo: Group roster lookups
            transcriber: Speech-to-text provider (for fetching results)
            submitter: Starts transcription jobs
            engine: Summarizes transcripts
            persister: Writes derived records
        """
        self._meetings = meeting_repo
        self._members = member_repo
        self._transcriber = transcriber
        self._submitter = submitter
        self._engine = engine
        self._persister = persister

    async def handle(self, payload: Any) -> CallbackResult:
        """Dispatch a callback body to submission or completion handling.

        Raises:
            UnrecognizedCallbackError: If the body has no known shape
        """
        callback = parse_callback(payload)
        if isinstance(callback, SubmissionRequest):
            job_id = await self._submitter.submit(callback.meeting_id)
            return CallbackResult(
                outcome=CallbackOutcome.SUBMITTED,
                meeting_id=callback.meeting_id,
                transcript_id=job_id,
            )
        if isinstance(callback, CompletionNotice):
            return await self.handle_completion(callback.transcript_id)
        if isinstance(callback, ProviderErrorNotice):
            return await self.handle_provider_error(callback.transcript_id)
        raise AssertionError(f"Unhandled callback type: {type(callback).__name__}")

    async def handle_completion(self, job_id: str) -> CallbackResult:
        """Process a finished transcription job end to end.

        Unknown job ids are answered with NOT_FOUND and touch nothing, so
        stale or duplicate deliveries are harmless.

        Args:
            job_id: Provider job identifier from the webhook

        Returns:
            CallbackResult with the persisted records

        Raises:
            InvalidStateTransitionError: If the meeting is not awaiting a
                transcript (nothing is changed in that case)
            Exception: Whatever failed during processing, after the meeting
                has been marked failed
        """
        meeting = await self._meetings.get_by_provider_job_id(job_id)
        if meeting is None:
            logger.info("no meeting for transcript", transcript_id=job_id)
            return CallbackResult(outcome=CallbackOutcome.NOT_FOUND, transcript_id=job_id)

        if not meeting.processing_state.can_transition_to(ProcessingState.SUMMARIZING):
            raise InvalidStateTransitionError(
                meeting.processing_state, ProcessingState.SUMMARIZING
            )

        log = logger.bind(meeting_id=str(meeting.id), transcript_id=job_id)
        try:
            transcript = await self._transcriber.fetch(job_id)
            if transcript.status == "error":
                raise TranscriptionProviderError(
                    f"Transcription failed: {transcript.error or 'unknown error'}"
                )

            formatted = format_transcript(transcript)
            meeting.transcript_raw = formatted
            meeting.transcript_attributed = formatted
            meeting.transition_to(ProcessingState.SUMMARIZING)
            await self._meetings.update(meeting)
            log.info("transcript stored", state=meeting.processing_state.value)

            roster = await self._members.roster_for_group(meeting.group_id)
            analysis = await self._engine.summarize(
                formatted, [member.name for member in roster]
            )
            persisted = await self._persister.persist(meeting, analysis, roster)
        except Exception as e:
            log.error("meeting processing failed", error=str(e))
            try:
                await self._mark_failed(meeting.id)
            except Exception as mark_error:
                log.error("could not record failed state", error=str(mark_error))
            raise

        log.info("meeting processed", state=meeting.processing_state.value)
        return CallbackResult(
            outcome=CallbackOutcome.COMPLETED,
            meeting_id=meeting.id,
            transcript_id=job_id,
            persisted=persisted,
        )

    async def handle_provider_error(self, job_id: str) -> CallbackResult:
        """Mark the meeting behind a failed transcription job as failed."""
        meeting = await self._meetings.get_by_provider_job_id(job_id)
        if meeting is None:
            logger.info("no meeting for failed transcript", transcript_id=job_id)
            return CallbackResult(outcome=CallbackOutcome.NOT_FOUND, transcript_id=job_id)

        logger.warning(
            "transcriber reported job error",
            meeting_id=str(meeting.id),
            transcript_id=job_id,
        )
        await self._mark_failed(meeting.id)
        return CallbackResult(
            outcome=CallbackOutcome.FAILED,
            meeting_id=meeting.id,
            transcript_id=job_id,
        )

    async def submit(self, meeting_id: UUID) -> str:
        """Submit (or re-submit after failure) a meeting for transcription."""
        return await self._submitter.submit(meeting_id)

    async def mark_complete(self, meeting_id: UUID) -> MeetingRecord:
        """Operator override: close out a meeting without a summary.

        Used to skip a meeting stuck in processing or one that failed and
        will not be retried. Any summary already stored is kept.

        Raises:
            MeetingNotFoundError: If the meeting does not exist
            InvalidStateTransitionError: If the meeting is already complete
        """
        meeting = await self._meetings.get(meeting_id)
        if meeting is None:
            raise MeetingNotFoundError(f"Meeting {meeting_id} not found")
        previous_state = meeting.processing_state
        meeting.transition_to(ProcessingState.COMPLETE)
        await self._meetings.update(meeting)
        logger.info(
            "meeting marked complete by operator",
            meeting_id=str(meeting_id),
            previous_state=previous_state.value,
        )
        return meeting

    async def _mark_failed(self, meeting_id: UUID) -> None:
        # Re-read so in-memory transitions that never reached storage are ignored
        meeting = await self._meetings.get(meeting_id)
        if meeting is None or not meeting.processing_state.can_transition_to(
            ProcessingState.FAILED
        ):
            return
        meeting.transition_to(ProcessingState.FAILED)
        await self._meetings.update(meeting)
