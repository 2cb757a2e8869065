"""Transcription submitter.

Signs the meeting's audio, hands it to the transcriber and records the
returned job id. The meeting is only written after the provider accepted
the job, so a failed submission leaves nothing behind and can be retried.
"""

from uuid import UUID

import structlog

from hive_meetings.adapters.assemblyai_adapter import AssemblyAIAdapter
from hive_meetings.adapters.storage_adapter import StorageAdapter
from hive_meetings.models.meeting import (
    InvalidStateTransitionError,
    MeetingNotFoundError,
    ProcessingState,
)
from hive_meetings.repositories.meeting_repo import MeetingRepository

logger = structlog.get_logger()


class MissingAudioError(ValueError):
    """Raised when a meeting has no recording to transcribe."""


class TranscriptionSubmitter:
    """Starts diarized transcription for a recorded meeting."""

    def __init__(
        self,
        meeting_repo: MeetingRepository,
        storage: StorageAdapter,
        transcriber: AssemblyAIAdapter,
        callback_url: str | None,
    ):
        """Initialize submitter with its collaborators.

        Args:
            meeting_repo: Meeting persistence
            storage: Issues signed audio URLs
            transcriber: Speech-to-text provider
            callback_url: Webhook the provider calls on completion
        """
        self._meetings = meeting_repo
        self._storage = storage
        self._transcriber = transcriber
        self._callback_url = callback_url

    async def submit(self, meeting_id: UUID) -> str:
        """Submit a meeting's recording for transcription.

        Accepts pending meetings and, as an operator re-submission, failed
        ones. Makes exactly one submission call to the provider.

        Args:
            meeting_id: Meeting to transcribe

        Returns:
            Provider job identifier

        Raises:
            MeetingNotFoundError: If the meeting does not exist
            MissingAudioError: If the meeting has no audio
            InvalidStateTransitionError: If the meeting is past submission
            StorageError: If the audio URL cannot be signed
            TranscriptionProviderError: If the provider rejects the job
        """
        meeting = await self._meetings.get(meeting_id)
        if meeting is None:
            raise MeetingNotFoundError(f"Meeting {meeting_id} not found")
        if not meeting.audio_path:
            raise MissingAudioError(f"Meeting {meeting_id} has no audio recording")
        if not meeting.processing_state.can_transition_to(ProcessingState.TRANSCRIBING):
            raise InvalidStateTransitionError(
                meeting.processing_state, ProcessingState.TRANSCRIBING
            )

        audio_url = await self._storage.create_signed_url(meeting.audio_path)
        job_id = await self._transcriber.submit(audio_url, self._callback_url)

        previous_state = meeting.processing_state
        meeting.provider_job_id = job_id
        meeting.transition_to(ProcessingState.TRANSCRIBING)
        await self._meetings.update(meeting)

        logger.info(
            "meeting submitted for transcription",
            meeting_id=str(meeting_id),
            transcript_id=job_id,
            resubmission=previous_state == ProcessingState.FAILED,
        )
        return job_id
