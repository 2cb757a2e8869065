"""Recording ingest: registers an uploaded recording as a pending meeting."""

from datetime import date
from uuid import UUID

import structlog

from hive_meetings.adapters.assemblyai_adapter import TranscriptionProviderError
from hive_meetings.adapters.storage_adapter import StorageError
from hive_meetings.models.meeting import MeetingRecord
from hive_meetings.repositories.meeting_repo import MeetingRepository
from hive_meetings.services.transcription import (
    MissingAudioError,
    TranscriptionSubmitter,
)

logger = structlog.get_logger()


class RecordingIngest:
    """Creates meeting records for uploaded audio and starts transcription."""

    def __init__(
        self,
        meeting_repo: MeetingRepository,
        submitter: TranscriptionSubmitter,
    ):
        self._meetings = meeting_repo
        self._submitter = submitter

    async def register(
        self,
        group_id: UUID,
        meeting_date: date,
        audio_path: str,
        recorded_by: UUID | None = None,
        title: str | None = None,
        auto_submit: bool = True,
    ) -> MeetingRecord:
        """Create a pending meeting and optionally submit it.

        A failed automatic submission is logged and leaves the meeting
        pending, where it can be submitted again.

        Args:
            group_id: Owning group
            meeting_date: When the meeting took place
            audio_path: Storage path of the uploaded recording
            recorded_by: Member who recorded it
            title: Optional title
            auto_submit: Submit for transcription right away

        Returns:
            The meeting as stored after creation (and submission)
        """
        meeting = await self._meetings.create(
            MeetingRecord(
                group_id=group_id,
                meeting_date=meeting_date,
                audio_path=audio_path,
                recorded_by=recorded_by,
                title=title,
            )
        )
        logger.info("meeting recorded", meeting_id=str(meeting.id), group_id=str(group_id))

        if not auto_submit:
            return meeting

        try:
            await self._submitter.submit(meeting.id)
        except (StorageError, TranscriptionProviderError, MissingAudioError) as e:
            logger.warning(
                "failed to start transcription",
                meeting_id=str(meeting.id),
                error=str(e),
            )
        return await self._meetings.get(meeting.id) or meeting
