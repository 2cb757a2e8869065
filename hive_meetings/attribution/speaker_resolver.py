"""Speaker attribution service.

A person who attended the meeting maps each anonymous speaker label to a
group member; saving rewrites the raw transcript with those names and
stores the result as the attributed transcript. Can be repeated at any
time after a raw transcript exists; each save starts again from the raw
text.
"""

from dataclasses import dataclass
from uuid import UUID

import structlog

from hive_meetings.attribution.labels import (
    apply_attribution,
    extract_speaker_labels,
    is_resolved,
)
from hive_meetings.models.meeting import MeetingNotFoundError, MeetingRecord
from hive_meetings.models.member import Member
from hive_meetings.repositories.meeting_repo import MeetingRepository
from hive_meetings.repositories.member_repo import MemberRepository

logger = structlog.get_logger()


class TranscriptNotReadyError(Exception):
    """Raised when attribution is attempted before a raw transcript exists."""

    pass


class UnknownMemberError(ValueError):
    """Raised when a mapping names someone outside the group roster."""

    pass


@dataclass
class AttributionState:
    """What a client needs to show the attribution form."""

    meeting_id: UUID
    labels: list[str]
    roster: list[Member]
    transcript: str | None
    resolved: bool


class SpeakerAttributionService:
    """Loads and saves speaker-to-member mappings for a meeting."""

    def __init__(self, meeting_repo: MeetingRepository, member_repo: MemberRepository):
        """Initialize service with repositories.

        Args:
            meeting_repo: Meeting persistence
            member_repo: Group roster lookups
        """
        self._meetings = meeting_repo
        self._members = member_repo

    async def _get_meeting(self, meeting_id: UUID) -> MeetingRecord:
        meeting = await self._meetings.get(meeting_id)
        if meeting is None:
            raise MeetingNotFoundError(f"Meeting {meeting_id} not found")
        return meeting

    async def load(self, meeting_id: UUID) -> AttributionState:
        """Get the speaker labels and roster for a meeting."""
        meeting = await self._get_meeting(meeting_id)
        return AttributionState(
            meeting_id=meeting.id,
            labels=extract_speaker_labels(meeting.transcript_raw),
            roster=await self._members.roster_for_group(meeting.group_id),
            transcript=meeting.effective_transcript,
            resolved=meeting.speakers_resolved,
        )

    async def save(
        self,
        meeting_id: UUID,
        mapping: dict[str, UUID | None],
    ) -> MeetingRecord:
        """Apply a label -> member mapping and store the attributed transcript.

        Labels mapped to None, or left out, stay anonymous. Labels that do
        not occur in the transcript are ignored.

        Args:
            meeting_id: Meeting to attribute
            mapping: Speaker label to member id

        Returns:
            The updated meeting

        Raises:
            MeetingNotFoundError: If the meeting does not exist
            TranscriptNotReadyError: If there is no raw transcript yet
            UnknownMemberError: If a member id is not in the group roster
        """
        meeting = await self._get_meeting(meeting_id)
        if not meeting.transcript_raw:
            raise TranscriptNotReadyError(
                f"Meeting {meeting_id} has no transcript to attribute yet"
            )

        roster = {m.id: m for m in await self._members.roster_for_group(meeting.group_id)}
        labels = set(extract_speaker_labels(meeting.transcript_raw))

        names_by_label: dict[str, str] = {}
        for label, member_id in mapping.items():
            if member_id is None or label not in labels:
                continue
            member = roster.get(member_id)
            if member is None:
                raise UnknownMemberError(
                    f"Member {member_id} is not part of this meeting's group"
                )
            names_by_label[label] = member.name

        meeting.transcript_attributed = apply_attribution(
            meeting.transcript_raw, names_by_label
        )
        await self._meetings.update(meeting)

        logger.info(
            "speakers attributed",
            meeting_id=str(meeting.id),
            mapped=sorted(names_by_label),
            resolved=is_resolved(meeting.transcript_raw, meeting.transcript_attributed),
        )
        return meeting
