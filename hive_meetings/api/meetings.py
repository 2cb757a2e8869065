"""Meetings API endpoints: ingest, status polling, detail and attribution."""

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from pydantic import BaseModel, ConfigDict, Field

from hive_meetings.adapters.assemblyai_adapter import TranscriptionProviderError
from hive_meetings.adapters.storage_adapter import StorageError
from hive_meetings.api.schemas import (
    ActionItemResponse,
    HighlightResponse,
    MeetingDetailResponse,
    MeetingResponse,
)
from hive_meetings.attribution.speaker_resolver import (
    SpeakerAttributionService,
    TranscriptNotReadyError,
    UnknownMemberError,
)
from hive_meetings.models.meeting import (
    InvalidStateTransitionError,
    MeetingNotFoundError,
    MeetingRecord,
    ProcessingState,
)
from hive_meetings.repositories.action_item_repo import ActionItemRepository
from hive_meetings.repositories.highlight_repo import HighlightRepository
from hive_meetings.repositories.meeting_repo import MeetingRepository
from hive_meetings.services.ingest import RecordingIngest
from hive_meetings.services.pipeline import MeetingPipeline
from hive_meetings.services.transcription import MissingAudioError

# Clients poll at this interval while any meeting is still processing
POLL_INTERVAL_SECONDS = 5

IN_PROGRESS_STATES = [
    ProcessingState.PENDING,
    ProcessingState.TRANSCRIBING,
    ProcessingState.SUMMARIZING,
]

router = APIRouter(prefix="/meetings", tags=["meetings"])


class CreateMeetingRequest(BaseModel):
    """Register an uploaded recording."""

    model_config = ConfigDict(str_strip_whitespace=True)

    group_id: UUID
    meeting_date: date
    audio_path: str = Field(min_length=1, description="Storage path of the recording")
    recorded_by: UUID | None = None
    title: str | None = Field(default=None, max_length=500)
    auto_submit: bool = Field(
        default=True,
        description="Start transcription immediately",
    )


class ProcessingStatusResponse(BaseModel):
    """Meetings still in flight, for client polling."""

    meetings: list[MeetingResponse]
    should_poll: bool
    poll_interval_seconds: int


class SubmitResponse(BaseModel):
    """Response after (re-)submitting a meeting."""

    meeting_id: UUID
    transcript_id: str


class MemberResponse(BaseModel):
    """Roster entry offered for speaker mapping."""

    id: UUID
    name: str


class SpeakersResponse(BaseModel):
    """Speaker labels and roster for the attribution form."""

    meeting_id: UUID
    labels: list[str]
    members: list[MemberResponse]
    transcript: str | None
    resolved: bool


class SaveSpeakersRequest(BaseModel):
    """Speaker label to member mapping."""

    mapping: dict[str, UUID | None] = Field(
        description="Speaker label (e.g. 'A') to member id; null leaves it anonymous",
    )


def get_meeting_repo(request: Request) -> MeetingRepository:
    """Dependency to get MeetingRepository from app state."""
    return request.app.state.meeting_repo


def get_action_item_repo(request: Request) -> ActionItemRepository:
    """Dependency to get ActionItemRepository from app state."""
    return request.app.state.action_item_repo


def get_highlight_repo(request: Request) -> HighlightRepository:
    """Dependency to get HighlightRepository from app state."""
    return request.app.state.highlight_repo


def get_ingest(request: Request) -> RecordingIngest:
    """Dependency to get RecordingIngest from app state."""
    return request.app.state.ingest


def get_pipeline(request: Request) -> MeetingPipeline:
    """Dependency to get MeetingPipeline from app state."""
    return request.app.state.pipeline


def get_attribution_service(request: Request) -> SpeakerAttributionService:
    """Dependency to get SpeakerAttributionService from app state."""
    return request.app.state.attribution_service


async def _require_meeting(repo: MeetingRepository, meeting_id: UUID) -> MeetingRecord:
    meeting = await repo.get(meeting_id)
    if meeting is None:
        raise HTTPException(status_code=404, detail="Meeting not found")
    return meeting


@router.post("", response_model=MeetingDetailResponse, status_code=201)
async def create_meeting(
    body: CreateMeetingRequest,
    ingest: RecordingIngest = Depends(get_ingest),
) -> MeetingDetailResponse:
    """Register a recorded meeting and start transcription."""
    meeting = await ingest.register(
        group_id=body.group_id,
        meeting_date=body.meeting_date,
        audio_path=body.audio_path,
        recorded_by=body.recorded_by,
        title=body.title,
        auto_submit=body.auto_submit,
    )
    return MeetingDetailResponse.from_record(meeting)


@router.get("", response_model=list[MeetingResponse])
async def list_meetings(
    group_id: UUID = Query(description="Group whose meetings to list"),
    repo: MeetingRepository = Depends(get_meeting_repo),
) -> list[MeetingResponse]:
    """List a group's meetings, newest first."""
    meetings = await repo.list_for_group(group_id)
    return [MeetingResponse.from_record(m) for m in meetings]


@router.get("/processing", response_model=ProcessingStatusResponse)
async def processing_status(
    group_id: UUID = Query(description="Group whose meetings to check"),
    repo: MeetingRepository = Depends(get_meeting_repo),
) -> ProcessingStatusResponse:
    """List meetings still being processed.

    Clients poll this while ``should_poll`` is true and stop once every
    meeting has reached complete or failed.
    """
    meetings = await repo.list_for_group(group_id, states=IN_PROGRESS_STATES)
    return ProcessingStatusResponse(
        meetings=[MeetingResponse.from_record(m) for m in meetings],
        should_poll=bool(meetings),
        poll_interval_seconds=POLL_INTERVAL_SECONDS,
    )


@router.get("/{meeting_id}", response_model=MeetingDetailResponse)
async def get_meeting(
    meeting_id: UUID,
    repo: MeetingRepository = Depends(get_meeting_repo),
) -> MeetingDetailResponse:
    """Get a meeting with its transcript and summary."""
    return MeetingDetailResponse.from_record(await _require_meeting(repo, meeting_id))


@router.post("/{meeting_id}/resubmit", response_model=SubmitResponse)
async def resubmit_meeting(
    meeting_id: UUID,
    pipeline: MeetingPipeline = Depends(get_pipeline),
) -> SubmitResponse:
    """Submit a pending or failed meeting for transcription again."""
    try:
        transcript_id = await pipeline.submit(meeting_id)
    except MeetingNotFoundError:
        raise HTTPException(status_code=404, detail="Meeting not found")
    except InvalidStateTransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except (StorageError, TranscriptionProviderError) as e:
        raise HTTPException(status_code=502, detail=str(e))
    except MissingAudioError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return SubmitResponse(meeting_id=meeting_id, transcript_id=transcript_id)


@router.post("/{meeting_id}/complete", response_model=MeetingDetailResponse)
async def mark_meeting_complete(
    meeting_id: UUID,
    pipeline: MeetingPipeline = Depends(get_pipeline),
) -> MeetingDetailResponse:
    """Mark a meeting complete without waiting for (or after failing) processing."""
    try:
        meeting = await pipeline.mark_complete(meeting_id)
    except MeetingNotFoundError:
        raise HTTPException(status_code=404, detail="Meeting not found")
    except InvalidStateTransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return MeetingDetailResponse.from_record(meeting)


@router.get("/{meeting_id}/action-items", response_model=list[ActionItemResponse])
async def list_action_items(
    meeting_id: UUID,
    repo: MeetingRepository = Depends(get_meeting_repo),
    action_items: ActionItemRepository = Depends(get_action_item_repo),
) -> list[ActionItemResponse]:
    """List a meeting's action items."""
    await _require_meeting(repo, meeting_id)
    items = await action_items.list_for_meeting(meeting_id)
    return [ActionItemResponse.from_item(item) for item in items]


@router.get("/{meeting_id}/highlights", response_model=list[HighlightResponse])
async def list_meeting_highlights(
    meeting_id: UUID,
    repo: MeetingRepository = Depends(get_meeting_repo),
    highlights: HighlightRepository = Depends(get_highlight_repo),
) -> list[HighlightResponse]:
    """List the highlights a meeting contributed."""
    await _require_meeting(repo, meeting_id)
    rows = await highlights.list_for_meeting(meeting_id)
    return [HighlightResponse.from_highlight(h) for h in rows]


@router.get("/{meeting_id}/speakers", response_model=SpeakersResponse)
async def get_speakers(
    meeting_id: UUID,
    service: SpeakerAttributionService = Depends(get_attribution_service),
) -> SpeakersResponse:
    """Get the speaker labels to map and the roster to map them to."""
    try:
        state = await service.load(meeting_id)
    except MeetingNotFoundError:
        raise HTTPException(status_code=404, detail="Meeting not found")
    return SpeakersResponse(
        meeting_id=state.meeting_id,
        labels=state.labels,
        members=[MemberResponse(id=m.id, name=m.name) for m in state.roster],
        transcript=state.transcript,
        resolved=state.resolved,
    )


@router.put("/{meeting_id}/speakers", response_model=MeetingDetailResponse)
async def save_speakers(
    meeting_id: UUID,
    body: SaveSpeakersRequest,
    service: SpeakerAttributionService = Depends(get_attribution_service),
) -> MeetingDetailResponse:
    """Save speaker names and rewrite the attributed transcript."""
    try:
        meeting = await service.save(meeting_id, body.mapping)
    except MeetingNotFoundError:
        raise HTTPException(status_code=404, detail="Meeting not found")
    except TranscriptNotReadyError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except UnknownMemberError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return MeetingDetailResponse.from_record(meeting)
