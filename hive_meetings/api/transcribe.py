"""Transcribe endpoint: submission requests and transcriber webhooks.

One URL serves both the app (``{"meeting_id": ...}`` to start a job) and
the transcriber's completion webhook (``{"status": "completed",
"transcript_id": ...}``), which is the address registered with the
provider on submission.
"""

from uuid import UUID

import structlog
from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel

from hive_meetings.adapters.assemblyai_adapter import TranscriptionProviderError
from hive_meetings.adapters.storage_adapter import StorageError
from hive_meetings.models.meeting import (
    InvalidStateTransitionError,
    MeetingNotFoundError,
)
from hive_meetings.services.callbacks import UnrecognizedCallbackError
from hive_meetings.services.llm_client import LLMClientError
from hive_meetings.services.pipeline import CallbackOutcome, MeetingPipeline
from hive_meetings.services.transcription import MissingAudioError

logger = structlog.get_logger()

router = APIRouter(tags=["transcribe"])


class TranscribeResponse(BaseModel):
    """Response for both submission and webhook callbacks."""

    success: bool = True
    transcript_id: str | None = None
    meeting_id: UUID | None = None
    processing_state: str | None = None
    action_item_count: int | None = None
    highlight_count: int | None = None


def get_pipeline(request: Request) -> MeetingPipeline:
    """Dependency to get MeetingPipeline from app state."""
    return request.app.state.pipeline


@router.post("/transcribe", response_model=TranscribeResponse, response_model_exclude_none=True)
async def transcribe(
    request: Request,
    pipeline: MeetingPipeline = Depends(get_pipeline),
) -> TranscribeResponse:
    """Start a transcription or handle a transcriber callback.

    Returns:
        TranscribeResponse: the job id for submissions, an acknowledgement
        with counts for completions

    Raises:
        HTTPException:
            - 400: Body is not a known callback shape, or meeting has no audio
            - 404: Meeting (or transcript job) not found
            - 409: Meeting is not in a state that accepts this callback
            - 502: Storage or a provider failed
            - 500: Any other processing error (meeting is marked failed)
    """
    try:
        payload = await request.json()
    except ValueError:
        raise HTTPException(status_code=400, detail="Body must be JSON")

    try:
        result = await pipeline.handle(payload)
    except UnrecognizedCallbackError:
        raise HTTPException(status_code=400, detail="Invalid request")
    except MeetingNotFoundError:
        raise HTTPException(status_code=404, detail="Meeting not found")
    except InvalidStateTransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except (StorageError, TranscriptionProviderError, LLMClientError) as e:
        raise HTTPException(status_code=502, detail=str(e))
    except MissingAudioError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("transcription error", error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")

    if result.outcome == CallbackOutcome.NOT_FOUND:
        raise HTTPException(status_code=404, detail="Meeting not found")

    if result.outcome == CallbackOutcome.SUBMITTED:
        return TranscribeResponse(
            transcript_id=result.transcript_id,
            meeting_id=result.meeting_id,
            processing_state="transcribing",
        )

    if result.outcome == CallbackOutcome.FAILED:
        return TranscribeResponse(
            meeting_id=result.meeting_id,
            processing_state="failed",
        )

    persisted = result.persisted
    return TranscribeResponse(
        meeting_id=result.meeting_id,
        processing_state="complete",
        action_item_count=len(persisted.action_items) if persisted else 0,
        highlight_count=len(persisted.highlights) if persisted else 0,
    )
