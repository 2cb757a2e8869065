"""Inbound callback payload shapes.

The transcribe endpoint receives two kinds of JSON body: a request from
the app to start transcribing a meeting, and the transcriber's webhook
reporting that a job finished (or errored).
"""

from typing import Any, Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, ValidationError


class UnrecognizedCallbackError(ValueError):
    """Raised when a callback body matches none of the known shapes."""

    pass


class SubmissionRequest(BaseModel):
    """Start transcription for a meeting."""

    model_config = ConfigDict(extra="ignore")

    meeting_id: UUID


class CompletionNotice(BaseModel):
    """Transcriber webhook: job finished successfully."""

    model_config = ConfigDict(extra="ignore")

    transcript_id: str
    status: Literal["completed"]


class ProviderErrorNotice(BaseModel):
    """Transcriber webhook: job failed on the provider side."""

    model_config = ConfigDict(extra="ignore")

    transcript_id: str
    status: Literal["error"]


Callback = SubmissionRequest | CompletionNotice | ProviderErrorNotice


def parse_callback(payload: Any) -> Callback:
    """Classify a callback body.

    A body with ``status`` is a provider webhook; otherwise a body with
    ``meeting_id`` is a submission request.

    Args:
        payload: Decoded JSON body

    Returns:
        The matching callback model

    Raises:
        UnrecognizedCallbackError: If the body matches no known shape
    """
    if not isinstance(payload, dict):
        raise UnrecognizedCallbackError("Callback body must be a JSON object")

    status = payload.get("status")
    try:
        if status == "completed":
            return CompletionNotice.model_validate(payload)
        if status == "error":
            return ProviderErrorNotice.model_validate(payload)
        if payload.get("meeting_id") is not None:
            return SubmissionRequest.model_validate(payload)
    except ValidationError as e:
        raise UnrecognizedCallbackError(f"Invalid callback body: {e}") from e

    raise UnrecognizedCallbackError("Invalid request")
