"""Tests for callback body classification."""

from uuid import uuid4

import pytest

from hive_meetings.services.callbacks import (
    CompletionNotice,
    ProviderErrorNotice,
    SubmissionRequest,
    UnrecognizedCallbackError,
    parse_callback,
)


class TestParseCallback:
    """Tests for parse_callback."""

    def test_submission(self):
        meeting_id = uuid4()

        callback = parse_callback({"meeting_id": str(meeting_id)})

        assert isinstance(callback, SubmissionRequest)
        assert callback.meeting_id == meeting_id

    def test_completion(self):
        callback = parse_callback(
            {"transcript_id": "job-1", "status": "completed", "extra": "ignored"}
        )

        assert isinstance(callback, CompletionNotice)
        assert callback.transcript_id == "job-1"

    def test_provider_error(self):
        callback = parse_callback({"transcript_id": "job-1", "status": "error"})

        assert isinstance(callback, ProviderErrorNotice)

    @pytest.mark.parametrize(
        "payload",
        [
            {},
            {"status": "queued", "transcript_id": "job-1"},
            {"status": "completed"},
            {"meeting_id": "not-a-uuid"},
            {"meeting_id": None},
            ["meeting_id"],
            "completed",
        ],
    )
    def test_unrecognized(self, payload):
        with pytest.raises(UnrecognizedCallbackError):
            parse_callback(payload)
