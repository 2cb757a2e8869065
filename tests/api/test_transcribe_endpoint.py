"""Integration tests for the /transcribe endpoint."""

import json
from uuid import uuid4

from httpx import AsyncClient

from hive_meetings.adapters.assemblyai_adapter import TranscriptionProviderError
from hive_meetings.models.meeting import ProcessingState
from hive_meetings.services.llm_client import LLMClientError


class TestSubmission:
    """Submission requests from the app."""

    async def test_submit_returns_transcript_id(
        self, client: AsyncClient, pending_meeting, meeting_repo
    ) -> None:
        response = await client.post("/transcribe", json={"meeting_id": str(pending_meeting.id)})

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["transcript_id"] == "job-123"
        assert data["processing_state"] == "transcribing"

        stored = await meeting_repo.get(pending_meeting.id)
        assert stored.processing_state == ProcessingState.TRANSCRIBING

    async def test_unknown_meeting_returns_404(self, client: AsyncClient) -> None:
        response = await client.post("/transcribe", json={"meeting_id": str(uuid4())})

        assert response.status_code == 404

    async def test_provider_rejection_returns_502(
        self, client: AsyncClient, pending_meeting, mock_transcriber, meeting_repo
    ) -> None:
        mock_transcriber.submit.side_effect = TranscriptionProviderError("rejected")

        response = await client.post("/transcribe", json={"meeting_id": str(pending_meeting.id)})

        assert response.status_code == 502
        stored = await meeting_repo.get(pending_meeting.id)
        assert stored.processing_state == ProcessingState.PENDING

    async def test_meeting_without_audio_returns_400(
        self, client: AsyncClient, pending_meeting, meeting_repo
    ) -> None:
        pending_meeting.audio_path = None
        await meeting_repo.update(pending_meeting)

        response = await client.post("/transcribe", json={"meeting_id": str(pending_meeting.id)})

        assert response.status_code == 400

    async def test_already_submitted_returns_409(
        self, client: AsyncClient, pending_meeting
    ) -> None:
        body = {"meeting_id": str(pending_meeting.id)}
        await client.post("/transcribe", json=body)

        response = await client.post("/transcribe", json=body)

        assert response.status_code == 409


class TestWebhook:
    """Completion callbacks from the transcriber."""

    async def test_completion_processes_meeting(
        self, client: AsyncClient, pending_meeting, active_cycle, meeting_repo
    ) -> None:
        await client.post("/transcribe", json={"meeting_id": str(pending_meeting.id)})

        response = await client.post(
            "/transcribe", json={"transcript_id": "job-123", "status": "completed"}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["meeting_id"] == str(pending_meeting.id)
        assert data["processing_state"] == "complete"
        assert data["action_item_count"] == 1
        assert data["highlight_count"] == 2

        stored = await meeting_repo.get(pending_meeting.id)
        assert stored.processing_state == ProcessingState.COMPLETE

    async def test_unknown_job_returns_404(
        self, client: AsyncClient, mock_transcriber
    ) -> None:
        response = await client.post(
            "/transcribe", json={"transcript_id": "nope", "status": "completed"}
        )

        assert response.status_code == 404
        mock_transcriber.fetch.assert_not_awaited()

    async def test_processing_error_marks_failed(
        self, client: AsyncClient, pending_meeting, meeting_repo, mock_llm_client
    ) -> None:
        mock_llm_client.complete.side_effect = LLMClientError("overloaded")
        await client.post("/transcribe", json={"meeting_id": str(pending_meeting.id)})

        response = await client.post(
            "/transcribe", json={"transcript_id": "job-123", "status": "completed"}
        )

        assert response.status_code == 502
        stored = await meeting_repo.get(pending_meeting.id)
        assert stored.processing_state == ProcessingState.FAILED

    async def test_unexpected_error_returns_500(
        self, client: AsyncClient, pending_meeting, meeting_repo, mock_llm_client
    ) -> None:
        mock_llm_client.complete.side_effect = RuntimeError("bug")
        await client.post("/transcribe", json={"meeting_id": str(pending_meeting.id)})

        response = await client.post(
            "/transcribe", json={"transcript_id": "job-123", "status": "completed"}
        )

        assert response.status_code == 500
        stored = await meeting_repo.get(pending_meeting.id)
        assert stored.processing_state == ProcessingState.FAILED

    async def test_tail_value_error_returns_500(
        self, client: AsyncClient, pending_meeting, meeting_repo, mock_llm_client
    ) -> None:
        mock_llm_client.complete.side_effect = ValueError("unexpected shape")
        await client.post("/transcribe", json={"meeting_id": str(pending_meeting.id)})

        response = await client.post(
            "/transcribe", json={"transcript_id": "job-123", "status": "completed"}
        )

        assert response.status_code == 500
        assert response.json()["detail"] == "Internal server error"
        stored = await meeting_repo.get(pending_meeting.id)
        assert stored.processing_state == ProcessingState.FAILED

    async def test_oversized_action_item_completes(
        self, client: AsyncClient, pending_meeting, meeting_repo, mock_llm_client
    ) -> None:
        mock_llm_client.complete.return_value = json.dumps(
            {"summary": "Long one.", "action_items": [{"description": "x" * 2500}]}
        )
        await client.post("/transcribe", json={"meeting_id": str(pending_meeting.id)})

        response = await client.post(
            "/transcribe", json={"transcript_id": "job-123", "status": "completed"}
        )

        assert response.status_code == 200
        assert response.json()["action_item_count"] == 1
        stored = await meeting_repo.get(pending_meeting.id)
        assert stored.processing_state == ProcessingState.COMPLETE

    async def test_provider_error_callback(
        self, client: AsyncClient, pending_meeting, meeting_repo
    ) -> None:
        await client.post("/transcribe", json={"meeting_id": str(pending_meeting.id)})

        response = await client.post(
            "/transcribe", json={"transcript_id": "job-123", "status": "error"}
        )

        assert response.status_code == 200
        assert response.json()["processing_state"] == "failed"
        stored = await meeting_repo.get(pending_meeting.id)
        assert stored.processing_state == ProcessingState.FAILED


class TestInvalidBodies:
    """Bodies matching no known callback shape."""

    async def test_unknown_shape_returns_400(self, client: AsyncClient) -> None:
        response = await client.post("/transcribe", json={"foo": "bar"})

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid request"

    async def test_non_json_returns_400(self, client: AsyncClient) -> None:
        response = await client.post(
            "/transcribe",
            content=b"not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
