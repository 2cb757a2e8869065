"""AssemblyAI adapter for diarized speech-to-text.

Submits audio for transcription with speaker labels and a completion
webhook, and fetches finished transcripts. Submission is never retried
(a retry could start a second job); fetches are idempotent reads and
retry on transient transport errors.
"""

import httpx
import structlog
from pydantic import BaseModel, ConfigDict, Field
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from hive_meetings.config import settings

logger = structlog.get_logger()

RETRIABLE_EXCEPTIONS = (httpx.TransportError,)


class TranscriptionProviderError(Exception):
    """Raised when the transcriber rejects a request or is unreachable."""

    pass


class ProviderUtterance(BaseModel):
    """One diarized segment of a finished transcript."""

    model_config = ConfigDict(extra="ignore")

    speaker: str = Field(description="Anonymous speaker label, e.g. 'A'")
    text: str = Field(description="What was said")
    start: float | None = Field(default=None, description="Start offset in ms")
    end: float | None = Field(default=None, description="End offset in ms")


class ProviderTranscript(BaseModel):
    """Transcript job as reported by the provider."""

    model_config = ConfigDict(extra="ignore")

    id: str
    status: str
    text: str | None = None
    utterances: list[ProviderUtterance] | None = None
    error: str | None = None


class AssemblyAIAdapter:
    """Async client for the AssemblyAI transcript API."""

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        client: httpx.AsyncClient | None = None,
        read_attempts: int | None = None,
    ):
        """Initialize adapter.

        Args:
            api_key: AssemblyAI API key. Falls back to settings.
            base_url: API base URL. Falls back to settings.
            client: Optional httpx client for dependency injection
            read_attempts: Attempts for transcript fetches
        """
        self._api_key = api_key or settings.assemblyai_api_key
        self._base_url = (base_url or settings.assemblyai_base_url).rstrip("/")
        self._client = client
        self._read_attempts = read_attempts or settings.provider_read_retries

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if not self._api_key:
            raise TranscriptionProviderError(
                "No AssemblyAI key. Set ASSEMBLYAI_API_KEY env var "
                "or pass api_key to constructor."
            )
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=settings.provider_timeout_seconds,
            )
        return self._client

    def _headers(self) -> dict[str, str]:
        return {"Authorization": self._api_key or ""}

    async def submit(self, audio_url: str, webhook_url: str | None) -> str:
        """Submit audio for diarized transcription.

        Args:
            audio_url: URL the provider can download the audio from
            webhook_url: Callback the provider calls on completion

        Returns:
            Provider job identifier

        Raises:
            TranscriptionProviderError: On transport or provider errors
        """
        payload: dict = {"audio_url": audio_url, "speaker_labels": True}
        if webhook_url:
            payload["webhook_url"] = webhook_url

        try:
            response = await self._get_client().post(
                f"{self._base_url}/transcript",
                json=payload,
                headers=self._headers(),
            )
            response.raise_for_status()
            job_id = response.json().get("id")
        except httpx.HTTPStatusError as e:
            raise TranscriptionProviderError(
                f"AssemblyAI rejected submission: {e.response.status_code} "
                f"{e.response.text}"
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            raise TranscriptionProviderError(f"AssemblyAI submission failed: {e}") from e

        if not job_id:
            raise TranscriptionProviderError("AssemblyAI response carried no job id")

        logger.info("transcription submitted", transcript_id=job_id)
        return job_id

    async def fetch(self, job_id: str) -> ProviderTranscript:
        """Fetch a transcript job with its utterances.

        Args:
            job_id: Provider job identifier

        Returns:
            ProviderTranscript (utterances may be None)

        Raises:
            TranscriptionProviderError: On provider errors or when retries
                are exhausted
        """
        client = self._get_client()

        @retry(
            stop=stop_after_attempt(self._read_attempts),
            wait=wait_exponential(multiplier=0.5, min=0.5, max=8),
            retry=retry_if_exception_type(RETRIABLE_EXCEPTIONS),
            reraise=True,
        )
        async def get() -> httpx.Response:
            return await client.get(
                f"{self._base_url}/transcript/{job_id}",
                headers=self._headers(),
            )

        try:
            response = await get()
            response.raise_for_status()
            return ProviderTranscript.model_validate(response.json())
        except httpx.HTTPStatusError as e:
            raise TranscriptionProviderError(
                f"AssemblyAI fetch failed: {e.response.status_code} {e.response.text}"
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            raise TranscriptionProviderError(f"AssemblyAI fetch failed: {e}") from e

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
