"""Supabase Storage adapter for signed recording URLs.

The transcriber downloads audio itself, so it needs a short-lived signed
URL for the private recordings bucket. Signing is an idempotent read and
retries on transient transport errors.
"""

from urllib.parse import quote

import httpx
import structlog
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from hive_meetings.config import settings

logger = structlog.get_logger()


class StorageError(Exception):
    """Raised when a signed URL cannot be issued."""

    pass


class StorageAdapter:
    """Issues signed read URLs for objects in a storage bucket."""

    def __init__(
        self,
        base_url: str | None = None,
        service_key: str | None = None,
        bucket: str | None = None,
        client: httpx.AsyncClient | None = None,
        read_attempts: int | None = None,
    ):
        """Initialize adapter.

        Args:
            base_url: Supabase project URL. Falls back to settings.
            service_key: Service role key. Falls back to settings.
            bucket: Bucket holding recordings. Falls back to settings.
            client: Optional httpx client for dependency injection
            read_attempts: Attempts for signing requests
        """
        self._base_url = (base_url or settings.supabase_url or "").rstrip("/")
        self._service_key = service_key or settings.supabase_service_role_key
        self._bucket = bucket or settings.recordings_bucket
        self._client = client
        self._read_attempts = read_attempts or settings.provider_read_retries

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if not self._base_url or not self._service_key:
            raise StorageError(
                "Storage not configured. Set SUPABASE_URL and "
                "SUPABASE_SERVICE_ROLE_KEY env vars."
            )
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=settings.provider_timeout_seconds,
            )
        return self._client

    async def create_signed_url(self, path: str, expires_in: int | None = None) -> str:
        """Create a time-limited read URL for an object.

        Args:
            path: Object path inside the bucket
            expires_in: Lifetime in seconds (defaults to settings)

        Returns:
            Absolute signed URL

        Raises:
            StorageError: If signing fails
        """
        client = self._get_client()
        ttl = expires_in or settings.signed_url_ttl_seconds
        endpoint = (
            f"{self._base_url}/storage/v1/object/sign/"
            f"{quote(self._bucket)}/{quote(path.lstrip('/'))}"
        )

        @retry(
            stop=stop_after_attempt(self._read_attempts),
            wait=wait_exponential(multiplier=0.5, min=0.5, max=8),
            retry=retry_if_exception_type(httpx.TransportError),
            reraise=True,
        )
        async def sign() -> httpx.Response:
            return await client.post(
                endpoint,
                json={"expiresIn": ttl},
                headers={
                    "Authorization": f"Bearer {self._service_key}",
                    "apikey": self._service_key or "",
                },
            )

        try:
            response = await sign()
            response.raise_for_status()
            signed_path = response.json().get("signedURL")
        except httpx.HTTPStatusError as e:
            raise StorageError(
                f"Could not sign '{path}': {e.response.status_code} {e.response.text}"
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            raise StorageError(f"Could not sign '{path}': {e}") from e

        if not signed_path:
            raise StorageError(f"Could not get signed URL for '{path}'")

        logger.debug("signed url issued", path=path, ttl=ttl)
        return f"{self._base_url}/storage/v1{signed_path}"

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
