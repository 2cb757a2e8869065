"""Application configuration using pydantic-settings pattern."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = "Hive Meetings"
    app_version: str = "0.1.0"
    app_env: str = Field(default="development")
    log_level: str = Field(default="INFO")

    # Database (Turso)
    turso_database_url: str | None = Field(default=None)
    turso_auth_token: str | None = Field(default=None)

    # Anthropic (meeting summarization)
    anthropic_api_key: str | None = Field(default=None)
    anthropic_model: str = Field(default="claude-sonnet-4-20250514")
    anthropic_max_tokens: int = Field(default=2048, gt=0)

    # AssemblyAI (diarized transcription)
    assemblyai_api_key: str | None = Field(default=None)
    assemblyai_base_url: str = Field(default="https://api.assemblyai.com/v2")

    # Supabase storage (audio recordings)
    supabase_url: str | None = Field(default=None)
    supabase_service_role_key: str | None = Field(default=None)
    recordings_bucket: str = Field(default="meeting-recordings")
    signed_url_ttl_seconds: int = Field(
        default=3600,
        gt=0,
        description="Lifetime of signed audio URLs handed to the transcriber",
    )

    # Provider callback
    webhook_url: str | None = Field(
        default=None,
        description="Public URL the transcriber calls when a job completes",
    )
    provider_timeout_seconds: float = Field(default=30.0, gt=0)
    provider_read_retries: int = Field(
        default=3,
        ge=1,
        description="Attempts for idempotent provider reads (signed URLs, fetches)",
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @property
    def callback_url(self) -> str | None:
        """Resolve the webhook URL registered with the transcriber."""
        if self.webhook_url:
            return self.webhook_url
        if self.supabase_url:
            return f"{self.supabase_url.rstrip('/')}/functions/v1/transcribe"
        return None


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
