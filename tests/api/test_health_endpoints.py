"""Tests for health check endpoints."""

from httpx import AsyncClient

from hive_meetings.config import settings


class TestHealth:
    """Tests for /health endpoints."""

    async def test_health(self, client: AsyncClient) -> None:
        response = await client.get("/health/")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["version"] == settings.app_version

    async def test_liveness(self, client: AsyncClient) -> None:
        response = await client.get("/health/live")

        assert response.json() == {"status": "alive"}

    async def test_ready_when_fully_configured(self, client: AsyncClient, monkeypatch) -> None:
        monkeypatch.setattr(settings, "supabase_url", "https://project.storage.test")
        monkeypatch.setattr(settings, "supabase_service_role_key", "service-key")
        monkeypatch.setattr(settings, "webhook_url", None)
        monkeypatch.setattr(settings, "assemblyai_api_key", "stt-key")
        monkeypatch.setattr(settings, "anthropic_api_key", "llm-key")

        response = await client.get("/health/ready")

        data = response.json()
        assert data["checks"] == {
            "database": "ok",
            "storage": "ok",
            "transcriber": "ok",
            "summarizer": "ok",
        }
        assert data["status"] == "ready"

    async def test_not_ready_without_transcriber_key(
        self, client: AsyncClient, monkeypatch
    ) -> None:
        monkeypatch.setattr(settings, "assemblyai_api_key", None)

        response = await client.get("/health/ready")

        data = response.json()
        assert data["status"] == "not_ready"
        assert data["checks"]["transcriber"] == "not_configured"

    async def test_transcriber_needs_callback_address(
        self, client: AsyncClient, monkeypatch
    ) -> None:
        monkeypatch.setattr(settings, "assemblyai_api_key", "stt-key")
        monkeypatch.setattr(settings, "webhook_url", None)
        monkeypatch.setattr(settings, "supabase_url", None)

        response = await client.get("/health/ready")

        checks = response.json()["checks"]
        assert checks["transcriber"] == "not_configured"
        assert checks["storage"] == "not_configured"
