"""Tests for StorageAdapter signed URLs."""

import json

import httpx
import pytest

from hive_meetings.adapters.storage_adapter import StorageAdapter, StorageError
from hive_meetings.config import settings

BASE_URL = "https://project.storage.test"


def make_adapter(handler) -> StorageAdapter:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return StorageAdapter(
        base_url=BASE_URL,
        service_key="service-key",
        bucket="meeting-recordings",
        client=client,
        read_attempts=2,
    )


class TestCreateSignedUrl:
    """Tests for StorageAdapter.create_signed_url."""

    async def test_returns_absolute_url(self):
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(
                200,
                json={"signedURL": "/object/sign/meeting-recordings/g/a.m4a?token=abc"},
            )

        adapter = make_adapter(handler)

        url = await adapter.create_signed_url("g/a.m4a", expires_in=600)

        assert url == f"{BASE_URL}/storage/v1/object/sign/meeting-recordings/g/a.m4a?token=abc"
        [request] = requests
        assert request.url.path == "/storage/v1/object/sign/meeting-recordings/g/a.m4a"
        assert request.headers["Authorization"] == "Bearer service-key"
        assert request.headers["apikey"] == "service-key"
        assert json.loads(request.content) == {"expiresIn": 600}

    async def test_missing_object(self):
        adapter = make_adapter(lambda request: httpx.Response(400, json={"error": "not_found"}))

        with pytest.raises(StorageError, match="400"):
            await adapter.create_signed_url("g/missing.m4a")

    async def test_response_without_url(self):
        adapter = make_adapter(lambda request: httpx.Response(200, json={}))

        with pytest.raises(StorageError):
            await adapter.create_signed_url("g/a.m4a")

    async def test_retries_transport_errors(self):
        calls = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal calls
            calls += 1
            if calls == 1:
                raise httpx.ReadTimeout("slow", request=request)
            return httpx.Response(200, json={"signedURL": "/object/sign/x?token=t"})

        adapter = make_adapter(handler)

        url = await adapter.create_signed_url("x")

        assert url.endswith("/object/sign/x?token=t")
        assert calls == 2

    async def test_not_configured(self, monkeypatch):
        monkeypatch.setattr(settings, "supabase_url", None)
        monkeypatch.setattr(settings, "supabase_service_role_key", None)
        adapter = StorageAdapter()

        with pytest.raises(StorageError):
            await adapter.create_signed_url("g/a.m4a")
