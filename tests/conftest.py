"""Pytest configuration and fixtures."""

import json
from collections.abc import AsyncIterator
from datetime import date
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock
from uuid import UUID

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from hive_meetings.adapters.assemblyai_adapter import (
    AssemblyAIAdapter,
    ProviderTranscript,
    ProviderUtterance,
)
from hive_meetings.adapters.storage_adapter import StorageAdapter
from hive_meetings.api.router import api_router
from hive_meetings.db.turso import TursoClient
from hive_meetings.main import init_repositories, init_services
from hive_meetings.models.highlight import CycleStatus, SubjectCycle
from hive_meetings.models.meeting import MeetingRecord
from hive_meetings.models.member import Member
from hive_meetings.repositories.action_item_repo import ActionItemRepository
from hive_meetings.repositories.highlight_repo import HighlightRepository
from hive_meetings.repositories.meeting_repo import MeetingRepository
from hive_meetings.repositories.member_repo import MemberRepository
from hive_meetings.services.llm_client import LLMClient

GROUP_ID = UUID("11111111-1111-1111-1111-111111111111")
ALICE = Member(id=UUID("aaaaaaaa-0000-0000-0000-000000000001"), name="Alice Smith")
BOB = Member(id=UUID("bbbbbbbb-0000-0000-0000-000000000002"), name="Bob Jones")

JOB_ID = "job-123"

SUMMARY_JSON = {
    "summary": "The group reviewed Alice's garden project.",
    "action_items": [
        {
            "description": "Send the seed order",
            "assigned_to_name": "alice",
            "due_date": "2025-03-14",
        }
    ],
    "wishes_surfaced": [{"person_name": "Bob Jones", "description": "A ride to the airport"}],
    "queen_bee_highlights": ["Raised beds are built", "Compost delivery booked"],
}


@pytest.fixture
def group_id() -> UUID:
    """Group that owns every test meeting."""
    return GROUP_ID


@pytest.fixture
def alice() -> Member:
    return ALICE


@pytest.fixture
def bob() -> Member:
    return BOB


@pytest.fixture
def summary_payload() -> dict:
    """Summary JSON the mocked summarizer answers with."""
    return SUMMARY_JSON


@pytest.fixture
async def db_client(tmp_path: Path) -> AsyncIterator[TursoClient]:
    """Create a temp file database client for testing."""
    db_path = tmp_path / "test_meetings.db"
    client = TursoClient(url=f"file:{db_path}")
    await client.connect()
    yield client
    await client.close()


@pytest.fixture
async def meeting_repo(db_client: TursoClient) -> MeetingRepository:
    """MeetingRepository with initialized tables."""
    repo = MeetingRepository(db_client)
    await repo.initialize()
    return repo


@pytest.fixture
async def member_repo(db_client: TursoClient) -> MemberRepository:
    """MemberRepository seeded with Alice and Bob in the test group."""
    repo = MemberRepository(db_client)
    await repo.initialize()
    await repo.add_member(ALICE, GROUP_ID)
    await repo.add_member(BOB, GROUP_ID)
    return repo


@pytest.fixture
async def action_item_repo(db_client: TursoClient) -> ActionItemRepository:
    """ActionItemRepository with initialized tables."""
    repo = ActionItemRepository(db_client)
    await repo.initialize()
    return repo


@pytest.fixture
async def highlight_repo(db_client: TursoClient) -> HighlightRepository:
    """HighlightRepository with initialized tables."""
    repo = HighlightRepository(db_client)
    await repo.initialize()
    return repo


@pytest.fixture
async def active_cycle(highlight_repo: HighlightRepository) -> SubjectCycle:
    """An active subject cycle for the test group, held by Alice."""
    return await highlight_repo.create_cycle(
        SubjectCycle(
            group_id=GROUP_ID,
            holder_id=ALICE.id,
            period="2025-03",
            title="Community garden",
            status=CycleStatus.ACTIVE,
        )
    )


@pytest.fixture
async def pending_meeting(meeting_repo: MeetingRepository) -> MeetingRecord:
    """A freshly recorded meeting in pending state."""
    return await meeting_repo.create(
        MeetingRecord(
            group_id=GROUP_ID,
            meeting_date=date(2025, 3, 7),
            audio_path="group-1/2025-03-07.m4a",
            recorded_by=ALICE.id,
        )
    )


@pytest.fixture
def provider_transcript() -> ProviderTranscript:
    """Finished transcript with two diarized speakers."""
    return ProviderTranscript(
        id=JOB_ID,
        status="completed",
        text="Hi everyone. The beds are built.",
        utterances=[
            ProviderUtterance(speaker="A", text="Hi everyone.", start=0, end=900),
            ProviderUtterance(speaker="B", text="The beds are built.", start=1000, end=2400),
        ],
    )


@pytest.fixture
def mock_storage() -> StorageAdapter:
    """Storage adapter that signs every path."""
    storage = MagicMock(spec=StorageAdapter)
    storage.create_signed_url = AsyncMock(return_value="https://storage.test/signed/audio")
    return storage


@pytest.fixture
def mock_transcriber(provider_transcript: ProviderTranscript) -> AssemblyAIAdapter:
    """Transcriber that accepts jobs and returns the two-speaker transcript."""
    transcriber = MagicMock(spec=AssemblyAIAdapter)
    transcriber.submit = AsyncMock(return_value=JOB_ID)
    transcriber.fetch = AsyncMock(return_value=provider_transcript)
    return transcriber


@pytest.fixture
def mock_llm_client() -> LLMClient:
    """LLM client answering with a valid summary JSON object."""
    client = MagicMock(spec=LLMClient)
    client.complete = AsyncMock(return_value=json.dumps(SUMMARY_JSON))
    return client


@pytest.fixture
async def app(
    db_client: TursoClient,
    member_repo: MemberRepository,
    mock_storage: StorageAdapter,
    mock_transcriber: AssemblyAIAdapter,
    mock_llm_client: LLMClient,
) -> FastAPI:
    """Test application wired to the temp database and mock providers."""
    test_app = FastAPI()
    test_app.state.db = db_client
    await init_repositories(test_app, db_client)
    init_services(test_app, mock_storage, mock_transcriber, mock_llm_client)
    test_app.include_router(api_router)
    return test_app


@pytest.fixture
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    """Create async test client for the wired application."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
