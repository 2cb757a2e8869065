"""FastAPI application entry point."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from hive_meetings.adapters.assemblyai_adapter import AssemblyAIAdapter
from hive_meetings.adapters.storage_adapter import StorageAdapter
from hive_meetings.api.router import api_router
from hive_meetings.attribution.speaker_resolver import SpeakerAttributionService
from hive_meetings.config import settings
from hive_meetings.db.turso import TursoClient
from hive_meetings.repositories.action_item_repo import ActionItemRepository
from hive_meetings.repositories.highlight_repo import HighlightRepository
from hive_meetings.repositories.meeting_repo import MeetingRepository
from hive_meetings.repositories.member_repo import MemberRepository
from hive_meetings.services.ingest import RecordingIngest
from hive_meetings.services.llm_client import LLMClient
from hive_meetings.services.persister import DerivedRecordPersister
from hive_meetings.services.pipeline import MeetingPipeline
from hive_meetings.services.transcription import TranscriptionSubmitter
from hive_meetings.summarization.engine import SummarizationEngine

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


async def init_repositories(app: FastAPI, db: TursoClient) -> None:
    """Create repositories, their tables, and register them in app state."""
    app.state.meeting_repo = MeetingRepository(db)
    app.state.member_repo = MemberRepository(db)
    app.state.action_item_repo = ActionItemRepository(db)
    app.state.highlight_repo = HighlightRepository(db)

    for repo in (
        app.state.meeting_repo,
        app.state.member_repo,
        app.state.action_item_repo,
        app.state.highlight_repo,
    ):
        await repo.initialize()
    logger.info("Repositories initialized")


def init_services(
    app: FastAPI,
    storage: StorageAdapter,
    transcriber: AssemblyAIAdapter,
    llm_client: LLMClient,
) -> None:
    """Wire pipeline services from repositories already in app state.

    Every collaborator is passed in explicitly so tests can substitute
    provider adapters without touching the network.
    """
    submitter = TranscriptionSubmitter(
        meeting_repo=app.state.meeting_repo,
        storage=storage,
        transcriber=transcriber,
        callback_url=settings.callback_url,
    )
    persister = DerivedRecordPersister(
        meeting_repo=app.state.meeting_repo,
        action_item_repo=app.state.action_item_repo,
        highlight_repo=app.state.highlight_repo,
    )
    app.state.pipeline = MeetingPipeline(
        meeting_repo=app.state.meeting_repo,
        member_repo=app.state.member_repo,
        transcriber=transcriber,
        submitter=submitter,
        engine=SummarizationEngine(llm_client),
        persister=persister,
    )
    app.state.ingest = RecordingIngest(
        meeting_repo=app.state.meeting_repo,
        submitter=submitter,
    )
    app.state.attribution_service = SpeakerAttributionService(
        meeting_repo=app.state.meeting_repo,
        member_repo=app.state.member_repo,
    )
    logger.info("Pipeline services initialized")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan management.

    Startup:
    - Initialize database connection and tables
    - Create provider adapters and pipeline services

    Shutdown:
    - Close provider HTTP clients and the database connection
    """
    logger.info("Starting Hive Meetings...")

    db = TursoClient()
    await db.connect()
    app.state.db = db
    logger.info(f"Database connected: {db.url}")

    await init_repositories(app, db)

    storage = StorageAdapter()
    transcriber = AssemblyAIAdapter()
    if settings.callback_url is None:
        logger.warning("No webhook URL configured; transcripts will not call back")
    init_services(app, storage, transcriber, LLMClient())

    yield

    logger.info("Shutting down Hive Meetings...")
    await storage.aclose()
    await transcriber.aclose()
    await db.close()
    logger.info("Database connection closed")


app = FastAPI(
    title=settings.app_name,
    description="Meeting recording transcription and summarization",
    version=settings.app_version,
    lifespan=lifespan,
)

app.include_router(api_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "hive_meetings.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
