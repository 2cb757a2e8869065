"""API router aggregation."""

from fastapi import APIRouter

from hive_meetings.api.action_items import router as action_items_router
from hive_meetings.api.cycles import router as cycles_router
from hive_meetings.api.health import router as health_router
from hive_meetings.api.meetings import router as meetings_router
from hive_meetings.api.transcribe import router as transcribe_router

api_router = APIRouter()
api_router.include_router(health_router)
# Submission requests and transcriber webhooks share one endpoint
api_router.include_router(transcribe_router)
api_router.include_router(meetings_router)
api_router.include_router(action_items_router)
api_router.include_router(cycles_router)
