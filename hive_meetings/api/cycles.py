"""Subject cycle highlight endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request

from hive_meetings.api.schemas import HighlightResponse
from hive_meetings.repositories.highlight_repo import HighlightRepository

router = APIRouter(prefix="/cycles", tags=["cycles"])


def get_highlight_repo(request: Request) -> HighlightRepository:
    """Dependency to get HighlightRepository from app state."""
    return request.app.state.highlight_repo


@router.get("/{cycle_id}/highlights", response_model=list[HighlightResponse])
async def list_cycle_highlights(
    cycle_id: UUID,
    repo: HighlightRepository = Depends(get_highlight_repo),
) -> list[HighlightResponse]:
    """List every highlight recorded for a cycle, grouped by meeting."""
    highlights = await repo.list_for_cycle(cycle_id)
    return [HighlightResponse.from_highlight(h) for h in highlights]
