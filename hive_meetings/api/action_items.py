"""Action item endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel

from hive_meetings.api.schemas import ActionItemResponse
from hive_meetings.repositories.action_item_repo import ActionItemRepository

router = APIRouter(prefix="/action-items", tags=["action-items"])


class UpdateActionItemRequest(BaseModel):
    """Completion toggle."""

    completed: bool


def get_action_item_repo(request: Request) -> ActionItemRepository:
    """Dependency to get ActionItemRepository from app state."""
    return request.app.state.action_item_repo


@router.patch("/{item_id}", response_model=ActionItemResponse)
async def update_action_item(
    item_id: UUID,
    body: UpdateActionItemRequest,
    repo: ActionItemRepository = Depends(get_action_item_repo),
) -> ActionItemResponse:
    """Mark an action item complete or reopen it."""
    item = await repo.set_completed(item_id, body.completed)
    if item is None:
        raise HTTPException(status_code=404, detail="Action item not found")
    return ActionItemResponse.from_item(item)
