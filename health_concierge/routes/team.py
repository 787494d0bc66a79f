"""Team roster and scripted history routes."""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..logging_config import get_logger
from ..models.chat import Conversation, TeamMember
from ..services.storage import Storage, get_storage

logger = get_logger(__name__)

router = APIRouter(tags=["team"])


@router.get("/team-members", response_model=List[TeamMember])
async def get_team_members(storage: Storage = Depends(get_storage)) -> List[TeamMember]:
    try:
        return await storage.get_team_members()
    except Exception as e:
        logger.error(f"Error getting team members: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch team members")


@router.get("/conversations", response_model=List[Conversation])
async def get_conversations(storage: Storage = Depends(get_storage)) -> List[Conversation]:
    """Scripted member history, oldest first."""
    try:
        return await storage.get_conversations()
    except Exception as e:
        logger.error(f"Error getting conversations: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch conversations")


@router.get("/conversations/search", response_model=List[Conversation])
async def search_conversations(
    q: Optional[str] = Query(None),
    storage: Storage = Depends(get_storage),
) -> List[Conversation]:
    if not q:
        raise HTTPException(status_code=400, detail="Search query is required")

    try:
        return await storage.search_conversations(q)
    except Exception as e:
        logger.error(f"Error searching conversations: {e}")
        raise HTTPException(status_code=500, detail="Failed to search conversations")


__all__ = ["router"]
