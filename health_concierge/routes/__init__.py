"""API routes for the health concierge."""

from fastapi import APIRouter

from .chat import router as chat_router
from .records import router as records_router
from .team import router as team_router

api_router = APIRouter(prefix="/api")

api_router.include_router(chat_router)
api_router.include_router(team_router)
api_router.include_router(records_router)

__all__ = ["api_router"]
