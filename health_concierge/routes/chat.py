"""Chat routes for the web interface."""

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..conductor.runtime import ConciergeRuntime
from ..logging_config import get_logger
from ..models.base import CamelModel
from ..models.chat import ChatMessage, FileAttachment
from ..models.decisions import EmergencyAlert
from ..models.health import EmergencyRecord, SessionContext
from ..openrouter_client import TextGenerator, get_text_generator
from ..services.conversation import SessionSummarizer
from ..services.storage import DEFAULT_USER_ID, Storage, get_storage
from ..specialists import Specialist
from ..utils.timeparse import format_message_date, format_message_time

logger = get_logger(__name__)

router = APIRouter(tags=["chat"])

DEFAULT_SESSION_ID = "current-session"


class ChatRequest(CamelModel):
    """Chat request model."""
    message: str
    files: Optional[List[FileAttachment]] = None
    user_id: str = DEFAULT_USER_ID
    session_id: str = DEFAULT_SESSION_ID


class ChatResponse(CamelModel):
    """Chat response model."""
    user_message: ChatMessage
    ai_message: ChatMessage
    specialist: Specialist
    emergency_alert: Optional[EmergencyAlert] = None
    needs_referral: bool = False
    referred_specialist: Optional[Specialist] = None


def get_concierge_runtime(
    storage: Storage = Depends(get_storage),
    generator: TextGenerator = Depends(get_text_generator),
) -> ConciergeRuntime:
    return ConciergeRuntime(storage=storage, generator=generator)


def _file_context(files: Optional[List[FileAttachment]]) -> str:
    if not files:
        return ""
    names = ", ".join(f.original_name for f in files)
    return f"\n\n[User attached files: {names}]"


@router.post("/chat", response_model=ChatResponse)
async def send_message(
    request: ChatRequest,
    runtime: ConciergeRuntime = Depends(get_concierge_runtime),
    storage: Storage = Depends(get_storage),
    generator: TextGenerator = Depends(get_text_generator),
) -> ChatResponse:
    """Send a member message to the concierge team and store both sides of the exchange."""

    if not request.message or not request.message.strip():
        raise HTTPException(status_code=400, detail="Message is required")

    try:
        now = datetime.now()
        timestamp, date = format_message_time(now), format_message_date(now)
        query = request.message.strip() + _file_context(request.files)

        logger.info(f"🌐 WEB API: Received message from {request.user_id}/{request.session_id}")

        user_message = await storage.add_chat_message(ChatMessage(
            user_id=request.user_id,
            session_id=request.session_id,
            sender_name="You",
            sender_color="user",
            message=query,
            timestamp=timestamp,
            date=date,
            is_from_user=True,
            attachments=request.files,
        ))

        result = await runtime.execute(query, request.user_id, request.session_id)

        ai_message = await storage.add_chat_message(ChatMessage(
            user_id=request.user_id,
            session_id=request.session_id,
            sender_id=result.specialist.id.value,
            sender_name=result.specialist.name,
            sender_role=result.specialist.role,
            sender_color=result.specialist.color,
            message=result.response,
            timestamp=timestamp,
            date=date,
            is_from_user=False,
        ))

        if result.emergency_alert and result.emergency_alert.is_emergency:
            alert = result.emergency_alert
            await storage.add_emergency_record(EmergencyRecord(
                user_id=request.user_id,
                session_id=request.session_id,
                message=query,
                urgency_level=alert.urgency_level.value,
                symptoms=alert.symptoms,
                recommendations=alert.recommendations,
            ))

        await _store_session_context(storage, generator, [user_message, ai_message], request)

        logger.info(f"🌐 WEB API: {result.specialist.name} answered (referral: {result.needs_referral})")

        return ChatResponse(
            user_message=user_message,
            ai_message=ai_message,
            specialist=result.specialist,
            emergency_alert=result.emergency_alert,
            needs_referral=result.needs_referral,
            referred_specialist=result.referred_specialist,
        )

    except Exception as e:
        logger.error(f"Error processing chat message: {e}")
        raise HTTPException(status_code=500, detail="Failed to process chat message")


async def _store_session_context(
    storage: Storage,
    generator: TextGenerator,
    session_messages: List[ChatMessage],
    request: ChatRequest,
) -> None:
    try:
        summary = await SessionSummarizer(generator).summarize_session(
            session_messages, request.session_id, request.user_id
        )
        await storage.add_session_context(SessionContext(
            user_id=request.user_id,
            session_id=request.session_id,
            **summary.model_dump(),
        ))
    except Exception as e:
        logger.error(f"Session context storage error: {e}")


@router.get("/chat-messages", response_model=List[ChatMessage])
async def get_chat_messages(
    user_id: Optional[str] = Query(None, alias="userId"),
    limit: Optional[int] = Query(None, ge=1),
    storage: Storage = Depends(get_storage),
) -> List[ChatMessage]:
    """Get interactive chat history, oldest first."""

    try:
        return await storage.get_chat_messages(user_id, limit)
    except Exception as e:
        logger.error(f"Error getting chat messages: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch chat messages")


__all__ = ["router", "get_concierge_runtime"]
