"""In-memory storage that also writes chat artifacts through to Supabase.

Reads are always served from memory. A failed write is logged and the
in-memory copy stays authoritative.
"""

from typing import Any, Dict

from supabase import Client

from ...logging_config import get_logger
from ...models.chat import ChatMessage
from ...models.health import EmergencyRecord, SessionContext
from ..supabase_client import CHAT_MESSAGES_TABLE, EMERGENCY_EVENTS_TABLE, SESSION_CONTEXT_TABLE
from .memory_store import InMemoryStorage

logger = get_logger(__name__)


class SupabaseStorage(InMemoryStorage):

    def __init__(self, client: Client, seed: bool = True):
        super().__init__(seed=seed)
        self.client = client

    def _write(self, table: str, data: Dict[str, Any]) -> None:
        try:
            self.client.table(table).insert(data).execute()
        except Exception as e:
            logger.error(f"Failed to write to {table}: {e}")

    async def add_chat_message(self, message: ChatMessage) -> ChatMessage:
        stored = await super().add_chat_message(message)
        self._write(CHAT_MESSAGES_TABLE, {
            "id": stored.id,
            "user_id": stored.user_id,
            "session_id": stored.session_id,
            "sender_id": stored.sender_id,
            "sender_name": stored.sender_name,
            "message": stored.message,
            "timestamp": stored.timestamp,
            "date": stored.date,
            "is_from_user": stored.is_from_user,
        })
        return stored

    async def add_session_context(self, context: SessionContext) -> SessionContext:
        created = await super().add_session_context(context)
        self._write(SESSION_CONTEXT_TABLE, created.model_dump())
        return created

    async def add_emergency_record(self, record: EmergencyRecord) -> EmergencyRecord:
        created = await super().add_emergency_record(record)
        self._write(EMERGENCY_EVENTS_TABLE, created.model_dump())
        logger.info(f"🚨 Emergency event {created.id} persisted for user {created.user_id}")
        return created
