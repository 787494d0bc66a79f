"""Supabase client for persisting chat history and decision artifacts."""

from functools import lru_cache
from typing import Optional

from supabase import create_client, Client

from ..config import get_settings
from ..logging_config import get_logger

logger = get_logger(__name__)

CHAT_MESSAGES_TABLE = "chat_messages"
SESSION_CONTEXT_TABLE = "session_context"
EMERGENCY_EVENTS_TABLE = "emergency_events"


@lru_cache(maxsize=1)
def get_supabase_client() -> Optional[Client]:
    """Get Supabase client instance, or None when credentials are missing."""
    settings = get_settings()

    if not settings.supabase_enabled:
        logger.info("Supabase credentials not configured, using in-memory storage only")
        return None

    try:
        client = create_client(settings.supabase_url, settings.supabase_key)
        logger.info("Supabase client initialized successfully")
        return client
    except Exception as e:
        logger.error(f"Failed to initialize Supabase client: {e}")
        return None


def verify_tables(client: Client) -> bool:
    """Check that the tables written by the concierge are reachable."""
    for table in (CHAT_MESSAGES_TABLE, SESSION_CONTEXT_TABLE, EMERGENCY_EVENTS_TABLE):
        try:
            client.table(table).select('id').limit(1).execute()
        except Exception as e:
            logger.error(f"Supabase table '{table}' not reachable: {e}")
            return False
    logger.info("Database tables verified")
    return True
