"""Storage backends for chat history and member records."""

from functools import lru_cache

from ...config import get_settings
from ...logging_config import get_logger
from .base import Storage
from .memory_store import InMemoryStorage, apply_updates
from .seed_data import DEFAULT_USER_ID

logger = get_logger(__name__)


@lru_cache(maxsize=1)
def get_storage() -> Storage:
    """Return the process-wide storage backend."""
    if get_settings().supabase_enabled:
        from ..supabase_client import get_supabase_client, verify_tables
        from .supabase_store import SupabaseStorage

        client = get_supabase_client()
        if client is not None and verify_tables(client):
            logger.info("Using Supabase write-through storage")
            return SupabaseStorage(client)

    logger.info("Using in-memory storage")
    return InMemoryStorage()


__all__ = ["Storage", "InMemoryStorage", "apply_updates", "get_storage", "DEFAULT_USER_ID"]
