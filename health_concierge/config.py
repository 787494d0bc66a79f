"""Configuration management for the Health Concierge server."""

import os
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field


def _load_env_file() -> None:
    """Load .env from the project root if present."""
    env_path = Path(__file__).parent.parent / ".env"
    if not env_path.is_file():
        return
    try:
        for line in env_path.read_text(encoding="utf-8").splitlines():
            stripped = line.strip()
            if stripped and not stripped.startswith("#") and "=" in stripped:
                key, value = stripped.split("=", 1)
                key, value = key.strip(), value.strip().strip("'\"")
                if key and value and key not in os.environ:
                    os.environ[key] = value
    except OSError:
        pass


_load_env_file()


DEFAULT_APP_NAME = "Health Concierge Server"
DEFAULT_APP_VERSION = "1.0.0"
DEFAULT_EMERGENCY_NUMBER = "995"


def _env_int(name: str, fallback: int) -> int:
    try:
        return int(os.getenv(name, str(fallback)))
    except (TypeError, ValueError):
        return fallback


def _env_float(name: str, fallback: float) -> float:
    try:
        return float(os.getenv(name, str(fallback)))
    except (TypeError, ValueError):
        return fallback


class Settings(BaseModel):
    """Application settings with environment fallbacks."""

    # App metadata
    app_name: str = Field(default=DEFAULT_APP_NAME)
    app_version: str = Field(default=DEFAULT_APP_VERSION)

    # Server runtime
    server_host: str = Field(default_factory=lambda: os.getenv("HEALTH_CONCIERGE_HOST", "0.0.0.0"))
    server_port: int = Field(default_factory=lambda: _env_int("HEALTH_CONCIERGE_PORT", 8001))

    # LLM model selection
    specialist_model: str = Field(default_factory=lambda: os.getenv("HEALTH_CONCIERGE_SPECIALIST_MODEL", "google/gemini-2.5-flash"))
    emergency_model: str = Field(default_factory=lambda: os.getenv("HEALTH_CONCIERGE_EMERGENCY_MODEL", "google/gemini-2.5-flash"))
    memory_model: str = Field(default_factory=lambda: os.getenv("HEALTH_CONCIERGE_MEMORY_MODEL", "google/gemini-2.5-flash"))
    summarizer_model: str = Field(default_factory=lambda: os.getenv("HEALTH_CONCIERGE_SUMMARIZER_MODEL", "google/gemini-2.5-flash"))

    # LLM transport
    openrouter_api_key: Optional[str] = Field(default_factory=lambda: os.getenv("OPENROUTER_API_KEY"))
    llm_timeout: float = Field(default_factory=lambda: _env_float("HEALTH_CONCIERGE_LLM_TIMEOUT", 60.0))
    llm_max_retries: int = Field(default_factory=lambda: _env_int("HEALTH_CONCIERGE_LLM_MAX_RETRIES", 0))

    # Supabase database
    supabase_url: Optional[str] = Field(default_factory=lambda: os.getenv("SUPABASE_URL"))
    supabase_key: Optional[str] = Field(default_factory=lambda: os.getenv("SUPABASE_KEY"))

    # HTTP behaviour
    cors_allow_origins_raw: str = Field(default_factory=lambda: os.getenv("HEALTH_CONCIERGE_CORS_ALLOW_ORIGINS", "http://localhost:5000,http://127.0.0.1:5000,http://localhost:3000"))
    enable_docs: bool = Field(default_factory=lambda: os.getenv("HEALTH_CONCIERGE_ENABLE_DOCS", "1") != "0")
    docs_url: Optional[str] = Field(default_factory=lambda: os.getenv("HEALTH_CONCIERGE_DOCS_URL", "/docs"))

    # Emergency handling
    emergency_number: str = Field(default=DEFAULT_EMERGENCY_NUMBER)

    # Conversation memory controls
    context_window_days: int = Field(default=14)
    max_context_messages: int = Field(default=50)
    repetition_threshold: int = Field(default=70)
    repetition_lookback: int = Field(default=10)
    chat_history_limit: int = Field(default=20)

    @property
    def cors_allow_origins(self) -> List[str]:
        """Parse CORS origins from comma-separated string."""
        if self.cors_allow_origins_raw.strip() in {"", "*"}:
            return ["*"]
        return [origin.strip() for origin in self.cors_allow_origins_raw.split(",") if origin.strip()]

    @property
    def resolved_docs_url(self) -> Optional[str]:
        """Return documentation URL when docs are enabled."""
        return (self.docs_url or "/docs") if self.enable_docs else None

    @property
    def supabase_enabled(self) -> bool:
        """Flag indicating chat data should be written through to Supabase."""
        return bool(self.supabase_url and self.supabase_key)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
