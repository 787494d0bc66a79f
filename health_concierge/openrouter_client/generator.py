"""Text generation facade used by the concierge components.

Components depend on :class:`TextGenerator` rather than on OpenRouter
directly so that the decision logic can run against scripted fakes.
"""

from abc import ABC, abstractmethod
from functools import lru_cache
from typing import Optional

from ..config import Settings, get_settings
from ..errors import GenerationError
from ..logging_config import get_logger
from .client import request_chat_completion

logger = get_logger(__name__)


class TextGenerator(ABC):
    """Interface for the generative text service."""

    @abstractmethod
    async def generate(
        self,
        prompt: str,
        system: Optional[str] = None,
        json_response: bool = False,
        model: Optional[str] = None,
    ) -> str:
        """Return the model's text for ``prompt``.

        Raises GenerationError when no usable text is produced.
        """


class OpenRouterTextGenerator(TextGenerator):
    """TextGenerator backed by OpenRouter chat completions."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.api_key = self.settings.openrouter_api_key
        self.default_model = self.settings.specialist_model

    async def generate(
        self,
        prompt: str,
        system: Optional[str] = None,
        json_response: bool = False,
        model: Optional[str] = None,
    ) -> str:
        if not self.api_key:
            raise GenerationError("OpenRouter API key not configured. Set OPENROUTER_API_KEY environment variable.")

        try:
            response = await request_chat_completion(
                model=model or self.default_model,
                messages=[{"role": "user", "content": prompt}],
                api_key=self.api_key,
                system=system,
                response_format={"type": "json_object"} if json_response else None,
                temperature=0.3 if json_response else 0.7,
                timeout=self.settings.llm_timeout,
                max_retries=self.settings.llm_max_retries,
            )
        except Exception as e:
            raise GenerationError(f"OpenRouter request failed: {e}") from e

        assistant_message = (response.get("choices") or [{}])[0].get("message") or {}
        content = (assistant_message.get("content") or "").strip()

        if json_response:
            content = strip_code_fences(content)

        if not content:
            raise GenerationError("Empty response from LLM")

        return content


def strip_code_fences(text: str) -> str:
    """Remove a ```json ... ``` wrapper some models put around JSON output."""
    stripped = text.strip()
    if stripped.startswith("```") and stripped.endswith("```"):
        stripped = stripped[3:-3]
        if stripped.lower().startswith("json"):
            stripped = stripped[4:]
    return stripped.strip()


@lru_cache(maxsize=1)
def get_text_generator() -> TextGenerator:
    """Get the process-wide text generator."""
    return OpenRouterTextGenerator()
