"""OpenRouter client and text generation facade."""

from .client import request_chat_completion
from .generator import OpenRouterTextGenerator, TextGenerator, get_text_generator

__all__ = ["request_chat_completion", "TextGenerator", "OpenRouterTextGenerator", "get_text_generator"]
