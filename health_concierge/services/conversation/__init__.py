"""Conversation memory and session summarization services."""

from .memory import ConversationMemory
from .summarization import SessionSummarizer

__all__ = ["ConversationMemory", "SessionSummarizer"]
