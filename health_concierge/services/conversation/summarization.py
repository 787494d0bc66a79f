"""Session summarization for storage."""

from typing import List, Optional, Sequence

from ...config import get_settings
from ...logging_config import get_logger
from ...models.chat import ChatMessage
from ...models.decisions import SessionSummary
from ...openrouter_client import TextGenerator, get_text_generator

logger = get_logger(__name__)

FALLBACK_TOPIC = "General health consultation"


class SessionSummarizer:
    """Condenses one chat session into a SessionSummary."""

    def __init__(self, generator: Optional[TextGenerator] = None):
        self.settings = get_settings()
        self.generator = generator or get_text_generator()
        self.model = self.settings.summarizer_model

    async def summarize_session(
        self,
        session_messages: Sequence[ChatMessage],
        session_id: str,
        user_id: str,
    ) -> SessionSummary:
        """Summarise a session; falls back to a deterministic summary when the model is unavailable."""

        transcript = "\n".join(
            f"[{msg.timestamp}] {msg.sender_name}: {msg.message}" for msg in session_messages
        )

        prompt = f"""Analyze this conversation session and create a structured summary:

SESSION MESSAGES:
{transcript}

Respond in JSON format:
{{
  "conversationSummary": "Brief summary of main discussion points",
  "keyTopics": ["topic1", "topic2"],
  "specialistsInvolved": ["specialist1", "specialist2"],
  "actionItems": ["action1", "action2"],
  "followUpNeeded": ["followup1", "followup2"]
}}"""

        try:
            text = await self.generator.generate(prompt, json_response=True, model=self.model)
            summary = SessionSummary.model_validate_json(text)
            logger.info(f"Generated session summary for {user_id}/{session_id}")
            return summary
        except Exception as e:
            logger.error(f"Session summary error for {user_id}/{session_id}: {e}")
            return self.fallback_summary(session_messages)

    @staticmethod
    def fallback_summary(session_messages: Sequence[ChatMessage]) -> SessionSummary:
        specialists: List[str] = []
        for msg in session_messages:
            if not msg.is_from_user and msg.sender_name and msg.sender_name not in specialists:
                specialists.append(msg.sender_name)

        return SessionSummary(
            conversation_summary=f"Session with {len(session_messages)} messages",
            key_topics=[FALLBACK_TOPIC],
            specialists_involved=specialists,
            action_items=[],
            follow_up_needed=[],
        )
