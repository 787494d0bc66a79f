"""Short-term conversational memory: recency window, repetition checks, context summaries."""

import json
from datetime import datetime, timedelta
from typing import Any, List, Optional, Sequence

from ...config import get_settings
from ...logging_config import get_logger
from ...models.chat import ChatMessage
from ...models.decisions import RepetitionCheck, RepetitionVerdict
from ...models.health import MedicalHistory, UserProfile
from ...openrouter_client import TextGenerator, get_text_generator
from ...specialists.registry import Specialist
from ...utils.timeparse import chronological_key, parse_message_date

logger = get_logger(__name__)

# Leading characters of the matched question used to find it again in history
MATCH_PREFIX_LENGTH = 50


def _dump(value: Any) -> Any:
    if hasattr(value, "model_dump"):
        return value.model_dump(mode="json", by_alias=True)
    return value


class ConversationMemory:
    """Works over an externally supplied message history; holds no messages itself."""

    def __init__(
        self,
        generator: Optional[TextGenerator] = None,
        window_days: Optional[int] = None,
        max_messages: Optional[int] = None,
        repetition_threshold: Optional[int] = None,
        repetition_lookback: Optional[int] = None,
    ):
        settings = get_settings()
        self.generator = generator or get_text_generator()
        self.model = settings.memory_model
        self.window_days = window_days if window_days is not None else settings.context_window_days
        self.max_messages = max_messages if max_messages is not None else settings.max_context_messages
        self.repetition_threshold = (
            repetition_threshold if repetition_threshold is not None else settings.repetition_threshold
        )
        self.repetition_lookback = (
            repetition_lookback if repetition_lookback is not None else settings.repetition_lookback
        )

    def recent(self, messages: Sequence[ChatMessage], now: Optional[datetime] = None) -> List[ChatMessage]:
        """Messages from the trailing window, oldest first, capped to the most recent ones."""

        if not messages:
            return []

        cutoff = ((now or datetime.now()) - timedelta(days=self.window_days)).date()

        in_window = []
        for msg in messages:
            msg_date = parse_message_date(msg.date)
            if msg_date is not None and msg_date >= cutoff:
                in_window.append(msg)

        in_window.sort(key=lambda m: chronological_key(m.date, m.timestamp))
        return in_window[-self.max_messages:] if self.max_messages > 0 else []

    async def check_repetition(self, new_message: str, recent_messages: Sequence[ChatMessage]) -> RepetitionCheck:
        """Ask the comparison model whether ``new_message`` repeats a recent question."""

        user_messages = [msg.message for msg in recent_messages if msg.is_from_user][-self.repetition_lookback:]

        if not user_messages:
            return RepetitionCheck(is_repetitive=False, similarity=0)

        try:
            text = await self.generator.generate(
                self._build_similarity_prompt(new_message, user_messages),
                json_response=True,
                model=self.model,
            )
            verdict = RepetitionVerdict.model_validate_json(text)
        except Exception as e:
            logger.error(f"Repetitive question check error: {e}")
            return RepetitionCheck(is_repetitive=False, similarity=0)

        is_repetitive = verdict.is_repetitive and verdict.similarity > self.repetition_threshold
        previous_response = None

        if is_repetitive and verdict.most_similar_question:
            previous_response = self._find_previous_response(verdict.most_similar_question, recent_messages)

        logger.debug(f"Repetition check: repetitive={is_repetitive}, similarity={verdict.similarity}")
        return RepetitionCheck(
            is_repetitive=is_repetitive,
            previous_response=previous_response,
            similarity=verdict.similarity,
        )

    async def adaptive_response(
        self,
        new_message: str,
        context_summary: str,
        repetition: RepetitionCheck,
        specialist: Specialist,
    ) -> str:
        """Reference the earlier answer for repeated questions, else hand back the full context."""

        if repetition.is_repetitive and repetition.previous_response:
            return await self._generate_reference_response(new_message, repetition.previous_response, specialist)

        return context_summary

    async def generate_context_summary(
        self,
        user_id: str,
        chat_messages: Sequence[ChatMessage],
        user_profile: Optional[UserProfile] = None,
        medical_history: Optional[Sequence[MedicalHistory]] = None,
        now: Optional[datetime] = None,
    ) -> str:
        """Summarise profile, history and recent chat into patient context for a specialist."""

        recent_messages = self.recent(chat_messages, now=now)
        profile_text = json.dumps(_dump(user_profile), indent=2) if user_profile else "No profile available"
        history_text = (
            json.dumps([_dump(r) for r in list(medical_history)[:10]], indent=2)
            if medical_history
            else "No medical history available"
        )
        transcript = "\n".join(
            f"[{msg.timestamp}] {msg.sender_name} ({msg.sender_role or 'User'}): {msg.message}"
            for msg in recent_messages
        )

        prompt = f"""Generate a comprehensive medical context summary for continuing patient care:

PATIENT PROFILE:
{profile_text}

MEDICAL HISTORY:
{history_text}

RECENT CONVERSATION MESSAGES:
{transcript}

Create a concise summary including:
1. Current health concerns and symptoms
2. Ongoing treatments and medications
3. Key recommendations made by specialists
4. Pending follow-ups or tests
5. Travel plans or lifestyle factors
6. Any risk factors or alerts
7. Conversation patterns and compliance

Keep summary under 500 words but include all medically relevant details."""

        try:
            return await self.generator.generate(prompt, model=self.model)
        except Exception as e:
            logger.error(f"Context summary generation error for {user_id}: {e}")
            name = user_profile.name if user_profile else "Unknown"
            return f"Context: Recent conversation with {len(chat_messages)} messages. User profile: {name}"

    def _find_previous_response(self, question: str, messages: Sequence[ChatMessage]) -> Optional[str]:
        """Specialist reply that followed the first user message containing ``question``'s prefix."""

        prefix = question[:MATCH_PREFIX_LENGTH]
        for index, msg in enumerate(messages):
            if msg.is_from_user and prefix in msg.message:
                if index + 1 < len(messages) and not messages[index + 1].is_from_user:
                    return messages[index + 1].message
                return None
        return None

    async def _generate_reference_response(self, new_message: str, previous_response: str, specialist: Specialist) -> str:
        prompt = f"""The user is asking a similar question to one answered recently. Provide an updated response that:
1. References the previous answer
2. Adds any new relevant information
3. Avoids exact repetition
4. Maintains the specialist's voice

SPECIALIST: {specialist.name} ({specialist.role})
NEW QUESTION: "{new_message}"
PREVIOUS RESPONSE: "{previous_response}"

Create a response that acknowledges the previous discussion and provides updated or clarified information."""

        try:
            text = await self.generator.generate(prompt, model=self.model)
            return f"[Referencing our previous discussion] {text}"
        except Exception as e:
            logger.error(f"Reference response generation error: {e}")
            return f"As I mentioned before: {previous_response[:200]}..."

    @staticmethod
    def _build_similarity_prompt(new_message: str, user_messages: List[str]) -> str:
        numbered = "\n".join(f"{idx}. {msg}" for idx, msg in enumerate(user_messages, start=1))
        return f"""Compare this new question with recent questions to detect repetition:

NEW QUESTION: "{new_message}"

RECENT QUESTIONS:
{numbered}

Respond in JSON format:
{{
  "isRepetitive": boolean,
  "mostSimilarQuestion": "question text or null",
  "similarity": number (0-100),
  "reason": "explanation of similarity or difference"
}}

Consider questions repetitive if they ask about the same health concern, symptom, or topic with >70% similarity."""
