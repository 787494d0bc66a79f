"""Concierge runtime - decides who answers a member message and what they say."""

from dataclasses import dataclass
from typing import List, Optional

from ..config import Settings, get_settings
from ..logging_config import get_logger
from ..models.chat import ChatMessage
from ..models.decisions import EmergencyAlert, RepetitionCheck
from ..openrouter_client import TextGenerator, get_text_generator
from ..services.conversation import ConversationMemory
from ..services.emergency import EmergencyDetector
from ..services.storage import Storage, get_storage
from ..specialists import Specialist, SpecialistRouter, get_specialist_router, referral
from ..specialists.prompts import build_specialist_system_prompt

logger = get_logger(__name__)

ADVICE_FALLBACK = "I apologize, but I'm having trouble responding right now. Please try again."

TECHNICAL_DIFFICULTIES = (
    "I'm experiencing some technical difficulties right now. Let me connect you with the right team "
    "member shortly. In the meantime, feel free to send your question and we'll get back to you!"
)


@dataclass
class ConciergeResult:
    """Outcome of one member message."""

    specialist: Specialist
    response: str
    emergency_alert: Optional[EmergencyAlert] = None
    needs_referral: bool = False
    referred_specialist: Optional[Specialist] = None


class ConciergeRuntime:
    """Runs emergency screening, routing, referral and answer generation for a message."""

    def __init__(
        self,
        storage: Optional[Storage] = None,
        generator: Optional[TextGenerator] = None,
        router: Optional[SpecialistRouter] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.storage = storage or get_storage()
        self.generator = generator or get_text_generator()
        self.router = router or get_specialist_router()
        self.detector = EmergencyDetector(generator=self.generator)
        self.memory = ConversationMemory(generator=self.generator)

    async def execute(self, query: str, user_id: str, session_id: str) -> ConciergeResult:
        """Handle a member-authored message."""

        logger.info(f"🎯 NEW MEMBER MESSAGE: '{query}' from {user_id}/{session_id}")

        try:
            medical_history = await self.storage.get_medical_history(user_id)
        except Exception as e:
            logger.error(f"Medical history unavailable for {user_id}: {e}")
            medical_history = []

        # Emergency screening always completes before routing
        alert = await self.detector.analyze(query, medical_history)

        if self.detector.should_escalate(alert):
            logger.warning(f"🚨 Escalating {alert.urgency_level.value} emergency to the medical strategist")
            return self._emergency_result(alert)

        try:
            attached_alert = alert if alert.is_emergency else None
            emergency_prefix = self.detector.format_response(alert)

            user_profile = await self.storage.get_user_profile(user_id)
            recent_messages = await self.storage.get_chat_messages(user_id, self.settings.chat_history_limit)
            context_summary = await self.memory.generate_context_summary(
                user_id, recent_messages, user_profile, medical_history
            )
            earlier_messages = _without_current_query(recent_messages, query)
            repetition = await self.memory.check_repetition(query, self.memory.recent(earlier_messages))

            needs_advice = self.router.needs_advice(query)
            if needs_advice and self.router.is_logistics(query):
                primary = self.router.registry.coordinator
            else:
                primary = self.router.route(query, needs_advice)

            logger.info(f"🧭 Routed to {primary.name} (needs advice: {needs_advice})")

            if primary.id == self.router.registry.coordinator.id and needs_advice:
                advisor = self.router.route(query, True)
                if advisor.id != primary.id:
                    logger.info(f"🤝 {primary.name} referring to {advisor.name}")
                    advice = await self._specialist_advice(query, advisor, context_summary, repetition)
                    return ConciergeResult(
                        specialist=primary,
                        response=emergency_prefix + f"{referral(advisor)}\n\n{advisor.name} ({advisor.role}): {advice}",
                        emergency_alert=attached_alert,
                        needs_referral=True,
                        referred_specialist=advisor,
                    )

            if repetition.is_repetitive and repetition.previous_response:
                logger.info(f"🔁 Repeated question (similarity {repetition.similarity}), referencing earlier answer")
                answer = await self.memory.adaptive_response(query, context_summary, repetition, primary)
            else:
                answer = await self._specialist_advice(query, primary, context_summary, repetition)

            return ConciergeResult(
                specialist=primary,
                response=emergency_prefix + answer,
                emergency_alert=attached_alert,
            )

        except Exception as e:
            logger.error(f"Concierge runtime failed: {e}")
            if alert.is_emergency:
                return self._emergency_result(alert)
            return ConciergeResult(
                specialist=self.router.registry.coordinator,
                response=TECHNICAL_DIFFICULTIES,
            )

    def _emergency_result(self, alert: EmergencyAlert) -> ConciergeResult:
        return ConciergeResult(
            specialist=self.router.registry.default_advisor,
            response=self.detector.format_response(alert),
            emergency_alert=alert,
        )

    async def _specialist_advice(
        self,
        query: str,
        specialist: Specialist,
        context_summary: str,
        repetition: RepetitionCheck,
    ) -> str:
        system_prompt = build_specialist_system_prompt(specialist, query, context_summary, repetition)
        try:
            return await self.generator.generate(query, system=system_prompt, model=self.settings.specialist_model)
        except Exception as e:
            logger.error(f"Specialist advice generation failed for {specialist.name}: {e}")
            return ADVICE_FALLBACK


def _without_current_query(messages: List[ChatMessage], query: str) -> List[ChatMessage]:
    """Drop the member's just-stored copy of ``query`` so it is not compared with itself."""
    if messages and messages[-1].is_from_user and messages[-1].message == query:
        return messages[:-1]
    return messages
