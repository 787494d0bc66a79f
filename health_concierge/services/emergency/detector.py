"""Two-stage emergency detection.

A fast keyword gate runs first. Only when it fires is the query sent to the
generative classifier for a severity level. Every failure after the gate
fired produces a high-urgency alert; it never downgrades to non-emergency.
"""

import json
from typing import Any, List, Optional, Sequence

from ...config import get_settings
from ...logging_config import get_logger
from ...models.decisions import EmergencyAlert, UrgencyLevel
from ...openrouter_client import TextGenerator, get_text_generator
from ...specialists.scoring import matches_any
from ...specialists.taxonomy import load_keyword_taxonomy

logger = get_logger(__name__)

NEAREST_HOSPITALS = [
    "Singapore General Hospital",
    "Tan Tock Seng Hospital",
    "National University Hospital",
]

ESCALATION_LEVELS = {UrgencyLevel.HIGH, UrgencyLevel.CRITICAL}


def _history_json(medical_history: Optional[Sequence[Any]]) -> str:
    records = [r.model_dump(mode="json", by_alias=True) if hasattr(r, "model_dump") else r for r in medical_history]
    return json.dumps(records)


class EmergencyDetector:
    """Flags emergency symptoms in member messages."""

    def __init__(
        self,
        generator: Optional[TextGenerator] = None,
        keywords: Optional[List[str]] = None,
        emergency_number: Optional[str] = None,
    ):
        settings = get_settings()
        self.generator = generator or get_text_generator()
        self.keywords = keywords if keywords is not None else load_keyword_taxonomy().emergency
        self.emergency_number = emergency_number or settings.emergency_number
        self.model = settings.emergency_model

    def has_emergency_keywords(self, message: str) -> bool:
        return matches_any(message, self.keywords)

    async def analyze(self, message: str, medical_history: Optional[Sequence[Any]] = None) -> EmergencyAlert:
        """Classify ``message``; the classifier is only called when the keyword gate fires."""

        if not self.has_emergency_keywords(message):
            return self._non_emergency()

        logger.warning("🚨 Emergency keywords detected, requesting severity classification")

        try:
            text = await self.generator.generate(
                self._build_prompt(message, medical_history),
                json_response=True,
                model=self.model,
            )
            if not text or not text.strip():
                return self._fail_safe(
                    ["Potential emergency detected"],
                    [
                        f"Call {self.emergency_number} immediately if experiencing severe symptoms",
                        "Seek immediate medical attention at the nearest hospital",
                        "Do not delay if symptoms worsen",
                    ],
                )
            classified = EmergencyAlert.model_validate_json(text)
        except Exception as e:
            logger.error(f"Emergency detection error: {e}")
            return self._fail_safe(
                ["Unable to analyze - system error"],
                [
                    f"Call {self.emergency_number} immediately if experiencing severe symptoms",
                    "Seek immediate medical attention",
                    "System unable to analyze - err on side of caution",
                ],
            )

        # The gate fired, so the alert stands whatever the classifier concluded
        return classified.model_copy(update={
            "is_emergency": True,
            "emergency_number": self.emergency_number,
        })

    def format_response(self, alert: EmergencyAlert) -> str:
        """Render an alert as the member-facing emergency message."""
        if not alert.is_emergency:
            return ""

        response = ""

        if alert.urgency_level == UrgencyLevel.CRITICAL:
            response = "🚨 **EMERGENCY DETECTED** 🚨\n\n"
            response += f"**CALL {alert.emergency_number} IMMEDIATELY**\n\n"
        elif alert.urgency_level == UrgencyLevel.HIGH:
            response = "⚠️ **URGENT MEDICAL ATTENTION NEEDED** ⚠️\n\n"
            response += f"Consider calling {alert.emergency_number} or seek immediate medical care\n\n"

        if alert.symptoms:
            response += f"**Symptoms detected:** {', '.join(alert.symptoms)}\n\n"

        if alert.recommendations:
            response += "**Immediate actions:**\n"
            for recommendation in alert.recommendations:
                response += f"• {recommendation}\n"
            response += "\n"

        response += f"**Emergency Number:** {alert.emergency_number}\n"
        response += f"**Nearest Hospitals:** {', '.join(NEAREST_HOSPITALS)}\n\n"

        return response

    @staticmethod
    def should_escalate(alert: EmergencyAlert) -> bool:
        return alert.is_emergency and alert.urgency_level in ESCALATION_LEVELS

    def _non_emergency(self) -> EmergencyAlert:
        return EmergencyAlert(
            is_emergency=False,
            urgency_level=UrgencyLevel.LOW,
            symptoms=[],
            recommendations=[],
            emergency_number=self.emergency_number,
        )

    def _fail_safe(self, symptoms: List[str], recommendations: List[str]) -> EmergencyAlert:
        return EmergencyAlert(
            is_emergency=True,
            urgency_level=UrgencyLevel.HIGH,
            symptoms=symptoms,
            recommendations=recommendations,
            emergency_number=self.emergency_number,
        )

    def _build_prompt(self, message: str, medical_history: Optional[Sequence[Any]]) -> str:
        history_line = f"Medical History: {_history_json(medical_history)}" if medical_history else ""
        number = self.emergency_number
        return f"""You are a medical emergency detection system for Singapore. Analyze this message for emergency symptoms.

CRITICAL EMERGENCY SYMPTOMS (call {number} immediately):
- Chest pain with shortness of breath
- Signs of stroke (weakness, speech difficulty, facial drooping)
- Severe allergic reactions
- Choking or severe breathing difficulty
- Loss of consciousness
- Severe bleeding
- Signs of heart attack
- Severe head injury
- Diabetic emergency (very high/low blood sugar with symptoms)

Message: "{message}"
{history_line}

Respond in JSON format:
{{
  "isEmergency": boolean,
  "urgencyLevel": "low|medium|high|critical",
  "symptoms": ["symptom1", "symptom2"],
  "recommendations": ["recommendation1", "recommendation2"],
  "emergencyNumber": "{number}"
}}

For any critical emergency, always include "Call {number} immediately" in recommendations."""
