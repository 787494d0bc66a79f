import asyncio
import json

from conftest import FakeTextGenerator

from health_concierge.errors import GenerationError
from health_concierge.models.decisions import EmergencyAlert, UrgencyLevel
from health_concierge.services.emergency import NEAREST_HOSPITALS, EmergencyDetector

URGENT_LEVELS = {UrgencyLevel.HIGH, UrgencyLevel.CRITICAL}


def _classification(**overrides) -> str:
    payload = {
        "isEmergency": True,
        "urgencyLevel": "critical",
        "symptoms": ["chest pain", "breathing difficulty"],
        "recommendations": ["Call 995 immediately"],
        "emergencyNumber": "995",
    }
    payload.update(overrides)
    return json.dumps(payload)


def test_negative_gate_makes_no_classifier_call():
    generator = FakeTextGenerator(default=_classification())
    alert = asyncio.run(EmergencyDetector(generator).analyze("Can I move my appointment to Friday?"))

    assert alert.is_emergency is False
    assert alert.urgency_level == UrgencyLevel.LOW
    assert alert.emergency_number == "995"
    assert generator.calls == []


def test_chest_pain_with_failing_classifier_is_high_urgency():
    generator = FakeTextGenerator(error=GenerationError("service down"))
    alert = asyncio.run(EmergencyDetector(generator).analyze("I have severe chest pain and can't breathe", []))

    assert alert.is_emergency is True
    assert alert.urgency_level in URGENT_LEVELS
    assert alert.symptoms == ["Unable to analyze - system error"]
    assert len(generator.calls) == 1
    assert generator.calls[0]["json_response"] is True


def test_invalid_classifier_json_is_high_urgency():
    generator = FakeTextGenerator(default="not json at all")
    alert = asyncio.run(EmergencyDetector(generator).analyze("sudden chest pain"))

    assert alert.is_emergency is True
    assert alert.urgency_level == UrgencyLevel.HIGH


def test_empty_classifier_text_is_high_urgency():
    generator = FakeTextGenerator(default="   ")
    alert = asyncio.run(EmergencyDetector(generator).analyze("I think I'm having a stroke"))

    assert alert.is_emergency is True
    assert alert.urgency_level == UrgencyLevel.HIGH
    assert alert.symptoms == ["Potential emergency detected"]


def test_classifier_cannot_clear_a_fired_gate():
    generator = FakeTextGenerator(default=_classification(isEmergency=False, urgencyLevel="medium", emergencyNumber="911"))
    alert = asyncio.run(EmergencyDetector(generator).analyze("mild confusion after a long flight"))

    assert alert.is_emergency is True
    assert alert.urgency_level == UrgencyLevel.MEDIUM
    assert alert.emergency_number == "995"


def test_classifier_severity_is_kept():
    generator = FakeTextGenerator(default=_classification())
    alert = asyncio.run(EmergencyDetector(generator).analyze("Chest pain and shortness of breath"))

    assert alert.urgency_level == UrgencyLevel.CRITICAL
    assert EmergencyDetector.should_escalate(alert)


def test_medical_history_is_included_in_prompt():
    generator = FakeTextGenerator(default=_classification())
    history = [{"title": "LDL Cholesterol", "value": "125"}]
    asyncio.run(EmergencyDetector(generator).analyze("chest pain", history))

    assert "LDL Cholesterol" in generator.calls[0]["prompt"]


def test_should_escalate_only_high_and_critical():
    def alert(level):
        return EmergencyAlert(is_emergency=True, urgency_level=level)

    assert not EmergencyDetector.should_escalate(alert(UrgencyLevel.LOW))
    assert not EmergencyDetector.should_escalate(alert(UrgencyLevel.MEDIUM))
    assert EmergencyDetector.should_escalate(alert(UrgencyLevel.HIGH))
    assert EmergencyDetector.should_escalate(alert(UrgencyLevel.CRITICAL))
    assert not EmergencyDetector.should_escalate(
        EmergencyAlert(is_emergency=False, urgency_level=UrgencyLevel.CRITICAL)
    )


def test_format_critical_alert():
    detector = EmergencyDetector(FakeTextGenerator())
    text = detector.format_response(EmergencyAlert(
        is_emergency=True,
        urgency_level=UrgencyLevel.CRITICAL,
        symptoms=["chest pain"],
        recommendations=["Call 995 immediately", "Chew aspirin if advised"],
    ))

    assert text.startswith("🚨 **EMERGENCY DETECTED** 🚨")
    assert "**CALL 995 IMMEDIATELY**" in text
    assert "**Symptoms detected:** chest pain" in text
    assert "**Immediate actions:**\n• Call 995 immediately\n• Chew aspirin if advised\n" in text
    assert f"**Nearest Hospitals:** {', '.join(NEAREST_HOSPITALS)}" in text


def test_format_high_alert_banner():
    detector = EmergencyDetector(FakeTextGenerator())
    text = detector.format_response(EmergencyAlert(is_emergency=True, urgency_level=UrgencyLevel.HIGH))

    assert text.startswith("⚠️ **URGENT MEDICAL ATTENTION NEEDED** ⚠️")
    assert "Consider calling 995" in text


def test_format_without_recommendations_has_no_actions_header():
    detector = EmergencyDetector(FakeTextGenerator())
    text = detector.format_response(EmergencyAlert(
        is_emergency=True,
        urgency_level=UrgencyLevel.HIGH,
        symptoms=["dizziness"],
        recommendations=[],
    ))

    assert "Immediate actions" not in text
    assert "**Emergency Number:** 995" in text


def test_format_non_emergency_is_empty():
    detector = EmergencyDetector(FakeTextGenerator())
    assert detector.format_response(EmergencyAlert(is_emergency=False, urgency_level=UrgencyLevel.LOW)) == ""
