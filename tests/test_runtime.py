import asyncio
import json
from datetime import datetime

from conftest import FakeTextGenerator

from health_concierge.conductor import ConciergeRuntime
from health_concierge.conductor.runtime import ADVICE_FALLBACK, TECHNICAL_DIFFICULTIES
from health_concierge.errors import GenerationError
from health_concierge.models.chat import ChatMessage
from health_concierge.models.decisions import UrgencyLevel
from health_concierge.services.storage import DEFAULT_USER_ID, InMemoryStorage
from health_concierge.specialists import SpecialistId
from health_concierge.specialists.referral import REFERRAL_PHRASES
from health_concierge.utils.timeparse import format_message_date

SESSION = "current-session"


def _execute(storage, generator, query):
    runtime = ConciergeRuntime(storage=storage, generator=generator)
    return asyncio.run(runtime.execute(query, DEFAULT_USER_ID, SESSION))


def test_severe_chest_pain_escalates_even_when_classifier_fails(storage):
    generator = FakeTextGenerator(error=GenerationError("service down"))
    result = _execute(storage, generator, "I have severe chest pain and can't breathe")

    assert result.specialist.id == SpecialistId.WARREN
    assert result.emergency_alert.is_emergency is True
    assert result.emergency_alert.urgency_level in {UrgencyLevel.HIGH, UrgencyLevel.CRITICAL}
    assert result.response.startswith("⚠️ **URGENT MEDICAL ATTENTION NEEDED** ⚠️")
    # only the classifier was consulted
    assert len(generator.calls) == 1


def test_critical_classification_escalates(storage):
    classification = json.dumps({
        "isEmergency": True,
        "urgencyLevel": "critical",
        "symptoms": ["chest pain"],
        "recommendations": ["Call 995 immediately"],
        "emergencyNumber": "995",
    })
    result = _execute(storage, FakeTextGenerator(replies=[classification]), "Crushing chest pain right now")

    assert result.specialist.id == SpecialistId.WARREN
    assert result.emergency_alert.urgency_level == UrgencyLevel.CRITICAL
    assert "**CALL 995 IMMEDIATELY**" in result.response
    assert result.needs_referral is False


def test_low_urgency_alert_is_attached_to_normal_answer(storage):
    classification = json.dumps({
        "isEmergency": False,
        "urgencyLevel": "low",
        "symptoms": [],
        "recommendations": [],
        "emergencyNumber": "995",
    })
    advice = "Dr. Warren (Medical Strategist): Let's review this together."
    generator = FakeTextGenerator(replies=[classification], default=advice)
    result = _execute(storage, generator, "I have severe chest pain and can't breathe")

    assert result.emergency_alert.is_emergency is True
    assert result.emergency_alert.urgency_level == UrgencyLevel.LOW
    # "chest pain" ties with "pain" and the "eat" in "breathe"; first declared wins
    assert result.specialist.id == SpecialistId.WARREN
    assert result.response.endswith(advice)
    assert "**Emergency Number:** 995" in result.response


def test_bloating_question_is_answered_by_nutritionist(storage):
    advice = "Carla (Nutritionist): Try ginger tea and avoid carbonated drinks."
    generator = FakeTextGenerator(default=advice)
    result = _execute(storage, generator, "What should I eat before my flight to reduce bloating?")

    assert result.specialist.id == SpecialistId.CARLA
    assert result.response == advice
    assert result.emergency_alert is None
    assert result.needs_referral is False
    # context summary and specialist advice; no classifier or repetition call
    assert len(generator.calls) == 2
    assert generator.calls[-1]["prompt"] == "What should I eat before my flight to reduce bloating?"
    assert generator.calls[-1]["system"].startswith("You are Carla, Nutritionist.")


def test_reschedule_goes_to_coordinator_without_referral(storage):
    generator = FakeTextGenerator(default="Ruby (Concierge): Done, moved to Friday.")
    result = _execute(storage, generator, "Can you reschedule my Thursday appointment?")

    assert result.specialist.id == SpecialistId.RUBY
    assert result.needs_referral is False
    assert result.referred_specialist is None
    assert result.response == "Ruby (Concierge): Done, moved to Friday."
    assert generator.calls[-1]["system"].startswith("You are Ruby, the Concierge.")


def test_logistics_with_advice_is_referred_by_coordinator(storage):
    generator = FakeTextGenerator(default="Focus on fibre and lean protein.")
    result = _execute(storage, generator, "Can you book an appointment and recommend a diet?")

    assert result.specialist.id == SpecialistId.RUBY
    assert result.needs_referral is True
    assert result.referred_specialist.id == SpecialistId.CARLA
    assert result.response == (
        f"{REFERRAL_PHRASES[SpecialistId.CARLA]}\n\n"
        "Carla (Nutritionist): Focus on fibre and lean protein."
    )


def test_specialist_failure_uses_apology(storage):
    generator = FakeTextGenerator(error=GenerationError("down"))
    result = _execute(storage, generator, "What should I eat before my flight to reduce bloating?")

    assert result.specialist.id == SpecialistId.CARLA
    assert result.response == ADVICE_FALLBACK


def test_repeated_question_references_previous_answer(storage):
    today = format_message_date(datetime.now())
    question = "What should I eat before my flight to reduce bloating?"
    asyncio.run(storage.add_chat_message(ChatMessage(
        user_id=DEFAULT_USER_ID, session_id=SESSION, sender_name="You",
        message=question, timestamp="12:00 AM", date=today, is_from_user=True,
    )))
    asyncio.run(storage.add_chat_message(ChatMessage(
        user_id=DEFAULT_USER_ID, session_id=SESSION, sender_id="carla", sender_name="Carla",
        sender_role="Nutritionist", message="Carla (Nutritionist): Ginger tea helps.",
        timestamp="12:01 AM", date=today, is_from_user=False,
    )))
    verdict = json.dumps({
        "isRepetitive": True,
        "mostSimilarQuestion": question,
        "similarity": 92,
        "reason": "Same topic",
    })
    generator = FakeTextGenerator(replies=["Patient context", verdict, "Ginger tea still helps."])
    result = _execute(storage, generator, "How should I eat to avoid bloating when flying?")

    assert result.specialist.id == SpecialistId.CARLA
    assert result.response == "[Referencing our previous discussion] Ginger tea still helps."
    assert "Carla (Nutritionist): Ginger tea helps." in generator.calls[-1]["prompt"]


class _BrokenStorage(InMemoryStorage):
    async def get_medical_history(self, user_id, category=None):
        raise RuntimeError("database offline")


def test_unexpected_failure_returns_coordinator_apology():
    result = _execute(_BrokenStorage(seed=False), FakeTextGenerator(), "How can I sleep better?")

    assert result.specialist.id == SpecialistId.RUBY
    assert result.response == TECHNICAL_DIFFICULTIES
    assert result.emergency_alert is None


class _HistoryDown(InMemoryStorage):
    async def get_medical_history(self, user_id, category=None):
        raise RuntimeError("database offline")


class _ProfileDown(InMemoryStorage):
    async def get_user_profile(self, user_id):
        raise RuntimeError("database offline")


def test_missing_history_still_screens_for_emergencies():
    generator = FakeTextGenerator(error=GenerationError("service down"))
    result = _execute(_HistoryDown(seed=False), generator, "I have severe chest pain and can't breathe")

    assert result.specialist.id == SpecialistId.WARREN
    assert result.emergency_alert is not None
    assert result.emergency_alert.urgency_level == UrgencyLevel.HIGH
    assert result.response.startswith("⚠️ **URGENT MEDICAL ATTENTION NEEDED** ⚠️")


def test_failure_after_screening_keeps_the_alert():
    classification = json.dumps({
        "isEmergency": True,
        "urgencyLevel": "medium",
        "symptoms": ["confusion"],
        "recommendations": ["Rest and monitor symptoms"],
        "emergencyNumber": "995",
    })
    generator = FakeTextGenerator(replies=[classification])
    result = _execute(_ProfileDown(seed=False), generator, "I have some confusion after my flight")

    assert result.specialist.id == SpecialistId.WARREN
    assert result.emergency_alert.is_emergency is True
    assert result.emergency_alert.urgency_level == UrgencyLevel.MEDIUM
    assert "**Emergency Number:** 995" in result.response
    assert result.response != TECHNICAL_DIFFICULTIES


def test_stored_copy_of_current_question_is_not_checked_for_repetition(storage):
    query = "What should I eat before my flight to reduce bloating?"
    asyncio.run(storage.add_chat_message(ChatMessage(
        user_id=DEFAULT_USER_ID, session_id=SESSION, sender_name="You",
        message=query, timestamp="12:00 AM", date=format_message_date(datetime.now()), is_from_user=True,
    )))
    generator = FakeTextGenerator(default="Carla (Nutritionist): Ginger tea helps.")
    result = _execute(storage, generator, query)

    assert result.specialist.id == SpecialistId.CARLA
    # context summary and specialist advice only
    assert len(generator.calls) == 2
    assert not any(call["json_response"] for call in generator.calls)
