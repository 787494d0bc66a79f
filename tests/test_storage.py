import asyncio

import pytest

from health_concierge.errors import RecordNotFoundError
from health_concierge.models.chat import ChatMessage
from health_concierge.models.health import EmergencyRecord, HealthPlan, MedicalHistory, SessionContext
from health_concierge.services.storage import DEFAULT_USER_ID, InMemoryStorage, apply_updates, get_storage


def _chat(text, date="08/30/24", timestamp="10:00 AM", user_id=DEFAULT_USER_ID, from_user=True):
    return ChatMessage(user_id=user_id, message=text, date=date, timestamp=timestamp, is_from_user=from_user)


def test_seeded_team_and_history(storage):
    team = asyncio.run(storage.get_team_members())
    assert [m.id for m in team] == ["ruby", "warren", "advik", "carla", "rachel", "neel"]

    conversations = asyncio.run(storage.get_conversations())
    assert conversations[0].sender_id == "ruby"
    assert conversations[0].date == "01/05/24"
    assert conversations[-1].is_from_member
    assert all(c.id for c in conversations)


def test_search_conversations_matches_message_and_sender(storage):
    by_message = asyncio.run(storage.search_conversations("bangkok"))
    assert by_message and all(
        "bangkok" in c.message.lower() or "bangkok" in (c.sender_name or "").lower() for c in by_message
    )

    by_role = asyncio.run(storage.search_conversations("Nutritionist"))
    assert by_role and all(c.sender_id == "carla" for c in by_role)


def test_chat_messages_sorted_filtered_and_limited():
    storage = InMemoryStorage(seed=False)
    asyncio.run(storage.add_chat_message(_chat("late", timestamp="9:00 PM")))
    asyncio.run(storage.add_chat_message(_chat("early", timestamp="8:00 AM")))
    asyncio.run(storage.add_chat_message(_chat("older", date="08/01/24")))
    asyncio.run(storage.add_chat_message(_chat("someone else", user_id="other")))

    mine = asyncio.run(storage.get_chat_messages(DEFAULT_USER_ID))
    assert [m.message for m in mine] == ["older", "early", "late"]
    assert all(m.id for m in mine)

    assert [m.message for m in asyncio.run(storage.get_chat_messages(DEFAULT_USER_ID, 2))] == ["early", "late"]
    assert len(asyncio.run(storage.get_chat_messages())) == 4


def test_chat_messages_by_date_range():
    storage = InMemoryStorage(seed=False)
    asyncio.run(storage.add_chat_message(_chat("july", date="07/15/24")))
    asyncio.run(storage.add_chat_message(_chat("august", date="08/15/24")))

    found = asyncio.run(storage.get_chat_messages_by_date_range(DEFAULT_USER_ID, "2024-08-01", "2024-08-31"))
    assert [m.message for m in found] == ["august"]


def test_profile_update_accepts_camel_and_snake_keys(storage):
    updated = asyncio.run(storage.update_user_profile(DEFAULT_USER_ID, {
        "travelFrequency": "Monthly",
        "age": 47,
        "id": "hijack",
        "unknownField": "ignored",
    }))

    assert updated.id == DEFAULT_USER_ID
    assert updated.travel_frequency == "Monthly"
    assert updated.age == 47
    assert asyncio.run(storage.get_user_profile(DEFAULT_USER_ID)).age == 47


def test_update_unknown_records_raise(storage):
    with pytest.raises(RecordNotFoundError):
        asyncio.run(storage.update_user_profile("nobody", {"age": 1}))
    with pytest.raises(RecordNotFoundError):
        asyncio.run(storage.update_health_plan("missing", {"status": "completed"}))
    with pytest.raises(RecordNotFoundError):
        asyncio.run(storage.update_medical_history("missing", {}))
    with pytest.raises(RecordNotFoundError):
        asyncio.run(storage.update_session_context("missing", {}))


def test_medical_history_newest_first_with_category(storage):
    history = asyncio.run(storage.get_medical_history(DEFAULT_USER_ID))
    assert history
    dates = [r.recorded_date for r in history]
    assert dates == sorted(dates, reverse=True)

    category = history[0].category
    filtered = asyncio.run(storage.get_medical_history(DEFAULT_USER_ID, category))
    assert filtered and all(r.category == category for r in filtered)


def test_add_medical_history_assigns_id(storage):
    record = asyncio.run(storage.add_medical_history(MedicalHistory(
        user_id=DEFAULT_USER_ID,
        category="lab_result",
        title="Vitamin D",
        value="32",
        unit="ng/mL",
        recorded_date="2099-01-01",
    )))

    assert record.id and record.created_at
    assert asyncio.run(storage.get_medical_history(DEFAULT_USER_ID))[0].title == "Vitamin D"


def test_health_plan_status_and_update(storage):
    plan = asyncio.run(storage.add_health_plan(HealthPlan(
        user_id=DEFAULT_USER_ID, title="Sleep reset", description="Wind-down routine",
    )))
    assert plan in asyncio.run(storage.get_health_plans(DEFAULT_USER_ID, "active"))

    updated = asyncio.run(storage.update_health_plan(plan.id, {"status": "completed"}))
    assert updated.status == "completed"
    assert plan.id not in [p.id for p in asyncio.run(storage.get_health_plans(DEFAULT_USER_ID, "active"))]


def test_session_context_and_emergency_records():
    storage = InMemoryStorage(seed=False)
    context = asyncio.run(storage.add_session_context(SessionContext(
        user_id=DEFAULT_USER_ID, session_id="s1", conversation_summary="hello",
    )))
    assert asyncio.run(storage.get_session_context(DEFAULT_USER_ID, "s1")) == [context]
    assert asyncio.run(storage.get_session_context(DEFAULT_USER_ID, "s2")) == []

    asyncio.run(storage.add_emergency_record(EmergencyRecord(
        user_id=DEFAULT_USER_ID, session_id="s1", message="chest pain", urgency_level="high",
    )))
    records = asyncio.run(storage.get_emergency_records(DEFAULT_USER_ID))
    assert len(records) == 1 and records[0].urgency_level == "high"


def test_search_medical_records_tags_type(storage):
    results = asyncio.run(storage.search_medical_records(DEFAULT_USER_ID, "cholesterol"))
    assert results
    assert {r["type"] for r in results} <= {"medical_history", "health_plan"}


def test_patient_summary(storage):
    asyncio.run(storage.add_chat_message(_chat("hi")))
    summary = asyncio.run(storage.get_patient_summary(DEFAULT_USER_ID))

    assert summary["profile"]["name"] == "Rohan Patel"
    assert len(summary["medicalHistory"]) <= 10
    assert all(p["status"] == "active" for p in summary["activeHealthPlans"])
    assert summary["recentActivity"] == 1
    assert summary["lastActive"] == "08/30/24"


def test_apply_updates_revalidates():
    plan = HealthPlan(user_id="u", title="t", description="d")
    updated = apply_updates(plan, {"actionSteps": ["walk"], "review_date": "2025-01-01"})
    assert updated.action_steps == ["walk"]
    assert updated.review_date == "2025-01-01"
    assert plan.action_steps == []


def test_get_storage_defaults_to_memory():
    assert isinstance(get_storage(), InMemoryStorage)
    assert get_storage() is get_storage()
