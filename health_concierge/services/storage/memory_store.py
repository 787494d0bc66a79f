"""Dict-backed storage seeded with the scripted member history.

Contents are discarded on restart.
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, TypeVar

from pydantic import BaseModel

from ...errors import RecordNotFoundError
from ...logging_config import get_logger
from ...models.chat import ChatMessage, Conversation, TeamMember
from ...models.health import (
    EmergencyRecord,
    HealthPlan,
    MedicalHistory,
    RiskPrediction,
    SessionContext,
    TravelAdvisory,
    UserProfile,
)
from ...specialists.registry import get_specialist_registry
from ...utils.timeparse import chronological_key, parse_message_date
from . import seed_data
from .base import Storage

logger = get_logger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _new_id() -> str:
    return str(uuid.uuid4())


def apply_updates(record: RecordT, updates: Dict[str, Any]) -> RecordT:
    """Return ``record`` with ``updates`` merged in and re-validated.

    Keys may use field names or camelCase aliases; ``id`` and unknown keys are ignored.
    """
    fields = type(record).model_fields
    by_alias = {info.alias: name for name, info in fields.items() if info.alias}
    normalized = {by_alias.get(key, key): value for key, value in updates.items()}
    merged = record.model_dump()
    merged.update({k: v for k, v in normalized.items() if k in fields and k != "id"})
    return type(record).model_validate(merged)


def _newest_first(records: List[RecordT], attr: str) -> List[RecordT]:
    return sorted(records, key=lambda r: getattr(r, attr) or "", reverse=True)


class InMemoryStorage(Storage):
    """Process-local storage for the prototype."""

    def __init__(self, seed: bool = True):
        self.team_members: Dict[str, TeamMember] = {}
        self.conversations: Dict[str, Conversation] = {}
        self.chat_messages: Dict[str, ChatMessage] = {}
        self.user_profiles: Dict[str, UserProfile] = {}
        self.medical_history: Dict[str, MedicalHistory] = {}
        self.health_plans: Dict[str, HealthPlan] = {}
        self.risk_predictions: Dict[str, RiskPrediction] = {}
        self.travel_advisories: Dict[str, TravelAdvisory] = {}
        self.session_contexts: Dict[str, SessionContext] = {}
        self.emergency_records: Dict[str, EmergencyRecord] = {}

        for specialist in get_specialist_registry():
            member = specialist.to_team_member()
            self.team_members[member.id] = member

        if seed:
            self._seed()

    def _seed(self) -> None:
        now_iso = _now_iso()

        for conversation in seed_data.scripted_conversations():
            conversation = conversation.model_copy(update={"id": _new_id()})
            self.conversations[conversation.id] = conversation

        profile = seed_data.default_profile(now_iso)
        self.user_profiles[profile.id] = profile

        for record in seed_data.default_medical_history():
            record = record.model_copy(update={"id": _new_id()})
            self.medical_history[record.id] = record

        for plan in seed_data.default_health_plans(now_iso):
            plan = plan.model_copy(update={"id": _new_id()})
            self.health_plans[plan.id] = plan

        for prediction in seed_data.default_risk_predictions(now_iso):
            prediction = prediction.model_copy(update={"id": _new_id()})
            self.risk_predictions[prediction.id] = prediction

        logger.info(f"Seeded in-memory storage with {len(self.conversations)} scripted messages")

    # Team and scripted history

    async def get_team_members(self) -> List[TeamMember]:
        return list(self.team_members.values())

    async def get_conversations(self) -> List[Conversation]:
        return sorted(self.conversations.values(), key=lambda c: chronological_key(c.date, c.timestamp))

    async def search_conversations(self, query: str) -> List[Conversation]:
        lowered = query.lower()
        return [
            c for c in await self.get_conversations()
            if lowered in c.message.lower()
            or lowered in (c.sender_name or "").lower()
            or lowered in (c.sender_role or "").lower()
        ]

    # Interactive chat

    async def get_chat_messages(self, user_id: Optional[str] = None, limit: Optional[int] = None) -> List[ChatMessage]:
        messages = list(self.chat_messages.values())
        if user_id:
            messages = [m for m in messages if m.user_id == user_id]

        messages.sort(key=lambda m: chronological_key(m.date, m.timestamp))

        if limit:
            messages = messages[-limit:]
        return messages

    async def add_chat_message(self, message: ChatMessage) -> ChatMessage:
        stored = message.model_copy(update={"id": message.id or _new_id()})
        self.chat_messages[stored.id] = stored
        return stored

    async def get_chat_messages_by_date_range(self, user_id: str, start_date: str, end_date: str) -> List[ChatMessage]:
        start, end = parse_message_date(start_date), parse_message_date(end_date)
        if start is None or end is None:
            return []

        in_range = []
        for msg in await self.get_chat_messages(user_id):
            msg_date = parse_message_date(msg.date)
            if msg_date is not None and start <= msg_date <= end:
                in_range.append(msg)
        return in_range

    # Profile

    async def get_user_profile(self, user_id: str) -> Optional[UserProfile]:
        return self.user_profiles.get(user_id)

    async def create_user_profile(self, profile: UserProfile) -> UserProfile:
        now_iso = _now_iso()
        created = profile.model_copy(update={"id": profile.id or _new_id(), "created_at": now_iso, "updated_at": now_iso})
        self.user_profiles[created.id] = created
        return created

    async def update_user_profile(self, user_id: str, updates: Dict[str, Any]) -> UserProfile:
        existing = self.user_profiles.get(user_id)
        if existing is None:
            raise RecordNotFoundError("User profile", user_id)
        updated = apply_updates(existing, updates).model_copy(update={"updated_at": _now_iso()})
        self.user_profiles[user_id] = updated
        return updated

    # Medical history

    async def get_medical_history(self, user_id: str, category: Optional[str] = None) -> List[MedicalHistory]:
        records = [r for r in self.medical_history.values() if r.user_id == user_id]
        if category:
            records = [r for r in records if r.category == category]
        return _newest_first(records, "recorded_date")

    async def add_medical_history(self, record: MedicalHistory) -> MedicalHistory:
        created = record.model_copy(update={"id": _new_id(), "created_at": _now_iso()})
        self.medical_history[created.id] = created
        return created

    async def update_medical_history(self, record_id: str, updates: Dict[str, Any]) -> MedicalHistory:
        existing = self.medical_history.get(record_id)
        if existing is None:
            raise RecordNotFoundError("Medical history record", record_id)
        updated = apply_updates(existing, updates)
        self.medical_history[record_id] = updated
        return updated

    # Health plans

    async def get_health_plans(self, user_id: str, status: Optional[str] = None) -> List[HealthPlan]:
        plans = [p for p in self.health_plans.values() if p.user_id == user_id]
        if status:
            plans = [p for p in plans if p.status == status]
        return _newest_first(plans, "created_at")

    async def add_health_plan(self, plan: HealthPlan) -> HealthPlan:
        now_iso = _now_iso()
        created = plan.model_copy(update={"id": _new_id(), "created_at": now_iso, "updated_at": now_iso})
        self.health_plans[created.id] = created
        return created

    async def update_health_plan(self, plan_id: str, updates: Dict[str, Any]) -> HealthPlan:
        existing = self.health_plans.get(plan_id)
        if existing is None:
            raise RecordNotFoundError("Health plan", plan_id)
        updated = apply_updates(existing, updates).model_copy(update={"updated_at": _now_iso()})
        self.health_plans[plan_id] = updated
        return updated

    # Risk predictions

    async def get_risk_predictions(self, user_id: str) -> List[RiskPrediction]:
        predictions = [p for p in self.risk_predictions.values() if p.user_id == user_id]
        return _newest_first(predictions, "created_at")

    async def add_risk_prediction(self, prediction: RiskPrediction) -> RiskPrediction:
        created = prediction.model_copy(update={"id": _new_id(), "created_at": _now_iso()})
        self.risk_predictions[created.id] = created
        return created

    # Travel advisories

    async def get_travel_advisories(self, user_id: str, status: Optional[str] = None) -> List[TravelAdvisory]:
        advisories = [a for a in self.travel_advisories.values() if a.user_id == user_id]
        if status:
            advisories = [a for a in advisories if a.status == status]
        return _newest_first(advisories, "created_at")

    async def add_travel_advisory(self, advisory: TravelAdvisory) -> TravelAdvisory:
        created = advisory.model_copy(update={"id": _new_id(), "created_at": _now_iso()})
        self.travel_advisories[created.id] = created
        return created

    async def update_travel_advisory(self, advisory_id: str, updates: Dict[str, Any]) -> TravelAdvisory:
        existing = self.travel_advisories.get(advisory_id)
        if existing is None:
            raise RecordNotFoundError("Travel advisory", advisory_id)
        updated = apply_updates(existing, updates)
        self.travel_advisories[advisory_id] = updated
        return updated

    # Session context and emergencies

    async def get_session_context(self, user_id: str, session_id: Optional[str] = None) -> List[SessionContext]:
        contexts = [c for c in self.session_contexts.values() if c.user_id == user_id]
        if session_id:
            contexts = [c for c in contexts if c.session_id == session_id]
        return _newest_first(contexts, "created_at")

    async def add_session_context(self, context: SessionContext) -> SessionContext:
        now_iso = _now_iso()
        created = context.model_copy(update={"id": _new_id(), "created_at": now_iso, "updated_at": now_iso})
        self.session_contexts[created.id] = created
        return created

    async def update_session_context(self, context_id: str, updates: Dict[str, Any]) -> SessionContext:
        existing = self.session_contexts.get(context_id)
        if existing is None:
            raise RecordNotFoundError("Session context", context_id)
        updated = apply_updates(existing, updates).model_copy(update={"updated_at": _now_iso()})
        self.session_contexts[context_id] = updated
        return updated

    async def add_emergency_record(self, record: EmergencyRecord) -> EmergencyRecord:
        created = record.model_copy(update={"id": _new_id(), "created_at": _now_iso()})
        self.emergency_records[created.id] = created
        return created

    async def get_emergency_records(self, user_id: str) -> List[EmergencyRecord]:
        records = [r for r in self.emergency_records.values() if r.user_id == user_id]
        return _newest_first(records, "created_at")

    # Search and analytics

    async def search_medical_records(self, user_id: str, query: str) -> List[Dict[str, Any]]:
        lowered = query.lower()
        results: List[Dict[str, Any]] = []

        for record in await self.get_medical_history(user_id):
            if (
                lowered in record.title.lower()
                or lowered in (record.notes or "").lower()
                or lowered in (record.value or "").lower()
            ):
                results.append({**record.model_dump(mode="json", by_alias=True), "type": "medical_history"})

        for plan in await self.get_health_plans(user_id):
            if lowered in plan.title.lower() or lowered in plan.description.lower():
                results.append({**plan.model_dump(mode="json", by_alias=True), "type": "health_plan"})

        return results

    async def get_patient_summary(self, user_id: str) -> Dict[str, Any]:
        profile = await self.get_user_profile(user_id)
        medical_history = await self.get_medical_history(user_id)
        active_plans = await self.get_health_plans(user_id, "active")
        risk_predictions = await self.get_risk_predictions(user_id)
        recent_messages = await self.get_chat_messages(user_id, 20)

        return {
            "profile": profile.model_dump(mode="json", by_alias=True) if profile else None,
            "medicalHistory": [r.model_dump(mode="json", by_alias=True) for r in medical_history[:10]],
            "activeHealthPlans": [p.model_dump(mode="json", by_alias=True) for p in active_plans],
            "riskPredictions": [p.model_dump(mode="json", by_alias=True) for p in risk_predictions],
            "recentActivity": len(recent_messages),
            "lastActive": recent_messages[-1].date if recent_messages else None,
        }
