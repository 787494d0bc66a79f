"""Storage interface consumed by the concierge runtime and HTTP routes."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

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


class Storage(ABC):
    """Repository of chat history and member records.

    The concierge core never writes durable state itself; it returns decision
    artifacts and the caller persists them through this interface.
    """

    # Team and scripted history
    @abstractmethod
    async def get_team_members(self) -> List[TeamMember]: ...

    @abstractmethod
    async def get_conversations(self) -> List[Conversation]: ...

    @abstractmethod
    async def search_conversations(self, query: str) -> List[Conversation]: ...

    # Interactive chat
    @abstractmethod
    async def get_chat_messages(self, user_id: Optional[str] = None, limit: Optional[int] = None) -> List[ChatMessage]: ...

    @abstractmethod
    async def add_chat_message(self, message: ChatMessage) -> ChatMessage: ...

    @abstractmethod
    async def get_chat_messages_by_date_range(self, user_id: str, start_date: str, end_date: str) -> List[ChatMessage]: ...

    # Profile
    @abstractmethod
    async def get_user_profile(self, user_id: str) -> Optional[UserProfile]: ...

    @abstractmethod
    async def create_user_profile(self, profile: UserProfile) -> UserProfile: ...

    @abstractmethod
    async def update_user_profile(self, user_id: str, updates: Dict[str, Any]) -> UserProfile: ...

    # Medical history
    @abstractmethod
    async def get_medical_history(self, user_id: str, category: Optional[str] = None) -> List[MedicalHistory]: ...

    @abstractmethod
    async def add_medical_history(self, record: MedicalHistory) -> MedicalHistory: ...

    @abstractmethod
    async def update_medical_history(self, record_id: str, updates: Dict[str, Any]) -> MedicalHistory: ...

    # Health plans
    @abstractmethod
    async def get_health_plans(self, user_id: str, status: Optional[str] = None) -> List[HealthPlan]: ...

    @abstractmethod
    async def add_health_plan(self, plan: HealthPlan) -> HealthPlan: ...

    @abstractmethod
    async def update_health_plan(self, plan_id: str, updates: Dict[str, Any]) -> HealthPlan: ...

    # Risk predictions
    @abstractmethod
    async def get_risk_predictions(self, user_id: str) -> List[RiskPrediction]: ...

    @abstractmethod
    async def add_risk_prediction(self, prediction: RiskPrediction) -> RiskPrediction: ...

    # Travel advisories
    @abstractmethod
    async def get_travel_advisories(self, user_id: str, status: Optional[str] = None) -> List[TravelAdvisory]: ...

    @abstractmethod
    async def add_travel_advisory(self, advisory: TravelAdvisory) -> TravelAdvisory: ...

    @abstractmethod
    async def update_travel_advisory(self, advisory_id: str, updates: Dict[str, Any]) -> TravelAdvisory: ...

    # Session context and emergencies
    @abstractmethod
    async def get_session_context(self, user_id: str, session_id: Optional[str] = None) -> List[SessionContext]: ...

    @abstractmethod
    async def add_session_context(self, context: SessionContext) -> SessionContext: ...

    @abstractmethod
    async def update_session_context(self, context_id: str, updates: Dict[str, Any]) -> SessionContext: ...

    @abstractmethod
    async def add_emergency_record(self, record: EmergencyRecord) -> EmergencyRecord: ...

    @abstractmethod
    async def get_emergency_records(self, user_id: str) -> List[EmergencyRecord]: ...

    # Search and analytics
    @abstractmethod
    async def search_medical_records(self, user_id: str, query: str) -> List[Dict[str, Any]]: ...

    @abstractmethod
    async def get_patient_summary(self, user_id: str) -> Dict[str, Any]: ...
