"""Member health records owned by the storage layer."""

from typing import Dict, List, Optional

from pydantic import Field

from .base import CamelModel


class UserProfile(CamelModel):
    id: Optional[str] = None
    name: str
    age: Optional[int] = None
    gender: Optional[str] = None
    chronic_conditions: List[str] = Field(default_factory=list)
    travel_frequency: Optional[str] = None
    lifestyle_habits: Dict[str, str] = Field(default_factory=dict)
    emergency_contact: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class MedicalHistory(CamelModel):
    id: Optional[str] = None
    user_id: str
    category: str  # lab_result, diagnosis, medication, allergy, ...
    title: str
    value: Optional[str] = None
    unit: Optional[str] = None
    normal_range: Optional[str] = None
    status: Optional[str] = None  # normal, high, low, critical
    notes: Optional[str] = None
    source: Optional[str] = None  # uploaded_file, chat_extraction, manual_entry
    source_file_id: Optional[str] = None
    recorded_date: str
    created_at: Optional[str] = None


class HealthPlan(CamelModel):
    id: Optional[str] = None
    user_id: str
    title: str
    description: str
    action_steps: List[str] = Field(default_factory=list)
    responsible_specialist: Optional[str] = None
    timeline: Optional[str] = None
    progress_tracker: Dict[str, str] = Field(default_factory=dict)
    risk_alerts: List[str] = Field(default_factory=list)
    citations: List[str] = Field(default_factory=list)
    status: str = "active"  # active, completed, cancelled
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    review_date: Optional[str] = None


class RiskPrediction(CamelModel):
    id: Optional[str] = None
    user_id: str
    risk_type: str
    risk_percentage: int
    contributing_factors: List[str] = Field(default_factory=list)
    prevention_steps: List[str] = Field(default_factory=list)
    confidence: Optional[int] = None
    based_on_data: Optional[str] = None
    created_at: Optional[str] = None
    valid_until: Optional[str] = None


class TravelAdvisory(CamelModel):
    id: Optional[str] = None
    user_id: str
    destination: str
    travel_date: Optional[str] = None
    return_date: Optional[str] = None
    required_vaccines: List[str] = Field(default_factory=list)
    health_risks: List[str] = Field(default_factory=list)
    preventive_steps: List[str] = Field(default_factory=list)
    local_healthcare_info: Optional[str] = None
    emergency_numbers: Dict[str, str] = Field(default_factory=dict)
    status: str = "active"
    created_at: Optional[str] = None


class SessionContext(CamelModel):
    """Stored session summary for conversational memory."""
    id: Optional[str] = None
    user_id: str
    session_id: str
    conversation_summary: Optional[str] = None
    key_topics: List[str] = Field(default_factory=list)
    specialists_involved: List[str] = Field(default_factory=list)
    action_items: List[str] = Field(default_factory=list)
    follow_up_needed: List[str] = Field(default_factory=list)
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class EmergencyRecord(CamelModel):
    """A chat exchange that raised an emergency alert."""
    id: Optional[str] = None
    user_id: str
    session_id: str
    message: str
    urgency_level: str
    symptoms: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
    created_at: Optional[str] = None
