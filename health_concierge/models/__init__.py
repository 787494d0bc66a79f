"""Pydantic models for chat, health records and decision artifacts."""

from .chat import ChatMessage, Conversation, FileAttachment, TeamMember
from .decisions import EmergencyAlert, RepetitionCheck, RepetitionVerdict, SessionSummary, UrgencyLevel
from .health import (
    EmergencyRecord,
    HealthPlan,
    MedicalHistory,
    RiskPrediction,
    SessionContext,
    TravelAdvisory,
    UserProfile,
)

__all__ = [
    "ChatMessage",
    "Conversation",
    "FileAttachment",
    "TeamMember",
    "EmergencyAlert",
    "RepetitionCheck",
    "RepetitionVerdict",
    "SessionSummary",
    "UrgencyLevel",
    "EmergencyRecord",
    "HealthPlan",
    "MedicalHistory",
    "RiskPrediction",
    "SessionContext",
    "TravelAdvisory",
    "UserProfile",
]
