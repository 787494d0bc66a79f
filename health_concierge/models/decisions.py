"""Per-request decision artifacts produced by the concierge core."""

from enum import Enum
from typing import List, Optional

from pydantic import Field

from ..config import DEFAULT_EMERGENCY_NUMBER
from .base import CamelModel


class UrgencyLevel(str, Enum):
    """Ordinal severity of an emergency alert."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class EmergencyAlert(CamelModel):
    is_emergency: bool
    urgency_level: UrgencyLevel
    symptoms: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
    emergency_number: str = DEFAULT_EMERGENCY_NUMBER


class RepetitionCheck(CamelModel):
    is_repetitive: bool = False
    previous_response: Optional[str] = None
    similarity: float = Field(default=0, ge=0, le=100)


class RepetitionVerdict(CamelModel):
    """Raw JSON verdict returned by the text-comparison model."""
    is_repetitive: bool = False
    most_similar_question: Optional[str] = None
    similarity: float = Field(default=0, ge=0, le=100)
    reason: Optional[str] = None


class SessionSummary(CamelModel):
    conversation_summary: str
    key_topics: List[str] = Field(default_factory=list)
    specialists_involved: List[str] = Field(default_factory=list)
    action_items: List[str] = Field(default_factory=list)
    follow_up_needed: List[str] = Field(default_factory=list)
