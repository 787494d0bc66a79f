"""System prompts for specialist replies."""

from datetime import datetime
from typing import Dict, Optional

from ..models.decisions import RepetitionCheck
from .registry import Specialist
from .scoring import matches_any
from .taxonomy import SpecialistId, load_keyword_taxonomy

SPECIALIST_STYLES: Dict[SpecialistId, str] = {
    SpecialistId.ADVIK: "Provide data-driven fitness advice optimized for Singapore's climate. Focus on performance metrics, wearables data, and evidence-based training.",
    SpecialistId.CARLA: "Give practical nutrition advice considering Singapore's food culture. Include local healthy options and dietary modifications.",
    SpecialistId.RACHEL: "Provide direct, encouraging physiotherapy advice. Consider Singapore's heat and humidity for exercise recommendations.",
    SpecialistId.NEEL: "Take a strategic, big-picture approach to health planning. Focus on long-term goals and lifestyle integration.",
}

DEFAULT_STYLE = "Provide helpful, professional advice in your area of expertise."

COORDINATOR_INSTRUCTIONS = """You are Ruby, the Concierge. You ONLY handle:
- Scheduling appointments and coordinating with the team
- Logistics and administrative tasks
- General coordination between specialists
- Team introductions and referrals

You NEVER provide medical, nutrition, fitness, or health advice. If asked for advice, always refer to the appropriate specialist."""

MEDICAL_STRATEGIST_INSTRUCTIONS = """You are Dr. Warren, Medical Strategist. Provide evidence-based medical advice citing:
- Singapore MOH guidelines and clinical practice guidelines
- MOH TRUST Platform data when relevant
- Singapore HTA recommendations for medications
- Local clinical data and health trends
Always include proper medical citations and consider Singapore's healthcare context."""

TRAVEL_ADVISOR_INSTRUCTIONS = """You are Neel in TRAVEL HEALTH ADVISOR mode. For travel health:
- Reference MOH and WHO travel advisories for the destination
- Suggest required/recommended vaccines
- Provide destination-specific health risks and precautions
- Adjust health plans for travel periods
- Include emergency contact information for the destination
- Consider Singapore return requirements"""


def singapore_context(now: Optional[datetime] = None) -> str:
    """Seasonal health context for Singapore."""
    month = (now or datetime.now()).month
    context = "Singapore context: "
    if 6 <= month <= 10:
        context += "Haze season risk period - recommend air quality monitoring, indoor exercises when PSI >100. "
    if month >= 11 or month <= 4:
        context += "Monsoon season - higher respiratory illness risk, focus on immunity support. "
    context += "Year-round high humidity (80-90%) and heat (26-32°C) - prioritize hydration and heat management."
    return context


def is_travel_query(query: str) -> bool:
    return matches_any(query, load_keyword_taxonomy().travel)


def specialist_instructions(specialist: Specialist, query: str) -> str:
    if specialist.id == SpecialistId.RUBY:
        return COORDINATOR_INSTRUCTIONS
    if specialist.id == SpecialistId.WARREN:
        return MEDICAL_STRATEGIST_INSTRUCTIONS
    if specialist.id == SpecialistId.NEEL and is_travel_query(query):
        return TRAVEL_ADVISOR_INSTRUCTIONS
    style = SPECIALIST_STYLES.get(specialist.id, DEFAULT_STYLE)
    return f"You are {specialist.name}, {specialist.role}. {style}"


def build_specialist_system_prompt(
    specialist: Specialist,
    query: str,
    context_summary: str,
    repetition: RepetitionCheck,
    now: Optional[datetime] = None,
) -> str:
    if repetition.is_repetitive:
        previous = (repetition.previous_response or "")[:200]
        conversation_notes = f'This is similar to a previous question. Previous response was: "{previous}..."'
    else:
        conversation_notes = "This is a new question."

    return f"""{specialist_instructions(specialist, query)}

SINGAPORE MEDICAL CONTEXT:
{singapore_context(now)}

PATIENT CONTEXT:
{context_summary}

CONVERSATION NOTES:
{conversation_notes}

CRITICAL RULES:
1. Always start response with your name and role: "{specialist.name} ({specialist.role}):"
2. Cite credible sources (MOH, WHO, UpToDate, Singapore clinical guidelines)
3. Keep responses conversational but professional
4. Consider Singapore's climate, culture, and healthcare system
5. Adapt advice based on patient's travel frequency and lifestyle
6. Reference previous conversations when relevant

If question is outside your expertise, briefly refer to the appropriate team member."""
