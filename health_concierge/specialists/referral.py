"""Coordinator hand-off phrases."""

from typing import Dict, Optional

from ..errors import ConfigurationError
from .registry import Specialist, SpecialistRegistry, get_specialist_registry
from .taxonomy import SpecialistId

REFERRAL_PHRASES: Dict[SpecialistId, str] = {
    SpecialistId.WARREN: "I understand your concern about this health issue. Let me bring in Dr. Warren to provide you with proper medical guidance.",
    SpecialistId.ADVIK: "That's a great fitness question! Let me connect you with Advik, our Performance Scientist, who can give you expert advice.",
    SpecialistId.CARLA: "Perfect nutrition question! I'll bring in Carla, our Nutritionist, to help you with that.",
    SpecialistId.RACHEL: "That sounds like something our Physiotherapist Rachel can help you with. Let me get her for you.",
    SpecialistId.NEEL: "This seems like a perfect question for Neel, our Relationship Manager, who handles health planning and strategy.",
}

GENERIC_REFERRAL = "Let me connect you with {name} from our team who can help you with that."


def referral(advisor: Specialist) -> str:
    """Hand-off line the coordinator sends before an advisor answers."""
    phrase = REFERRAL_PHRASES.get(advisor.id)
    if phrase is None:
        return GENERIC_REFERRAL.format(name=advisor.name)
    return phrase


def validate_referral_phrases(
    registry: Optional[SpecialistRegistry] = None,
    phrases: Optional[Dict[SpecialistId, str]] = None,
) -> None:
    """Fail at startup unless every advisor has exactly one known phrase."""
    registry = registry or get_specialist_registry()
    phrases = REFERRAL_PHRASES if phrases is None else phrases

    missing = [s.id.value for s in registry.advisors if not phrases.get(s.id)]
    if missing:
        raise ConfigurationError(f"Missing referral phrases for: {', '.join(missing)}")

    unknown = [str(key) for key in phrases if key not in registry]
    if unknown:
        raise ConfigurationError(f"Referral phrases for unknown specialists: {', '.join(unknown)}")

    if registry.coordinator.id in phrases:
        raise ConfigurationError("The coordinator cannot be a referral target")
