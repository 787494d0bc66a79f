"""Specialist registry, keyword routing and referral composition."""

from .referral import referral, validate_referral_phrases
from .registry import Specialist, SpecialistRegistry, get_specialist_registry
from .router import SpecialistRouter, get_specialist_router, is_logistics_query, needs_advice_detection, route
from .scoring import matches_any, score
from .taxonomy import KeywordTaxonomy, SpecialistId, load_keyword_taxonomy

__all__ = [
    "KeywordTaxonomy",
    "Specialist",
    "SpecialistId",
    "SpecialistRegistry",
    "SpecialistRouter",
    "get_specialist_registry",
    "get_specialist_router",
    "is_logistics_query",
    "load_keyword_taxonomy",
    "matches_any",
    "needs_advice_detection",
    "referral",
    "route",
    "score",
    "validate_referral_phrases",
]
