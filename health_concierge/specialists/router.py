"""Keyword-based specialist routing."""

from functools import lru_cache
from typing import Optional

from ..logging_config import get_logger
from .registry import Specialist, SpecialistRegistry, get_specialist_registry
from .scoring import matches_any, score
from .taxonomy import KeywordTaxonomy, load_keyword_taxonomy

logger = get_logger(__name__)


class SpecialistRouter:
    """Selects the specialist that should answer a query.

    Advisors are scored in registry declaration order and the first maximal
    score wins ties. When nothing matches, advice queries go to the default
    advisor and everything else to the coordinator, so routing always
    resolves.
    """

    def __init__(
        self,
        registry: Optional[SpecialistRegistry] = None,
        taxonomy: Optional[KeywordTaxonomy] = None,
    ):
        self.registry = registry or get_specialist_registry()
        self.taxonomy = taxonomy or load_keyword_taxonomy()

    def needs_advice(self, query: str) -> bool:
        return matches_any(query, self.taxonomy.advice)

    def is_logistics(self, query: str) -> bool:
        return matches_any(query, self.taxonomy.logistics)

    def route(self, query: str, needs_advice: bool = True) -> Specialist:
        if needs_advice:
            best: Optional[Specialist] = None
            best_score = 0
            for specialist in self.registry.advisors:
                current = score(query, specialist.specialties)
                if current > best_score:
                    best, best_score = specialist, current

            if best is None:
                logger.debug("No specialty keywords matched, using default advisor")
                return self.registry.default_advisor

            logger.debug(f"Routed advice query to {best.name} (score {best_score})")
            return best

        if self.is_logistics(query):
            logger.debug("Logistics keywords matched, routing to coordinator")
        return self.registry.coordinator


@lru_cache(maxsize=1)
def get_specialist_router() -> SpecialistRouter:
    """Get the router bound to the process-wide registry and taxonomy."""
    return SpecialistRouter()


def route(query: str, needs_advice: bool = True) -> Specialist:
    return get_specialist_router().route(query, needs_advice)


def needs_advice_detection(query: str) -> bool:
    """True when any advice-signal keyword occurs in ``query``."""
    return get_specialist_router().needs_advice(query)


def is_logistics_query(query: str) -> bool:
    return get_specialist_router().is_logistics(query)
