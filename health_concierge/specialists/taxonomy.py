"""Keyword taxonomy shared by the router, advice detector and emergency gate."""

import json
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import BaseModel, ValidationError, field_validator

from ..errors import ConfigurationError
from ..logging_config import get_logger

logger = get_logger(__name__)

TAXONOMY_PATH = Path(__file__).parent / "keyword_taxonomy.json"


class SpecialistId(str, Enum):
    """Closed set of specialist identities, in routing declaration order."""
    RUBY = "ruby"
    WARREN = "warren"
    ADVIK = "advik"
    CARLA = "carla"
    RACHEL = "rachel"
    NEEL = "neel"


class KeywordTaxonomy(BaseModel):
    specialties: Dict[SpecialistId, List[str]]
    logistics: List[str]
    advice: List[str]
    emergency: List[str]
    travel: List[str]

    @field_validator("logistics", "advice", "emergency", "travel")
    @classmethod
    def _non_empty(cls, value: List[str]) -> List[str]:
        if not value:
            raise ValueError("keyword list must not be empty")
        return value

    @field_validator("specialties")
    @classmethod
    def _every_specialist_listed(cls, value: Dict[SpecialistId, List[str]]) -> Dict[SpecialistId, List[str]]:
        missing = [sid.value for sid in SpecialistId if not value.get(sid)]
        if missing:
            raise ValueError(f"no specialty keywords for: {', '.join(missing)}")
        return value


def parse_keyword_taxonomy(raw: str) -> KeywordTaxonomy:
    """Validate a taxonomy document, raising ConfigurationError on bad input."""
    try:
        return KeywordTaxonomy.model_validate(json.loads(raw))
    except (json.JSONDecodeError, ValidationError) as e:
        raise ConfigurationError(f"Invalid keyword taxonomy: {e}") from e


@lru_cache(maxsize=1)
def load_keyword_taxonomy(path: Optional[str] = None) -> KeywordTaxonomy:
    """Load the keyword taxonomy once per process."""
    taxonomy_path = Path(path) if path else TAXONOMY_PATH
    try:
        raw = taxonomy_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Keyword taxonomy not readable at {taxonomy_path}: {e}") from e

    taxonomy = parse_keyword_taxonomy(raw)
    logger.info(
        f"Loaded keyword taxonomy: {len(taxonomy.specialties)} specialists, "
        f"{len(taxonomy.emergency)} emergency keywords"
    )
    return taxonomy
