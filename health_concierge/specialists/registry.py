"""Static specialist registry."""

from functools import lru_cache
from typing import Dict, List, Tuple

from pydantic import ConfigDict

from ..errors import ConfigurationError
from ..models.base import CamelModel
from ..models.chat import TeamMember
from .taxonomy import SpecialistId, load_keyword_taxonomy


class Specialist(CamelModel):
    """A concierge team persona."""

    model_config = ConfigDict(frozen=True)

    id: SpecialistId
    name: str
    role: str
    color: str
    specialties: Tuple[str, ...]
    can_provide_advice: bool

    def to_team_member(self) -> TeamMember:
        avatar = self.name.split()[-1][0].upper()
        return TeamMember(id=self.id.value, name=self.name, role=self.role, color=self.color, avatar=avatar)


# id, name, role, can_provide_advice -- in routing declaration order
_IDENTITIES = [
    (SpecialistId.RUBY, "Ruby", "Concierge", False),
    (SpecialistId.WARREN, "Dr. Warren", "Medical Strategist", True),
    (SpecialistId.ADVIK, "Advik", "Performance Scientist", True),
    (SpecialistId.CARLA, "Carla", "Nutritionist", True),
    (SpecialistId.RACHEL, "Rachel", "Physiotherapist", True),
    (SpecialistId.NEEL, "Neel", "Relationship Manager", True),
]

COORDINATOR_ID = SpecialistId.RUBY
DEFAULT_ADVISOR_ID = SpecialistId.WARREN


class SpecialistRegistry:
    """Read-only, ordered collection of specialists."""

    def __init__(self, specialists: List[Specialist]):
        self._ordered = list(specialists)
        self._by_id: Dict[SpecialistId, Specialist] = {s.id: s for s in self._ordered}
        self._validate()

    def _validate(self) -> None:
        if len(self._by_id) != len(self._ordered):
            raise ConfigurationError("Duplicate specialist ids in registry")

        coordinators = [s for s in self._ordered if not s.can_provide_advice]
        if len(coordinators) != 1:
            raise ConfigurationError(f"Expected exactly one coordinator, found {len(coordinators)}")
        if coordinators[0].id != COORDINATOR_ID:
            raise ConfigurationError(f"Coordinator must be '{COORDINATOR_ID.value}'")

        default_advisor = self._by_id.get(DEFAULT_ADVISOR_ID)
        if default_advisor is None or not default_advisor.can_provide_advice:
            raise ConfigurationError(f"Default advisor '{DEFAULT_ADVISOR_ID.value}' must be able to provide advice")

    @property
    def all(self) -> List[Specialist]:
        return list(self._ordered)

    @property
    def advisors(self) -> List[Specialist]:
        return [s for s in self._ordered if s.can_provide_advice]

    @property
    def coordinator(self) -> Specialist:
        return self._by_id[COORDINATOR_ID]

    @property
    def default_advisor(self) -> Specialist:
        return self._by_id[DEFAULT_ADVISOR_ID]

    def get(self, specialist_id: SpecialistId) -> Specialist:
        return self._by_id[SpecialistId(specialist_id)]

    def __contains__(self, specialist_id: object) -> bool:
        try:
            return SpecialistId(specialist_id) in self._by_id
        except ValueError:
            return False

    def __iter__(self):
        return iter(self._ordered)

    def __len__(self) -> int:
        return len(self._ordered)


def build_specialists() -> List[Specialist]:
    """Combine the fixed identities with specialty keywords from the taxonomy."""
    taxonomy = load_keyword_taxonomy()
    return [
        Specialist(
            id=sid,
            name=name,
            role=role,
            color=sid.value,
            specialties=tuple(taxonomy.specialties[sid]),
            can_provide_advice=can_advise,
        )
        for sid, name, role, can_advise in _IDENTITIES
    ]


@lru_cache(maxsize=1)
def get_specialist_registry() -> SpecialistRegistry:
    """Get the process-wide specialist registry."""
    return SpecialistRegistry(build_specialists())
