import json

import pytest

from health_concierge.errors import ConfigurationError
from health_concierge.specialists import (
    SpecialistId,
    SpecialistRouter,
    get_specialist_registry,
    is_logistics_query,
    matches_any,
    needs_advice_detection,
    route,
    score,
)
from health_concierge.specialists.registry import SpecialistRegistry, build_specialists
from health_concierge.specialists.taxonomy import TAXONOMY_PATH, parse_keyword_taxonomy


def test_score_counts_case_insensitive_substrings():
    assert score("My KNEE Pain is hurting", ["pain", "hurt", "knee", "elbow"]) == 3
    assert score("", ["pain"]) == 0
    assert score("anything", []) == 0


def test_score_counts_each_keyword_once():
    assert score("pain pain pain", ["pain"]) == 1


def test_matches_any():
    assert matches_any("Book me in", ["book"])
    assert not matches_any("hello", ["book", "team"])


@pytest.mark.parametrize("query", [
    "What should I do about it?",
    "Any advice for me?",
    "I feel off today",
])
def test_zero_keyword_advice_query_goes_to_default_advisor(query):
    specialist = route(query, True)
    assert specialist.id == SpecialistId.WARREN
    assert specialist.can_provide_advice


@pytest.mark.parametrize("query", [
    "Can you reschedule my Thursday appointment?",
    "Please book a session with the team",
    "Cancel tomorrow",
])
def test_logistics_without_advice_goes_to_coordinator(query):
    assert is_logistics_query(query)
    assert route(query, False).id == SpecialistId.RUBY


def test_non_advice_query_without_logistics_still_goes_to_coordinator():
    assert route("Hello there", False).id == SpecialistId.RUBY


def test_tie_goes_to_first_declared_advisor():
    query = "Should I track calories during training?"
    registry = get_specialist_registry()
    assert score(query, registry.get(SpecialistId.ADVIK).specialties) == 1
    assert score(query, registry.get(SpecialistId.CARLA).specialties) == 1
    assert route(query, True).id == SpecialistId.ADVIK


def test_highest_score_wins():
    assert route("My knee injuries affect mobility and posture", True).id == SpecialistId.RACHEL
    assert route("Any supplements or vitamins for my diet?", True).id == SpecialistId.CARLA


def test_advice_route_never_returns_coordinator():
    # "scheduling" is one of the coordinator's specialties
    assert route("How do I improve my scheduling?", True).id != SpecialistId.RUBY


def test_needs_advice_detection():
    assert needs_advice_detection("What should I eat before my flight to reduce bloating?")
    assert needs_advice_detection("I'm worried about this")
    assert not needs_advice_detection("Can you reschedule my Thursday appointment?")


def test_bloating_question_goes_to_nutritionist():
    assert route("What should I eat before my flight to reduce bloating?", True).id == SpecialistId.CARLA


def test_registry_shape():
    registry = get_specialist_registry()
    assert [s.id for s in registry] == list(SpecialistId)
    assert registry.coordinator.id == SpecialistId.RUBY
    assert not registry.coordinator.can_provide_advice
    assert registry.default_advisor.id == SpecialistId.WARREN
    assert len(registry.advisors) == 5
    assert "neel" in registry
    assert "nobody" not in registry


def test_team_member_avatar_uses_last_name_initial():
    registry = get_specialist_registry()
    assert registry.get(SpecialistId.WARREN).to_team_member().avatar == "W"
    assert registry.get(SpecialistId.RUBY).to_team_member().avatar == "R"


def test_registry_rejects_duplicates():
    specialists = build_specialists()
    with pytest.raises(ConfigurationError):
        SpecialistRegistry(specialists + [specialists[1]])


def test_registry_rejects_missing_coordinator():
    specialists = [s for s in build_specialists() if s.id != SpecialistId.RUBY]
    with pytest.raises(ConfigurationError):
        SpecialistRegistry(specialists)


def test_router_uses_injected_taxonomy():
    raw = json.loads(TAXONOMY_PATH.read_text(encoding="utf-8"))
    raw["advice"] = ["zzz"]
    taxonomy = parse_keyword_taxonomy(json.dumps(raw))
    router = SpecialistRouter(taxonomy=taxonomy)
    assert router.needs_advice("zzz please")
    assert not router.needs_advice("how do I recommend")


def test_taxonomy_rejects_missing_specialist():
    raw = json.loads(TAXONOMY_PATH.read_text(encoding="utf-8"))
    del raw["specialties"]["carla"]
    with pytest.raises(ConfigurationError):
        parse_keyword_taxonomy(json.dumps(raw))


def test_taxonomy_rejects_empty_emergency_list():
    raw = json.loads(TAXONOMY_PATH.read_text(encoding="utf-8"))
    raw["emergency"] = []
    with pytest.raises(ConfigurationError):
        parse_keyword_taxonomy(json.dumps(raw))


def test_taxonomy_rejects_malformed_json():
    with pytest.raises(ConfigurationError):
        parse_keyword_taxonomy("{not json")
