from datetime import datetime

import pytest

from personatwin.interview import PersonalityDimension as D
from personatwin.profile import PersonalityProfile, CommunicationStyle
from personatwin.twin import StoredTwin, calculate_compatibility

FIXED_NOW = datetime(2024, 5, 1, 12, 30)


def test_compatibility_scoring():
    twin1 = StoredTwin(
        communication_style="Casual & Balanced",
        interests=["Technology", "Music"],
        formality_score=0.2,
        analytical_score=0.5,
        question_frequency=0.1,
        verbosity_score=0.2,
    )
    twin2 = StoredTwin(
        communication_style="Formal & Analytical",
        interests=["Technology"],
        formality_score=0.7,
        analytical_score=0.6,
        question_frequency=0.6,
        verbosity_score=0.9,
    )
    result = calculate_compatibility(twin1, twin2)

    assert result.score == pytest.approx(85.0)
    assert result.strengths == ["Shared interests: Technology", "Balanced communication styles"]
    assert result.complementary_traits == ["Natural conversation flow", "Complementary detail levels"]


def test_identical_twins_without_interests():
    twin = StoredTwin(communication_style="Balanced & Balanced")
    result = calculate_compatibility(twin, twin)
    assert result.score == pytest.approx(45.0)
    assert result.strengths == []
    assert result.complementary_traits == []


def test_shared_interests_relative_to_first_twin():
    twin1 = StoredTwin(communication_style="x", interests=["Art", "Music"])
    twin2 = StoredTwin(communication_style="y", interests=["Music", "Art", "Travel"])
    assert calculate_compatibility(twin1, twin2).strengths[0] == "Shared interests: Art, Music"
    assert calculate_compatibility(twin1, twin2).score == pytest.approx(30 + 10 + 20 + 10 + 5)


def test_scores_are_clipped():
    twin = StoredTwin(communication_style="x", formality_score=1.4, verbosity_score=-0.2)
    assert twin.formality_score == 1.0
    assert twin.verbosity_score == 0.0


def test_from_profile_uses_strong_dimensions():
    dimensions = {d: 0.5 for d in D}
    dimensions[D.HUMOR] = 0.9
    dimensions[D.ANALYTICAL_THINKING] = 0.7
    dimensions[D.FORMALITY] = 0.2
    profile = PersonalityProfile(
        dimensions=dimensions,
        communication_style=CommunicationStyle(formality=0.2, expressiveness=0.9),
        comfort_topics=["Friendships"],
    )
    twin = StoredTwin.from_profile(profile, ["Personal storyteller"], clock=lambda: FIXED_NOW)

    assert twin.personality_traits == ["Humor", "Analytical Thinking"]
    assert twin.communication_style == "Casual and expressive"
    assert twin.interests == ["Friendships"]
    assert twin.conversation_patterns == ["Personal storyteller"]
    assert twin.formality_score == 0.2
    assert twin.analytical_score == 0.7
    assert twin.created_at == twin.last_updated == FIXED_NOW


def test_dict_round_trip_keeps_dates():
    twin = StoredTwin(communication_style="x", interests=["Music"], created_at=FIXED_NOW, last_updated=FIXED_NOW)
    data = twin.to_dict()
    assert data["created_at"] == "2024-05-01T12:30:00"

    data["unexpected"] = "ignored"
    restored = StoredTwin.from_dict(data)
    assert restored == twin
