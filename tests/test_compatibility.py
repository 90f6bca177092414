"""
Compatibility scoring tests.

Test Categories:
1. Component functions (personality, interests, communication)
2. Overall blend, rounding, tiers
3. Symmetry and malformed input
"""

import logging
from dataclasses import replace

import pytest

from matchfeed.compatibility import (
    CompatibilityScorer,
    communication_match,
    interest_overlap,
    personality_compatibility,
)
from matchfeed.errors import MalformedInputError
from matchfeed.schema import MatchTier


@pytest.fixture
def scorer():
    return CompatibilityScorer()


@pytest.fixture
def poor_pair(make_profile, make_details, make_preferences):
    """
    Viewer and candidate who don't seek each other's gender and differ in
    personality, interests and communication style.

        preferences:   both directions 230 -> 230 / 300 * 100 = 76.67
        personality:   15 + 10 + 12 + 10 + 7.5 = 54.5
        interests:     0
        communication: 50
        raw = 30.67 + 16.35 + 0 + 5 = 52.02
    """
    viewer = make_profile("viewer", gender="female",
                          preferences=make_preferences(seeking_genders={"female"}))
    candidate = make_profile(
        "candidate",
        gender="male",
        preferences=make_preferences(seeking_genders={"male"}),
        details=make_details(
            agreeableness=1, neuroticism=10, openness=10, conscientiousness=1,
            interests={"chess"}, communication_preference="calling",
        ),
    )
    return viewer, candidate


class TestComponents:

    def test_interest_overlap_empty(self):
        assert interest_overlap([], []) == 0

    @pytest.mark.parametrize("interests", [["hiking"], ["a", "b", "c"], {"music", "art"}])
    def test_interest_overlap_identical(self, interests):
        assert interest_overlap(interests, interests) == 100

    def test_interest_overlap_partial(self):
        assert interest_overlap({"a", "b"}, {"b", "c"}) == pytest.approx(100 / 3)
        assert interest_overlap(["a"], []) == 0

    def test_interest_overlap_ignores_duplicates(self):
        assert interest_overlap(["a", "a", "b"], ["a", "b"]) == 100

    def test_personality_identical_midpoints(self, make_details):
        # 25 + 20 + 20 + 10 + 15
        assert personality_compatibility(make_details(), make_details()) == 90

    @pytest.mark.parametrize("a,b,bonus", [
        (3, 7, 15),   # diff 4
        (2, 8, 15),   # diff 6
        (3, 6, 10),   # diff 3, exclusive bound
        (1, 8, 10),   # diff 7, exclusive bound
        (1, 10, 10),  # diff 9
    ])
    def test_extraversion_complementarity(self, make_details, a, b, bonus):
        score = personality_compatibility(make_details(extraversion=a), make_details(extraversion=b))
        assert score == 80 + bonus

    def test_personality_clamped_to_100(self, make_details):
        a = make_details(agreeableness=10, neuroticism=1, extraversion=2)
        b = make_details(agreeableness=10, neuroticism=1, extraversion=7)
        # 50 + 20 + 20 + 15 + 27 = 132
        assert personality_compatibility(a, b) == 100

    def test_personality_symmetric(self, make_details):
        a = make_details(openness=2, conscientiousness=9, extraversion=1, agreeableness=4, neuroticism=8)
        b = make_details(openness=7, conscientiousness=3, extraversion=6, agreeableness=9, neuroticism=2)
        assert personality_compatibility(a, b) == personality_compatibility(b, a)

    def test_personality_missing_trait(self, make_details):
        with pytest.raises(MalformedInputError) as exc_info:
            personality_compatibility(make_details(neuroticism=None), make_details(), ("x", "y"))
        assert exc_info.value.field == "neuroticism"
        assert exc_info.value.user_id == "x"

    def test_communication(self):
        assert communication_match("texting", "texting") == 100
        assert communication_match("texting", "calling") == 50
        assert communication_match(None, "calling") == 50


class TestOverall:

    def test_identical_profiles(self, scorer, make_profile):
        result = scorer.score(make_profile("a"), make_profile("b"))

        # preferences 350 / 300 * 100 = 116.67 -> raw 46.67 + 27 + 20 + 10
        assert result.raw_score == pytest.approx(103.6667, abs=1e-3)
        assert result.score == 100
        assert result.breakdown.preferences == 117
        assert result.breakdown.personality == 90
        assert result.breakdown.interests == 100
        assert result.breakdown.communication == 100
        assert result.is_match
        assert result.tier is MatchTier.PERFECT

    def test_poor_match(self, scorer, poor_pair):
        viewer, candidate = poor_pair
        result = scorer.score(viewer, candidate)

        assert result.raw_score == pytest.approx(52.0167, abs=1e-3)
        assert result.score == 52
        assert result.breakdown.to_dict() == {
            "preferences": 77,
            "personality": 55,
            "interests": 0,
            "communication": 50,
        }
        assert not result.is_match
        assert result.tier is MatchTier.POOR

    def test_preference_component_averages_directions(self, scorer, make_profile, make_preferences):
        a = make_profile("a", age=30)
        b = make_profile("b", age=45, preferences=make_preferences(
            age_min_must_have=40, age_max_must_have=50,
        ))
        # a on b: 350 - 110 = 240; b on a: 350 - 50 = 300
        assert scorer.preference_component(a, b) == pytest.approx(270 / 300 * 100)

    def test_non_preference_components_symmetric(self, scorer, poor_pair):
        viewer, candidate = poor_pair
        forward = scorer.score(viewer, candidate).breakdown
        backward = scorer.score(candidate, viewer).breakdown
        assert forward.personality == backward.personality
        assert forward.interests == backward.interests
        assert forward.communication == backward.communication

    @pytest.mark.parametrize("raw,tier", [
        (100, MatchTier.PERFECT),
        (95, MatchTier.PERFECT),
        (94.99, MatchTier.GREAT),
        (80, MatchTier.GREAT),
        (79.9, MatchTier.GOOD),
        (60, MatchTier.GOOD),
        (59.99, MatchTier.POOR),
        (-5, MatchTier.POOR),
    ])
    def test_tier_thresholds(self, scorer, raw, tier):
        assert scorer.classify(raw) is tier

    def test_missing_preferences(self, scorer, make_profile):
        with pytest.raises(MalformedInputError):
            scorer.score(make_profile("a"), replace(make_profile("b"), preferences=None))

    def test_result_to_dict(self, scorer, make_profile):
        d = scorer.score(make_profile("a"), make_profile("b")).to_dict()
        assert d["score"] == 100
        assert d["tier"] == "perfect"
        assert d["is_match"] is True

    def test_components_logged_at_debug(self, scorer, poor_pair, caplog):
        caplog.set_level(logging.DEBUG, logger="matchfeed")
        viewer, candidate = poor_pair

        scorer.score(viewer, candidate)

        assert "Compatibility viewer -> candidate: raw 52.02" in caplog.text
        assert "Candidate candidate: preference score 230.0, tier MUST_HAVE" in caplog.text
