"""
Shared fixtures for the ranking tests.

The baseline profile built by make_profile() scores 350 against the
baseline preferences from make_preferences():

    age 30 in must-have band [28, 32]   +100
    gender "female" sought              +100
    height 170 within [160, 190]        +50
    smoking "never"                     +25
    drinking / drugs tolerance neutral  0
    children preference neutral         +25
    education bachelor >= high school   +25
    religion / politics not required    +12.5 each

Tests override single fields to move one dimension at a time.
"""

from pathlib import Path
from typing import List

import pytest

from matchfeed.schema import ConnectionMode, PreferenceSet, Profile, ProfileDetails


PROJECT_ROOT = Path(__file__).parent.parent


class ScriptedRandom:
    """Random source returning a fixed sequence of draws (cycled)."""

    def __init__(self, draws: List[float]):
        self.draws = list(draws)
        self.calls = 0

    def random(self) -> float:
        value = self.draws[self.calls % len(self.draws)]
        self.calls += 1
        return value


def _details(**overrides) -> ProfileDetails:
    values = dict(
        height_cm=170,
        smoking_status="never",
        drinking_frequency="socially",
        drug_use="never",
        education_level="bachelor degree",
        occupation="Engineer",
        has_children_number=0,
        religion="agnostic",
        political_views="moderate",
        openness=5,
        conscientiousness=5,
        extraversion=5,
        agreeableness=5,
        neuroticism=5,
        interests={"hiking", "music"},
        communication_preference="texting",
    )
    values.update(overrides)
    return ProfileDetails(**values)


def _preferences(**overrides) -> PreferenceSet:
    values = dict(
        age_min_must_have=28,
        age_max_must_have=32,
        age_min_preferred=25,
        age_max_preferred=35,
        age_min_acceptable=20,
        age_max_acceptable=40,
        seeking_genders={"female", "male", "nonbinary"},
        height_min_cm=160,
        height_max_cm=190,
        smoking_tolerance="neutral",
        drinking_tolerance="neutral",
        drugs_tolerance="neutral",
        children_preference="neutral",
        education_level_min="high school",
        career_importance="important",
        religion_importance=None,
        religion_compatibility_required=False,
        political_importance=None,
        political_compatibility_required=False,
    )
    values.update(overrides)
    return PreferenceSet(**values)


def _profile(user_id: str = "u1", details=None, preferences=None, **overrides) -> Profile:
    values = dict(
        user_id=user_id,
        age=30,
        gender="female",
        location="Springfield",
        details=details if details is not None else _details(),
        preferences=preferences if preferences is not None else _preferences(),
        connection_modes={ConnectionMode.DATING},
        likes_received_this_week=10,
        visibility_score=1.0,
    )
    values.update(overrides)
    return Profile(**values)


@pytest.fixture
def make_details():
    return _details


@pytest.fixture
def make_preferences():
    return _preferences


@pytest.fixture
def make_profile():
    return _profile


@pytest.fixture
def scripted_random():
    return ScriptedRandom


@pytest.fixture
def config_path():
    return PROJECT_ROOT / "configs" / "config.yaml"
