"""
Snapshot loading tests.

Test Categories:
1. Row decoding (column mapping, JSON arrays, flags, missing cells)
2. CSV / JSON files
3. Synthetic population
"""

import json

import pandas as pd
import pytest

from matchfeed.data_loading import (
    create_synthetic_frame,
    create_synthetic_profiles,
    load_profiles,
    profile_from_row,
    profiles_from_frame,
)
from matchfeed.errors import MalformedInputError
from matchfeed.schema import BIG_FIVE_TRAITS, ConnectionMode


@pytest.fixture
def rows():
    return [
        {
            "user_id": "u1",
            "age": 30,
            "gender": "female",
            "location_city": "Austin",
            "location_state": "TX",
            "seeking_dating": 1,
            "seeking_casual": 0,
            "seeking_platonic": 1,
            "likes_received_week": 4,
            "swipes_week": 31,
            "visibility_score": 1.5,
            "height_cm": 168,
            "smoking_status": "never",
            "has_children_number": 1,
            "openness_score": 7,
            "conscientiousness_score": 6,
            "extraversion_score": 4,
            "agreeableness_score": 8,
            "neuroticism_score": 3,
            "interests": json.dumps(["hiking", "music"]),
            "communication_preference": "texting",
            "age_min_musthave": 28,
            "age_max_musthave": 35,
            "seeking_genders": json.dumps(["male", "nonbinary"]),
            "smoking_tolerance": "dealbreaker",
            "religion_compatibility_required": 1,
        },
        {
            "user_id": "u2",
            "gender": "male",
            "seeking_casual": 1,
        },
    ]


@pytest.fixture
def frame(rows):
    return pd.DataFrame(rows)


# ============================================================
# TEST: ROW DECODING
# ============================================================

class TestRowDecoding:

    def test_full_row(self, frame):
        profile = profiles_from_frame(frame)[0]

        assert profile.user_id == "u1"
        assert profile.age == 30
        assert profile.location == "Austin, TX"
        assert profile.connection_modes == frozenset({ConnectionMode.DATING, ConnectionMode.PLATONIC})
        assert profile.likes_received_this_week == 4
        assert profile.swipes_this_week == 31
        assert profile.visibility_score == 1.5

    def test_details_columns(self, frame):
        details = profiles_from_frame(frame)[0].details

        assert details.height_cm == 168
        assert details.openness == 7
        assert details.neuroticism == 3
        assert details.interests == frozenset({"hiking", "music"})
        assert details.has_children_number == 1
        assert details.has_children

    def test_preference_columns(self, frame):
        prefs = profiles_from_frame(frame)[0].preferences

        assert prefs.age_min_must_have == 28
        assert prefs.age_max_must_have == 35
        assert prefs.age_min_preferred is None
        assert prefs.seeking_genders == frozenset({"male", "nonbinary"})
        assert prefs.smoking_tolerance == "dealbreaker"
        assert prefs.religion_compatibility_required is True
        assert prefs.political_compatibility_required is False

    def test_missing_cells_become_none(self, frame):
        profile = profiles_from_frame(frame)[1]

        assert profile.age is None
        assert profile.location is None
        assert profile.preferences is None
        assert profile.details.openness is None
        assert profile.details.interests == frozenset()
        assert profile.connection_modes == frozenset({ConnectionMode.CASUAL})
        assert profile.likes_received_this_week == 0
        assert profile.visibility_score == 1.0

    def test_values_are_native_python(self, frame):
        profile = profiles_from_frame(frame)[0]
        assert type(profile.likes_received_this_week) is int
        assert type(profile.visibility_score) is float
        assert not type(profile.details.height_cm).__module__.startswith("numpy")

    def test_string_flags(self):
        profile = profile_from_row({"user_id": "x", "seeking_dating": "true", "seeking_casual": "0"})
        assert profile.connection_modes == frozenset({ConnectionMode.DATING})

    def test_numeric_user_id_as_string(self):
        assert profile_from_row({"user_id": 101}).user_id == "101"

    def test_explicit_location_wins(self):
        row = {"user_id": "x", "location": "Remote", "location_city": "Austin"}
        assert profile_from_row(row).location == "Remote"

    def test_empty_json_array(self):
        assert profile_from_row({"user_id": "x", "interests": ""}).details.interests == frozenset()

    def test_non_array_json_rejected(self):
        with pytest.raises(MalformedInputError) as exc_info:
            profile_from_row({"user_id": "x", "interests": '{"hiking": true}'})
        assert exc_info.value.field == "interests"

    def test_missing_user_id(self):
        with pytest.raises(MalformedInputError):
            profile_from_row({"age": 30})

    def test_big_five_out_of_range(self):
        with pytest.raises(MalformedInputError):
            profile_from_row({"user_id": "x", "openness_score": 11})


# ============================================================
# TEST: FILES
# ============================================================

class TestFiles:

    def test_csv(self, frame, tmp_path):
        path = tmp_path / "users.csv"
        frame.to_csv(path, index=False)

        profiles = load_profiles(str(path))

        assert [p.user_id for p in profiles] == ["u1", "u2"]
        assert profiles[0].details.interests == frozenset({"hiking", "music"})
        assert profiles[0].preferences.seeking_genders == frozenset({"male", "nonbinary"})
        assert profiles[1].preferences is None

    def test_json(self, rows, tmp_path):
        path = tmp_path / "users.json"
        path.write_text(json.dumps(rows))

        profiles = load_profiles(str(path))

        assert [p.user_id for p in profiles] == ["u1", "u2"]
        assert profiles[0].location == "Austin, TX"
        assert profiles[0].details.agreeableness == 8
        assert profiles[1].age is None

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_profiles(str(tmp_path / "missing.csv"))

    def test_header_only_csv(self, tmp_path):
        path = tmp_path / "empty.csv"
        path.write_text("user_id,age,gender\n")
        with pytest.raises(ValueError):
            load_profiles(str(path))

    def test_unsupported_format(self, tmp_path):
        path = tmp_path / "users.parquet"
        path.write_text("not really parquet")
        with pytest.raises(ValueError, match="Unsupported"):
            load_profiles(str(path))


# ============================================================
# TEST: SYNTHETIC POPULATION
# ============================================================

class TestSynthetic:

    def test_shape(self):
        profiles = create_synthetic_profiles(40, random_seed=1)

        assert len(profiles) == 40
        assert len({p.user_id for p in profiles}) == 40
        assert all(p.preferences is not None for p in profiles)
        assert all(p.age is not None for p in profiles)

    def test_big_five_in_range(self):
        for profile in create_synthetic_profiles(40, random_seed=2):
            for trait in BIG_FIVE_TRAITS:
                assert 1 <= getattr(profile.details, trait) <= 10

    def test_nested_age_bands(self):
        for profile in create_synthetic_profiles(40, random_seed=3):
            p = profile.preferences
            assert p.age_min_acceptable <= p.age_min_must_have <= profile.age <= p.age_max_must_have
            assert p.age_max_must_have <= p.age_max_acceptable

    def test_reproducible(self):
        pd.testing.assert_frame_equal(
            create_synthetic_frame(25, random_seed=9),
            create_synthetic_frame(25, random_seed=9),
        )
        assert not create_synthetic_frame(25, random_seed=9).equals(
            create_synthetic_frame(25, random_seed=10)
        )
