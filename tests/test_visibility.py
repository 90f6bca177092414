"""Visibility (exposure equalization) tests."""

import pytest

from matchfeed.configs import MatchingConfig
from matchfeed.visibility import VisibilityModel, platform_average_likes


@pytest.fixture
def model():
    return VisibilityModel()


class TestVisibility:

    def test_zero_inputs_return_baseline(self, model):
        assert model.visibility(0, 10) == 1.0
        assert model.visibility(10, 0) == 1.0
        assert model.visibility(0, 0) == 1.0

    def test_inverse_relationship(self, model):
        assert model.visibility(10, 10) == 1.0
        assert model.visibility(20, 10) == 0.5
        assert model.visibility(5, 10) == 2.0

    def test_clamped_to_bounds(self, model):
        assert model.visibility(1, 100) == 3.0
        assert model.visibility(1000, 1) == 0.1

    @pytest.mark.parametrize("likes", [1, 2, 7, 33, 150, 10000])
    @pytest.mark.parametrize("average", [0.5, 3, 12.5, 400])
    def test_always_within_bounds(self, model, likes, average):
        assert 0.1 <= model.visibility(likes, average) <= 3.0

    def test_custom_bounds(self):
        model = VisibilityModel(MatchingConfig(min_visibility=0.5, max_visibility=2.0))
        assert model.visibility(1, 100) == 2.0
        assert model.visibility(100, 1) == 0.5


class TestRecomputeAll:

    def test_three_profile_population(self, model, make_profile):
        profiles = [
            make_profile("a", likes_received_this_week=0, visibility_score=2.0),
            make_profile("b", likes_received_this_week=10, visibility_score=2.0),
            make_profile("c", likes_received_this_week=20, visibility_score=2.0),
        ]

        result = model.recompute_all(profiles)

        assert result.platform_average_likes_per_week == 10
        assert [p.user_id for p in result.profiles] == ["a", "b", "c"]
        assert [p.visibility_score for p in result.profiles] == [1.0, 1.0, 0.5]
        assert all(p.platform_average_likes_per_week == 10 for p in result.profiles)

    def test_inputs_untouched(self, model, make_profile):
        original = make_profile("a", likes_received_this_week=30, visibility_score=2.0)
        result = model.recompute_all([original, make_profile("b", likes_received_this_week=10)])

        assert original.visibility_score == 2.0
        assert original.platform_average_likes_per_week is None
        assert result.profiles[0] is not original
        assert result.profiles[0].visibility_score == pytest.approx(20 / 30)

    def test_average_is_arithmetic_mean(self, model, make_profile):
        likes = [3, 8, 0, 41, 13]
        profiles = [make_profile(f"u{i}", likes_received_this_week=n) for i, n in enumerate(likes)]

        result = model.recompute_all(profiles)

        assert result.platform_average_likes_per_week == pytest.approx(sum(likes) / len(likes))
        assert len(result.profiles) == len(profiles)

    def test_empty_population(self, model):
        result = model.recompute_all([])
        assert result.profiles == ()
        assert result.platform_average_likes_per_week == 0
        assert platform_average_likes([]) == 0

    def test_accepts_generators(self, model, make_profile):
        result = model.recompute_all(make_profile(f"u{i}", likes_received_this_week=i) for i in range(4))
        assert len(result.profiles) == 4
        assert result.platform_average_likes_per_week == 1.5

    def test_to_dict(self, model, make_profile):
        d = model.recompute_all([make_profile("a", likes_received_this_week=4)]).to_dict()
        assert d["platform_average_likes_per_week"] == 4
        assert d["profiles"] == [
            {"user_id": "a", "likes_received_this_week": 4, "visibility_score": 1.0}
        ]
