"""
Multi-factor compatibility scoring.

Four independently computed components are blended with fixed weights:

    overall = 0.4 * preferences + 0.3 * personality
            + 0.2 * interests   + 0.1 * communication

Components (all on a 0-100 scale):
- Preferences: both directional preference scores averaged, as a percentage
  of 3 * MUST_HAVE. Not clamped, so it can leave [0, 100].
- Personality: Big Five heuristic. High agreeableness, similar openness and
  conscientiousness, moderately different extraversion and low neuroticism
  score higher. Clamped to [0, 100].
- Interests: Jaccard similarity of the interest sets.
- Communication: 100 for the same preferred style, 50 otherwise.
"""

import logging
from typing import Iterable, Optional

from ..configs import MatchingConfig, DEFAULT_CONFIG
from ..errors import MalformedInputError
from ..preferences import PreferenceEvaluator
from ..schema import (
    BIG_FIVE_TRAITS,
    CompatibilityBreakdown,
    CompatibilityResult,
    MatchTier,
    Profile,
    ProfileDetails,
)
from ..utils import clamp, round_half_up

logger = logging.getLogger(__name__)


def _require_big_five(details: ProfileDetails, user_id: Optional[str]) -> None:
    for trait in BIG_FIVE_TRAITS:
        if getattr(details, trait) is None:
            raise MalformedInputError(
                f"Profile {user_id} is missing {trait} score",
                field=trait,
                user_id=user_id,
            )


def personality_compatibility(
    details_a: ProfileDetails,
    details_b: ProfileDetails,
    user_ids: tuple = (None, None)
) -> float:
    """
    Big Five personality compatibility on a 0-100 scale.

    Formula:
        avg(agreeableness) * 5
        + (10 - |openness_a - openness_b|) * 2
        + (10 - |conscientiousness_a - conscientiousness_b|) * 2
        + (15 if 3 < |extraversion_a - extraversion_b| < 7 else 10)
        + (10 - avg(neuroticism)) * 3

    Args:
        details_a: First profile's details
        details_b: Second profile's details
        user_ids: Ids used in error messages

    Returns:
        Score clamped to [0, 100]

    Raises:
        MalformedInputError: If either side lacks a Big Five score
    """
    _require_big_five(details_a, user_ids[0])
    _require_big_five(details_b, user_ids[1])

    score = (details_a.agreeableness + details_b.agreeableness) / 2 * 5

    score += (10 - abs(details_a.openness - details_b.openness)) * 2
    score += (10 - abs(details_a.conscientiousness - details_b.conscientiousness)) * 2

    # Moderate (not extreme) extraversion differences complement each other
    extraversion_diff = abs(details_a.extraversion - details_b.extraversion)
    score += 15 if 3 < extraversion_diff < 7 else 10

    score += (10 - (details_a.neuroticism + details_b.neuroticism) / 2) * 3

    return clamp(score, 0, 100)


def interest_overlap(interests_a: Iterable[str], interests_b: Iterable[str]) -> float:
    """Jaccard similarity of two interest collections, times 100 (0 if both empty)."""
    set_a = set(interests_a)
    set_b = set(interests_b)
    union = set_a | set_b
    if not union:
        return 0.0
    return len(set_a & set_b) / len(union) * 100


def communication_match(style_a: Optional[str], style_b: Optional[str]) -> float:
    return 100.0 if style_a == style_b else 50.0


class CompatibilityScorer:
    """
    Combines preference, personality, interest and communication signals.

    Attributes:
        config: MatchingConfig with component weights and thresholds
        evaluator: PreferenceEvaluator for the two directional checks
    """

    def __init__(
        self,
        config: Optional[MatchingConfig] = None,
        evaluator: Optional[PreferenceEvaluator] = None
    ):
        self.config = config or DEFAULT_CONFIG
        self.evaluator = evaluator or PreferenceEvaluator(self.config)

    def score(self, profile_a: Profile, profile_b: Profile) -> CompatibilityResult:
        """
        Compute compatibility between two profiles.

        Args:
            profile_a: First profile (the viewer, in a feed)
            profile_b: Second profile (the candidate, in a feed)

        Returns:
            CompatibilityResult with display score, breakdown, match flag and tier

        Raises:
            MalformedInputError: If a profile lacks preferences, age or Big Five scores
        """
        cfg = self.config
        weights = cfg.component_weights

        preferences = self.preference_component(profile_a, profile_b)
        personality = personality_compatibility(
            profile_a.details, profile_b.details,
            user_ids=(profile_a.user_id, profile_b.user_id)
        )
        interests = interest_overlap(profile_a.details.interests, profile_b.details.interests)
        communication = communication_match(
            profile_a.details.communication_preference,
            profile_b.details.communication_preference
        )

        raw = (
            preferences * weights.preferences +
            personality * weights.personality +
            interests * weights.interests +
            communication * weights.communication
        )

        logger.debug(f"Compatibility {profile_a.user_id} -> {profile_b.user_id}: raw {raw:.2f} "
                     f"(preferences {preferences:.1f}, personality {personality:.1f}, "
                     f"interests {interests:.1f}, communication {communication:.0f})")

        breakdown = CompatibilityBreakdown(
            preferences=round_half_up(preferences),
            personality=round_half_up(personality),
            interests=round_half_up(interests),
            communication=round_half_up(communication),
        )

        return CompatibilityResult(
            score=int(clamp(round_half_up(raw), 0, 100)),
            breakdown=breakdown,
            is_match=raw >= cfg.match_threshold,
            tier=self.classify(raw),
            raw_score=raw,
        )

    def preference_component(self, profile_a: Profile, profile_b: Profile) -> float:
        """
        Mutual preference score as a percentage of 3 * MUST_HAVE.

        Each side's preferences are applied to the other and the two raw
        scores averaged. The directions are not normalized against each
        other.
        """
        a_on_b = self.evaluator.evaluate(profile_b, profile_a.require_preferences())
        b_on_a = self.evaluator.evaluate(profile_a, profile_b.require_preferences())
        average = (a_on_b.score + b_on_a.score) / 2
        return average / (self.config.preference_weights.must_have * 3) * 100

    def classify(self, raw_score: float) -> MatchTier:
        cfg = self.config
        if raw_score >= cfg.perfect_match_threshold:
            return MatchTier.PERFECT
        if raw_score >= cfg.great_match_threshold:
            return MatchTier.GREAT
        if raw_score >= cfg.match_threshold:
            return MatchTier.GOOD
        return MatchTier.POOR
