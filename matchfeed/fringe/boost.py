"""
Fringe boost for niche-but-compatible candidates.

A candidate below the pool's median popularity who nevertheless sits in the
viewer's must-have or preferred tier gets an extra multiplier. The further
below the median, the larger the boost:

    boost = 1 + (1 - likes / median) * fringe_multiplier
    boost = min(boost, max_visibility)
"""

import logging
from typing import Optional

from ..configs import MatchingConfig, DEFAULT_CONFIG
from ..preferences import PreferenceEvaluator
from ..schema import PreferenceTier, Profile

logger = logging.getLogger(__name__)

BOOSTED_TIERS = (PreferenceTier.MUST_HAVE, PreferenceTier.PREFERRED)


class FringeBoost:
    """
    Computes the niche-compatibility boost of a candidate for one viewer.

    Attributes:
        config: MatchingConfig with fringe_multiplier and max_visibility
        evaluator: PreferenceEvaluator used for the candidate -> viewer check
    """

    def __init__(
        self,
        config: Optional[MatchingConfig] = None,
        evaluator: Optional[PreferenceEvaluator] = None
    ):
        self.config = config or DEFAULT_CONFIG
        self.evaluator = evaluator or PreferenceEvaluator(self.config)

    def boost(self, candidate: Profile, viewer: Profile, median_popularity: float) -> float:
        """
        Fringe boost multiplier for a candidate in a viewer's feed.

        Args:
            candidate: Profile being ranked
            viewer: Profile whose feed is being built
            median_popularity: Median weekly likes received over the pool

        Returns:
            Multiplier >= 1.0, at most max_visibility

        Raises:
            MalformedInputError: If the viewer has no preferences
        """
        likes = candidate.likes_received_this_week
        if likes >= median_popularity:
            return 1.0

        match = self.evaluator.evaluate(candidate, viewer.require_preferences())
        if match.tier not in BOOSTED_TIERS:
            return 1.0

        ratio = likes / (median_popularity or 1)
        boost = 1.0 + (1.0 - ratio) * self.config.fringe_multiplier
        boost = min(boost, self.config.max_visibility)
        logger.debug(f"Fringe boost {boost:.2f} for {candidate.user_id} "
                     f"({likes} likes vs median {median_popularity})")
        return boost
