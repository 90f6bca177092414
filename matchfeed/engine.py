"""
Matching engine facade.

Wires every scoring component from one MatchingConfig and one random
source. This is the object a service layer holds on to: feed requests,
pairwise compatibility queries, preference diagnostics, visibility
recomputes and the engagement estimate all go through it.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Union

from .compatibility import CompatibilityScorer
from .configs import MatchingConfig, DEFAULT_CONFIG
from .engagement import MatchProbabilityEstimator
from .feed import FeedAssembler, NumpyRandomSource, RandomSource
from .fringe import FringeBoost
from .preferences import PreferenceEvaluator
from .schema import (
    CompatibilityResult,
    ConnectionMode,
    FeedEntry,
    PreferenceMatchResult,
    PreferenceSet,
    Profile,
    VisibilityRecompute,
)
from .visibility import VisibilityModel

logger = logging.getLogger(__name__)


class MatchingEngine:
    """
    Entry point for all ranking operations.

    Attributes:
        config: MatchingConfig shared by every component
        evaluator: PreferenceEvaluator
        visibility_model: VisibilityModel
        fringe: FringeBoost
        scorer: CompatibilityScorer
        assembler: FeedAssembler
        probability: MatchProbabilityEstimator
    """

    def __init__(
        self,
        config: Optional[MatchingConfig] = None,
        random_source: Optional[RandomSource] = None
    ):
        """
        Initialize the engine.

        Args:
            config: MatchingConfig (defaults to the production constants)
            random_source: Source for the feed head shuffle (unseeded numpy by default)
        """
        self.config = config or DEFAULT_CONFIG
        self.config.validate()

        self.evaluator = PreferenceEvaluator(self.config)
        self.visibility_model = VisibilityModel(self.config)
        self.fringe = FringeBoost(self.config, self.evaluator)
        self.scorer = CompatibilityScorer(self.config, self.evaluator)
        self.assembler = FeedAssembler(
            self.config,
            scorer=self.scorer,
            fringe=self.fringe,
            random_source=random_source or NumpyRandomSource(),
        )
        self.probability = MatchProbabilityEstimator(self.config)

    @classmethod
    def from_config(cls, config: Dict[str, Any], random_seed: Optional[int] = None) -> "MatchingEngine":
        """
        Create from main config dictionary.

        Args:
            config: Main configuration dictionary (YAML contents)
            random_seed: Seed for the shuffle; falls back to global.random_seed

        Returns:
            Configured MatchingEngine
        """
        if random_seed is None:
            random_seed = (config.get("global") or {}).get("random_seed")
        engine = cls(MatchingConfig.from_config(config), NumpyRandomSource(random_seed))
        logger.info(f"Initialized MatchingEngine (random_seed={random_seed})")
        return engine

    def generate_feed(
        self,
        viewer: Profile,
        candidates: Iterable[Profile],
        connection_mode: Union[ConnectionMode, str] = ConnectionMode.DATING,
        limit: Optional[int] = None,
        offset: int = 0,
        include_outside_preferences: bool = False
    ) -> List[FeedEntry]:
        return self.assembler.generate_feed(
            viewer,
            candidates,
            connection_mode,
            limit=limit,
            offset=offset,
            include_outside_preferences=include_outside_preferences,
        )

    def compatibility(self, profile_a: Profile, profile_b: Profile) -> CompatibilityResult:
        return self.scorer.score(profile_a, profile_b)

    def evaluate_preferences(self, candidate: Profile, preferences: PreferenceSet) -> PreferenceMatchResult:
        return self.evaluator.evaluate(candidate, preferences)

    def visibility(self, user_likes: float, average_likes: float) -> float:
        return self.visibility_model.visibility(user_likes, average_likes)

    def recompute_visibility(self, profiles: Iterable[Profile]) -> VisibilityRecompute:
        return self.visibility_model.recompute_all(profiles)

    def fringe_boost(self, candidate: Profile, viewer: Profile, median_popularity: float) -> float:
        return self.fringe.boost(candidate, viewer, median_popularity)

    def match_probability(self, swipes_this_session: int, likes_waiting: int) -> int:
        return self.probability.estimate(swipes_this_session, likes_waiting)
