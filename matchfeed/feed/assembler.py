"""
Feed assembly: filter, score, sort, diversify, paginate.

Steps for one viewer:
1. Drop the viewer and candidates not open to the requested connection mode
2. Median weekly likes received over the remaining pool
3. Score every candidate:
       display_probability = visibility_score * fringe_boost * score / 100
4. Flag entries that pass the match threshold (or all of them, on request)
5. Drop unflagged entries unless outside-preference entries were requested
6. Sort by display probability, highest first
7. Shuffle the top N so the head of the feed doesn't go stale
8. Return the requested page

The pool median is local to each call; it is not a stored platform value.
"""

import logging
from typing import Iterable, List, Optional, Union

from ..compatibility import CompatibilityScorer
from ..configs import MatchingConfig, DEFAULT_CONFIG
from ..fringe import FringeBoost
from ..preferences import PreferenceEvaluator
from ..schema import ConnectionMode, FeedEntry, Profile
from .randomness import NumpyRandomSource, RandomSource, shuffle_top_n

logger = logging.getLogger(__name__)


def pool_median_likes(profiles: Iterable[Profile]) -> float:
    """
    Median weekly likes received: the middle element of the sorted values.

    For an even-sized pool this is the upper of the two middle values, not
    their mean. An empty pool gives 0.
    """
    likes = sorted(p.likes_received_this_week for p in profiles)
    if not likes:
        return 0
    return likes[len(likes) // 2]


class FeedAssembler:
    """
    Builds ranked, paginated feeds.

    Attributes:
        config: MatchingConfig with feed settings
        scorer: CompatibilityScorer for viewer/candidate pairs
        fringe: FringeBoost for below-median candidates
        random_source: Source of uniform draws for the head shuffle
    """

    def __init__(
        self,
        config: Optional[MatchingConfig] = None,
        scorer: Optional[CompatibilityScorer] = None,
        fringe: Optional[FringeBoost] = None,
        random_source: Optional[RandomSource] = None
    ):
        self.config = config or DEFAULT_CONFIG
        evaluator = PreferenceEvaluator(self.config)
        self.scorer = scorer or CompatibilityScorer(self.config, evaluator)
        self.fringe = fringe or FringeBoost(self.config, evaluator)
        self.random_source = random_source or NumpyRandomSource()

    def generate_feed(
        self,
        viewer: Profile,
        candidates: Iterable[Profile],
        connection_mode: Union[ConnectionMode, str],
        limit: Optional[int] = None,
        offset: int = 0,
        include_outside_preferences: bool = False
    ) -> List[FeedEntry]:
        """
        Generate a personalized feed.

        limit and offset must be non-negative integers; they are used as
        given, without clamping.

        Args:
            viewer: Profile the feed is for
            candidates: Candidate pool (may include the viewer)
            connection_mode: Mode candidates must be open to
            limit: Page size (config default_feed_limit when None)
            offset: Index of the first entry to return
            include_outside_preferences: Keep entries below the match threshold

        Returns:
            Ranked FeedEntry list for the requested page

        Raises:
            ValueError: If connection_mode is not a known mode
            MalformedInputError: If a profile lacks data needed for scoring
        """
        mode = ConnectionMode(connection_mode)
        if limit is None:
            limit = self.config.default_feed_limit

        pool = [
            c for c in candidates
            if c.user_id != viewer.user_id and c.seeks(mode)
        ]
        median = pool_median_likes(pool)
        logger.debug(f"Feed for {viewer.user_id}: {len(pool)} candidates in "
                     f"{mode.value} pool, median likes {median}")

        entries = [
            self._score_candidate(viewer, candidate, median, include_outside_preferences)
            for candidate in pool
        ]

        if not include_outside_preferences:
            entries = [e for e in entries if e.show_in_feed]

        entries.sort(key=lambda e: e.display_probability, reverse=True)
        entries = shuffle_top_n(entries, self.config.shuffle_top_n, self.random_source)

        return entries[offset:offset + limit]

    def _score_candidate(
        self,
        viewer: Profile,
        candidate: Profile,
        median: float,
        include_outside_preferences: bool
    ) -> FeedEntry:
        compatibility = self.scorer.score(viewer, candidate)
        fringe_boost = self.fringe.boost(candidate, viewer, median)
        display_probability = (
            candidate.visibility_score * fringe_boost * (compatibility.score / 100)
        )

        return FeedEntry(
            profile=candidate,
            compatibility=compatibility,
            fringe_boost=fringe_boost,
            display_probability=display_probability,
            show_in_feed=include_outside_preferences or compatibility.is_match,
        )
