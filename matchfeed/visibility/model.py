"""
Inverse-popularity visibility ("exposure equalization").

A profile's visibility multiplier is the platform average of weekly likes
received divided by the profile's own weekly likes, clamped to
[min_visibility, max_visibility]. Heavily liked profiles are shown less,
rarely liked profiles more, which counteracts popularity feedback loops.

Formula:
    visibility = clamp(base * average / user, min, max)
    visibility = base                   if user == 0 or average == 0
"""

import logging
from dataclasses import replace
from typing import Iterable, Optional

import numpy as np

from ..configs import MatchingConfig, DEFAULT_CONFIG
from ..schema import Profile, VisibilityRecompute

logger = logging.getLogger(__name__)


class VisibilityModel:
    """
    Computes population-relative exposure multipliers.

    Attributes:
        config: MatchingConfig with the visibility bounds
    """

    def __init__(self, config: Optional[MatchingConfig] = None):
        self.config = config or DEFAULT_CONFIG

    def visibility(self, user_likes: float, average_likes: float) -> float:
        """
        Visibility multiplier for one profile.

        A zero on either side means there is no signal yet (new account,
        empty platform), so the neutral baseline is returned.

        Args:
            user_likes: Profile's likes received this week
            average_likes: Platform average likes received per week

        Returns:
            Multiplier in [min_visibility, max_visibility]
        """
        cfg = self.config
        if user_likes == 0 or average_likes == 0:
            return cfg.visibility_base

        raw = cfg.visibility_base * (average_likes / user_likes)
        return float(np.clip(raw, cfg.min_visibility, cfg.max_visibility))

    def recompute_all(self, profiles: Iterable[Profile]) -> VisibilityRecompute:
        """
        Recompute visibility for a whole population.

        The average is computed once over the input, then every profile gets
        a new record carrying its multiplier and the shared average. Input
        records are left untouched.

        Args:
            profiles: Population snapshot

        Returns:
            VisibilityRecompute with updated profiles (input order) and the average
        """
        profiles = list(profiles)
        average = platform_average_likes(profiles)

        updated = tuple(
            replace(
                p,
                visibility_score=self.visibility(p.likes_received_this_week, average),
                platform_average_likes_per_week=average,
            )
            for p in profiles
        )

        logger.info(f"Recomputed visibility for {len(updated)} profiles "
                    f"(platform average {average:.2f} likes/week)")
        return VisibilityRecompute(profiles=updated, platform_average_likes_per_week=average)


def platform_average_likes(profiles: Iterable[Profile]) -> float:
    """Arithmetic mean of weekly likes received; 0 for an empty population."""
    likes = np.fromiter((p.likes_received_this_week for p in profiles), dtype=float)
    if likes.size == 0:
        return 0.0
    return float(likes.mean())
