"""
Engagement nudge shown while swiping.

Not a real probability: it grows with swipes this session, saturates at
the cap, and is scaled down while fewer than `likes_saturation` likes are
waiting.

    base   = min(cap, base0 + swipes * per_swipe)
    result = round(base * min(1, likes_waiting / likes_saturation))
"""

from typing import Optional

from ..configs import MatchingConfig, DEFAULT_CONFIG
from ..utils import round_half_up


class MatchProbabilityEstimator:

    def __init__(self, config: Optional[MatchingConfig] = None):
        self.config = config or DEFAULT_CONFIG

    def estimate(self, swipes_this_session: int, likes_waiting: int) -> int:
        """Integer percentage in [0, 100]; 0 when nobody is waiting."""
        if likes_waiting == 0:
            return 0

        cfg = self.config
        base = min(cfg.probability_cap,
                   cfg.probability_base + swipes_this_session * cfg.probability_per_swipe)
        scale = min(1, likes_waiting / cfg.probability_likes_saturation)
        return round_half_up(base * scale)
