"""
Result records produced by the ranking core.

All results are immutable and built fresh per call.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Any, Tuple

from .profile import Profile


class PreferenceTier(Enum):
    """Bullseye tier of a candidate against one viewer's preferences."""
    MUST_HAVE = "MUST_HAVE"
    PREFERRED = "PREFERRED"
    ACCEPTABLE = "ACCEPTABLE"
    OUTSIDE = "OUTSIDE"


class MismatchSeverity(Enum):
    OUTSIDE = "outside"
    DEALBREAKER = "dealbreaker"
    MINOR = "minor"
    IMPORTANT = "important"


class MatchTier(Enum):
    """Qualitative compatibility tier."""
    POOR = "poor"
    GOOD = "good"
    GREAT = "great"
    PERFECT = "perfect"


@dataclass(frozen=True)
class PreferenceMismatch:
    field: str
    severity: MismatchSeverity

    def to_dict(self) -> Dict[str, str]:
        return {"field": self.field, "severity": self.severity.value}


@dataclass(frozen=True)
class PreferenceMatchResult:
    """
    Outcome of evaluating one candidate against one preference set.

    Attributes:
        tier: Overall tier derived from the summed score
        score: Sum of all dimension contributions
        mismatches: Dimensions the candidate fell short on, in evaluation order
        contributions: (dimension, signed weight) pairs in evaluation order
    """
    tier: PreferenceTier
    score: float
    mismatches: Tuple[PreferenceMismatch, ...] = ()
    contributions: Tuple[Tuple[str, float], ...] = ()

    def contribution(self, dimension: str) -> float:
        """Total weight a dimension added (0 if it added nothing)."""
        return sum(w for name, w in self.contributions if name == dimension)

    @property
    def mismatch_fields(self) -> Tuple[str, ...]:
        return tuple(m.field for m in self.mismatches)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tier": self.tier.value,
            "score": self.score,
            "mismatches": [m.to_dict() for m in self.mismatches],
            "contributions": [{"dimension": n, "weight": w} for n, w in self.contributions],
        }


@dataclass(frozen=True)
class CompatibilityBreakdown:
    """Per-component scores, each rounded for display."""
    preferences: int
    personality: int
    interests: int
    communication: int

    def to_dict(self) -> Dict[str, int]:
        return {
            "preferences": self.preferences,
            "personality": self.personality,
            "interests": self.interests,
            "communication": self.communication,
        }


@dataclass(frozen=True)
class CompatibilityResult:
    """
    Result of compatibility scoring between two profiles.

    Attributes:
        score: Display score, rounded and clamped to [0, 100]
        breakdown: Rounded component scores
        is_match: Whether the unrounded score reaches the match threshold
        tier: Qualitative tier of the unrounded score
        raw_score: Unrounded weighted sum
    """
    score: int
    breakdown: CompatibilityBreakdown
    is_match: bool
    tier: MatchTier
    raw_score: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "breakdown": self.breakdown.to_dict(),
            "is_match": self.is_match,
            "tier": self.tier.value,
            "raw_score": self.raw_score,
        }


@dataclass(frozen=True)
class FeedEntry:
    """
    A candidate profile annotated for one feed response.

    Attributes:
        profile: The candidate snapshot
        compatibility: Viewer/candidate compatibility
        fringe_boost: Niche-compatibility multiplier (>= 1.0)
        display_probability: Final ranking weight
        show_in_feed: Whether the entry passes the match filter
    """
    profile: Profile
    compatibility: CompatibilityResult
    fringe_boost: float
    display_probability: float
    show_in_feed: bool

    @property
    def user_id(self) -> str:
        return self.profile.user_id

    def to_dict(self) -> Dict[str, Any]:
        d = self.profile.to_dict()
        d.update({
            "compatibility": self.compatibility.to_dict(),
            "fringe_boost": self.fringe_boost,
            "display_probability": self.display_probability,
            "show_in_feed": self.show_in_feed,
        })
        return d


@dataclass(frozen=True)
class VisibilityRecompute:
    """Population-wide visibility recompute output."""
    profiles: Tuple[Profile, ...]
    platform_average_likes_per_week: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "platform_average_likes_per_week": self.platform_average_likes_per_week,
            "profiles": [
                {
                    "user_id": p.user_id,
                    "likes_received_this_week": p.likes_received_this_week,
                    "visibility_score": p.visibility_score,
                }
                for p in self.profiles
            ],
        }
