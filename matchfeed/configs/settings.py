"""
Scoring configuration.

All weights and thresholds used by the ranking core live on one immutable
MatchingConfig object that each component receives at construction. The
defaults are the production constants.

Configuration Layout (YAML, under the "matching" section):
    visibility:     base, min, max, fringe_multiplier
    preference_weights: must_have, preferred, acceptable, outside
    thresholds:     match, great, perfect
    component_weights: preferences, personality, interests, communication
    feed:           shuffle_top_n, default_limit
    match_probability: base, per_swipe, cap, likes_saturation
"""

import logging
from dataclasses import dataclass, field, asdict
from typing import Dict, Any

from ..errors import ConfigError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PreferenceWeights:
    """Signed contribution of each bullseye tier."""
    must_have: float = 100
    preferred: float = 50
    acceptable: float = 25
    outside: float = -10


@dataclass(frozen=True)
class ComponentWeights:
    """Blend weights of the four compatibility components."""
    preferences: float = 0.4
    personality: float = 0.3
    interests: float = 0.2
    communication: float = 0.1

    def total(self) -> float:
        return self.preferences + self.personality + self.interests + self.communication


@dataclass(frozen=True)
class MatchingConfig:
    """
    Configuration for the ranking core.

    Attributes:
        visibility_base: Neutral visibility multiplier
        min_visibility: Lower clamp of the visibility multiplier
        max_visibility: Upper clamp of visibility and of the fringe boost
        fringe_multiplier: Scale of the fringe boost
        preference_weights: Tier weights for preference evaluation
        match_threshold: Minimum compatibility for a match
        great_match_threshold: Minimum compatibility for the "great" tier
        perfect_match_threshold: Minimum compatibility for the "perfect" tier
        component_weights: Compatibility blend weights
        shuffle_top_n: Size of the feed head that gets shuffled
        default_feed_limit: Page size when the caller gives none
        probability_base: Engagement estimate with zero swipes
        probability_per_swipe: Increment per swipe
        probability_cap: Ceiling of the engagement estimate
        probability_likes_saturation: Pending likes at which scaling saturates
    """
    visibility_base: float = 1.0
    min_visibility: float = 0.1
    max_visibility: float = 3.0
    fringe_multiplier: float = 1.5
    preference_weights: PreferenceWeights = field(default_factory=PreferenceWeights)
    match_threshold: float = 60
    great_match_threshold: float = 80
    perfect_match_threshold: float = 95
    component_weights: ComponentWeights = field(default_factory=ComponentWeights)
    shuffle_top_n: int = 10
    default_feed_limit: int = 20
    probability_base: float = 10
    probability_per_swipe: float = 5
    probability_cap: float = 95
    probability_likes_saturation: float = 10

    def validate(self) -> None:
        """Validate configuration values."""
        if not 0 < self.min_visibility <= self.visibility_base <= self.max_visibility:
            raise ConfigError(
                f"Visibility bounds must satisfy 0 < min <= base <= max, got "
                f"{self.min_visibility}, {self.visibility_base}, {self.max_visibility}"
            )
        if self.fringe_multiplier < 0:
            raise ConfigError(f"fringe_multiplier must be >= 0, got {self.fringe_multiplier}")
        if not self.match_threshold <= self.great_match_threshold <= self.perfect_match_threshold:
            raise ConfigError(
                f"Thresholds must be ordered match <= great <= perfect, got "
                f"{self.match_threshold}, {self.great_match_threshold}, {self.perfect_match_threshold}"
            )
        if self.preference_weights.must_have <= 0:
            raise ConfigError("preference_weights.must_have must be positive")
        if abs(self.component_weights.total() - 1.0) > 0.01:
            raise ConfigError(
                f"Component weights don't sum to 1: {self.component_weights.total()}"
            )
        if self.shuffle_top_n < 0:
            raise ConfigError(f"shuffle_top_n must be >= 0, got {self.shuffle_top_n}")
        if self.probability_likes_saturation <= 0:
            raise ConfigError("probability_likes_saturation must be positive")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "MatchingConfig":
        """Create from the flat dictionary produced by to_dict."""
        d = dict(d)
        if isinstance(d.get("preference_weights"), dict):
            d["preference_weights"] = PreferenceWeights(**d["preference_weights"])
        if isinstance(d.get("component_weights"), dict):
            d["component_weights"] = ComponentWeights(**d["component_weights"])
        return cls(**d)

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "MatchingConfig":
        """Create from main config dictionary."""
        matching = config.get("matching", {}) or {}
        visibility = matching.get("visibility") or {}
        weights = matching.get("preference_weights") or {}
        thresholds = matching.get("thresholds") or {}
        components = matching.get("component_weights") or {}
        feed = matching.get("feed") or {}
        probability = matching.get("match_probability") or {}

        defaults = cls()
        default_weights = defaults.preference_weights
        default_components = defaults.component_weights

        result = cls(
            visibility_base=visibility.get("base", defaults.visibility_base),
            min_visibility=visibility.get("min", defaults.min_visibility),
            max_visibility=visibility.get("max", defaults.max_visibility),
            fringe_multiplier=visibility.get("fringe_multiplier", defaults.fringe_multiplier),
            preference_weights=PreferenceWeights(
                must_have=weights.get("must_have", default_weights.must_have),
                preferred=weights.get("preferred", default_weights.preferred),
                acceptable=weights.get("acceptable", default_weights.acceptable),
                outside=weights.get("outside", default_weights.outside),
            ),
            match_threshold=thresholds.get("match", defaults.match_threshold),
            great_match_threshold=thresholds.get("great", defaults.great_match_threshold),
            perfect_match_threshold=thresholds.get("perfect", defaults.perfect_match_threshold),
            component_weights=ComponentWeights(
                preferences=components.get("preferences", default_components.preferences),
                personality=components.get("personality", default_components.personality),
                interests=components.get("interests", default_components.interests),
                communication=components.get("communication", default_components.communication),
            ),
            shuffle_top_n=feed.get("shuffle_top_n", defaults.shuffle_top_n),
            default_feed_limit=feed.get("default_limit", defaults.default_feed_limit),
            probability_base=probability.get("base", defaults.probability_base),
            probability_per_swipe=probability.get("per_swipe", defaults.probability_per_swipe),
            probability_cap=probability.get("cap", defaults.probability_cap),
            probability_likes_saturation=probability.get(
                "likes_saturation", defaults.probability_likes_saturation
            ),
        )
        result.validate()
        logger.debug(f"Built MatchingConfig from config: {result}")
        return result


DEFAULT_CONFIG = MatchingConfig()
