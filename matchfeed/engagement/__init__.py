from .probability import MatchProbabilityEstimator

__all__ = ["MatchProbabilityEstimator"]
