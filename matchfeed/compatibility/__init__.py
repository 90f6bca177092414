"""Compatibility scoring between two profiles."""

from .scorer import (
    CompatibilityScorer,
    communication_match,
    interest_overlap,
    personality_compatibility,
)

__all__ = [
    "CompatibilityScorer",
    "communication_match",
    "interest_overlap",
    "personality_compatibility",
]
