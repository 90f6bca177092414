"""
Data model for the ranking core.

Profiles and preference sets come in; preference, compatibility and feed
annotations come out. Every record is immutable.
"""

from .profile import (
    BIG_FIVE_TRAITS,
    ConnectionMode,
    PreferenceSet,
    Profile,
    ProfileDetails,
)
from .results import (
    CompatibilityBreakdown,
    CompatibilityResult,
    FeedEntry,
    MatchTier,
    MismatchSeverity,
    PreferenceMatchResult,
    PreferenceMismatch,
    PreferenceTier,
    VisibilityRecompute,
)

__all__ = [
    "BIG_FIVE_TRAITS",
    "ConnectionMode",
    "PreferenceSet",
    "Profile",
    "ProfileDetails",
    "CompatibilityBreakdown",
    "CompatibilityResult",
    "FeedEntry",
    "MatchTier",
    "MismatchSeverity",
    "PreferenceMatchResult",
    "PreferenceMismatch",
    "PreferenceTier",
    "VisibilityRecompute",
]
