"""
Feed Ranking Core

This package implements the scoring and ranking pipeline that orders
candidate profiles in a social-matching feed.

Key Design Decisions:
- Visibility is inversely proportional to recent popularity (exposure equalization)
- Niche candidates who strongly match a viewer get a fringe boost
- Preferences are tiered (must-have / preferred / acceptable / outside)
- Compatibility is a fixed-weight blend of four independent components
- The core is pure computation: no I/O, inputs are never mutated
"""

from .engine import MatchingEngine
from .errors import MatchingError, MalformedInputError, ConfigError

__version__ = "1.0.0"

__all__ = ["MatchingEngine", "MatchingError", "MalformedInputError", "ConfigError"]
