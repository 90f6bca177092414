"""Distribution diagnostics for visibility and feed output."""

from .metrics import (
    ScoreDistributionStats,
    compute_score_distribution_stats,
    summarize_feed,
    summarize_visibility,
)

__all__ = [
    "ScoreDistributionStats",
    "compute_score_distribution_stats",
    "summarize_feed",
    "summarize_visibility",
]
