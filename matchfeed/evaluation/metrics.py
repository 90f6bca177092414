"""
Diagnostics for exposure equalization and feed ranking.

There is no ground truth for "fair" exposure, so these reports describe
distributions rather than score accuracy:
1. Visibility multiplier distribution after a recompute
2. Display probability and compatibility distribution of a feed
3. How many entries carry a fringe boost
"""

import logging
from dataclasses import dataclass
from typing import Dict, Any, Iterable, List

import numpy as np

from ..schema import FeedEntry, VisibilityRecompute

logger = logging.getLogger(__name__)


@dataclass
class ScoreDistributionStats:
    """Statistics about score distribution."""
    count: int
    mean: float
    std: float
    min: float
    max: float
    quantiles: Dict[str, float]  # e.g., {"p10": 0.2, "p50": 0.5, "p90": 0.8}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "count": int(self.count),
            "mean": float(self.mean),
            "std": float(self.std),
            "min": float(self.min),
            "max": float(self.max),
            "quantiles": {k: float(v) for k, v in self.quantiles.items()}
        }


def compute_score_distribution_stats(values: Iterable[float]) -> ScoreDistributionStats:
    """
    Compute distribution statistics for a set of scores.

    Args:
        values: Scores (any iterable of numbers)

    Returns:
        ScoreDistributionStats; all zeros for empty input
    """
    arr = np.asarray(list(values), dtype=float)
    if arr.size == 0:
        return ScoreDistributionStats(
            count=0, mean=0.0, std=0.0, min=0.0, max=0.0,
            quantiles={"p10": 0.0, "p50": 0.0, "p90": 0.0}
        )

    return ScoreDistributionStats(
        count=int(arr.size),
        mean=float(np.mean(arr)),
        std=float(np.std(arr)),
        min=float(np.min(arr)),
        max=float(np.max(arr)),
        quantiles={
            "p10": float(np.percentile(arr, 10)),
            "p50": float(np.percentile(arr, 50)),
            "p90": float(np.percentile(arr, 90)),
        }
    )


def summarize_visibility(recompute: VisibilityRecompute) -> Dict[str, Any]:
    """
    Summarize a visibility recompute.

    Reports the multiplier distribution and how many profiles ended up
    suppressed (< 1), neutral (== 1) or amplified (> 1).
    """
    scores = np.asarray([p.visibility_score for p in recompute.profiles], dtype=float)
    stats = compute_score_distribution_stats(scores)

    summary = {
        "platform_average_likes_per_week": recompute.platform_average_likes_per_week,
        "visibility": stats.to_dict(),
        "suppressed": int(np.sum(scores < 1.0)),
        "neutral": int(np.sum(scores == 1.0)),
        "amplified": int(np.sum(scores > 1.0)),
    }
    logger.info(f"Visibility summary: {summary['suppressed']} suppressed, "
                f"{summary['neutral']} neutral, {summary['amplified']} amplified")
    return summary


def summarize_feed(entries: List[FeedEntry]) -> Dict[str, Any]:
    """Summarize one generated feed page."""
    return {
        "count": len(entries),
        "display_probability": compute_score_distribution_stats(
            e.display_probability for e in entries
        ).to_dict(),
        "compatibility": compute_score_distribution_stats(
            e.compatibility.score for e in entries
        ).to_dict(),
        "fringe_boosted": sum(1 for e in entries if e.fringe_boost > 1.0),
    }
