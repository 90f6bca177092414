"""Feed assembly and the randomized head shuffle."""

from .assembler import FeedAssembler, pool_median_likes
from .randomness import NumpyRandomSource, RandomSource, shuffle_top_n

__all__ = [
    "FeedAssembler",
    "pool_median_likes",
    "NumpyRandomSource",
    "RandomSource",
    "shuffle_top_n",
]
