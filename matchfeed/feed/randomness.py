"""
Random sources for the feed head shuffle.

The assembler only needs uniform draws in [0, 1), so any object with a
random() method will do. Tests pass scripted sources to pin the order.
"""

from typing import List, Optional, Protocol, TypeVar

import numpy as np

T = TypeVar("T")


class RandomSource(Protocol):
    def random(self) -> float:
        """Uniform draw in [0, 1)."""
        ...


class NumpyRandomSource:
    """
    RandomSource backed by numpy's RandomState.

    Attributes:
        random_state: Numpy RandomState for reproducibility
    """

    def __init__(self, random_seed: Optional[int] = None):
        self.random_state = np.random.RandomState(random_seed)

    def random(self) -> float:
        return float(self.random_state.random_sample())


def shuffle_top_n(items: List[T], n: int, source: RandomSource) -> List[T]:
    """
    Fisher-Yates shuffle of the first n items; the rest keep their order.

    Args:
        items: Ranked items
        n: Size of the prefix to shuffle
        source: Random source

    Returns:
        New list: shuffled prefix followed by the untouched remainder
    """
    head = list(items[:n])
    tail = list(items[n:])

    for i in range(len(head) - 1, 0, -1):
        j = int(source.random() * (i + 1))
        head[i], head[j] = head[j], head[i]

    return head + tail
