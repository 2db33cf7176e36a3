from __future__ import annotations

"""
Leaf Shuffler.

In-place Fisher-Yates permutation of the discovered leaves.
"""

import random
import time
from typing import List, Optional, TypeVar

T = TypeVar("T")


def shuffle_leaves(leaves: List[T], rng: Optional[random.Random] = None) -> None:
    """
    Permute a list uniformly at random, in place.

    Walks i from n-1 down to 1 and swaps element i with a uniformly chosen
    element in [0, i]. The generator is seeded from the nanosecond clock at
    call time unless one is supplied.

    Args:
        leaves: Sequence to permute.
        rng: Optional random source, mainly for reproducible tests.
    """
    if rng is None:
        rng = random.Random(time.time_ns())

    for i in range(len(leaves) - 1, 0, -1):
        j = rng.randint(0, i)
        leaves[i], leaves[j] = leaves[j], leaves[i]
