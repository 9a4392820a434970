from __future__ import annotations

import random
from typing import List, Sequence, TypeVar

T = TypeVar("T")


def sample_without_replacement(
    items: Sequence[T], k: int, rng: random.Random
) -> List[T]:
    """Pick ``k`` distinct items using a partial Fisher-Yates shuffle.

    Only the first ``k`` slots of a copy are shuffled, so every k-subset is
    equally likely and the cost is O(n) for the copy plus O(k) swaps.
    """
    if k < 0 or k > len(items):
        raise ValueError(f"Cannot sample {k} items from a pool of {len(items)}")

    pool = list(items)
    last = len(pool) - 1
    for idx in range(k):
        swap = rng.randint(idx, last)
        pool[idx], pool[swap] = pool[swap], pool[idx]
    return pool[:k]
