from __future__ import annotations

import random
from typing import List, Sequence, TypeVar

T = TypeVar("T")


def choose_k(candidates: Sequence[T], k: int, rng: random.Random) -> List[T]:
    """Pick up to ``k`` distinct candidates uniformly, without replacement, in draw order."""
    if k < 1:
        raise ValueError(f"sample size must be at least 1, got {k}")
    return rng.sample(list(candidates), min(k, len(candidates)))


__all__ = ["choose_k"]
