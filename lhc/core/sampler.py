# lhc/core/sampler.py
from __future__ import annotations

import random
from typing import Iterable, List, Optional, TypeVar

T = TypeVar("T")

_sysrand = random.SystemRandom()


def shuffle(items: Iterable[T], rng: Optional[random.Random] = None) -> List[T]:
    """Fisher–Yates shuffle on a copy of ``items``."""
    r = rng or _sysrand
    out = list(items)
    for i in range(len(out) - 1, 0, -1):
        j = r.randint(0, i)
        out[i], out[j] = out[j], out[i]
    return out


def draw(pool: Iterable[T], count: int, rng: Optional[random.Random] = None) -> List[T]:
    """Uniform random subset of ``count`` questions, without replacement.

    A count larger than the pool returns the whole pool (shuffled). Draws
    keep no state; callers that need the same set again must keep the ids.
    """
    if count < 0:
        raise ValueError(f"count must be >= 0, got {count}")
    shuffled = shuffle(pool, rng)
    return shuffled[:count]


__all__ = ["shuffle", "draw"]
