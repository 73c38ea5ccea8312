"""Randomness helpers for shuffling problem order."""

from __future__ import annotations

import os
import random
from typing import List, Optional, Sequence, TypeVar

T = TypeVar("T")


def make_rng(seed: Optional[int] = None) -> random.Random:
    """Build a generator from `seed`, falling back to the SEED env var."""
    if seed is None:
        env_seed = os.environ.get("SEED")
        if env_seed is not None:
            try:
                seed = int(env_seed)
            except ValueError:
                seed = None
    return random.Random(seed)


def shuffle_problems(problems: Sequence[T], rng: Optional[random.Random] = None) -> List[T]:
    """Return a uniformly shuffled copy; the input sequence is left untouched."""
    shuffled = list(problems)
    (rng or random.Random()).shuffle(shuffled)
    return shuffled
