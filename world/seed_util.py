"""Reproducible random sources. Seed -1 = new random seed each call; the seed actually
used is returned so a run can be replayed."""

import random

import numpy as np


def resolve_seed(seed: int) -> int:
    if seed == -1:
        return random.randint(0, 2**31 - 1)
    return seed


def make_rng(seed: int) -> tuple[np.random.Generator, int]:
    """Return (rng, seed_used)."""
    seed_used = resolve_seed(seed)
    return np.random.default_rng(seed_used), seed_used
