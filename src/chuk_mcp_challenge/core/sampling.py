"""
Sampling primitives shared by every generator.

All randomness flows through an explicit `random.Random` so a seeded
generator reproduces the same challenge.
"""

from __future__ import annotations

import random
from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")


def weighted_index(
    weights: Sequence[float],
    rng: random.Random,
    normalize: bool = False,
) -> int:
    """
    Sample an index from a weight vector by cumulative-sum walk.

    Draws r in [0, 1) and returns the first index whose running sum is
    >= r. Weights are data and are not required to sum to 1.0; if the walk
    never reaches r the first index is returned.

    Args:
        weights: Non-negative weights, one per candidate
        rng: Random source
        normalize: Scale r by the total weight (for unnormalized counts
            or a filtered subset of a distribution)

    Returns:
        The chosen index

    Raises:
        ValueError: If weights is empty
    """
    if not weights:
        raise ValueError("Cannot sample from an empty weight vector")

    r = rng.random()
    if normalize:
        r *= sum(weights)

    cumulative = 0.0
    for index, weight in enumerate(weights):
        cumulative += weight
        if r <= cumulative:
            return index
    return 0


def weighted_choice(items: Sequence[T], weights: Sequence[float], rng: random.Random) -> T:
    """Pick one of `items` using the parallel `weights` vector."""
    if len(items) != len(weights):
        raise ValueError(f"Got {len(items)} items but {len(weights)} weights")
    return items[weighted_index(weights, rng)]


def choose(items: Sequence[T], rng: random.Random) -> T:
    """Uniform pick from a non-empty sequence."""
    if not items:
        raise ValueError("Cannot choose from an empty sequence")
    return items[rng.randrange(len(items))]


def ensure_rng(rng: random.Random | None) -> random.Random:
    """Return the given generator, or a fresh unseeded one."""
    return rng if rng is not None else random.Random()
