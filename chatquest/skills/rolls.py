"""
Random Roll Skill.

All randomness in the engine goes through a RandomSource that yields
uniform floats in [0, 1). Integer ranges, picks and chance rolls are
derived from single draws so a scripted source reproduces every outcome.
"""

from __future__ import annotations

import math
import random
from collections.abc import Sequence
from typing import Protocol, TypeVar

T = TypeVar("T")


class RandomSource(Protocol):
    """Anything with a ``random()`` method returning a float in [0, 1)."""

    def random(self) -> float:
        ...


def default_random() -> RandomSource:
    """A fresh, unseeded source for production use."""
    return random.Random()


def roll_int(rng: RandomSource, low: int, high: int) -> int:
    """
    Roll an integer uniformly in ``[low, high]`` (both inclusive).

    Examples:
        >>> roll_int(rng, 10, 25)  # a message XP amount
    """
    if high < low:
        raise ValueError(f"Empty range: [{low}, {high}]")
    return low + math.floor(rng.random() * (high - low + 1))


def roll_below(rng: RandomSource, bound: int) -> int:
    """Roll an integer uniformly in ``[0, bound)``."""
    if bound < 1:
        raise ValueError("Bound must be positive")
    return math.floor(rng.random() * bound)


def pick(rng: RandomSource, options: Sequence[T]) -> T:
    """Pick one element uniformly."""
    if not options:
        raise ValueError("Cannot pick from an empty sequence")
    return options[roll_below(rng, len(options))]


def chance(rng: RandomSource, probability: float) -> bool:
    """Return True with the given probability."""
    return rng.random() < probability
