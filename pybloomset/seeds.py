"""Seed sources for the per-hash-function BLAKE2b keys.

A *seed source* is any callable ``source(count) -> Sequence[int]`` returning
``count`` non-negative integers below ``2**64``. The filter asks for its seeds
exactly once, at construction. Production filters use :func:`random_seeds`;
tests pin seeds with :func:`fixed_seeds` or :func:`seeded_source`.
"""
from __future__ import annotations

import random
import sys
from collections.abc import Callable, Iterable, Sequence

from .errors import InvalidConfiguration

__all__ = [
    "SeedSource",
    "MAX_SEED",
    "random_seeds",
    "seeded_source",
    "fixed_seeds",
    "validate_seeds",
]

SeedSource = Callable[[int], Sequence[int]]

MAX_SEED = sys.maxsize  # exclusive upper bound for generated seeds

_system_random = random.SystemRandom()


def random_seeds(count: int) -> list[int]:
    """Draw `count` seeds from the OS entropy pool."""
    return [_system_random.randrange(MAX_SEED) for _ in range(count)]


def seeded_source(seed: int) -> SeedSource:
    """Reproducible source backed by a private :class:`random.Random`."""
    rng = random.Random(seed)

    def _source(count: int) -> list[int]:
        return [rng.randrange(MAX_SEED) for _ in range(count)]

    return _source


def fixed_seeds(seeds: Iterable[int]) -> SeedSource:
    """Source that hands out the first `count` of the given seeds."""
    pinned = tuple(seeds)
    if not pinned:
        raise InvalidConfiguration("fixed_seeds() needs at least one seed")

    def _source(count: int) -> list[int]:
        if count > len(pinned):
            raise InvalidConfiguration(f"{count} seeds requested but only {len(pinned)} pinned")
        return list(pinned[:count])

    return _source


def validate_seeds(seeds: Sequence[int], expected: int) -> tuple[int, ...]:
    """Check what a seed source returned and freeze it into a tuple."""
    frozen = tuple(seeds)
    if len(frozen) != expected:
        raise InvalidConfiguration(f"seed source returned {len(frozen)} seeds, expected {expected}")
    for s in frozen:
        if isinstance(s, bool) or not isinstance(s, int):
            raise InvalidConfiguration(f"seed {s!r} is not an integer")
        if not 0 <= s < 2**64:
            raise InvalidConfiguration(f"seed {s} outside [0, 2**64)")
    return frozen
