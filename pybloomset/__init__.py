"""pybloomset: a small, classic Bloom filter for Python.

The package exposes `pybloomset.BloomFilter` for insert/query membership
testing together with the pure sizing helpers used to plan a filter before
building it. Hash seeds come from a pluggable source so filters can be made
reproducible in tests.
"""

from __future__ import annotations

__all__ = [
    "BloomFilter",
    "InvalidConfiguration",
    "DEFAULT_EXPECTED_ELEMENTS",
    "optimal_hashes_number",
    "optimal_filter_size",
    "estimate_false_positive_probability",
    "fixed_seeds",
    "random_seeds",
    "seeded_source",
]

from .bloom import (
    DEFAULT_EXPECTED_ELEMENTS,
    BloomFilter,
    estimate_false_positive_probability,
    optimal_filter_size,
    optimal_hashes_number,
)
from .errors import InvalidConfiguration
from .seeds import fixed_seeds, random_seeds, seeded_source
