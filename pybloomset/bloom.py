"""Classic insert/query Bloom filter.

Main goals:
    • one seeded hash primitive (keyed BLAKE2b) standing in for k functions
    • sizing helpers usable without building a filter
    • a false-positive estimate computed with extended precision

Bits are only ever set, never cleared: there is no delete, no resize and no
serialisation. Not thread-safe; callers serialise mutation themselves.
"""
from __future__ import annotations

import logging
import math
import sys
from decimal import Decimal, localcontext
from hashlib import blake2b
from typing import ClassVar, Optional, Union

from .errors import InvalidConfiguration
from .seeds import SeedSource, random_seeds, validate_seeds

__all__ = [
    "BloomFilter",
    "DEFAULT_EXPECTED_ELEMENTS",
    "DEFAULT_FALSE_POSITIVE_RATE",
    "optimal_hashes_number",
    "optimal_filter_size",
    "estimate_false_positive_probability",
]

logger = logging.getLogger(__name__)

DEFAULT_EXPECTED_ELEMENTS = 100_000
DEFAULT_FALSE_POSITIVE_RATE = 0.01

_DECIMAL_PRECISION = 50  # digits kept while raising the inner term to the k-th power

Element = Union[str, bytes, bytearray, memoryview]


def _require_positive_int(name: str, value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidConfiguration(f"{name} must be an integer, got {type(value).__name__}")
    if value < 1:
        raise InvalidConfiguration(f"{name} must be >= 1, got {value}")
    return value


# -------------------------------------------------------
# Sizing helpers 📐
# -------------------------------------------------------
def optimal_hashes_number(filter_size: int, num_expected_elements: int) -> int:
    """Number of hash functions for `filter_size` bits holding `num_expected_elements`.

    Computes ``int((m // n) * ln 2)``: the bits-per-element ratio is truncated
    *before* the logarithm factor is applied, and the product is truncated
    again. The result is clamped into ``[1, sys.maxsize]``. With m=35 and
    n=30 this gives ``int(1 * 0.693) == 0``, clamped to 1.
    """
    m = _require_positive_int("filter_size", filter_size)
    n = _require_positive_int("num_expected_elements", num_expected_elements)
    k = int((m // n) * math.log(2))
    return min(max(k, 1), sys.maxsize)


def optimal_filter_size(num_expected_elements: int, false_positive_rate: float = DEFAULT_FALSE_POSITIVE_RATE) -> int:
    """Bits needed so `num_expected_elements` items stay under `false_positive_rate`."""
    n = _require_positive_int("num_expected_elements", num_expected_elements)
    if not 0.0 < false_positive_rate < 1.0:
        raise InvalidConfiguration(f"false_positive_rate must be in (0, 1), got {false_positive_rate}")
    m = -n * math.log(false_positive_rate) / (math.log(2) ** 2)
    return max(1, math.ceil(m))


def estimate_false_positive_probability(filter_size: int, num_expected_elements: int, num_hash_functions: int) -> float:
    """Theoretical false-positive rate ``(1 - e^(-k / (m / n)))^k``.

    The inner term is a plain float; the k-th power is taken with
    :class:`decimal.Decimal` so large k does not lose precision before the
    result is narrowed back to float.
    """
    m = _require_positive_int("filter_size", filter_size)
    n = _require_positive_int("num_expected_elements", num_expected_elements)
    k = _require_positive_int("num_hash_functions", num_hash_functions)
    inner = 1.0 - math.exp(-k / (m / n))
    with localcontext(prec=_DECIMAL_PRECISION):
        p = Decimal(inner) ** k
    return min(max(float(p), 0.0), 1.0)


class BloomFilter:
    """Fixed-size Bloom filter backed by a packed bit-array.

    Parameters
    ----------
    filter_size: int
        Number of bits (m) in the filter.
    num_expected_elements: int
        Capacity (n) the filter is planned for; drives the hash count.
    seed_source: SeedSource | None
        Callable returning the k BLAKE2b seeds. Defaults to OS randomness.
    """

    _DIGEST_SIZE: ClassVar[int] = 8  # 64-bit hash values

    def __init__(
        self,
        filter_size: int,
        num_expected_elements: int = DEFAULT_EXPECTED_ELEMENTS,
        *,
        seed_source: Optional[SeedSource] = None,
    ):
        self._m = _require_positive_int("filter_size", filter_size)
        self._n = _require_positive_int("num_expected_elements", num_expected_elements)
        self._k = optimal_hashes_number(self._m, self._n)
        source = seed_source or random_seeds
        self._seeds = validate_seeds(source(self._k), self._k)
        # One keyed hasher per seed; copied for every element.
        self._hashers = tuple(
            blake2b(digest_size=self._DIGEST_SIZE, key=seed.to_bytes(8, "big")) for seed in self._seeds
        )
        self._bits = bytearray((self._m + 7) // 8)
        logger.debug("bloom filter created: m=%d n=%d k=%d", self._m, self._n, self._k)

    # -------------------------------------------------------
    # Construction helpers 🏗️
    # -------------------------------------------------------
    @classmethod
    def from_capacity(
        cls,
        num_expected_elements: int,
        false_positive_rate: float = DEFAULT_FALSE_POSITIVE_RATE,
        *,
        seed_source: Optional[SeedSource] = None,
    ) -> "BloomFilter":
        """Create a filter sized for `num_expected_elements` at ≤ `false_positive_rate`."""
        m = optimal_filter_size(num_expected_elements, false_positive_rate)
        return cls(m, num_expected_elements, seed_source=seed_source)

    # -------------------------------------------------------
    # Configuration (read-only)
    # -------------------------------------------------------
    @property
    def filter_size(self) -> int:
        return self._m

    @property
    def num_expected_elements(self) -> int:
        return self._n

    @property
    def num_hash_functions(self) -> int:
        return self._k

    @property
    def seeds(self) -> tuple[int, ...]:
        return self._seeds

    # -------------------------------------------------------
    # Hash helpers
    # -------------------------------------------------------
    def hash_values(self, value: Element) -> list[int]:
        """One unsigned 64-bit hash of `value` per seed, in seed order."""
        data = _as_bytes(value)
        out = []
        for base in self._hashers:
            h = base.copy()
            h.update(data)
            out.append(int.from_bytes(h.digest(), "big"))
        return out

    def _positions(self, value: Element):
        for h in self.hash_values(value):
            yield h % self._m

    # -------------------------------------------------------
    # API
    # -------------------------------------------------------
    def add(self, value: Element) -> None:
        for pos in self._positions(value):
            self._bits[pos // 8] |= 1 << (pos % 8)

    def contains(self, value: Element) -> bool:
        """True if `value` may have been added, False if it certainly was not."""
        return all(self._bits[pos // 8] & (1 << (pos % 8)) for pos in self._positions(value))

    def __contains__(self, value: Element) -> bool:
        return self.contains(value)

    def is_empty(self) -> bool:
        return not any(self._bits)

    def false_positive_probability(self) -> float:
        """Expected false-positive rate once `num_expected_elements` items are in."""
        return estimate_false_positive_probability(self._m, self._n, self._k)

    def __repr__(self) -> str:
        return f"BloomFilter(filter_size={self._m}, num_expected_elements={self._n}, num_hash_functions={self._k})"


def _as_bytes(value: Element) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    raise TypeError(f"BloomFilter elements must be str or bytes-like, got {type(value).__name__}")
