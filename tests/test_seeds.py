"""Tests for seed sources and their use by the filter."""
import logging

import pytest

from pybloomset import BloomFilter, InvalidConfiguration, fixed_seeds, random_seeds, seeded_source
from pybloomset.seeds import MAX_SEED


def test_random_seeds_range():
    seeds = random_seeds(64)
    assert len(seeds) == 64
    assert all(0 <= s < MAX_SEED for s in seeds)


def test_seeded_source_is_reproducible():
    assert seeded_source(7)(5) == seeded_source(7)(5)
    assert seeded_source(7)(5) != seeded_source(8)(5)


def test_same_seeds_same_hashes():
    a = BloomFilter(1000, 10, seed_source=seeded_source(99))
    b = BloomFilter(1000, 10, seed_source=seeded_source(99))
    assert a.seeds == b.seeds
    assert a.hash_values("key") == b.hash_values("key")


def test_seeds_drive_hashes():
    a = BloomFilter(1000, 100, seed_source=fixed_seeds([1, 2, 3, 4, 5, 6]))
    b = BloomFilter(1000, 100, seed_source=fixed_seeds([6, 5, 4, 3, 2, 1]))
    assert a.hash_values("key") == list(reversed(b.hash_values("key")))


def test_seeds_fixed_for_lifetime():
    bf = BloomFilter(1000, 100, seed_source=seeded_source(3))
    seeds = bf.seeds
    first = bf.hash_values("x")
    for i in range(100):
        bf.add(str(i))
    assert bf.seeds == seeds
    assert bf.hash_values("x") == first
    with pytest.raises(AttributeError):
        bf.seeds = (1,)  # type: ignore[misc]


def test_fixed_seeds_uses_prefix():
    assert fixed_seeds([10, 20, 30])(2) == [10, 20]


def test_fixed_seeds_too_few():
    with pytest.raises(InvalidConfiguration):
        BloomFilter(1000, 100, seed_source=fixed_seeds([1]))


def test_fixed_seeds_empty():
    with pytest.raises(InvalidConfiguration):
        fixed_seeds([])


@pytest.mark.parametrize("bad", [[-1], [2**64], ["1"], [1.0], [False]])
def test_invalid_seed_values(bad):
    with pytest.raises(InvalidConfiguration):
        BloomFilter(35, 30, seed_source=lambda count: bad)


def test_wrong_seed_count():
    with pytest.raises(InvalidConfiguration):
        BloomFilter(35, 30, seed_source=lambda count: [1, 2])


def test_construction_logged(caplog):
    with caplog.at_level(logging.DEBUG, logger="pybloomset.bloom"):
        BloomFilter(35, 30, seed_source=fixed_seeds([1]))
    assert "m=35 n=30 k=1" in caplog.text
