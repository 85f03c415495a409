"""Exceptions raised by pybloomset."""
from __future__ import annotations

__all__ = ["InvalidConfiguration"]


class InvalidConfiguration(ValueError):
    """Filter parameters (size, capacity, rate or seeds) are unusable.

    Raised at construction or planning time only; a filter that was built
    successfully never raises it afterwards.
    """
