"""Random integers for draws and simulated guesses."""

from __future__ import annotations

import secrets
from typing import Protocol


class RandomNumberSource(Protocol):
    """Anything that can produce a uniform integer in ``[low, high]``."""

    def randint(self, low: int, high: int) -> int:
        ...


class SystemRandomSource:
    """Cryptographically strong source backed by the OS CSPRNG.

    Guesses must not be derivable from earlier draws, so a seeded PRNG such as
    :mod:`random` is not acceptable here. ``secrets`` holds no shared state,
    so worker threads calling it concurrently never wait on each other.
    """

    def randint(self, low: int, high: int) -> int:
        """Return a uniformly distributed integer with ``low <= n <= high``."""
        if low > high:
            raise ValueError(f"Empty range [{low}, {high}]")
        return low + secrets.randbelow(high - low + 1)
