"""Prime-counting function via Lehmer's formula.

pi(x) is computed without enumerating the primes up to x: only the primes
up to sqrt(x) are sieved, and the rest is recovered from the partial
sieve function phi(m, n), the count of integers <= m not divisible by any
of the first n primes.
"""

from __future__ import annotations

import logging
from bisect import bisect_right
from collections.abc import Iterable, Sequence
from math import isqrt

import numpy as np

from primekit.config import EngineConfig, get_config
from primekit.core.sieve import check_u64, prime_sieve
from primekit.factorization.arith import icbrt

logger = logging.getLogger(__name__)

# pi(x) for x < 100
SMALL_PI = (
    0, 0, 1, 2, 2, 3, 3, 4, 4, 4,
    4, 5, 5, 6, 6, 6, 6, 7, 7, 8,
    8, 8, 8, 9, 9, 9, 9, 9, 9, 10,
    10, 11, 11, 11, 11, 11, 11, 12, 12, 12,
    12, 13, 13, 14, 14, 14, 14, 15, 15, 15,
    15, 15, 15, 16, 16, 16, 16, 16, 16, 17,
    17, 18, 18, 18, 18, 18, 18, 19, 19, 19,
    19, 20, 20, 21, 21, 21, 21, 21, 21, 22,
    22, 22, 22, 23, 23, 23, 23, 23, 23, 24,
    24, 24, 24, 24, 24, 24, 24, 25, 25, 25,
)


class PhiCache:
    """Fixed-size memo table for phi(m, n).

    Only pairs with both ``m`` and ``n`` below ``dimension`` are stored;
    everything else is recomputed on every call. The table never grows.
    Zero marks an empty slot, since phi(m, n) >= 1 for every cached m >= 1.

    Args:
        dimension: Side length of the square table.
    """

    __slots__ = ("dimension", "hits", "_table")

    def __init__(self, dimension: int = 1024):
        self.dimension = dimension
        self.hits = 0
        # phi(m, n) <= m < dimension, so int32 is plenty
        self._table = np.zeros((dimension, dimension), dtype=np.int32)

    def covers(self, m: int, n: int) -> bool:
        return m < self.dimension and n < self.dimension

    def get(self, m: int, n: int) -> int:
        return int(self._table[m, n])

    def put(self, m: int, n: int, value: int) -> None:
        self._table[m, n] = value

    def filled(self) -> int:
        """Number of populated slots."""
        return int(np.count_nonzero(self._table))


def phi(m: int, n: int, primes: Sequence[int], cache: PhiCache) -> int:
    """Count the integers in ``[1, m]`` not divisible by any of the first ``n`` primes.

    Uses ``phi(m, n) = phi(m, n - 1) - phi(m // p_n, n - 1)``.

    Args:
        m: Upper bound.
        n: Number of primes to sieve out.
        primes: Ascending primes; must hold at least ``n`` entries.
        cache: Memo table shared across calls.
    """
    if n == 0 or m == 0:
        return m
    if n == 1:
        return (m + 1) // 2

    p_n = primes[n - 1]
    if m <= p_n:
        return 1

    if cache.covers(m, n):
        cached = cache.get(m, n)
        if cached:
            cache.hits += 1
            return cached
        value = phi(m, n - 1, primes, cache) - phi(m // p_n, n - 1, primes, cache)
        cache.put(m, n, value)
        return value

    return phi(m, n - 1, primes, cache) - phi(m // p_n, n - 1, primes, cache)


def lehmer(x: int, primes: Sequence[int], cache: PhiCache) -> int:
    """Return pi(x) using Lehmer's formula.

    Args:
        x: Upper bound.
        primes: Ascending primes covering at least ``[2, sqrt(x)]``.
        cache: phi memo table, reusable across calls with the same primes.
    """
    if x < len(SMALL_PI):
        return SMALL_PI[x]

    if x < primes[-1]:
        return bisect_right(primes, x)

    a = lehmer(isqrt(isqrt(x)), primes, cache) + 1
    b = lehmer(isqrt(x), primes, cache) + 1
    c = lehmer(icbrt(x), primes, cache)

    pi = phi(x, a - 1, primes, cache) + ((b + a - 4) * (b - a + 1)) // 2

    for i in range(a, b):
        w = x // primes[i - 1]
        pi -= lehmer(w, primes, cache)

        if i > c:
            continue

        bi = lehmer(isqrt(w), primes, cache) + 1
        for j in range(i, bi):
            pi += j - 1
            pi -= lehmer(w // primes[j - 1], primes, cache)

    return pi


def prime_count(x: int, config: EngineConfig | None = None) -> int:
    """Return the number of primes less than or equal to ``x``.

    Can take a long time for very large ``x``. When computing several
    values, ``prime_count_batch`` shares its sieve and cache between them.

    Args:
        x: Upper bound.
        config: Engine configuration; ``phi_cache_size`` sizes the memo table.

    Examples:
        >>> prime_count(1_000)
        168
    """
    x = check_u64(x, "x")
    if x < len(SMALL_PI):
        return SMALL_PI[x]

    config = config or get_config()
    primes = prime_sieve(isqrt(x) + 1, config).tolist()
    cache = PhiCache(config.phi_cache_size)
    count = lehmer(x, primes, cache)

    logger.debug("prime_count(%d) = %d (%d phi cache hits)", x, count, cache.hits)
    return count


def prime_count_batch(values: Iterable[int], config: EngineConfig | None = None) -> list[int]:
    """Return pi(x) for each value, in input order.

    One seeding prime list (up to the square root of the largest value)
    and one phi cache are shared across all entries.

    Examples:
        >>> prime_count_batch([10, 100, 1_000])
        [4, 25, 168]
    """
    xs = [check_u64(v, "x") for v in values]
    if not xs:
        return []

    config = config or get_config()
    primes = prime_sieve(isqrt(max(xs)) + 1, config).tolist()
    cache = PhiCache(config.phi_cache_size)
    counts = [lehmer(x, primes, cache) for x in xs]

    logger.debug(
        "prime_count_batch: %d values, %d seeding primes, %d phi cache hits",
        len(xs), len(primes), cache.hits,
    )
    return counts
