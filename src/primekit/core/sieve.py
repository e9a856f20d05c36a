"""Prime number generation, primality testing and trial-division factoring.

Two sieve families back ``prime_sieve``:

1. Sieve of Atkin - fast for small maxima, but needs one bit per integer.
2. Segmented Sieve of Eratosthenes - processes the range in fixed-size
   windows, so memory stays bounded no matter how large the maximum is.

A plain Sieve of Eratosthenes is kept for cross-validating the two.

All values live in the unsigned 64-bit domain. Prime lists are returned
as ascending ``uint64`` arrays.
"""

from __future__ import annotations

import logging
import math
import sys
from collections.abc import Iterable, Iterator
from math import isqrt

import numpy as np

from primekit.config import EngineConfig, get_config
from primekit.core.bitset import BitSet
from primekit.errors import InvalidInputError, OutOfRangeError

logger = logging.getLogger(__name__)

U64_MAX = 2 ** 64 - 1

# Residue classes mod 60 toggled by each of Atkin's quadratic forms
_ATKIN_4X2_Y2 = np.zeros(60, dtype=bool)
_ATKIN_4X2_Y2[[1, 13, 17, 29, 37, 41, 49, 53]] = True
_ATKIN_3X2_PLUS_Y2 = np.zeros(60, dtype=bool)
_ATKIN_3X2_PLUS_Y2[[7, 19, 31, 43]] = True
_ATKIN_3X2_MINUS_Y2 = np.zeros(60, dtype=bool)
_ATKIN_3X2_MINUS_Y2[[11, 23, 47, 59]] = True

_TRIVIAL_PRIMES = {
    0: (),
    1: (),
    2: (2,),
    3: (2, 3),
    4: (2, 3),
    5: (2, 3, 5),
}
_FIRST_PRIMES = (2, 3, 5, 7)

# Deterministic for every n < 3.3 * 10**24, which covers the 64-bit domain
_MILLER_RABIN_BASES = (2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37)


def check_u64(value: int, name: str = "value") -> int:
    """Validate that ``value`` is an integer in ``[0, 2**64 - 1]``.

    Args:
        value: Candidate value (Python or numpy integer).
        name: Argument name used in error messages.

    Returns:
        ``value`` as a Python ``int``.

    Raises:
        InvalidInputError: If ``value`` is not an integer or is negative.
        OutOfRangeError: If ``value`` exceeds the 64-bit range.
    """
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise InvalidInputError(f"{name} must be an integer, got {type(value).__name__}")
    value = int(value)
    if value < 0:
        raise InvalidInputError(f"{name} must be >= 0, got {value}")
    if value > U64_MAX:
        raise OutOfRangeError(f"{name} {value} exceeds the 64-bit range")
    return value


def _check_sieve_max(max_value: int) -> int:
    max_value = check_u64(max_value, "sieve max")
    if max_value >= sys.maxsize:
        raise OutOfRangeError(f"sieve max {max_value} is larger than machine word size")
    return max_value


def _empty_primes() -> np.ndarray:
    return np.array([], dtype=np.uint64)


def atkin(max_value: int) -> np.ndarray:
    """Return the primes in ``[1, max_value]`` using the Sieve of Atkin.

    Fast for small maxima. Memory grows linearly with ``max_value`` (one
    bit per integer), so large maxima should go through ``segmented``;
    ``prime_sieve`` picks between the two automatically.

    Args:
        max_value: Upper bound (inclusive).

    Returns:
        Ascending ``uint64`` array of primes.

    Raises:
        OutOfRangeError: If ``max_value`` does not fit a machine word.
    """
    max_value = _check_sieve_max(max_value)

    if max_value < 6:
        return np.array(_TRIVIAL_PRIMES[max_value], dtype=np.uint64)

    sieve = BitSet(max_value)
    limit = isqrt(max_value) + 1

    ys = np.arange(1, limit + 1, dtype=np.int64)
    yy = ys * ys

    for x in range(1, limit + 1):
        xx = x * x

        n = 4 * xx + yy
        n = n[n <= max_value]
        sieve.flip_many(n[_ATKIN_4X2_Y2[n % 60]])

        n = 3 * xx + yy
        n = n[n <= max_value]
        sieve.flip_many(n[_ATKIN_3X2_PLUS_Y2[n % 60]])

        # 3x^2 - y^2 only for y < x
        n = 3 * xx - yy[: x - 1]
        n = n[n <= max_value]
        sieve.flip_many(n[_ATKIN_3X2_MINUS_Y2[n % 60]])

    # Squarefree correction
    for i in range(7, limit + 1):
        if sieve.read(i):
            sieve.clear_stride(i * i, i * i)

    return np.concatenate((
        np.array(_TRIVIAL_PRIMES[5], dtype=np.uint64),
        sieve.collect_true_indices(),
    ))


def eratosthenes(max_value: int) -> np.ndarray:
    """Return the primes in ``[1, max_value]`` using a full Sieve of Eratosthenes.

    Mainly useful for validating the other sieves.

    Args:
        max_value: Upper bound (inclusive).

    Returns:
        Ascending ``uint64`` array of primes.
    """
    max_value = _check_sieve_max(max_value)
    if max_value < 2:
        return _empty_primes()

    sieve = BitSet(max_value)
    sieve.one()
    sieve.set(0, False)
    sieve.set(1, False)

    for pos in range(2, isqrt(max_value) + 1):
        if sieve.read(pos):
            sieve.clear_stride(pos * pos, pos)

    return sieve.collect_true_indices()


def iter_segmented(max_value: int, config: EngineConfig | None = None) -> Iterator[np.ndarray]:
    """Yield the odd primes in ``[3, max_value]``, one window at a time.

    The prime 2 is never produced; callers add it themselves. Seeding
    primes up to ``sqrt(max_value)`` are computed once, up front, with the
    Sieve of Atkin. Each seeding prime carries the offset of its next odd
    multiple from one window into the next.

    Args:
        max_value: Upper bound (inclusive).
        config: Engine configuration; ``segment_size`` sets the window width.

    Yields:
        Ascending ``uint64`` arrays of the primes found in each window.
        Windows without primes are skipped.
    """
    config = config or get_config()
    max_value = check_u64(max_value, "sieve max")
    if max_value < 3:
        return

    window = config.segment_size
    seeds = atkin(isqrt(max_value) + 1).tolist()
    n_windows = -(-max_value // window)

    logger.debug(
        "segmented sieve: max=%d, %d window(s) of %d, %d seeding primes",
        max_value, n_windows, window, len(seeds),
    )

    sieve = BitSet(window - 1)
    sieve_primes: list[int] = []
    offsets: list[int] = []
    next_seed = 1  # seeds[0] == 2 never sieves the odd-only stream

    for pos in range(0, n_windows * window, window):
        sieve.one()
        high = min(pos + window - 1, max_value)

        while next_seed < len(seeds) and seeds[next_seed] ** 2 <= high:
            p = seeds[next_seed]
            sieve_primes.append(p)
            offsets.append(p * p - pos)
            next_seed += 1

        for i, p in enumerate(sieve_primes):
            offset = offsets[i]
            step = 2 * p
            if offset >= window:
                offsets[i] = offset - window
                continue
            sieve.clear_stride(offset, step)
            offsets[i] = (offset - window) % step

        idx = sieve.collect_true_indices()
        candidates = idx[(idx & 1) == 1] + np.uint64(pos)
        primes = candidates[(candidates >= 3) & (candidates <= high)]
        if primes.size:
            yield primes


def segmented(max_value: int, config: EngineConfig | None = None) -> np.ndarray:
    """Return the primes in ``[1, max_value]`` using a segmented Sieve of Eratosthenes.

    Memory use is bounded by the window width plus the seeding primes, so
    this works for maxima far beyond what ``atkin`` can allocate.

    Args:
        max_value: Upper bound (inclusive).
        config: Engine configuration.

    Returns:
        Ascending ``uint64`` array of primes.
    """
    max_value = check_u64(max_value, "sieve max")
    if max_value < 2:
        return _empty_primes()

    return np.concatenate(
        [np.array([2], dtype=np.uint64), *iter_segmented(max_value, config)]
    )


def prime_sieve(max_value: int, config: EngineConfig | None = None) -> np.ndarray:
    """Return the primes in ``[1, max_value]``.

    Uses ``atkin`` below ``config.segment_size`` and ``segmented`` above it.

    Args:
        max_value: Upper bound (inclusive).
        config: Engine configuration.

    Returns:
        Ascending ``uint64`` array of primes.

    Examples:
        >>> prime_sieve(20).tolist()
        [2, 3, 5, 7, 11, 13, 17, 19]
    """
    config = config or get_config()
    max_value = check_u64(max_value, "sieve max")

    if max_value < config.segment_size:
        logger.debug("prime_sieve(%d): atkin", max_value)
        return atkin(max_value)

    logger.debug("prime_sieve(%d): segmented", max_value)
    return segmented(max_value, config)


def _miller_rabin(n: int) -> bool:
    # Write n-1 as 2^r * d
    r, d = 0, n - 1
    while d % 2 == 0:
        r += 1
        d //= 2

    for a in _MILLER_RABIN_BASES:
        if a % n == 0:
            continue
        x = pow(a, d, n)
        if x == 1 or x == n - 1:
            continue
        for _ in range(r - 1):
            x = pow(x, 2, n)
            if x == n - 1:
                break
        else:
            return False

    return True


def is_prime(value: int, config: EngineConfig | None = None) -> bool:
    """Check if a single number is prime.

    Uses 6k +/- 1 trial division below ``config.trial_division_limit`` and a
    deterministic Miller-Rabin test at or above it.

    Args:
        value: Number to check.
        config: Engine configuration.

    Returns:
        True if value is prime, False otherwise.
    """
    value = check_u64(value)
    if value < 2:
        return False
    if value < 4:
        return True
    if value % 2 == 0 or value % 3 == 0:
        return False

    config = config or get_config()
    if value >= config.trial_division_limit:
        return _miller_rabin(value)

    i = 5
    while i * i <= value:
        if value % i == 0 or value % (i + 2) == 0:
            return False
        i += 6

    return True


def next_prime(n: int, config: EngineConfig | None = None) -> int:
    """Return the smallest prime greater than ``n``.

    Args:
        n: Starting point.
        config: Engine configuration, forwarded to ``is_prime``.

    Raises:
        OutOfRangeError: If no prime above ``n`` fits in 64 bits.
    """
    config = config or get_config()
    n = check_u64(n, "n")
    if n < 2:
        return 2

    candidate = n + 1 if n % 2 == 0 else n + 2
    while candidate <= U64_MAX:
        if is_prime(candidate, config):
            return candidate
        candidate += 2

    raise OutOfRangeError(f"next prime after {n} is larger than 2**64 - 1")


def nth_prime(n: int, config: EngineConfig | None = None) -> int:
    """Return the nth prime number (0-indexed, so ``nth_prime(0) == 2``).

    Sieves up to the estimate ``k (ln k + ln ln k)`` with ``k = n + 1``.
    If that bound turns out too small the sieve is rerun with the bound
    scaled by ``config.nth_prime_growth``.

    Args:
        n: Index of the prime to return.
        config: Engine configuration.

    Raises:
        OutOfRangeError: If the bound would exceed the 64-bit range.

    Examples:
        >>> nth_prime(3)
        7
    """
    config = config or get_config()
    n = check_u64(n, "n")
    if n < len(_FIRST_PRIMES):
        return _FIRST_PRIMES[n]

    k = n + 1
    bound = math.ceil(k * math.log(k) + k * math.log(math.log(k)))

    while True:
        if bound > U64_MAX:
            raise OutOfRangeError(f"nth prime of n = {n} is larger than 2**64 - 1")

        count = 1  # the prime 2
        for chunk in iter_segmented(bound, config):
            if count + len(chunk) > n:
                return int(chunk[n - count])
            count += len(chunk)

        logger.warning(
            "nth_prime(%d): bound %d holds only %d primes, retrying with a larger bound",
            n, bound, count,
        )
        bound = math.ceil(bound * config.nth_prime_growth)


def factorize_with_primes(value: int, primes: Iterable[int]) -> list[int]:
    """Factor ``value`` by trial division over an ascending list of primes.

    Useful when many values are factored against one cached prime list,
    or when factoring over a custom factor base. Only the primes in the
    list are tried, so the result is complete only if the list covers
    every prime factor of ``value``.

    Args:
        value: Number to factor.
        primes: Ascending primes.

    Returns:
        Ascending factors with multiplicity. Empty for 0 and 1.
    """
    value = check_u64(value)
    factors: list[int] = []
    if value <= 1:
        return factors

    for prime in primes:
        prime = int(prime)
        if prime > value:
            break
        while value % prime == 0:
            factors.append(prime)
            value //= prime

    return factors


def factorize(value: int, config: EngineConfig | None = None) -> list[int]:
    """Factor ``value`` by trial division over ``prime_sieve(value)``.

    Examples:
        >>> factorize(200)
        [2, 2, 2, 5, 5]
    """
    value = check_u64(value)
    return factorize_with_primes(value, prime_sieve(value, config).tolist())
