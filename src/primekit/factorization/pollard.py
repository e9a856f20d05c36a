"""Integer factorization with Brent's variant of Pollard's Rho.

``quick_factorize`` is the entry point: small values are trial-divided
against a cached prime list, large ones are split with ``rho`` and the
pieces factored recursively.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

from primekit.config import EngineConfig, get_config
from primekit.core.sieve import U64_MAX, check_u64, factorize_with_primes, is_prime, prime_sieve
from primekit.errors import FactorizationStallError

logger = logging.getLogger(__name__)


def rho(value: int, seed: int) -> int:
    """Extract a candidate factor of ``value`` using Brent's cycle finding.

    The polynomial ``f(x) = (x^2 + c) mod value`` and the starting point
    are derived from ``seed * value``. Differences are multiplied together
    in batches and tested with one gcd per batch; if a batch overshoots to
    ``value`` the sequence is replayed one step at a time from the batch
    start.

    A given seed can fail. The return value is then ``1`` or ``value``, and
    the caller should retry with another seed.

    Args:
        value: Composite to split.
        seed: Seed for the pseudo-random map.

    Returns:
        A divisor of ``value``, possibly trivial.
    """
    value = check_u64(value)
    seed = check_u64(seed, "seed")
    if value < 4:
        return max(value, 1)

    entropy = (seed * value) & U64_MAX
    c = entropy & 0xFF
    batch = max(entropy & 0x7F, 1)
    y = entropy & 0xF

    def f(v: int) -> int:
        return (v * v + c) % value

    r = 1
    q = 1
    g = 1
    x = 0
    ys = 0

    while g == 1:
        x = y
        for _ in range(r):
            y = f(y)

        k = 0
        while k < r and g == 1:
            ys = y
            for _ in range(min(batch, r - k)):
                y = f(y)
                q = q * abs(x - y) % value
            g = math.gcd(q, value)
            k += batch

        r *= 2

    # Backtrack when the batched product overshot
    while g == value or g <= 1:
        ys = f(ys)
        if x == ys:
            # Cycle closed without a factor; this seed has failed
            return g
        g = math.gcd(abs(x - ys), value)

    return g


def quick_factorize_with_small_primes(
    value: int,
    small_primes: Sequence[int],
    config: EngineConfig | None = None,
) -> list[int]:
    """Return the prime factorization of ``value``.

    Values below ``config.small_factor_ceiling`` are factored by trial
    division over ``small_primes``, which should hold every prime up to
    that ceiling. Larger values have their factors of two shifted out and
    are then split with ``rho``, rotating the seed whenever it stalls.

    Slow for values with one very large prime factor, but always correct.

    Args:
        value: Number to factor.
        small_primes: Ascending primes up to the small-factor ceiling.
        config: Engine configuration.

    Returns:
        Ascending prime factors with multiplicity.

    Raises:
        FactorizationStallError: If ``config.rho_max_attempts`` is set and
            that many consecutive seeds fail.
    """
    config = config or get_config()
    value = check_u64(value)

    if value < config.small_factor_ceiling:
        return factorize_with_primes(value, small_primes)

    factors: list[int] = []

    while value & 1 == 0:
        value >>= 1
        factors.append(2)

    seed = 2
    stalls = 0
    while value > 1:
        if is_prime(value, config):
            factors.append(value)
            break

        factor = rho(value, seed)

        if factor == value or factor == 1:
            stalls += 1
            logger.debug("rho stalled on %d with seed %d, rotating seed", value, seed)
            if config.rho_max_attempts is not None and stalls >= config.rho_max_attempts:
                raise FactorizationStallError(value, seed)
            seed += 1
            continue

        stalls = 0
        if is_prime(factor, config):
            factors.append(factor)
        else:
            factors.extend(quick_factorize_with_small_primes(factor, small_primes, config))

        value //= factor

    factors.sort()
    return factors


def quick_factorize(value: int, config: EngineConfig | None = None) -> list[int]:
    """Return the prime factorization of ``value``.

    Sieves the small prime list on every call; when factoring many values,
    build it once with ``prime_sieve(config.small_factor_ceiling)`` and use
    ``quick_factorize_with_small_primes``.

    Examples:
        >>> quick_factorize(65_536) == [2] * 16
        True
        >>> quick_factorize(9_223_372_036_854_775_807)
        [7, 7, 73, 127, 337, 92737, 649657]
    """
    config = config or get_config()
    small_primes = prime_sieve(config.small_factor_ceiling, config).tolist()
    return quick_factorize_with_small_primes(value, small_primes, config)
