"""GCD, LCM and perfect-power tests over the 64-bit domain."""

from __future__ import annotations

import math
from collections.abc import Iterable
from functools import reduce
from math import isqrt

from primekit.core.sieve import U64_MAX, check_u64
from primekit.errors import OutOfRangeError

# Low bytes that a perfect square can end in
_SQUARE_LOW_BYTES = frozenset((i * i) & 0xFF for i in range(256))


def gcd(a: int, b: int) -> int:
    """Greatest common divisor. ``gcd(0, 0) == 0``."""
    return math.gcd(check_u64(a, "a"), check_u64(b, "b"))


def gcd_all(values: Iterable[int]) -> int:
    """GCD of a collection. Returns 0 for an empty collection."""
    return reduce(gcd, values, 0)


def coprime(a: int, b: int) -> bool:
    return gcd(a, b) == 1


def lcm(a: int, b: int) -> int:
    """Least common multiple. Zero if either argument is zero.

    Raises:
        OutOfRangeError: If the result does not fit in 64 bits.
    """
    result = math.lcm(check_u64(a, "a"), check_u64(b, "b"))
    if result > U64_MAX:
        raise OutOfRangeError(f"lcm({a}, {b}) exceeds the 64-bit range")
    return result


def lcm_all(values: Iterable[int]) -> int:
    """LCM of a collection. Returns 1 for an empty collection."""
    return reduce(lcm, values, 1)


def icbrt(n: int) -> int:
    """Integer cube root: the largest ``r`` with ``r**3 <= n``."""
    n = check_u64(n, "n")
    if n == 0:
        return 0
    r = int(round(n ** (1.0 / 3.0)))
    while r ** 3 > n:
        r -= 1
    while (r + 1) ** 3 <= n:
        r += 1
    return r


def perfect_square(n: int) -> bool:
    """Return True if ``n`` is a perfect square.

    Rejects most non-squares by their low byte before taking the root.
    """
    n = check_u64(n, "n")
    if (n & 0xFF) not in _SQUARE_LOW_BYTES:
        return False
    root = isqrt(n)
    return root * root == n


def perfect_cube(n: int) -> bool:
    root = icbrt(n)
    return root ** 3 == n
