"""Core prime generation and primality utilities."""

from primekit.core.bitset import BitSet
from primekit.core.sieve import (
    U64_MAX,
    atkin,
    eratosthenes,
    factorize,
    factorize_with_primes,
    is_prime,
    iter_segmented,
    next_prime,
    nth_prime,
    prime_sieve,
    segmented,
)

__all__ = [
    "BitSet",
    "U64_MAX",
    "atkin",
    "eratosthenes",
    "factorize",
    "factorize_with_primes",
    "is_prime",
    "iter_segmented",
    "next_prime",
    "nth_prime",
    "prime_sieve",
    "segmented",
]
