"""primekit - prime generation, primality testing, factorization and prime counting."""

__version__ = "0.1.0"

from primekit.config import DEFAULT_CONFIG, EngineConfig, get_config
from primekit.core.bitset import BitSet
from primekit.core.sieve import (
    atkin,
    eratosthenes,
    factorize,
    factorize_with_primes,
    is_prime,
    next_prime,
    nth_prime,
    prime_sieve,
    segmented,
)
from primekit.counting.pi import prime_count, prime_count_batch
from primekit.errors import (
    FactorizationStallError,
    InvalidInputError,
    OutOfRangeError,
    PrimeKitError,
)
from primekit.factorization.arith import (
    coprime,
    gcd,
    gcd_all,
    lcm,
    lcm_all,
    perfect_cube,
    perfect_square,
)
from primekit.factorization.pollard import (
    quick_factorize,
    quick_factorize_with_small_primes,
    rho,
)

__all__ = [
    "DEFAULT_CONFIG",
    "EngineConfig",
    "get_config",
    "BitSet",
    "atkin",
    "eratosthenes",
    "segmented",
    "prime_sieve",
    "is_prime",
    "next_prime",
    "nth_prime",
    "factorize",
    "factorize_with_primes",
    "quick_factorize",
    "quick_factorize_with_small_primes",
    "rho",
    "prime_count",
    "prime_count_batch",
    "coprime",
    "gcd",
    "gcd_all",
    "lcm",
    "lcm_all",
    "perfect_cube",
    "perfect_square",
    "PrimeKitError",
    "InvalidInputError",
    "OutOfRangeError",
    "FactorizationStallError",
]
