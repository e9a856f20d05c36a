"""Integer factorization and related arithmetic."""

from primekit.factorization.arith import (
    coprime,
    gcd,
    gcd_all,
    icbrt,
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
    # Arithmetic
    "coprime",
    "gcd",
    "gcd_all",
    "icbrt",
    "lcm",
    "lcm_all",
    "perfect_cube",
    "perfect_square",
    # Rho
    "quick_factorize",
    "quick_factorize_with_small_primes",
    "rho",
]
