"""Prime-counting function."""

from primekit.counting.pi import (
    PhiCache,
    lehmer,
    phi,
    prime_count,
    prime_count_batch,
)

__all__ = [
    "PhiCache",
    "lehmer",
    "phi",
    "prime_count",
    "prime_count_batch",
]
