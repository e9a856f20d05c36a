"""Error taxonomy for primekit.

Input errors subclass ValueError so callers that already guard with
``except ValueError`` keep working.
"""

from __future__ import annotations


class PrimeKitError(Exception):
    """Base class for all primekit errors."""


class InvalidInputError(PrimeKitError, ValueError):
    """Raised for negative, non-integer, or otherwise invalid arguments."""


class OutOfRangeError(PrimeKitError, ValueError):
    """Raised when a bound or result falls outside the supported domain."""


class FactorizationStallError(PrimeKitError, RuntimeError):
    """Raised when Pollard-Brent Rho exceeds the configured retry ceiling.

    Attributes:
        value: The composite that could not be split.
        seed: The last seed that was tried.
    """

    def __init__(self, value: int, seed: int):
        super().__init__(
            f"rho failed to split {value} after rotating seeds up to {seed}"
        )
        self.value = value
        self.seed = seed
