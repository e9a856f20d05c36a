"""Engine configuration.

Tunables for the sieves, the factorizer and the prime counter live in a
frozen dataclass so a single instance can be shared freely. Values can be
loaded from a JSON file or overridden through ``PRIMEKIT_*`` environment
variables.
"""

from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any

from primekit.errors import InvalidInputError

ENV_PREFIX = "PRIMEKIT_"


@dataclass(frozen=True)
class EngineConfig:
    """Tunable constants for the prime engine.

    Attributes:
        segment_size: Width of a segmented-sieve window. Also the threshold
            at which ``prime_sieve`` switches from Atkin to segmented.
        small_factor_ceiling: Values below this are factored by trial
            division in ``quick_factorize``; the small prime list is sieved
            up to it.
        phi_cache_size: Dimension of the square phi memo table.
        trial_division_limit: ``is_prime`` switches from 6k +/- 1 trial
            division to deterministic Miller-Rabin at this value.
        nth_prime_growth: Factor applied to the nth-prime bound estimate
            when it turns out too small.
        rho_max_attempts: Maximum consecutive rho seed failures before
            giving up. None retries forever.
    """
    segment_size: int = 65_536
    small_factor_ceiling: int = 65_536
    phi_cache_size: int = 1024
    trial_division_limit: int = 2 ** 32
    nth_prime_growth: float = 2.0
    rho_max_attempts: int | None = None

    def __post_init__(self):
        self.validate()

    def validate(self) -> 'EngineConfig':
        """Check value ranges, returning self for chaining.

        Raises:
            InvalidInputError: If any field is out of range.
        """
        for name in ("segment_size", "small_factor_ceiling", "phi_cache_size"):
            value = getattr(self, name)
            if not isinstance(value, int) or value < 1:
                raise InvalidInputError(f"{name} must be a positive integer, got {value!r}")
        if self.segment_size % 2:
            raise InvalidInputError(f"segment_size must be even, got {self.segment_size}")
        if self.trial_division_limit < 4:
            raise InvalidInputError(
                f"trial_division_limit must be >= 4, got {self.trial_division_limit}"
            )
        if self.nth_prime_growth <= 1:
            raise InvalidInputError(
                f"nth_prime_growth must be > 1, got {self.nth_prime_growth}"
            )
        if self.rho_max_attempts is not None and self.rho_max_attempts < 1:
            raise InvalidInputError(
                f"rho_max_attempts must be >= 1 or None, got {self.rho_max_attempts}"
            )
        return self

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> 'EngineConfig':
        return cls(**{k: v for k, v in d.items() if k in cls.__dataclass_fields__}).validate()

    @classmethod
    def load(cls, path: str | Path) -> 'EngineConfig':
        """Load a configuration from a JSON file.

        Args:
            path: Path to a JSON object whose keys match field names.

        Returns:
            Validated configuration. Unknown keys are ignored.
        """
        with open(path) as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise InvalidInputError(f"{path}: expected a JSON object")
        return cls.from_dict(data)

    def save(self, path: str | Path) -> None:
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)


DEFAULT_CONFIG = EngineConfig()


def _parse_env(name: str, raw: str) -> Any:
    if name == "nth_prime_growth":
        return float(raw)
    if name == "rho_max_attempts" and raw.strip().lower() in ("", "none"):
        return None
    return int(raw.replace("_", ""))


def get_config(base: EngineConfig | None = None) -> EngineConfig:
    """Return ``base`` (default ``DEFAULT_CONFIG``) with env overrides applied.

    Each field can be overridden by ``PRIMEKIT_<FIELD_NAME>``, e.g.
    ``PRIMEKIT_SEGMENT_SIZE=32768``.
    """
    config = base or DEFAULT_CONFIG
    overrides: dict[str, Any] = {}
    for f in fields(EngineConfig):
        raw = os.environ.get(ENV_PREFIX + f.name.upper())
        if raw is None:
            continue
        try:
            overrides[f.name] = _parse_env(f.name, raw)
        except ValueError:
            raise InvalidInputError(
                f"{ENV_PREFIX}{f.name.upper()}: cannot parse {raw!r}"
            ) from None
    if not overrides:
        return config
    return replace(config, **overrides).validate()
