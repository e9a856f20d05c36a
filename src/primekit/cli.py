"""Command-line interface for primekit."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from primekit.config import EngineConfig, get_config
from primekit.errors import PrimeKitError
from primekit.utils.log import setup_logger


def _integer(text: str) -> int:
    """Parse a decimal integer, allowing ``_`` separators."""
    try:
        return int(text.replace("_", ""))
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {text!r}") from None


def cmd_sieve(args: argparse.Namespace, config: EngineConfig) -> int:
    """List or count the primes up to MAX."""
    from primekit.core.sieve import atkin, eratosthenes, prime_sieve, segmented

    if args.method == "atkin":
        primes = atkin(args.max)
    elif args.method == "segmented":
        primes = segmented(args.max, config)
    elif args.method == "eratosthenes":
        primes = eratosthenes(args.max)
    else:
        primes = prime_sieve(args.max, config)

    if args.count:
        print(len(primes))
    else:
        print(" ".join(str(p) for p in primes.tolist()))
    return 0


def cmd_is_prime(args: argparse.Namespace, config: EngineConfig) -> int:
    """Test each value for primality."""
    from primekit.core.sieve import is_prime

    for n in args.values:
        verdict = "prime" if is_prime(n, config) else "not prime"
        print(f"{n}: {verdict}")
    return 0


def cmd_next_prime(args: argparse.Namespace, config: EngineConfig) -> int:
    """Print the smallest prime greater than N."""
    from primekit.core.sieve import next_prime

    print(next_prime(args.n, config))
    return 0


def cmd_nth_prime(args: argparse.Namespace, config: EngineConfig) -> int:
    """Print the Nth prime (0-indexed)."""
    from primekit.core.sieve import nth_prime

    print(nth_prime(args.n, config))
    return 0


def cmd_factor(args: argparse.Namespace, config: EngineConfig) -> int:
    """Print the prime factorization of each value."""
    from primekit.core.sieve import factorize, prime_sieve
    from primekit.factorization.pollard import quick_factorize_with_small_primes

    small_primes = None
    for n in args.values:
        if args.trial:
            factors = factorize(n, config)
        else:
            if small_primes is None:
                small_primes = prime_sieve(config.small_factor_ceiling, config).tolist()
            factors = quick_factorize_with_small_primes(n, small_primes, config)
        print(f"{n}: {' '.join(str(f) for f in factors)}".rstrip())
    return 0


def cmd_count(args: argparse.Namespace, config: EngineConfig) -> int:
    """Print pi(x) for each value."""
    from primekit.counting.pi import prime_count_batch

    for x, count in zip(args.values, prime_count_batch(args.values, config)):
        print(f"pi({x}) = {count}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="primekit",
        description="Prime generation, primality testing, factorization and prime counting",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--log-file", type=Path, default=None, help="Append debug log to this file")
    parser.add_argument("--config", type=Path, default=None, help="Engine configuration JSON file")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    sieve_parser = subparsers.add_parser("sieve", help="List primes up to MAX")
    sieve_parser.add_argument("max", type=_integer, help="Upper bound (inclusive)")
    sieve_parser.add_argument("--method", choices=["auto", "atkin", "segmented", "eratosthenes"],
                              default="auto", help="Sieve to use")
    sieve_parser.add_argument("--count", action="store_true", help="Only print how many primes were found")

    isp_parser = subparsers.add_parser("is-prime", help="Test values for primality")
    isp_parser.add_argument("values", type=_integer, nargs="+", help="Values to test")

    next_parser = subparsers.add_parser("next-prime", help="Smallest prime greater than N")
    next_parser.add_argument("n", type=_integer, help="Starting value")

    nth_parser = subparsers.add_parser("nth-prime", help="Nth prime, counting from 0")
    nth_parser.add_argument("n", type=_integer, help="Index of the prime")

    factor_parser = subparsers.add_parser("factor", help="Prime factorization")
    factor_parser.add_argument("values", type=_integer, nargs="+", help="Values to factor")
    factor_parser.add_argument("--trial", action="store_true",
                               help="Use plain trial division instead of Pollard-Brent rho")

    count_parser = subparsers.add_parser("count", help="Prime-counting function pi(x)")
    count_parser.add_argument("values", type=_integer, nargs="+", help="Upper bounds")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    setup_logger(logging.DEBUG if args.verbose else logging.WARNING, args.log_file)

    commands = {
        "sieve": cmd_sieve,
        "is-prime": cmd_is_prime,
        "next-prime": cmd_next_prime,
        "nth-prime": cmd_nth_prime,
        "factor": cmd_factor,
        "count": cmd_count,
    }

    try:
        config = get_config(EngineConfig.load(args.config) if args.config else None)
        return commands[args.command](args, config)
    except PrimeKitError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
