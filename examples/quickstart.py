"""Quick start example for primekit.

Run this script to exercise each part of the library and check the installation.
"""

import time


def main():
    print("primekit - Quick Start Demo")
    print("=" * 50)

    print("\n1. Sieving primes up to 10M...")
    from primekit import atkin, prime_sieve, segmented

    start = time.perf_counter()
    primes = prime_sieve(10_000_000)
    elapsed = time.perf_counter() - start

    print(f"   Generated {len(primes):,} primes up to 10M in {elapsed:.3f}s")
    print(f"   First 10: {primes[:10].tolist()}")
    print(f"   Last 10: {primes[-10:].tolist()}")

    print("\n2. Cross-checking Atkin against the segmented sieve...")
    same = atkin(100_000).tolist() == segmented(100_000).tolist()
    print(f"   atkin(100000) == segmented(100000): {same}")

    print("\n3. Primality and prime navigation...")
    from primekit import is_prime, next_prime, nth_prime

    for n in (97, 128, 2 ** 61 - 1, 2 ** 64 - 59):
        print(f"   is_prime({n}) = {is_prime(n)}")
    print(f"   next_prime(95) = {next_prime(95)}")
    print(f"   nth_prime(10000) = {nth_prime(10_000)}")

    print("\n4. Factoring with Pollard-Brent rho...")
    from primekit import quick_factorize

    for n in (200, 65_536, 2 ** 63 - 1, 600_851_475_143):
        start = time.perf_counter()
        factors = quick_factorize(n)
        elapsed = time.perf_counter() - start
        print(f"   {n:>22,} = {' x '.join(map(str, factors))}  ({elapsed * 1000:.1f} ms)")

    print("\n5. Counting primes with Lehmer's formula...")
    from primekit import prime_count_batch

    xs = [10 ** k for k in range(1, 10)]
    start = time.perf_counter()
    counts = prime_count_batch(xs)
    elapsed = time.perf_counter() - start
    print("   x             | pi(x)")
    print("   " + "-" * 30)
    for x, count in zip(xs, counts):
        print(f"   {x:>13,} | {count:,}")
    print(f"   ({elapsed:.3f}s total)")

    print("\n" + "=" * 50)
    print("Quick start complete!")


if __name__ == "__main__":
    main()
