# Goldbach_Sieve.py

"""
This program sieves the primes up to a goal and writes every Goldbach
decomposition (every pair of primes p <= q with p + q = n) of each even n from
4 up to the goal.

Both results are kept in plain text files in the data directory:

    primes.txt   the primes found so far, one per line
    pairs.csv    n,p,q for every decomposition found so far

The program can be stopped and rerun at any time. On start it reloads
primes.txt and only sieves again if the goal is above the largest stored
prime, and it skips every even number that already has a line in pairs.csv.
Run twice with the same goal, the second run finds nothing left to do.

Each phase (loading the stored primes, sieving, enumerating the pairs) is
timed. With --verify N the results up to N are checked against SYMPY.

Run as: python Goldbach_Sieve.py [goal] [data_directory] [--verify N] [--quiet]
or omit the parameters to take the defaults.
"""

import argparse
import sys
import time

from sympy import isprime, primerange

import goldbach_files
from goldbach_pairs import GoldbachEnumerator
from prime_store import InvalidRangeError, PrimeStore

# Default parameters:
DEFAULT_GOAL = 1_000_000
DEFAULT_DATA_DIRECTORY = "goldbach_data"
VERIFY_SAMPLE_EVENS = 200  # number of even numbers re-derived by SYMPY in --verify


def timed(label, func, *args):
    """Run func(*args), print how long it took, and return its result."""
    start = time.perf_counter()
    result = func(*args)
    print(f"{label}: {time.perf_counter() - start:.3f} s")
    return result


def verify_with_sympy(store, enumerator, limit):
    """
    Cross-check the store and the pair enumeration against SYMPY up to limit.

    Returns a list of error messages, empty when everything agrees.
    """
    errors = []
    for x in range(limit + 1):
        if store.is_prime(x) != isprime(x):
            errors.append(f"primality of {x:,} disagrees with SYMPY")

    if limit >= 4:
        evens = range(4, limit + 1, 2)
        step = max(1, len(evens) // VERIFY_SAMPLE_EVENS)
        for even in evens[::step]:
            expected = [(p, even - p) for p in primerange(2, even // 2 + 1) if isprime(even - p)]
            if enumerator.decompositions(even) != expected:
                errors.append(f"decompositions of {even:,} disagree with SYMPY")
    return errors


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='Sieve primes and enumerate Goldbach decompositions up to a goal, resuming from stored results'
    )
    parser.add_argument('goal', nargs='?', type=int, default=DEFAULT_GOAL,
                        help=f'Upper bound for primes and even numbers (default: {DEFAULT_GOAL:,})')
    parser.add_argument('data_directory', nargs='?', default=DEFAULT_DATA_DIRECTORY,
                        help=f'Directory for primes.txt and pairs.csv (default: {DEFAULT_DATA_DIRECTORY})')
    parser.add_argument('--verify', type=int, default=0, metavar='N',
                        help='Check results up to N against SYMPY (default: off)')
    parser.add_argument('--quiet', action='store_true', help='Suppress progress output')
    args = parser.parse_args(argv)
    verbose = not args.quiet

    print("=" * 70)
    print("Goldbach Decompositions with Stored Primes")
    print("=" * 70)
    print(f"Goal: {args.goal:,}")
    print(f"Data directory: {args.data_directory}")
    print()

    primes_path, pairs_path = goldbach_files.ensure_files(args.data_directory)

    store = timed("Load stored primes", PrimeStore, primes_path, verbose)
    enumerator = GoldbachEnumerator(store, pairs_path, verbose=verbose)

    try:
        new_primes = timed("Sieve primes", store.ensure_primes_up_to, args.goal)
        result = timed("Goldbach pairs", enumerator.enumerate_up_to, args.goal)
    except InvalidRangeError as e:
        sys.exit(f"ERROR -- {e}")

    if args.verify:
        limit = min(args.verify, args.goal)
        print(f"\nVerifying up to {limit:,} with SYMPY...")
        errors = verify_with_sympy(store, enumerator, limit)
        if errors:
            for message in errors[:20]:
                print(f"  {message}")
            sys.exit(f"ERROR -- {len(errors):,} verification failure(s)")
        print("  All results agree with SYMPY.")

    print("\n" + "=" * 70)
    print("RUN COMPLETE")
    print("=" * 70)
    print(f"New primes found: {new_primes:,}")
    print(f"Total primes stored: {len(store.primes):,}, known bound: {store.known_bound:,}")
    print(f"Even numbers processed: {result.evens_processed:,}, skipped: {result.evens_skipped:,}")
    print(f"Pairs written: {result.records_written:,}")


if __name__ == "__main__":
    main()
    print("\nEnd of Program")
