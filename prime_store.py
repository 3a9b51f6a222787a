# prime_store.py
"""
The prime store: every prime up to a known bound, plus a byte-per-number
primality table for constant time lookups.

The store only ever grows. When a larger bound is requested, a complete Sieve
of Eratosthenes is run again over [0, n] rather than sieving just the new
range, so the table is always exactly one sieve result.

Primes discovered by a growth step (and only those) are appended to the prime
file, so the file always holds the ascending list of primes found so far, and
a later run starts from it by calling load().

Bounds are limited to MAX_BOUND, the largest signed 32 bit value, which keeps
the table and the stored values within a fixed integer width.
"""

from itertools import compress
from math import isqrt

import goldbach_files

MAX_BOUND = 2**31 - 1


class InvalidRangeError(ValueError):
    """A requested bound is outside the range the engine can handle."""


class OutOfRangeError(IndexError):
    """Primality was asked for a value the store has not sieved yet."""


def sieve_of_eratosthenes(n):
    """
    Return a bytearray of length n+1 where entry i is 1 if i is prime, else 0.
    """
    sieve = bytearray(b"\x01") * (n + 1)
    sieve[0:2] = b"\x00\x00"[:n + 1]
    root = isqrt(n)
    for p in range(2, root + 1):
        if sieve[p]:
            start = p * p
            sieve[start:n + 1:p] = bytes(((n - start) // p) + 1)
    return sieve


class PrimeStore:
    """
    Ordered, append-only list of primes with a primality table valid up to known_bound.

    If primes_path is given, the store is initialized from that file and newly
    found primes are appended to it. Without a path the store lives in memory only.
    """

    def __init__(self, primes_path=None, verbose=False):
        self.primes_path = primes_path
        self.verbose = verbose
        self.known_bound = 0
        self.primes = []
        self.primality_table = bytearray(1)
        if primes_path is not None:
            self.load()

    def load(self):
        """
        Read the persisted primes in file order and rebuild the lookup table.

        The file is trusted to be ascending. known_bound becomes the last value
        read (0 for an empty or missing file).
        """
        self.primes = list(goldbach_files.read_primes(self.primes_path))
        self.known_bound = self.primes[-1] if self.primes else 0
        self.primality_table = bytearray(self.known_bound + 1)
        for p in self.primes:
            self.primality_table[p] = 1
        if self.verbose:
            print(f"Loaded {len(self.primes):,} primes from {self.primes_path}, "
                  f"known bound {self.known_bound:,}")
        return len(self.primes)

    def ensure_primes_up_to(self, n):
        """
        Make sure primality is known for every integer in [0, n].

        Returns the number of primes newly found (0 when n is already covered).
        """
        if n <= self.known_bound:
            return 0
        if n > MAX_BOUND:
            raise InvalidRangeError(f"Bound {n:,} exceeds the maximum of {MAX_BOUND:,}")

        if self.verbose:
            print(f"Sieving [0, {n:,}] (previous bound {self.known_bound:,})")

        sieve = sieve_of_eratosthenes(n)

        first_new = self.known_bound + 1
        new_primes = list(compress(range(first_new, n + 1), sieve[first_new:]))
        self.primes.extend(new_primes)

        self.primality_table = sieve
        self.known_bound = n

        if self.primes_path is not None:
            goldbach_files.append_primes(self.primes_path, new_primes)

        if self.verbose:
            print(f"  Found {len(new_primes):,} new primes, {len(self.primes):,} in total")
        return len(new_primes)

    def is_prime(self, x):
        """Constant time primality test for 0 <= x <= known_bound."""
        if x < 0 or x > self.known_bound:
            raise OutOfRangeError(
                f"{x:,} is outside the sieved range [0, {self.known_bound:,}]; "
                f"call ensure_primes_up_to() first")
        return self.primality_table[x] == 1
