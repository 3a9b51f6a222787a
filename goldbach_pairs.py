# goldbach_pairs.py
"""
Enumerates every Goldbach decomposition of each even number up to a bound and
streams them to the pairs file.

For an even number e, the pairs (p, q) with p + q = e, p <= q and both prime
are found by walking the known primes p <= e/2 and testing q = e - p in the
prime store's table. The index of the first prime above e/2 only moves forward
as e grows, so one cursor is kept for the whole run instead of searching for it
on every even number.

Runs are incremental in a coarse way: an even number that already has any
record in the pairs file is skipped entirely, without checking whether all of
its pairs were written. A run interrupted halfway through the pairs of one even
number therefore leaves that number under-reported on later runs.
"""

from dataclasses import dataclass

import goldbach_files
from prime_store import InvalidRangeError

PROGRESS_EVERY = 1_000_000  # report progress after this many even numbers


@dataclass
class EnumerationResult:
    up_to: int
    evens_processed: int = 0
    evens_skipped: int = 0
    records_written: int = 0


class GoldbachEnumerator:
    """
    Finds prime pairs for the even numbers in [4, up_to] using a PrimeStore.

    The enumerator reads the store's primes and table but only grows the store
    through ensure_primes_up_to().
    """

    def __init__(self, store, pairs_path, verbose=False):
        self.store = store
        self.pairs_path = pairs_path
        self.verbose = verbose

    def decompositions(self, even):
        """Return all (p, q) with p + q == even, p <= q, both prime. Nothing is persisted."""
        if even < 4 or even % 2:
            raise InvalidRangeError(f"{even:,} is not an even number >= 4")
        self.store.ensure_primes_up_to(even)
        half = even // 2
        pairs = []
        for p in self.store.primes:
            if p > half:
                break
            q = even - p
            if self.store.is_prime(q):
                pairs.append((p, q))
        return pairs

    def enumerate_up_to(self, up_to):
        """
        Append the decompositions of every not yet recorded even number in
        [4, up_to] to the pairs file.

        Returns:
            EnumerationResult with the counts for this call
        """
        if up_to < 4:
            raise InvalidRangeError(f"Goldbach pairs need a bound of at least 4, got {up_to:,}")

        store = self.store
        store.ensure_primes_up_to(up_to)

        done = goldbach_files.read_completed_evens(self.pairs_path)
        if self.verbose:
            print(f"Enumerating Goldbach pairs up to {up_to:,} "
                  f"({len(done):,} even numbers already recorded)")

        result = EnumerationResult(up_to)
        primes = store.primes
        table = store.primality_table
        idx_cut = 0  # first index in primes whose value exceeds half

        with goldbach_files.RecordWriter(self.pairs_path) as out:
            for even in range(4, up_to + 1, 2):
                if even in done:
                    result.evens_skipped += 1
                    continue

                half = even // 2
                while idx_cut < len(primes) and primes[idx_cut] <= half:
                    idx_cut += 1

                for i in range(idx_cut):
                    p = primes[i]
                    q = even - p
                    if table[q]:
                        out.write(even, p, q)

                result.evens_processed += 1
                if self.verbose and result.evens_processed % PROGRESS_EVERY == 0:
                    print(f"    Processed {result.evens_processed:,} even numbers, current: {even:,}")

        result.records_written = out.records_written
        if self.verbose:
            print(f"  Wrote {result.records_written:,} pairs for {result.evens_processed:,} "
                  f"even numbers, skipped {result.evens_skipped:,}")
        return result
