# goldbach_files.py
"""
Line-oriented storage for the prime list and the Goldbach pairs.

Two plain text files live in the data directory:

    primes.txt   one prime per line, ascending, append-only
    pairs.csv    one decomposition per line as even,prime_a,prime_b, append-only

Neither file is ever rewritten. Readers are lenient: blank or malformed lines
are skipped without complaint.
"""

import os

PRIMES_FILENAME = "primes.txt"
PAIRS_FILENAME = "pairs.csv"


def ensure_files(directory):
    """
    Create the data directory and both data files if they do not exist.

    Args:
        directory: Directory holding primes.txt and pairs.csv

    Returns:
        Tuple of (primes_path, pairs_path)
    """
    if not os.path.exists(directory):
        os.makedirs(directory)
        print(f"Created data directory: {directory}")

    primes_path = os.path.join(directory, PRIMES_FILENAME)
    pairs_path = os.path.join(directory, PAIRS_FILENAME)
    for path in (primes_path, pairs_path):
        if not os.path.exists(path):
            open(path, 'a', encoding='utf-8').close()
    return primes_path, pairs_path


def read_primes(path):
    """
    Generator that yields the integers stored one per line in path, in file order.
    A missing file yields nothing.
    """
    if not os.path.exists(path):
        return
    with open(path, 'r', encoding='utf-8') as f:
        for line in f:
            try:
                yield int(line.strip())
            except ValueError:
                continue


def read_completed_evens(path):
    """
    Collect the first comma-separated field of every line of the pairs file.

    Returns:
        Set of even numbers that already have at least one stored record
    """
    done = set()
    if not os.path.exists(path):
        return done
    with open(path, 'r', encoding='utf-8') as f:
        for line in f:
            try:
                done.add(int(line.split(',', 1)[0]))
            except ValueError:
                continue
    return done


def append_primes(path, primes):
    """Append primes to path, one per line. Returns the number of lines written."""
    if not primes:
        return 0
    with open(path, 'a', encoding='utf-8') as f:
        f.write("\n".join(map(str, primes)) + "\n")
        f.flush()
        os.fsync(f.fileno())
    return len(primes)


class RecordWriter:
    """
    Streaming appender for Goldbach records.

    Records are buffered and written in batches. Leaving the context, normally
    or through an exception, always flushes what has been buffered so far and
    closes the file, so everything handed to write() before a failure is kept.
    """

    def __init__(self, path, batch_size=1_000):
        self.path = path
        self.batch_size = batch_size
        self.file_handle = None
        self.write_buffer = []
        self.records_written = 0

    def __enter__(self):
        self.file_handle = open(self.path, 'a', encoding='utf-8')
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.file_handle:
            try:
                self._flush_write_buffer()
                self.file_handle.flush()
                os.fsync(self.file_handle.fileno())
            finally:
                self.file_handle.close()
                self.file_handle = None
        return False

    def write(self, even, prime_a, prime_b):
        """Queue one record; the buffer goes to disk every batch_size records."""
        self.write_buffer.append(f"{even},{prime_a},{prime_b}\n")
        self.records_written += 1
        if len(self.write_buffer) >= self.batch_size:
            self._flush_write_buffer()

    def _flush_write_buffer(self):
        if self.write_buffer and self.file_handle:
            self.file_handle.write("".join(self.write_buffer))
            self.file_handle.flush()
            self.write_buffer = []
