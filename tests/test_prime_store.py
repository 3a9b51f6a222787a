import pytest
from sympy import isprime

from prime_store import (
    MAX_BOUND,
    InvalidRangeError,
    OutOfRangeError,
    PrimeStore,
    sieve_of_eratosthenes,
)


def trial_division(x):
    if x < 2:
        return False
    d = 2
    while d * d <= x:
        if x % d == 0:
            return False
        d += 1
    return True


def read_lines(path):
    return path.read_text().splitlines()


@pytest.mark.parametrize("n", [0, 1, 2, 3, 10, 97, 100, 1000])
def test_sieve_matches_trial_division(n):
    sieve = sieve_of_eratosthenes(n)
    assert len(sieve) == n + 1
    assert [bool(b) for b in sieve] == [trial_division(x) for x in range(n + 1)]


def test_is_prime_matches_reference_after_growth():
    store = PrimeStore()
    store.ensure_primes_up_to(2000)
    for x in range(2001):
        assert store.is_prime(x) == isprime(x)


def test_primes_up_to_ten():
    store = PrimeStore()
    assert store.ensure_primes_up_to(10) == 4
    assert store.primes == [2, 3, 5, 7]
    assert store.known_bound == 10


def test_growth_appends_only_new_primes(tmp_path):
    path = tmp_path / "primes.txt"
    store = PrimeStore(str(path))
    store.ensure_primes_up_to(10)
    store.ensure_primes_up_to(30)
    assert store.primes == [2, 3, 5, 7, 11, 13, 17, 19, 23, 29]
    assert read_lines(path) == ["2", "3", "5", "7", "11", "13", "17", "19", "23", "29"]


def test_smaller_bound_does_not_shrink(tmp_path):
    path = tmp_path / "primes.txt"
    store = PrimeStore(str(path))
    store.ensure_primes_up_to(50)
    primes = list(store.primes)

    assert store.ensure_primes_up_to(20) == 0
    assert store.known_bound == 50
    assert store.primes == primes
    assert store.is_prime(47)


def test_repeated_bound_writes_no_duplicates(tmp_path):
    path = tmp_path / "primes.txt"
    store = PrimeStore(str(path))
    store.ensure_primes_up_to(100)
    store.ensure_primes_up_to(100)
    lines = read_lines(path)
    assert len(lines) == len(set(lines)) == 25


def test_reload_resumes_without_duplicates(tmp_path):
    path = tmp_path / "primes.txt"
    PrimeStore(str(path)).ensure_primes_up_to(10)

    store = PrimeStore(str(path))
    assert store.primes == [2, 3, 5, 7]
    assert store.known_bound == 7
    assert store.is_prime(7)
    assert not store.is_prime(6)

    store.ensure_primes_up_to(10)
    assert read_lines(path) == ["2", "3", "5", "7"]


def test_load_skips_malformed_lines(tmp_path):
    path = tmp_path / "primes.txt"
    path.write_text("2\n\n3\nfive\n 5 \n7\n")
    store = PrimeStore(str(path))
    assert store.primes == [2, 3, 5, 7]
    assert store.known_bound == 7
    assert [store.is_prime(x) for x in range(8)] == [False, False, True, True, False, True, False, True]


def test_empty_or_missing_file_starts_at_zero(tmp_path):
    store = PrimeStore(str(tmp_path / "missing.txt"))
    assert store.known_bound == 0
    assert store.primes == []
    assert not store.is_prime(0)


def test_is_prime_beyond_bound_raises():
    store = PrimeStore()
    store.ensure_primes_up_to(10)
    with pytest.raises(OutOfRangeError):
        store.is_prime(11)
    with pytest.raises(OutOfRangeError):
        store.is_prime(-1)


def test_bound_above_integer_width_raises():
    store = PrimeStore()
    with pytest.raises(InvalidRangeError):
        store.ensure_primes_up_to(MAX_BOUND + 1)
    assert store.known_bound == 0
