#!/usr/bin/env python3
"""
Tests for trial division with the 2-3 wheel.
"""
import pytest

from ppfactor.models.factors import OperationStatistics, PrimeFactor
from ppfactor.services.trial_division import trial_divide
from ppfactor.utils.errors import FactorArgumentError
from ppfactor.utils.integers import BigInt, UInt64
from ppfactor.utils.number_utils import verify_complete_factorization


def as_pairs(factors):
    return [(int(f.prime), f.multiplicity) for f in factors]


@pytest.mark.parametrize("kind", [int, UInt64, BigInt])
def test_known_vector(kind):
    """337500 = 2^2 3^3 5^5"""
    factors = trial_divide(kind(337500))
    assert as_pairs(factors) == [(2, 2), (3, 3), (5, 5)]
    assert all(isinstance(f.prime, kind) for f in factors)


def test_one_has_empty_factorization():
    assert trial_divide(1) == []
    assert trial_divide(BigInt(1)) == []


@pytest.mark.parametrize("n,expected", [
    (2, [(2, 1)]),
    (3, [(3, 1)]),
    (13, [(13, 1)]),
    (156, [(2, 2), (3, 1), (13, 1)]),
    (49, [(7, 2)]),
    (35, [(5, 1), (7, 1)]),
    (104729, [(104729, 1)]),
    (2 ** 36 - 1, [(3, 3), (5, 1), (7, 1), (13, 1), (19, 1), (37, 1), (73, 1), (109, 1)]),
])
def test_factorizations(n, expected):
    assert as_pairs(trial_divide(n)) == expected


def test_products_match_for_small_numbers():
    for n in range(1, 3000):
        factors = trial_divide(n)
        assert verify_complete_factorization(n, factors), f"n = {n}"
        primes = [f.prime for f in factors]
        assert primes == sorted(set(primes)), f"n = {n}"


def test_statistics_counted():
    stats = OperationStatistics()
    trial_divide(337500, stats)
    # 2 + 3 divisions for 2s and 3s, then 5 successful divisions by 5
    assert stats.trial_divisions == 10


def test_zero_rejected():
    with pytest.raises(FactorArgumentError):
        trial_divide(0)


def test_repeated_divisor_increments_count():
    assert trial_divide(5 ** 4 * 7) == [PrimeFactor(5, 4), PrimeFactor(7, 1)]
