#!/usr/bin/env python3
"""
Tests for Pollard's rho (Brent variant).
"""
import pytest

from ppfactor.models.factors import OperationStatistics, PrimeFactor
from ppfactor.services.factorization import merge_prime_factors
from ppfactor.services.pollard_rho import RhoState, pollard_rho
from ppfactor.utils.integers import BigInt, UInt64
from ppfactor.utils.number_utils import prime_power_product


def merged_pairs(outcome):
    return [(int(f.prime), f.multiplicity) for f in merge_prime_factors(outcome.factors)]


@pytest.mark.parametrize("kind", [int, UInt64, BigInt])
def test_known_vector(kind, rng):
    """25852 = 2^2 23 281"""
    outcome = pollard_rho(kind(25852), rng=rng)
    assert outcome.state == RhoState.PRIME
    assert outcome.succeeded
    assert outcome.remainder == 1
    assert merged_pairs(outcome) == [(2, 2), (23, 1), (281, 1)]


def test_sentinel_unit_factor_is_seeded(rng):
    outcome = pollard_rho(25852, rng=rng)
    assert outcome.factors[0] == PrimeFactor(1, 1)


def test_one_succeeds_with_only_the_sentinel(rng):
    outcome = pollard_rho(1, rng=rng)
    assert outcome.succeeded
    assert outcome.factors == [PrimeFactor(1, 1)]


def test_prime_input(rng):
    outcome = pollard_rho(104729, rng=rng)
    assert outcome.succeeded
    assert merged_pairs(outcome) == [(104729, 1)]


def test_failure_is_signalled_not_raised(monkeypatch, rng):
    """A gcd equal to the whole residual is a failure outcome, not an exception"""
    import ppfactor.services.pollard_rho as rho_module

    monkeypatch.setattr(rho_module, "gcd", lambda a, b: b)
    outcome = pollard_rho(25852, rng=rng)
    assert outcome.state == RhoState.FAILED
    assert not outcome.succeeded
    assert outcome.remainder == 25852
    assert outcome.factors == [PrimeFactor(1, 1)]


def test_failure_keeps_factors_found_so_far(monkeypatch, rng):
    import ppfactor.services.pollard_rho as rho_module

    # Treat every gcd after the first factor as composite
    calls = {"n": 0}
    real = rho_module.almost_surely_prime

    def flaky_prime(value, **kwargs):
        calls["n"] += 1
        if value == 2 and calls["n"] > 2:
            return False
        return real(value, **kwargs)

    monkeypatch.setattr(rho_module, "almost_surely_prime", flaky_prime)
    outcome = pollard_rho(25852, rng=rng)
    assert outcome.state == RhoState.FAILED
    assert PrimeFactor(2, 1) in outcome.factors
    assert outcome.remainder == 12926


def test_statistics_counted(rng):
    stats = OperationStatistics()
    pollard_rho(25852, rng=rng, stats=stats)
    assert stats.gcd_calls > 0
    assert stats.modular_squarings > 0
    assert stats.primality_tests > 0


@pytest.mark.parametrize("n,expected", [
    (9, [(3, 2)]),
    (2 ** 29 - 1, [(233, 1), (1103, 1), (2089, 1)]),
    (1000003 * 999983, [(999983, 1), (1000003, 1)]),
])
def test_factorizations_account_for_n(n, expected, rng):
    outcome = pollard_rho(BigInt(n), rng=rng)
    found = merge_prime_factors(outcome.factors)
    assert prime_power_product(found, BigInt(1)) * outcome.remainder == n
    if outcome.succeeded:
        assert merged_pairs(outcome) == expected
        assert outcome.remainder == 1
    else:
        # a failure may only leave a composite remainder behind
        assert outcome.remainder > 1


def test_small_prime_square_succeeds(rng):
    """x = 5, xp = 2 gives gcd(3, 9) = 3 on the first step"""
    outcome = pollard_rho(BigInt(9), rng=rng)
    assert outcome.succeeded
    assert merged_pairs(outcome) == [(3, 2)]
