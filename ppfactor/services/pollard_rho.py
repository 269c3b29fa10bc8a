"""
Pollard's rho factoring with Brent's cycle detection.

Reference: D. E. Knuth, The Art of Computer Programming, vol. 2, 3rd ed.,
Algorithm B, pp. 385-386.

The iteration x -> (x^2 + c) mod n eventually cycles modulo every prime
divisor p of n. Brent's variant keeps a checkpoint xp and compares it against
x for a stretch of l steps, doubling l each time the stretch runs out, so a
cycle modulo p shows up as gcd(|x - xp|, n) > 1.

The search is a small state machine:

    REDUCING      n is composite; step the sequence until the gcd is nontrivial
    FACTOR_FOUND  the gcd is a prime; divide it out and test the cofactor
    PRIME         the remaining n is prime; record it and stop (success)
    FAILED        the gcd is n itself or composite; stop (caller retries)

Failure is an ordinary outcome, not an exception.
"""
import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional

from ..models.factors import OperationStatistics, PrimeFactor
from ..utils.number_utils import abs_difference, gcd, power_mod
from .primality import NUM_PRIME_TEST_TRIALS, almost_surely_prime

logger = logging.getLogger(__name__)

DEFAULT_RHO_CONSTANT = 2


class RhoState(str, Enum):
    REDUCING = "reducing"
    FACTOR_FOUND = "factor_found"
    PRIME = "prime"
    FAILED = "failed"


@dataclass
class RhoOutcome:
    """
    Result of one Pollard rho run.

    factors starts with the unit sentinel 1^1, removed later by the
    orchestrator's cleanup. remainder is the part of n still unfactored; it is
    1 after a successful run.
    """
    state: RhoState
    factors: List[PrimeFactor] = field(default_factory=list)
    remainder: Any = 1

    @property
    def succeeded(self) -> bool:
        return self.state == RhoState.PRIME


def pollard_rho(n, c=DEFAULT_RHO_CONSTANT,
                rng: Optional[random.Random] = None,
                trials: int = NUM_PRIME_TEST_TRIALS,
                stats: Optional[OperationStatistics] = None) -> RhoOutcome:
    """
    Try to factor n completely with x -> x^2 + c.

    Args:
        n: number to factor, n >= 1
        c: sequence constant; avoid 0, 1 and -2, which degenerate the sequence
        rng: random source for the primality checks
        trials: Miller-Rabin trials per primality check
        stats: counters to update

    Returns:
        RhoOutcome whose state is PRIME on success and FAILED otherwise. Factors
        found before a failure are kept in the outcome.
    """
    if stats is None:
        stats = OperationStatistics()

    kind = type(n)
    c = kind(c)
    x = kind(5)
    xp = kind(2)
    k = 1
    l = 1

    factors = [PrimeFactor(kind(1), 1)]
    if n == 1:
        return RhoOutcome(RhoState.PRIME, factors, n)

    def is_prime(value) -> bool:
        return almost_surely_prime(value, rng=rng, trials=trials, stats=stats)

    state = RhoState.PRIME if is_prime(n) else RhoState.REDUCING
    g = None
    while True:
        if state == RhoState.PRIME:
            factors.append(PrimeFactor(n, 1))
            logger.debug(f"Pollard rho (c = {c}) finished with prime cofactor {n}")
            return RhoOutcome(state, factors, kind(1))

        if state == RhoState.FAILED:
            logger.debug(f"Pollard rho (c = {c}) failed on n = {n}, gcd = {g}")
            return RhoOutcome(state, factors, n)

        if state == RhoState.FACTOR_FOUND:
            factors.append(PrimeFactor(g, 1))
            n //= g
            x %= n
            xp %= n
            logger.debug(f"Pollard rho found prime factor {g}, cofactor {n}")
            state = RhoState.PRIME if is_prime(n) else RhoState.REDUCING
            continue

        # REDUCING
        g = gcd(abs_difference(x, xp), n)
        stats.gcd_calls += 1

        if g == 1:
            k -= 1
            if k == 0:
                xp = x
                l *= 2
                k = l
            x = (power_mod(x, 2, n) + c) % n
            stats.modular_squarings += 1
        elif g == n:
            state = RhoState.FAILED
        elif is_prime(g):
            state = RhoState.FACTOR_FOUND
        else:
            # composite gcd; not factored recursively
            state = RhoState.FAILED
