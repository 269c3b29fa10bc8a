"""
Factorization orchestrator.

Picks an algorithm per FactoringStrategy and normalizes whatever it returns
into a FactorizationResult.

Costs, for N with largest prime divisor p_t and next largest p_{t-1}:
- factor table lookup: negligible
- Pollard rho: about sqrt(p_{t-1}) = O(N^(1/4)) operations
- trial division: max(p_{t-1}, sqrt(p_t)) = O(N^(1/2)) operations

AUTOMATIC tries them in that order. Trial division always succeeds, so the
only errors AUTOMATIC raises are table errors (missing or corrupt table) and
arithmetic domain errors from the integer type.
"""
import logging
import random
from dataclasses import replace
from typing import List, Optional

from ..models.factors import (
    FactoringStrategy,
    FactorizationResult,
    OperationStatistics,
    PrimeFactor,
)
from ..utils.errors import FactorArgumentError, FactorError
from ..utils.number_utils import prime_power_product
from .factor_table import FileSystemTableLocator, TableLocator, lookup_table
from .pollard_rho import DEFAULT_RHO_CONSTANT, pollard_rho
from .primality import NUM_PRIME_TEST_TRIALS
from .trial_division import trial_divide

logger = logging.getLogger(__name__)

ALTERNATE_RHO_CONSTANT = 5


def merge_prime_factors(factors: List[PrimeFactor]) -> List[PrimeFactor]:
    """
    Sort by prime, merge repeated primes and drop unit entries.

    Example:
        [5^1, 2^1, 1^1, 2^2, 3^3] -> [2^3, 3^3, 5^1]
    """
    merged: List[PrimeFactor] = []
    for factor in sorted(factors, key=lambda f: f.prime):
        if merged and merged[-1].prime == factor.prime:
            merged[-1] = PrimeFactor(factor.prime, merged[-1].multiplicity + factor.multiplicity)
        else:
            merged.append(factor)
    return [f for f in merged if not f.is_unit()]


class FactorizationService:
    """Factor integers with table lookup, Pollard rho and trial division."""

    def __init__(self, locator: Optional[TableLocator] = None,
                 rng: Optional[random.Random] = None,
                 primality_trials: int = NUM_PRIME_TEST_TRIALS,
                 rho_constant=DEFAULT_RHO_CONSTANT,
                 rho_alternate_constant=ALTERNATE_RHO_CONSTANT):
        self.locator = locator if locator is not None else FileSystemTableLocator(".")
        self.rng = rng
        self.primality_trials = primality_trials
        self.rho_constant = rho_constant
        self.rho_alternate_constant = rho_alternate_constant

    @classmethod
    def from_settings(cls, settings, rng: Optional[random.Random] = None) -> 'FactorizationService':
        """Build a service from Settings (see ppfactor.config)."""
        return cls(
            locator=FileSystemTableLocator(settings.factor_table_dir),
            rng=rng,
            primality_trials=settings.primality_trials,
            rho_constant=settings.rho_constant,
            rho_alternate_constant=settings.rho_alternate_constant,
        )

    # ==================== Single algorithms ====================

    def _table(self, n, p, exponent, stats) -> Optional[List[PrimeFactor]]:
        if p is None or exponent is None:
            return None
        factors = lookup_table(p, exponent, self.locator, kind=type(n),
                               rng=self.rng, trials=self.primality_trials, stats=stats)
        if factors is None:
            return None
        # compared as ints: p^exponent can exceed a fixed-width n
        if int(n) != int(p) ** exponent - 1:
            raise FactorArgumentError(f"{p}^{exponent} - 1 is not the number being factored, {n}")
        return factors

    def _rho(self, n, c, stats):
        return pollard_rho(n, c, rng=self.rng, trials=self.primality_trials, stats=stats)

    # ==================== Orchestration ====================

    def factorize(self, n, strategy: FactoringStrategy = FactoringStrategy.AUTOMATIC,
                  p: Optional[int] = None, exponent: Optional[int] = None) -> FactorizationResult:
        """
        Factor n into primes.

        Args:
            n: number to factor, n >= 1, any IntegerValue type
            strategy: algorithm selection; AUTOMATIC in production
            p, exponent: when n = p^exponent - 1, enables the table lookup

        Returns:
            FactorizationResult with primes ascending and merged

        Raises:
            FactorArgumentError: n is zero, or the table strategy lacks p/exponent
            MissingFactorTable, CorruptTableData: table problems, never caught here
            FactorError: the factors found do not multiply back to n
        """
        strategy = FactoringStrategy(strategy)
        if n == 0:
            raise FactorArgumentError("Cannot factor zero")

        kind = type(n)
        stats = OperationStatistics()
        factors: List[PrimeFactor] = []
        remainder = n
        used = strategy
        succeeded = True

        if strategy == FactoringStrategy.TRIAL_DIVISION:
            factors = trial_divide(n, stats)
            remainder = kind(1)

        elif strategy == FactoringStrategy.POLLARD_RHO:
            outcome = self._rho(n, self.rho_constant, stats)
            factors, remainder, succeeded = outcome.factors, outcome.remainder, outcome.succeeded
            if not succeeded:
                logger.info(f"Pollard rho failed on {n}; unfactored remainder {remainder}")

        elif strategy == FactoringStrategy.FACTOR_TABLE:
            if p is None or exponent is None:
                raise FactorArgumentError("Factor table strategy needs p and exponent")
            table_factors = self._table(n, p, exponent, stats)
            if table_factors is None:
                logger.info(f"Factor table has no entry for {p}^{exponent} - 1")
                succeeded = False
            else:
                factors, remainder = table_factors, kind(1)

        else:
            factors, remainder, used = self._automatic(n, p, exponent, stats)

        cleaned = merge_prime_factors(factors)
        if prime_power_product(cleaned, kind(1)) * remainder != n:
            raise FactorError(f"Factors of {n} do not multiply back to it: {[str(f) for f in cleaned]}")
        logger.info(f"Factored {n} with {used.value}: {len(cleaned)} distinct primes")
        return FactorizationResult(
            number=n,
            factors=tuple(cleaned),
            remainder=remainder,
            strategy=strategy,
            used_strategy=used,
            succeeded=succeeded,
            statistics=replace(stats),
        )

    def _automatic(self, n, p, exponent, stats):
        """Table, then rho, then rho with the alternate constant, then trial division."""
        kind = type(n)

        table_factors = self._table(n, p, exponent, stats)
        if table_factors is not None:
            logger.info(f"Factored {n} = {p}^{exponent} - 1 from the factor table")
            return table_factors, kind(1), FactoringStrategy.FACTOR_TABLE
        if p is not None and exponent is not None:
            logger.warning(f"Factor table lookup failed for {p}^{exponent} - 1; trying Pollard rho")

        # Factors found by a failed run are kept; later attempts work on the remainder.
        factors: List[PrimeFactor] = []
        remainder = n
        for c in (self.rho_constant, self.rho_alternate_constant):
            outcome = self._rho(remainder, c, stats)
            factors.extend(outcome.factors)
            remainder = outcome.remainder
            if outcome.succeeded:
                return factors, kind(1), FactoringStrategy.POLLARD_RHO
            logger.warning(f"Pollard rho with c = {c} failed; unfactored remainder {remainder}")

        logger.warning(f"Switching to trial division on {remainder}")
        factors.extend(trial_divide(remainder, stats))
        return factors, kind(1), FactoringStrategy.TRIAL_DIVISION


def factorize(n, strategy: FactoringStrategy = FactoringStrategy.AUTOMATIC,
              p: Optional[int] = None, exponent: Optional[int] = None,
              locator: Optional[TableLocator] = None,
              rng: Optional[random.Random] = None) -> FactorizationResult:
    """Factor n with a one-off FactorizationService."""
    service = FactorizationService(locator=locator, rng=rng)
    return service.factorize(n, strategy, p, exponent)
