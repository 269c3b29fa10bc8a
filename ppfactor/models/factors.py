"""
Value objects produced by the factoring engine.
"""

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Iterator, List, Optional, Tuple

from ..utils.errors import FactorIndexError
from ..utils.number_utils import prime_power_product


class FactoringStrategy(str, Enum):
    """Which algorithm the orchestrator runs."""
    AUTOMATIC = "automatic"
    FACTOR_TABLE = "factor_table"
    POLLARD_RHO = "pollard_rho"
    TRIAL_DIVISION = "trial_division"


@dataclass(frozen=True)
class PrimeFactor:
    """One distinct prime raised to a power."""
    prime: Any
    multiplicity: int = 1

    def __post_init__(self):
        if self.multiplicity < 0:
            raise ValueError(f"Negative multiplicity {self.multiplicity} for prime {self.prime}")

    def is_unit(self) -> bool:
        """Entries with prime 1 or multiplicity 0 carry no information."""
        return self.prime == 1 or self.multiplicity == 0

    def __str__(self):
        if self.multiplicity == 1:
            return str(self.prime)
        return f"{self.prime}^{self.multiplicity}"


@dataclass
class OperationStatistics:
    """Operation counters for performance introspection."""
    trial_divisions: int = 0
    gcd_calls: int = 0
    modular_squarings: int = 0
    primality_tests: int = 0

    def __add__(self, other: 'OperationStatistics') -> 'OperationStatistics':
        return OperationStatistics(**{
            f.name: getattr(self, f.name) + getattr(other, f.name) for f in fields(self)
        })

    def to_dict(self):
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class FactorizationResult:
    """
    Sorted, merged factorization of a number.

    Primes are strictly ascending, each appears once and every multiplicity is
    at least 1. On success the prime powers multiply back to `number` and the
    unfactored `remainder` is 1.
    """
    number: Any
    factors: Tuple[PrimeFactor, ...] = ()
    remainder: Any = 1
    strategy: FactoringStrategy = FactoringStrategy.AUTOMATIC
    used_strategy: Optional[FactoringStrategy] = None
    succeeded: bool = True
    statistics: OperationStatistics = field(default_factory=OperationStatistics)

    # ==================== Accessors ====================

    def number_of_distinct_factors(self) -> int:
        return len(self.factors)

    def _check_index(self, i: int, what: str) -> None:
        if i < 0 or i >= len(self.factors):
            raise FactorIndexError(f"Error accessing {what} at index i = {i}")

    def prime_at(self, i: int):
        self._check_index(i, "distinct prime factor")
        return self.factors[i].prime

    def multiplicity_at(self, i: int) -> int:
        self._check_index(i, "multiplicity")
        return self.factors[i].multiplicity

    def distinct_primes(self) -> List[Any]:
        return [f.prime for f in self.factors]

    def __getitem__(self, i: int) -> PrimeFactor:
        self._check_index(i, "Factor")
        return self.factors[i]

    def __len__(self) -> int:
        return len(self.factors)

    def __iter__(self) -> Iterator[PrimeFactor]:
        return iter(self.factors)

    def product(self):
        return prime_power_product(self.factors, type(self.number)(1))

    def skip_test(self, p: int, i: int) -> bool:
        """
        True when the i-th distinct prime divides p - 1.

        Example:
            For primes [2, 3, 13] and p = 5, skip_test(5, 0) is True since 2 | 4.
        """
        prime = self.prime_at(i)
        if p - 1 < prime:
            return False
        return (p - 1) % prime == 0

    def __str__(self):
        if not self.factors:
            return f"{self.number} = 1"
        return f"{self.number} = " + " * ".join(str(f) for f in self.factors)
