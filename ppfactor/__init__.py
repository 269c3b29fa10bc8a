"""
Prime factorization and primality testing for the primitive polynomial search.
"""
from .models import FactoringStrategy, FactorizationResult, OperationStatistics, PrimeFactor
from .services.factor_table import FileSystemTableLocator, InMemoryTableLocator, lookup_table
from .services.factorization import FactorizationService, factorize
from .services.pollard_rho import RhoOutcome, RhoState, pollard_rho
from .services.primality import Primality, almost_surely_prime, miller_rabin_test
from .services.trial_division import trial_divide
from .utils.errors import (
    ArithmeticDomainError,
    CorruptTableData,
    FactorArgumentError,
    FactorError,
    FactorIndexError,
    MissingFactorTable,
)
from .utils.integers import BigInt, IntegerValue, UInt64

__version__ = "1.0.0"

__all__ = [
    "ArithmeticDomainError",
    "BigInt",
    "CorruptTableData",
    "FactorArgumentError",
    "FactorError",
    "FactorIndexError",
    "FactoringStrategy",
    "FactorizationResult",
    "FactorizationService",
    "FileSystemTableLocator",
    "InMemoryTableLocator",
    "IntegerValue",
    "MissingFactorTable",
    "OperationStatistics",
    "Primality",
    "PrimeFactor",
    "RhoOutcome",
    "RhoState",
    "UInt64",
    "almost_surely_prime",
    "factorize",
    "lookup_table",
    "miller_rabin_test",
    "pollard_rho",
    "trial_divide",
]
