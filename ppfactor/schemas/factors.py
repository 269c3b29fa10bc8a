from pydantic import BaseModel, Field
from typing import List, Optional

from ..models.factors import FactoringStrategy, FactorizationResult


class PrimeFactorResponse(BaseModel):
    """Schema for one prime power"""
    prime: str = Field(..., description="Prime as a decimal string")
    multiplicity: int = Field(..., ge=1, description="Power of the prime")


class OperationStatisticsResponse(BaseModel):
    """Schema for algorithm operation counters"""
    trial_divisions: int = 0
    gcd_calls: int = 0
    modular_squarings: int = 0
    primality_tests: int = 0


class FactorizationResponse(BaseModel):
    """Schema for a factorization"""
    number: str = Field(..., description="The number that was factored")
    strategy: FactoringStrategy = Field(..., description="Requested strategy")
    used_strategy: Optional[FactoringStrategy] = Field(None, description="Algorithm that finished the job")
    succeeded: bool = Field(..., description="Whether the factorization is complete")
    remainder: str = Field(..., description="Unfactored part of the number, 1 on success")
    factors: List[PrimeFactorResponse]
    distinct_primes: List[str]
    statistics: OperationStatisticsResponse

    @classmethod
    def from_result(cls, result: FactorizationResult) -> 'FactorizationResponse':
        return cls(
            number=str(result.number),
            strategy=result.strategy,
            used_strategy=result.used_strategy,
            succeeded=result.succeeded,
            remainder=str(result.remainder),
            factors=[
                PrimeFactorResponse(prime=str(f.prime), multiplicity=f.multiplicity)
                for f in result.factors
            ],
            distinct_primes=[str(prime) for prime in result.distinct_primes()],
            statistics=OperationStatisticsResponse(**result.statistics.to_dict()),
        )


class FactorTableResponse(BaseModel):
    """Schema for a factor table entry"""
    p: int = Field(..., description="Table base")
    exponent: int = Field(..., description="Exponent n in p^n - 1")
    number: str = Field(..., description="p^n - 1")
    factors: List[PrimeFactorResponse]
