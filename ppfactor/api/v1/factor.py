import logging
from typing import Optional

from fastapi import APIRouter, Depends, Path, Query

from ...config import Settings, get_settings
from ...dependencies import get_factorization_service
from ...models.factors import FactoringStrategy
from ...schemas.factors import FactorizationResponse, FactorTableResponse, PrimeFactorResponse
from ...schemas.primality import PrimalityResponse
from ...services.factor_table import lookup_table
from ...services.factorization import FactorizationService
from ...services.primality import almost_surely_prime, miller_rabin_test
from ...utils.errors import (
    ArithmeticDomainError,
    FactorError,
    bad_request_error,
    factor_error_to_http,
    not_found_error,
)
from ...utils.integers import BigInt
from ...utils.number_utils import validate_integer

logger = logging.getLogger(__name__)

router = APIRouter()


def _parse_number(number: str) -> BigInt:
    if not validate_integer(number) or number == "0":
        raise bad_request_error(f"Invalid number format: {number}")
    return BigInt(number)


@router.get("/factor/{number}", response_model=FactorizationResponse)
async def factor_number(
    number: str = Path(..., description="Positive decimal integer to factor"),
    strategy: FactoringStrategy = Query(FactoringStrategy.AUTOMATIC, description="Factoring algorithm"),
    p: Optional[int] = Query(None, ge=2, description="Base p when number = p^exponent - 1"),
    exponent: Optional[int] = Query(None, ge=1, description="Exponent when number = p^exponent - 1"),
    service: FactorizationService = Depends(get_factorization_service)
):
    """
    Factor a number into primes.

    AUTOMATIC consults the factor tables (when p and exponent are given), then
    Pollard rho, then trial division. The other strategies run one algorithm
    alone and may report an incomplete factorization.
    """
    n = _parse_number(number)
    try:
        result = service.factorize(n, strategy, p, exponent)
    except (FactorError, ArithmeticDomainError) as e:
        logger.error(f"Factoring {number} with {strategy.value} failed: {e}")
        raise factor_error_to_http(e)

    return FactorizationResponse.from_result(result)


@router.get("/primality/{number}", response_model=PrimalityResponse)
async def check_primality(
    number: str = Path(..., description="Decimal integer to test"),
    witness: Optional[str] = Query(None, description="Witness for a single Miller-Rabin trial"),
    settings: Settings = Depends(get_settings)
):
    """Run the almost-surely-prime test and optionally one Miller-Rabin trial."""
    if not validate_integer(number):
        raise bad_request_error(f"Invalid number format: {number}")
    n = BigInt(number)

    verdict = None
    if witness is not None:
        if not validate_integer(witness):
            raise bad_request_error(f"Invalid witness format: {witness}")
        verdict = miller_rabin_test(n, BigInt(witness))

    return PrimalityResponse(
        number=number,
        almost_surely_prime=almost_surely_prime(n, trials=settings.primality_trials),
        trials=settings.primality_trials,
        witness=witness,
        verdict=verdict,
    )


@router.get("/factor-table/{p}/{exponent}", response_model=FactorTableResponse)
async def get_factor_table_entry(
    p: int = Path(..., ge=2, description="Table base"),
    exponent: int = Path(..., ge=1, description="Exponent n in p^n - 1"),
    service: FactorizationService = Depends(get_factorization_service)
):
    """Look up the validated table factorization of p^exponent - 1."""
    try:
        factors = lookup_table(p, exponent, service.locator, kind=BigInt,
                               trials=service.primality_trials)
    except FactorError as e:
        logger.error(f"Factor table lookup for {p}^{exponent} - 1 failed: {e}")
        raise factor_error_to_http(e)

    if factors is None:
        raise not_found_error("Factor table entry", f"{p}^{exponent} - 1")

    return FactorTableResponse(
        p=p,
        exponent=exponent,
        number=str(BigInt(p) ** exponent - 1),
        factors=[
            PrimeFactorResponse(prime=str(f.prime), multiplicity=f.multiplicity)
            for f in factors
        ],
    )
