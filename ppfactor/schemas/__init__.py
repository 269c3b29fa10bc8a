from .factors import FactorizationResponse, FactorTableResponse, PrimeFactorResponse
from .primality import PrimalityResponse

__all__ = [
    "FactorizationResponse",
    "FactorTableResponse",
    "PrimeFactorResponse",
    "PrimalityResponse"
]
