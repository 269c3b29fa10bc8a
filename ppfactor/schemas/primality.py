from pydantic import BaseModel, Field
from typing import Optional

from ..services.primality import Primality


class PrimalityResponse(BaseModel):
    """Schema for primality test results"""
    number: str = Field(..., description="The number that was tested")
    almost_surely_prime: bool = Field(..., description="Verdict after repeated Miller-Rabin trials")
    trials: int = Field(..., description="Miller-Rabin trial budget")
    witness: Optional[str] = Field(None, description="Witness for the single-trial test, if given")
    verdict: Optional[Primality] = Field(None, description="Single-trial Miller-Rabin verdict, if a witness was given")
