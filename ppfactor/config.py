import logging
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="PPFACTOR_",
        env_file=".env",
        validate_assignment=True,
    )

    # Factor tables
    factor_table_dir: Path = Field(
        default=Path("."),
        description="Root directory searched recursively for c{pp}minus.txt factor tables"
    )

    # Algorithms
    primality_trials: int = Field(default=14, ge=1, le=64, description="Miller-Rabin trials per primality check")
    rho_constant: int = Field(default=2, ge=0, description="Constant c in x -> x^2 + c for the first Pollard rho run")
    rho_alternate_constant: int = Field(default=5, ge=0, description="Constant c for the Pollard rho retry")

    # Logging
    log_level: str = Field(default="INFO", description="Logging level for the CLI and server")

    # API
    api_title: str = "Primitive Polynomial Factoring API"
    api_version: str = "1.0.0"
    api_description: str = "Prime factorization and primality testing for p^n - 1"

    @field_validator("rho_constant", "rho_alternate_constant")
    @classmethod
    def validate_rho_constant(cls, v):
        # x -> x^2 and x -> x^2 + 1 degenerate the rho sequence
        if v in (0, 1):
            raise ValueError("Pollard rho constant must not be 0 or 1")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level


@lru_cache()
def get_settings():
    return Settings()
