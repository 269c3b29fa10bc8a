"""
Dependency injection for FastAPI routes.

Provides reusable dependencies for:
- Configuration access
- Factorization service injection
"""

from fastapi import Depends
from .config import Settings, get_settings


def get_factorization_service(settings_dep: Settings = Depends(get_settings)):
    """
    Dependency for factorization service injection.

    Args:
        settings_dep: Settings dependency (automatically injected)

    Returns:
        FactorizationService configured with the table directory and
        algorithm constants from settings

    Example:
        @router.get("/factor/{number}")
        async def factor(
            number: str,
            service: FactorizationService = Depends(get_factorization_service)
        ):
            return service.factorize(BigInt(number))
    """
    from .services.factorization import FactorizationService
    return FactorizationService.from_settings(settings_dep)
