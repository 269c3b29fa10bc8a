from .factors import (
    FactoringStrategy,
    FactorizationResult,
    OperationStatistics,
    PrimeFactor,
)

__all__ = [
    "FactoringStrategy",
    "FactorizationResult",
    "OperationStatistics",
    "PrimeFactor"
]
