"""
Error types for the factoring engine and helpers for consistent HTTP exceptions.

Engine errors:
- FactorError and its subclasses for table, index and argument problems
- ArithmeticDomainError and its subclasses for the unsigned integer types

The HTTP helpers translate engine errors into FastAPI HTTPExceptions so every
route reports them the same way.
"""

from fastapi import HTTPException, status


# ==================== Integer arithmetic ====================

class ArithmeticDomainError(ArithmeticError):
    """An unsigned integer operation left the type's domain."""


class IntegerUnderflow(ArithmeticDomainError):
    """Result would be below zero."""


class IntegerOverflow(ArithmeticDomainError, OverflowError):
    """Result does not fit the fixed-width type."""


class IntegerZeroDivide(ArithmeticDomainError, ZeroDivisionError):
    pass


class IntegerFormatError(ArithmeticDomainError, ValueError):
    """String is not a decimal unsigned integer."""


# ==================== Factoring ====================

class FactorError(Exception):
    """Base class for factoring errors that must reach the caller."""


class MissingFactorTable(FactorError, FileNotFoundError):
    """A factor table that the table set covers cannot be located."""

    def __init__(self, p: int, file_name: str, root: str = None):
        self.p = p
        self.file_name = file_name
        self.root = root
        msg = f"Missing the factor table for p = {p} named {file_name}"
        if root:
            msg += f" under {root}"
        super().__init__(msg)


class CorruptTableData(FactorError, ValueError):
    """A recorded factorization fails primality or product validation."""


class FactorIndexError(FactorError, IndexError):
    """Accessor called with an index outside the list of distinct primes."""


class FactorArgumentError(FactorError, ValueError):
    """The caller asked for something the engine cannot answer."""


# ==================== HTTP helpers ====================

def not_found_error(resource_type: str, identifier: str = None) -> HTTPException:
    """
    Create a consistent 404 Not Found error.

    Example:
        raise not_found_error("Factor table entry", "3^400 - 1")
        # HTTPException(status_code=404, detail="Factor table entry not found: 3^400 - 1")
    """
    msg = f"{resource_type} not found"
    if identifier:
        msg += f": {identifier}"
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=msg
    )


def bad_request_error(detail: str) -> HTTPException:
    """Create a consistent 400 Bad Request error."""
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=detail
    )


def factor_error_to_http(error: Exception) -> HTTPException:
    """
    Map an engine error onto the HTTP status a client should see.

    Args:
        error: FactorError or ArithmeticDomainError raised by the engine

    Returns:
        HTTPException with 503 for a missing table, 500 for corrupt table data
        and 400 for caller mistakes
    """
    if isinstance(error, MissingFactorTable):
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=str(error)
        )
    if isinstance(error, CorruptTableData):
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Corrupt factor table: {error}"
        )
    return bad_request_error(str(error))
