"""
Unsigned integer types the factoring engine is generic over.

Two realizations of the same contract:
- UInt64: native fixed-width unsigned integer, range [0, 2**64 - 1]
- BigInt: arbitrary-precision unsigned integer backed by gmpy2.mpz

Both reject results below zero, division by zero and malformed digit strings
with an ArithmeticDomainError subclass. UInt64 additionally rejects results
above its range. Plain Python ints mix freely on either side of an operator
and the result keeps the wrapper type.
"""

import re
from typing import Protocol, Union, runtime_checkable

import gmpy2

from .errors import (
    IntegerFormatError,
    IntegerOverflow,
    IntegerUnderflow,
    IntegerZeroDivide,
)

_DIGITS = re.compile(r'^\s*\+?(\d+)\s*$')
_MPZ = type(gmpy2.mpz(0))


@runtime_checkable
class IntegerValue(Protocol):
    """Operations the factoring algorithms need from a number type."""

    def __eq__(self, other) -> bool: ...
    def __lt__(self, other) -> bool: ...
    def __le__(self, other) -> bool: ...
    def __add__(self, other): ...
    def __sub__(self, other): ...
    def __mul__(self, other): ...
    def __floordiv__(self, other): ...
    def __mod__(self, other): ...
    def __pow__(self, other, modulo=None): ...
    def __int__(self) -> int: ...
    def __bool__(self) -> bool: ...


class _UnsignedInteger:
    """Checked unsigned arithmetic shared by UInt64 and BigInt."""

    __slots__ = ('_value',)

    MAX = None  # no upper bound

    def __init__(self, value: Union[int, str, '_UnsignedInteger'] = 0):
        if isinstance(value, str):
            match = _DIGITS.match(value)
            if not match:
                raise IntegerFormatError(f"Invalid unsigned integer string: {value!r}")
            value = int(match.group(1))
        elif isinstance(value, _UnsignedInteger):
            value = int(value)
        elif isinstance(value, bool) or not isinstance(value, (int, _MPZ)):
            raise TypeError(f"Cannot build {type(self).__name__} from {type(value).__name__}")
        self._value = self._check(value)

    # ==================== Range checks ====================

    @classmethod
    def _check(cls, value):
        if value < 0:
            raise IntegerUnderflow(f"{cls.__name__} result {value} is below zero")
        if cls.MAX is not None and value > cls.MAX:
            raise IntegerOverflow(f"{cls.__name__} result {value} exceeds {cls.MAX}")
        return cls._store(value)

    @staticmethod
    def _store(value):
        return int(value)

    @classmethod
    def _wrap(cls, value):
        result = cls.__new__(cls)
        result._value = cls._check(value)
        return result

    @staticmethod
    def _raw(other):
        if isinstance(other, _UnsignedInteger):
            return other._value
        if isinstance(other, bool):
            return NotImplemented
        if isinstance(other, (int, _MPZ)):
            return other
        return NotImplemented

    # ==================== Arithmetic ====================

    def __add__(self, other):
        raw = self._raw(other)
        if raw is NotImplemented:
            return NotImplemented
        return self._wrap(self._value + raw)

    def __radd__(self, other):
        return self.__add__(other)

    def __sub__(self, other):
        raw = self._raw(other)
        if raw is NotImplemented:
            return NotImplemented
        return self._wrap(self._value - raw)

    def __rsub__(self, other):
        raw = self._raw(other)
        if raw is NotImplemented:
            return NotImplemented
        return self._wrap(raw - self._value)

    def __mul__(self, other):
        raw = self._raw(other)
        if raw is NotImplemented:
            return NotImplemented
        return self._wrap(self._value * raw)

    def __rmul__(self, other):
        return self.__mul__(other)

    def __floordiv__(self, other):
        raw = self._raw(other)
        if raw is NotImplemented:
            return NotImplemented
        if raw == 0:
            raise IntegerZeroDivide(f"{type(self).__name__} division of {self._value} by zero")
        return self._wrap(self._value // raw)

    def __rfloordiv__(self, other):
        raw = self._raw(other)
        if raw is NotImplemented:
            return NotImplemented
        if self._value == 0:
            raise IntegerZeroDivide(f"{type(self).__name__} division of {raw} by zero")
        return self._wrap(raw // self._value)

    def __mod__(self, other):
        raw = self._raw(other)
        if raw is NotImplemented:
            return NotImplemented
        if raw == 0:
            raise IntegerZeroDivide(f"{type(self).__name__} {self._value} modulo zero")
        return self._wrap(self._value % raw)

    def __rmod__(self, other):
        raw = self._raw(other)
        if raw is NotImplemented:
            return NotImplemented
        if self._value == 0:
            raise IntegerZeroDivide(f"{type(self).__name__} {raw} modulo zero")
        return self._wrap(raw % self._value)

    def __divmod__(self, other):
        return self // other, self % other

    def __pow__(self, exponent, modulo=None):
        exp = self._raw(exponent)
        if exp is NotImplemented:
            return NotImplemented
        if modulo is None:
            return self._wrap(self._value ** self._store(exp))
        mod = self._raw(modulo)
        if mod is NotImplemented:
            return NotImplemented
        if mod == 0:
            raise IntegerZeroDivide(f"{type(self).__name__} power modulo zero")
        # Residues are below the modulus so they never leave the range.
        return self._wrap(pow(self._value, self._store(exp), self._store(mod)))

    # ==================== Comparison ====================

    def __eq__(self, other):
        raw = self._raw(other)
        if raw is NotImplemented:
            return NotImplemented
        return self._value == raw

    def __ne__(self, other):
        raw = self._raw(other)
        if raw is NotImplemented:
            return NotImplemented
        return self._value != raw

    def __lt__(self, other):
        raw = self._raw(other)
        if raw is NotImplemented:
            return NotImplemented
        return self._value < raw

    def __le__(self, other):
        raw = self._raw(other)
        if raw is NotImplemented:
            return NotImplemented
        return self._value <= raw

    def __gt__(self, other):
        raw = self._raw(other)
        if raw is NotImplemented:
            return NotImplemented
        return self._value > raw

    def __ge__(self, other):
        raw = self._raw(other)
        if raw is NotImplemented:
            return NotImplemented
        return self._value >= raw

    def __hash__(self):
        return hash(int(self._value))

    # ==================== Conversion ====================

    def __bool__(self):
        return self._value != 0

    def __int__(self):
        return int(self._value)

    def __index__(self):
        return int(self._value)

    def __str__(self):
        return str(int(self._value))

    def __repr__(self):
        return f"{type(self).__name__}({int(self._value)})"

    def digits(self, base: int = 10) -> str:
        """Format in the given base (2..62). The base is never global state."""
        if not 2 <= base <= 62:
            raise ValueError(f"Unsupported base {base}; expected 2..62")
        return gmpy2.mpz(self._value).digits(base)

    def bit_length(self) -> int:
        return int(self._value).bit_length()


class UInt64(_UnsignedInteger):
    """Native 64-bit unsigned integer with checked (non-wrapping) arithmetic."""

    __slots__ = ()

    BITS = 64
    MAX = 2 ** 64 - 1

    def to_native(self) -> 'UInt64':
        return self

    def to_big(self) -> 'BigInt':
        return BigInt.from_native(self)


class BigInt(_UnsignedInteger):
    """Arbitrary-precision unsigned integer backed by gmpy2.mpz."""

    __slots__ = ()

    @staticmethod
    def _store(value):
        return gmpy2.mpz(value)

    @classmethod
    def from_native(cls, value: UInt64) -> 'BigInt':
        return cls(int(value))

    def to_native(self) -> UInt64:
        """Narrow to UInt64; raises IntegerOverflow when the value does not fit."""
        if self._value > UInt64.MAX:
            raise IntegerOverflow(f"BigInt {self} does not fit in {UInt64.BITS} bits")
        return UInt64(int(self._value))

    def to_big(self) -> 'BigInt':
        return self
