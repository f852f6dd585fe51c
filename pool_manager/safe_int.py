"""Checked integer wrapper for arithmetic on token amounts.

SafeInt makes the arithmetic used by the pool math checked by default:
- Division by zero raises DivisionByZero
- Subtraction underflow raises Underflow
- Narrowing a result into a Uint128 amount raises ConversionOverflow

Python integers never overflow, so intermediates are unbounded (the on-chain
Uint256/Uint512 intermediates are subsumed). Amounts returned by the curve
math are narrowed with to_uint128(); stored balances grow through
checked_add_uint128() and are validated again by the Uint128 model type.

Usage pattern:
    from pool_manager.safe_int import S

    def calculate(a: int, b: int, c: int) -> int:
        sa, sb, sc = S(a), S(b), S(c)
        result = (sa * sb) // sc  # Raises if sc == 0
        remainder = sa - sb       # Raises if sb > sa
        return result.to_uint128()
"""

from __future__ import annotations

from math import isqrt

from pool_manager.errors import MathError

UINT128_MAX = 2**128 - 1


class SafeIntError(MathError):
    """Base class for SafeInt arithmetic errors."""

    pass


class DivisionByZero(SafeIntError):
    """Division by zero."""

    pass


class Underflow(SafeIntError):
    """Subtraction would produce a negative result."""

    pass


class Overflow(SafeIntError):
    """Addition would exceed the Uint128 range of a stored amount."""

    pass


class ConversionOverflow(SafeIntError):
    """Value does not fit in a Uint128 amount."""

    pass


class SafeInt:
    """Non-negative integer with checked arithmetic.

    Attributes:
        value: The underlying integer value (read-only)
    """

    __slots__ = ("_value",)
    _value: int

    def __init__(self, value: int | SafeInt) -> None:
        if isinstance(value, SafeInt):
            self._value = value._value
        elif isinstance(value, int) and not isinstance(value, bool):
            self._value = value
        else:
            raise TypeError(f"SafeInt requires int, got {type(value).__name__}")

    @property
    def value(self) -> int:
        """The underlying integer value."""
        return self._value

    def __repr__(self) -> str:
        return f"SafeInt({self._value})"

    def __str__(self) -> str:
        return str(self._value)

    def __hash__(self) -> int:
        return hash(self._value)

    # --- Arithmetic operations ---

    def __add__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self._value + _extract_value(other))

    def __radd__(self, other: int) -> SafeInt:
        return SafeInt(other + self._value)

    def __sub__(self, other: SafeInt | int) -> SafeInt:
        """Subtract other from self.

        Raises:
            Underflow: If result would be negative
        """
        other_val = _extract_value(other)
        result = self._value - other_val
        if result < 0:
            raise Underflow(f"Underflow: {self._value} - {other_val} = {result}")
        return SafeInt(result)

    def __rsub__(self, other: int) -> SafeInt:
        result = other - self._value
        if result < 0:
            raise Underflow(f"Underflow: {other} - {self._value} = {result}")
        return SafeInt(result)

    def __mul__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self._value * _extract_value(other))

    def __rmul__(self, other: int) -> SafeInt:
        return SafeInt(other * self._value)

    def __floordiv__(self, other: SafeInt | int) -> SafeInt:
        """Integer division rounding down.

        Raises:
            DivisionByZero: If other is zero
        """
        other_val = _extract_value(other)
        if other_val == 0:
            raise DivisionByZero(f"Division by zero: {self._value} // 0")
        return SafeInt(self._value // other_val)

    def __pow__(self, exponent: int) -> SafeInt:
        return SafeInt(self._value**exponent)

    # --- Comparison operations ---

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SafeInt):
            return self._value == other._value
        if isinstance(other, int):
            return self._value == other
        return NotImplemented

    def __lt__(self, other: SafeInt | int) -> bool:
        return self._value < _extract_value(other)

    def __le__(self, other: SafeInt | int) -> bool:
        return self._value <= _extract_value(other)

    def __gt__(self, other: SafeInt | int) -> bool:
        return self._value > _extract_value(other)

    def __ge__(self, other: SafeInt | int) -> bool:
        return self._value >= _extract_value(other)

    def __int__(self) -> int:
        return self._value

    def __bool__(self) -> bool:
        return self._value != 0

    # --- Named operations ---

    def ceiling_div(self, other: SafeInt | int) -> SafeInt:
        """Division rounding up.

        Raises:
            DivisionByZero: If other is zero
        """
        other_val = _extract_value(other)
        if other_val == 0:
            raise DivisionByZero(f"Ceiling division by zero: {self._value}")
        return SafeInt(-(-self._value // other_val))

    def multiply_ratio(self, numerator: SafeInt | int, denominator: SafeInt | int) -> SafeInt:
        """self * numerator / denominator, rounding down."""
        return (self * numerator) // denominator

    def isqrt(self) -> SafeInt:
        """Integer square root, rounding down."""
        if self._value < 0:
            raise Underflow(f"Square root of negative value: {self._value}")
        return SafeInt(isqrt(self._value))

    def abs_diff(self, other: SafeInt | int) -> SafeInt:
        """Absolute difference, never raises."""
        return SafeInt(abs(self._value - _extract_value(other)))

    def saturating_sub(self, other: SafeInt | int) -> SafeInt:
        """Subtract, clamping result to zero instead of raising."""
        return SafeInt(max(0, self._value - _extract_value(other)))

    def checked_add_uint128(self, other: SafeInt | int) -> SafeInt:
        """Add, raising Overflow if the sum leaves the Uint128 range.

        Used where a stored balance is incremented.
        """
        result = self._value + _extract_value(other)
        if result > UINT128_MAX:
            raise Overflow(f"Overflow: {self._value} + {_extract_value(other)} exceeds Uint128")
        return SafeInt(result)

    def to_uint128(self) -> int:
        """Convert to int, validating Uint128 bounds.

        Raises:
            ConversionOverflow: If value is negative or exceeds 2^128-1
        """
        if self._value < 0:
            raise ConversionOverflow(f"Negative value cannot be Uint128: {self._value}")
        if self._value > UINT128_MAX:
            raise ConversionOverflow(f"Value exceeds Uint128 max: {self._value}")
        return self._value


def _extract_value(x: SafeInt | int) -> int:
    """Extract integer value from SafeInt or int."""
    if isinstance(x, SafeInt):
        return x._value
    return x


# Convenience alias for concise code
S = SafeInt
