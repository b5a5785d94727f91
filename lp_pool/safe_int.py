"""Checked integer wrapper for pool arithmetic.

Token amounts are u64 values. Python integers never overflow, so the
guard that matters is at the edges: subtraction must not go negative and
anything stored in the pool or handed back to a caller must fit in u64.

Usage pattern:
    from lp_pool.safe_int import S

    def payout(reserve: int, amount: int) -> int:
        left = S(reserve) - S(amount)  # Raises Underflow if amount > reserve
        return left.to_uint64()       # Raises Uint64Overflow if out of range
"""

from __future__ import annotations

from lp_pool.constants import UINT64_MAX


class SafeIntError(ArithmeticError):
    """Base class for SafeInt arithmetic errors."""

    pass


class DivisionByZero(SafeIntError):
    """Division by zero."""

    pass


class Underflow(SafeIntError):
    """Subtraction would produce negative result."""

    pass


class Uint64Overflow(SafeIntError):
    """Value is negative or exceeds the u64 maximum."""

    pass


class SafeInt:
    """Integer with checked arithmetic.

    - Division by zero raises DivisionByZero
    - Negative results from subtraction raise Underflow
    - Values outside u64 raise Uint64Overflow on to_uint64()

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

    def __mul__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self._value * _extract_value(other))

    def __floordiv__(self, other: SafeInt | int) -> SafeInt:
        """Integer division, truncating toward zero for non-negative operands.

        Raises:
            DivisionByZero: If other is zero
        """
        other_val = _extract_value(other)
        if other_val == 0:
            raise DivisionByZero(f"Division by zero: {self._value} // 0")
        return SafeInt(self._value // other_val)

    # --- Comparison operations ---

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SafeInt):
            return self._value == other._value
        if isinstance(other, int):
            return self._value == other
        return NotImplemented

    def __lt__(self, other: SafeInt | int) -> bool:
        return self._value < _extract_value(other)

    def __gt__(self, other: SafeInt | int) -> bool:
        return self._value > _extract_value(other)

    # --- Conversion ---

    def __int__(self) -> int:
        return self._value

    # --- Named operations ---

    def saturating_sub(self, other: SafeInt | int) -> SafeInt:
        """Subtract, clamping result to zero instead of raising."""
        return SafeInt(max(0, self._value - _extract_value(other)))

    def checked_sub(self, other: SafeInt | int) -> SafeInt | None:
        """Subtract, returning None on underflow instead of raising."""
        result = self._value - _extract_value(other)
        if result < 0:
            return None
        return SafeInt(result)

    def to_uint64(self) -> int:
        """Convert to int, validating u64 bounds.

        Raises:
            Uint64Overflow: If value is negative or exceeds 2^64-1
        """
        if self._value < 0:
            raise Uint64Overflow(f"Negative value cannot be u64: {self._value}")
        if self._value > UINT64_MAX:
            raise Uint64Overflow(f"Value exceeds u64 max: {self._value}")
        return self._value


def _extract_value(x: SafeInt | int) -> int:
    if isinstance(x, SafeInt):
        return x._value
    return x


def require_uint64(value: object, name: str) -> int:
    """Validate a caller-supplied amount.

    Args:
        value: Amount passed across the pool API
        name: Argument name (for error messages)

    Returns:
        The amount as int

    Raises:
        TypeError: If value is not an int
        Uint64Overflow: If value is negative or exceeds 2^64-1
    """
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be int, got {type(value).__name__}")
    if not 0 <= value <= UINT64_MAX:
        raise Uint64Overflow(f"{name} is not a u64: {value}")
    return value


# Convenience alias for concise code
S = SafeInt
