"""Fixed-point arithmetic at 6 decimals.

Prices, fees and ratios are integers scaled by 10^6. All pool math goes
through scaled_multiply and scaled_divide; both truncate toward zero,
and every rounding direction in the pool depends on that.
"""

from __future__ import annotations

from typing import ClassVar

from lp_pool.constants import SCALE
from lp_pool.safe_int import DivisionByZero, S, SafeInt

__all__ = [
    "Fp",
    "SCALE",
    "scaled_divide",
    "scaled_multiply",
]


def scaled_multiply(a: int | SafeInt, b: int | SafeInt) -> int:
    """Multiply with floor rounding: (a * b) // 10^6

    One operand carries the implicit scale (a fee, price or ratio), so the
    result is in the unit of the other operand.
    """
    return ((S(a) * S(b)) // SCALE).value


def scaled_divide(a: int | SafeInt, b: int | SafeInt) -> int:
    """Divide with floor rounding: (a * 10^6) // b

    Returns the ratio a/b as a scaled value.

    Raises:
        DivisionByZero: If b is zero
    """
    if S(b) == 0:
        raise DivisionByZero(f"scaled_divide by zero: {int(a)} / 0")
    return ((S(a) * SCALE) // S(b)).value


class Fp:
    """6-decimal fixed-point number stored as int.

    Example: 1.5 is stored as 1_500_000, 0.1% as 1_000.
    """

    ONE: ClassVar[int] = SCALE

    __slots__ = ("value",)
    __hash__ = None  # type: ignore[assignment]  # Unhashable since we define __eq__

    def __init__(self, value: int) -> None:
        """Create Fp from raw scaled value."""
        self.value = value

    @classmethod
    def ratio(cls, numerator: int, denominator: int) -> Fp:
        """Create from a ratio of two unscaled amounts."""
        return cls(scaled_divide(numerator, denominator))

    def mul_down(self, amount: int) -> int:
        """Scale an unscaled amount by self, rounding down."""
        return scaled_multiply(amount, self.value)

    def sub(self, other: Fp) -> Fp:
        """Subtract other from self.

        Raises:
            Underflow: If other > self
        """
        return Fp((S(self.value) - S(other.value)).value)

    def apply_fee(self, amount: int) -> int:
        """Amount left after charging self as a fee: amount - amount * fee."""
        return (S(amount) - self.mul_down(amount)).value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Fp):
            return NotImplemented
        return self.value == other.value

    def __repr__(self) -> str:
        return f"Fp({self.value})"

    def __str__(self) -> str:
        whole, frac = divmod(self.value, self.ONE)
        return f"{whole}.{frac:06d}"
