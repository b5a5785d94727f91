"""Tests for SafeInt checked arithmetic wrapper."""

import pytest

from lp_pool.constants import UINT64_MAX
from lp_pool.safe_int import (
    DivisionByZero,
    S,
    SafeInt,
    SafeIntError,
    Uint64Overflow,
    Underflow,
    require_uint64,
)


class TestSafeIntConstruction:
    """Tests for SafeInt construction."""

    def test_from_int(self):
        """SafeInt can be constructed from int."""
        assert SafeInt(42).value == 42

    def test_from_safeint(self):
        """SafeInt can be constructed from another SafeInt."""
        assert SafeInt(SafeInt(42)).value == 42

    def test_from_invalid_type_raises(self):
        """SafeInt rejects non-integers, including bool."""
        with pytest.raises(TypeError):
            SafeInt("42")  # type: ignore
        with pytest.raises(TypeError):
            SafeInt(3.14)  # type: ignore
        with pytest.raises(TypeError):
            SafeInt(True)

    def test_alias_s(self):
        """S is an alias for SafeInt."""
        assert S is SafeInt


class TestSafeIntArithmetic:
    """Tests for SafeInt arithmetic operations."""

    def test_add(self):
        """Addition works with SafeInt and int on either side."""
        assert (S(10) + S(5)).value == 15
        assert (S(10) + 5).value == 15

    def test_sub(self):
        """Subtraction works when result is non-negative."""
        assert (S(10) - S(4)).value == 6
        assert (S(10) - 10).value == 0

    def test_sub_underflow_raises(self):
        """Subtraction below zero raises Underflow."""
        with pytest.raises(Underflow):
            S(4) - S(10)

    def test_mul(self):
        """Multiplication is exact."""
        assert (S(UINT64_MAX) * 2).value == UINT64_MAX * 2
        assert (S(3) * 7).value == 21

    def test_floordiv(self):
        """Integer division truncates."""
        assert (S(7) // 2).value == 3

    def test_floordiv_by_zero_raises(self):
        """Division by zero raises DivisionByZero."""
        with pytest.raises(DivisionByZero):
            S(7) // 0

    def test_errors_are_arithmetic_errors(self):
        """All SafeInt errors derive from ArithmeticError."""
        assert issubclass(Underflow, SafeIntError)
        assert issubclass(SafeIntError, ArithmeticError)


class TestSafeIntNamedOperations:
    """Tests for saturating and checked operations."""

    def test_saturating_sub(self):
        """saturating_sub clamps at zero."""
        assert S(10).saturating_sub(4).value == 6
        assert S(4).saturating_sub(10).value == 0

    def test_checked_sub(self):
        """checked_sub returns None on underflow."""
        assert S(10).checked_sub(4) == 6
        assert S(4).checked_sub(10) is None

    def test_comparisons(self):
        """Comparisons work against int and SafeInt."""
        assert S(5) > 4
        assert S(4) < 5
        assert S(4) == 4
        assert not S(4) == S(5)
        assert 6 > S(5)


class TestUint64Bounds:
    """Tests for u64 validation."""

    def test_to_uint64(self):
        """In-range values convert."""
        assert S(0).to_uint64() == 0
        assert S(UINT64_MAX).to_uint64() == UINT64_MAX

    def test_to_uint64_overflow(self):
        """Values above u64 raise."""
        with pytest.raises(Uint64Overflow):
            S(UINT64_MAX + 1).to_uint64()

    def test_to_uint64_negative(self):
        """Negative values raise."""
        with pytest.raises(Uint64Overflow):
            S(-1).to_uint64()

    def test_require_uint64(self):
        """require_uint64 accepts u64 ints."""
        assert require_uint64(5, "amount") == 5

    def test_require_uint64_rejects_type(self):
        """require_uint64 rejects non-ints with TypeError."""
        with pytest.raises(TypeError, match="amount"):
            require_uint64(1.0, "amount")
        with pytest.raises(TypeError):
            require_uint64(False, "amount")

    def test_require_uint64_rejects_range(self):
        """require_uint64 rejects negatives and values above u64."""
        with pytest.raises(Uint64Overflow):
            require_uint64(-1, "amount")
        with pytest.raises(Uint64Overflow):
            require_uint64(UINT64_MAX + 1, "amount")
