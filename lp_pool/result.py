"""Pool operation result types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class PoolError(Enum):
    """Types of pool operation errors."""

    INVALID_PRICE = "invalid_price"
    INVALID_FEE = "invalid_fee"
    INVALID_LIQUIDITY_TARGET = "invalid_liquidity_target"
    INVALID_DEPOSIT = "invalid_deposit"
    INVALID_SWAP_AMOUNT = "invalid_swap_amount"
    INVALID_LP_TOKEN_TO_REMOVE = "invalid_lp_token_to_remove"
    TO_BIG_SWAP = "to_big_swap"


class PoolOperationError(Exception):
    """Raised by PoolResult.unwrap() when the operation failed."""

    def __init__(
        self, error: PoolError, max_swap: int | None = None, detail: str | None = None
    ) -> None:
        self.error = error
        self.max_swap = max_swap
        self.detail = detail
        message = error.value
        if max_swap is not None:
            message = f"{message} (max staked amount: {max_swap})"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


@dataclass(frozen=True)
class PoolResult(Generic[T]):
    """Result of a pool operation.

    Every fallible pool operation returns one of these instead of raising,
    so rejected deposits, withdrawals and swaps are ordinary values the
    caller inspects.

    Attributes:
        value: The operation's output (minted LP tokens, swap payout,
            withdrawn amounts, or the pool itself for init), or None on error.
        error: If the operation failed, the type of error that occurred.
        max_swap: For TO_BIG_SWAP, the largest staked amount the pool could
            currently absorb at max_fee.
        error_detail: Optional human-readable detail about the error.

    Examples:
        # Successful swap
        result = PoolResult.ok(8_991_000)
        assert result.is_valid
        assert result.value == 8_991_000

        # Swap larger than the reserve can cover
        result = PoolResult.too_big_swap(0)
        assert result.error is PoolError.TO_BIG_SWAP
        assert result.max_swap == 0
    """

    value: T | None
    error: PoolError | None = None
    max_swap: int | None = None
    error_detail: str | None = None

    @property
    def is_valid(self) -> bool:
        """True if the operation succeeded."""
        return self.error is None

    @property
    def is_error(self) -> bool:
        """True if the operation failed with an error."""
        return self.error is not None

    def unwrap(self) -> T:
        """Return the value, raising PoolOperationError on failure."""
        if self.error is not None:
            raise PoolOperationError(self.error, self.max_swap, self.error_detail)
        return self.value  # type: ignore[return-value]

    @classmethod
    def ok(cls, value: T) -> PoolResult[T]:
        """Create a successful result."""
        return cls(value=value)

    @classmethod
    def fail(cls, error: PoolError, detail: str | None = None) -> PoolResult[T]:
        """Create an error result."""
        return cls(value=None, error=error, error_detail=detail)

    @classmethod
    def too_big_swap(cls, max_swap: int) -> PoolResult[T]:
        """Create a TO_BIG_SWAP result carrying the largest swappable amount."""
        return cls(
            value=None,
            error=PoolError.TO_BIG_SWAP,
            max_swap=max_swap,
            error_detail=f"swap exceeds reserve even at max fee; max staked amount is {max_swap}",
        )
