"""Single-sided liquidity pool for a staked-token/base-token pair.

Liquidity providers deposit base tokens and receive LP tokens. Traders
swap staked tokens in for base tokens at the pool price minus a fee. The
fee stays at min_fee while the base reserve remains above the liquidity
target and slides linearly toward max_fee as a swap drains it further:

    fee = max_fee - (max_fee - min_fee) * amount_after / liquidity_target

where amount_after is the base reserve left after a fee-free swap.
All values are integers; ratios and fees are scaled by 10^6.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from lp_pool.config import PoolParams
from lp_pool.constants import SCALE
from lp_pool.math.fixed_point import Fp, scaled_divide, scaled_multiply
from lp_pool.result import PoolError, PoolResult
from lp_pool.safe_int import S, require_uint64

logger = structlog.get_logger()


@dataclass(frozen=True)
class PoolState:
    """Point-in-time view of a pool's reserves."""

    base_reserve: int
    staked_reserve: int
    lp_supply: int


class LpPool:
    """Staked-token/base-token pool with a dynamic unstake fee.

    Create pools with LpPool.init() or LpPool.from_params(); both validate
    the parameters and return a PoolResult. A pool is not safe for
    concurrent use: callers sharing one must serialize operations.
    """

    __slots__ = ("_params", "_base_reserve", "_staked_reserve", "_lp_supply")

    def __init__(self, params: PoolParams) -> None:
        """Create an empty pool from already validated parameters."""
        self._params = params
        self._base_reserve = 0
        self._staked_reserve = 0
        self._lp_supply = 0

    @classmethod
    def init(
        cls,
        price: int,
        min_fee: int,
        max_fee: int,
        liquidity_target: int,
    ) -> PoolResult[LpPool]:
        """Validate parameters and create an empty pool.

        Args:
            price: Base tokens per staked token (scaled by 10^6)
            min_fee: Lowest unstake fee (scaled by 10^6)
            max_fee: Highest unstake fee (scaled by 10^6), strictly above min_fee
                and at most 10^6 (100%)
            liquidity_target: Base reserve below which the fee starts sliding

        Returns:
            PoolResult holding the pool, INVALID_FEE (min_fee >= max_fee or
            max_fee above 100%), INVALID_PRICE or INVALID_LIQUIDITY_TARGET
        """
        price = require_uint64(price, "price")
        min_fee = require_uint64(min_fee, "min_fee")
        max_fee = require_uint64(max_fee, "max_fee")
        liquidity_target = require_uint64(liquidity_target, "liquidity_target")

        if min_fee >= max_fee:
            return _rejected(
                "pool_init", PoolError.INVALID_FEE, f"min_fee {min_fee} >= max_fee {max_fee}"
            )
        if max_fee > SCALE:
            return _rejected(
                "pool_init", PoolError.INVALID_FEE, f"max_fee {max_fee} exceeds 100%"
            )
        if price == 0:
            return _rejected("pool_init", PoolError.INVALID_PRICE, "price must be positive")
        # With a zero target the fee would be a constant
        if liquidity_target == 0:
            return _rejected(
                "pool_init",
                PoolError.INVALID_LIQUIDITY_TARGET,
                "liquidity_target must be positive",
            )

        params = PoolParams(
            price=price,
            min_fee=min_fee,
            max_fee=max_fee,
            liquidity_target=liquidity_target,
        )
        logger.debug(
            "pool_init",
            price=price,
            min_fee=min_fee,
            max_fee=max_fee,
            liquidity_target=liquidity_target,
        )
        return PoolResult.ok(cls(params))

    @classmethod
    def from_params(cls, params: PoolParams) -> PoolResult[LpPool]:
        """Same as init(), taking a PoolParams."""
        return cls.init(params.price, params.min_fee, params.max_fee, params.liquidity_target)

    # --- Read-only views ---

    @property
    def params(self) -> PoolParams:
        return self._params

    @property
    def base_reserve(self) -> int:
        return self._base_reserve

    @property
    def staked_reserve(self) -> int:
        return self._staked_reserve

    @property
    def lp_supply(self) -> int:
        return self._lp_supply

    def total_value(self) -> int:
        """Pool value in base tokens: base reserve plus staked reserve at price."""
        return (S(self._base_reserve) + scaled_multiply(self._staked_reserve, self._params.price)).value

    def snapshot(self) -> PoolState:
        return PoolState(
            base_reserve=self._base_reserve,
            staked_reserve=self._staked_reserve,
            lp_supply=self._lp_supply,
        )

    def __repr__(self) -> str:
        return (
            f"LpPool(price={self._params.price}, base_reserve={self._base_reserve}, "
            f"staked_reserve={self._staked_reserve}, lp_supply={self._lp_supply})"
        )

    # --- Operations ---

    def add_liquidity(self, token_amount: int) -> PoolResult[int]:
        """Deposit base tokens and mint LP tokens.

        Minted LP tokens keep every holder's share of total pool value
        constant: the supply grows by the same ratio as the value.

        Args:
            token_amount: Base tokens deposited

        Returns:
            PoolResult holding the minted LP amount, or INVALID_DEPOSIT for a
            zero deposit or a pool whose LP tokens back no value
        """
        token_amount = require_uint64(token_amount, "token_amount")
        if token_amount == 0:
            return _rejected("pool_add_liquidity", PoolError.INVALID_DEPOSIT, "deposit is zero")

        # No LP holders to dilute, or pool holds only base tokens 1:1 with LP tokens
        if self._lp_supply == 0 or (
            self._lp_supply == self._base_reserve and self._staked_reserve == 0
        ):
            self._base_reserve = (S(self._base_reserve) + token_amount).to_uint64()
            self._lp_supply = (S(self._lp_supply) + token_amount).to_uint64()
            logger.debug(
                "pool_add_liquidity",
                deposit=token_amount,
                minted=token_amount,
                path="bootstrap",
            )
            return PoolResult.ok(token_amount)

        value = self.total_value()
        if value == 0:
            return _rejected(
                "pool_add_liquidity",
                PoolError.INVALID_DEPOSIT,
                f"pool value is zero with {self._lp_supply} LP tokens outstanding",
            )
        growth = Fp.ratio(value + token_amount, value)
        minted = (S(growth.mul_down(self._lp_supply)) - self._lp_supply).to_uint64()

        self._base_reserve = (S(self._base_reserve) + token_amount).to_uint64()
        self._lp_supply = (S(self._lp_supply) + minted).to_uint64()

        logger.debug(
            "pool_add_liquidity",
            deposit=token_amount,
            minted=minted,
            pool_value=value,
            growth=growth.value,
            path="proportional",
        )
        return PoolResult.ok(minted)

    def remove_liquidity(self, lp_token_amount: int) -> PoolResult[tuple[int, int]]:
        """Burn LP tokens and withdraw a proportional share of both reserves.

        Args:
            lp_token_amount: LP tokens to burn, at most the outstanding supply

        Returns:
            PoolResult holding (base tokens, staked tokens) paid out, or
            INVALID_LP_TOKEN_TO_REMOVE
        """
        lp_token_amount = require_uint64(lp_token_amount, "lp_token_amount")
        if lp_token_amount == 0 or lp_token_amount > self._lp_supply:
            return _rejected(
                "pool_remove_liquidity",
                PoolError.INVALID_LP_TOKEN_TO_REMOVE,
                f"cannot remove {lp_token_amount} of {self._lp_supply} LP tokens",
            )

        share = scaled_divide(lp_token_amount, self._lp_supply)
        self._lp_supply = (S(self._lp_supply) - lp_token_amount).value

        # Payouts use the reserves as they stood before this call
        base_out = scaled_multiply(share, self._base_reserve)
        staked_out = scaled_multiply(share, self._staked_reserve)
        self._base_reserve = (S(self._base_reserve) - base_out).value
        self._staked_reserve = (S(self._staked_reserve) - staked_out).value

        logger.debug(
            "pool_remove_liquidity",
            burned=lp_token_amount,
            share=share,
            base_out=base_out,
            staked_out=staked_out,
        )
        return PoolResult.ok((base_out, staked_out))

    def swap(self, staked_token_amount: int) -> PoolResult[int]:
        """Swap staked tokens in for base tokens out.

        Args:
            staked_token_amount: Staked tokens paid into the pool

        Returns:
            PoolResult holding the base tokens paid out, INVALID_SWAP_AMOUNT,
            or TO_BIG_SWAP carrying the largest staked amount that would
            succeed at max_fee
        """
        staked_token_amount = require_uint64(staked_token_amount, "staked_token_amount")
        if staked_token_amount == 0:
            return _rejected("pool_swap", PoolError.INVALID_SWAP_AMOUNT, "swap amount is zero")

        params = self._params
        min_fee = Fp(params.min_fee)
        max_fee = Fp(params.max_fee)
        reserve = S(self._base_reserve)

        token_for_staked = scaled_multiply(params.price, staked_token_amount)

        # Not enough base tokens even at the highest fee
        if max_fee.apply_fee(token_for_staked) > reserve:
            token_max_fee = max_fee.apply_fee(reserve.value)
            max_swap = scaled_divide(token_max_fee, params.price)
            logger.debug(
                "pool_swap_rejected",
                error=PoolError.TO_BIG_SWAP.value,
                staked_in=staked_token_amount,
                base_reserve=reserve.value,
                max_swap=max_swap,
            )
            return PoolResult.too_big_swap(max_swap)

        token_min_fee = min_fee.apply_fee(token_for_staked)
        left_after_min_fee = reserve.checked_sub(token_min_fee)

        if (
            left_after_min_fee is not None and left_after_min_fee > params.liquidity_target
        ) or min_fee == max_fee:
            fee, payout, path = min_fee, token_min_fee, "flat"
        else:
            # Below zero the fee is pinned at max_fee
            amount_after = reserve.saturating_sub(token_for_staked)
            target_part = Fp.ratio(amount_after.value, params.liquidity_target)
            fee = max_fee.sub(Fp(target_part.mul_down(max_fee.sub(min_fee).value)))
            payout, path = fee.apply_fee(token_for_staked), "sliding"

        self._base_reserve = (reserve - payout).value
        self._staked_reserve = (S(self._staked_reserve) + staked_token_amount).to_uint64()

        logger.debug(
            "pool_swap",
            staked_in=staked_token_amount,
            payout=payout,
            fee=fee.value,
            path=path,
            base_reserve=self._base_reserve,
        )
        return PoolResult.ok(payout)


def _rejected(event: str, error: PoolError, detail: str) -> PoolResult:
    logger.debug(f"{event}_rejected", error=error.value, detail=detail)
    return PoolResult.fail(error, detail)
