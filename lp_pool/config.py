"""Pool parameter configuration."""

from dataclasses import dataclass

from lp_pool.constants import (
    DEMO_LIQUIDITY_TARGET,
    DEMO_MAX_FEE,
    DEMO_MIN_FEE,
    DEMO_PRICE,
)


@dataclass(frozen=True)
class PoolParams:
    """Immutable parameters of a pool.

    All four values are fixed at creation; there is no governance path
    that changes them afterwards.

    Attributes:
        price: Base tokens per staked token, scaled by 10^6 (1_500_000 = 1.5)
        min_fee: Fee charged while the reserve stays above target, scaled
            by 10^6 (1_000 = 0.1%)
        max_fee: Fee charged when the reserve would be drained, scaled by 10^6
        liquidity_target: Base-token reserve level below which the fee
            slides from min_fee toward max_fee
    """

    price: int = DEMO_PRICE
    min_fee: int = DEMO_MIN_FEE
    max_fee: int = DEMO_MAX_FEE
    liquidity_target: int = DEMO_LIQUIDITY_TARGET


# Default configuration instance
DEFAULT_POOL_PARAMS = PoolParams()
