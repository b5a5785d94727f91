"""Single-sided staked-token liquidity pool."""

from lp_pool.config import DEFAULT_POOL_PARAMS, PoolParams
from lp_pool.pool import LpPool, PoolState
from lp_pool.result import PoolError, PoolOperationError, PoolResult

__version__ = "0.1.0"
__all__ = [
    "DEFAULT_POOL_PARAMS",
    "LpPool",
    "PoolError",
    "PoolOperationError",
    "PoolParams",
    "PoolResult",
    "PoolState",
    "__version__",
]
