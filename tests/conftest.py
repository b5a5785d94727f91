"""Pytest configuration and fixtures."""

from collections.abc import Iterator

import pytest
import structlog

from lp_pool import DEFAULT_POOL_PARAMS, LpPool, PoolParams
from tests.helpers.factories import make_pool, run_story


@pytest.fixture(autouse=True)
def reset_structlog() -> Iterator[None]:
    """Undo logging configuration done by CLI tests."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def params() -> PoolParams:
    """Demonstration parameters: price 1.5, fees 0.1%-9%, target 90 tokens."""
    return DEFAULT_POOL_PARAMS


@pytest.fixture
def pool(params: PoolParams) -> LpPool:
    """Fresh empty pool with demonstration parameters."""
    return make_pool(params)


@pytest.fixture
def funded_pool(pool: LpPool) -> LpPool:
    """Pool holding 100 base tokens and 100 LP tokens, no staked tokens."""
    pool.add_liquidity(100_000_000).unwrap()
    return pool


@pytest.fixture
def story_pool(pool: LpPool) -> LpPool:
    """Pool after deposit 100, swap 6, deposit 10, swap 30."""
    return run_story(pool)
