"""Test helpers for pool tests."""

from tests.helpers.constants import (
    LIQUIDITY_TARGET,
    MAX_FEE,
    MIN_FEE,
    PRICE,
)
from tests.helpers.factories import make_pool, run_story

__all__ = [
    "LIQUIDITY_TARGET",
    "MAX_FEE",
    "MIN_FEE",
    "PRICE",
    "make_pool",
    "run_story",
]
