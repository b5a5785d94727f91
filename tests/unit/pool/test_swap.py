"""Tests for swap and the dynamic unstake fee curve."""

import pytest

from lp_pool import LpPool, PoolError, PoolOperationError, PoolParams, PoolState
from lp_pool.math import scaled_divide, scaled_multiply
from tests.helpers import LIQUIDITY_TARGET, PRICE, make_pool


class TestSwapFlatFee:
    """Reserve stays above target: min_fee applies."""

    def test_swap_above_target(self, funded_pool: LpPool):
        """6 staked at 1.5 = 9 tokens, minus 0.1% = 8.991."""
        received = funded_pool.swap(6_000_000).unwrap()

        assert received == 8_991_000
        assert funded_pool.base_reserve == 91_009_000
        assert funded_pool.staked_reserve == 6_000_000
        assert funded_pool.lp_supply == 100_000_000
        assert funded_pool.params.price == PRICE

    def test_just_above_target_is_flat(self, funded_pool: LpPool):
        """Leaving 90.000002 tokens (> target) keeps the flat fee."""
        assert funded_pool.swap(6_673_339).unwrap() == 9_999_998
        assert funded_pool.base_reserve == 90_000_002

    def test_equal_fees_always_flat(self):
        """With min_fee == max_fee the fee never slides."""
        # init rejects equal fees, so build the pool directly
        params = PoolParams(
            price=PRICE, min_fee=5_000, max_fee=5_000, liquidity_target=LIQUIDITY_TARGET
        )
        pool = LpPool(params)
        pool.add_liquidity(100_000_000).unwrap()

        # 90 tokens minus 0.5%, leaving the reserve far below target
        assert pool.swap(60_000_000).unwrap() == 89_550_000
        assert pool.base_reserve == 10_450_000


class TestSwapSlidingFee:
    """Reserve would fall to or below target: fee slides toward max_fee."""

    def test_swap_below_target(self, funded_pool: LpPool):
        """Second story swap: fee interpolates to 3.4614%."""
        funded_pool.swap(6_000_000).unwrap()
        funded_pool.add_liquidity(10_000_000).unwrap()

        received = funded_pool.swap(30_000_000).unwrap()

        assert received == 43_442_370
        assert funded_pool.base_reserve == 57_566_630
        assert funded_pool.staked_reserve == 36_000_000
        assert funded_pool.lp_supply == 109_999_100

    def test_landing_exactly_on_target_slides(self, funded_pool: LpPool):
        """A min-fee payout leaving exactly the target uses the sliding fee."""
        # 10.01001 tokens, min-fee payout 10 leaves exactly 90
        received = funded_pool.swap(6_673_340).unwrap()

        assert received == 9_999_900
        assert funded_pool.base_reserve == 90_000_100

    def test_draining_past_zero_charges_max_fee(self, funded_pool: LpPool):
        """Fee-free value above the reserve pins the fee at max_fee."""
        # 105 tokens owed, 100 in reserve; 9% fee pays 95.55
        received = funded_pool.swap(70_000_000).unwrap()

        assert received == 95_550_000
        assert funded_pool.base_reserve == 4_450_000
        assert funded_pool.staked_reserve == 70_000_000

    def test_fee_grows_as_reserve_shrinks(self):
        """Larger swaps from the same pool pay a higher effective fee."""
        fees = []
        for staked in (10_000_000, 20_000_000, 30_000_000, 40_000_000, 50_000_000):
            pool = make_pool()
            pool.add_liquidity(100_000_000).unwrap()
            owed = scaled_multiply(PRICE, staked)
            received = pool.swap(staked).unwrap()
            fees.append(scaled_divide(owed - received, owed))

        assert fees == sorted(fees)
        assert len(set(fees)) == len(fees)
        assert all(1_000 < fee <= 90_000 for fee in fees)


class TestSwapRejections:
    """Tests for rejected swaps."""

    def test_zero_swap_rejected(self, funded_pool: LpPool):
        """Swapping zero fails."""
        result = funded_pool.swap(0)
        assert result.error is PoolError.INVALID_SWAP_AMOUNT
        assert funded_pool.snapshot() == PoolState(100_000_000, 0, 100_000_000)

    def test_swap_on_empty_pool(self, pool: LpPool):
        """An empty pool cannot pay anything: max swappable is zero."""
        result = pool.swap(1)
        assert result.error is PoolError.TO_BIG_SWAP
        assert result.max_swap == 0
        assert pool.snapshot() == PoolState(0, 0, 0)

    def test_too_big_swap_reports_max(self, funded_pool: LpPool):
        """120 tokens owed exceeds what 100 can cover at 9%."""
        result = funded_pool.swap(80_000_000)

        assert result.error is PoolError.TO_BIG_SWAP
        # (100 - 9%) / 1.5
        assert result.max_swap == 60_666_666
        assert funded_pool.snapshot() == PoolState(100_000_000, 0, 100_000_000)

    def test_reported_max_swap_succeeds(self, funded_pool: LpPool):
        """Retrying with the reported maximum goes through."""
        max_swap = funded_pool.swap(80_000_000).max_swap
        assert max_swap is not None

        received = funded_pool.swap(max_swap).unwrap()

        assert received == 83_619_900
        assert funded_pool.base_reserve == 16_380_100

    def test_unwrap_carries_max_swap(self, funded_pool: LpPool):
        """unwrap() raises with the payload attached."""
        with pytest.raises(PoolOperationError) as exc_info:
            funded_pool.swap(80_000_000).unwrap()
        assert exc_info.value.error is PoolError.TO_BIG_SWAP
        assert exc_info.value.max_swap == 60_666_666

    def test_non_int_amount_raises(self, funded_pool: LpPool):
        """Amounts must be ints."""
        with pytest.raises(TypeError):
            funded_pool.swap("6000000")  # type: ignore[arg-type]
