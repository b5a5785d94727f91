"""Pool constants.

Centralizes the fixed-point scale and the parameters of the built-in
demonstration scenario.
"""

# Fixed-point scale for prices, fees and ratios (6 decimals)
# 1_500_000 = 1.5, 1_000 = 0.1%
SCALE = 1_000_000

# Every token amount entering or leaving the pool is a u64
UINT64_MAX = 2**64 - 1

# Demonstration pool: price 1.5, fees 0.1% to 9%, target 90 tokens
DEMO_PRICE = 1_500_000
DEMO_MIN_FEE = 1_000
DEMO_MAX_FEE = 90_000
DEMO_LIQUIDITY_TARGET = 90 * SCALE
