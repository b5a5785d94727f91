"""Mathematical utilities for the pool.

This package provides the fixed-point primitives all pool math uses:
- scaled_multiply / scaled_divide: 6-decimal truncating helpers
- Fp: 6-decimal fixed-point value (fees, prices, ratios)
"""

from lp_pool.math.fixed_point import SCALE, Fp, scaled_divide, scaled_multiply

__all__ = ["SCALE", "Fp", "scaled_divide", "scaled_multiply"]
