"""Integer math for the pool manager.

- Ratio: 18-decimal fixed-point fee shares, tolerances and prices
- stableswap: Newton-Raphson solvers for the stableswap invariant
- swap: forward and reverse swap pricing (import from pool_manager.math.swap)
- liquidity: LP share and guardrail math (import from pool_manager.math.liquidity)
"""

from pool_manager.math.fixed_point import Ratio
from pool_manager.math.stableswap import (
    DEFAULT_SOLVER_SETTINGS,
    SolverSettings,
    StableSwapDirection,
    calculate_stableswap_y,
    compute_d,
)

__all__ = [
    "Ratio",
    "SolverSettings",
    "DEFAULT_SOLVER_SETTINGS",
    "StableSwapDirection",
    "compute_d",
    "calculate_stableswap_y",
]
