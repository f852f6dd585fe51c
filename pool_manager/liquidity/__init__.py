"""Liquidity controller.

Module structure:
- provide.py: provide_liquidity entry point
- symmetric.py: deposits of two or more pool assets
- single_side.py: two-phase single-sided deposits
- withdraw.py: withdraw_liquidity
"""

from pool_manager.liquidity.provide import provide_liquidity
from pool_manager.liquidity.single_side import SwapConfirmation, handle_swap_confirmation
from pool_manager.liquidity.withdraw import withdraw_liquidity

__all__ = [
    "provide_liquidity",
    "withdraw_liquidity",
    "handle_swap_confirmation",
    "SwapConfirmation",
]
