"""Swap simulation, multi-hop chains and execution.

Module structure:
- simulation.py: single-hop forward and reverse simulation
- operations.py: forward and reverse chains through several pools
- execute.py: swap execution updating pool balances
"""

from pool_manager.swap.execute import swap
from pool_manager.swap.operations import (
    reverse_simulate_swap_operations,
    simulate_swap_operations,
)
from pool_manager.swap.simulation import query_reverse_simulation, query_simulation

__all__ = [
    "query_simulation",
    "query_reverse_simulation",
    "simulate_swap_operations",
    "reverse_simulate_swap_operations",
    "swap",
]
