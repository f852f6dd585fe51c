"""Pool Manager - pricing and liquidity core of a multi-pool AMM."""

from pool_manager.context import ManagerContext, MessageInfo
from pool_manager.liquidity import (
    SwapConfirmation,
    handle_swap_confirmation,
    provide_liquidity,
    withdraw_liquidity,
)
from pool_manager.swap import (
    query_reverse_simulation,
    query_simulation,
    reverse_simulate_swap_operations,
    simulate_swap_operations,
    swap,
)

__version__ = "0.1.0"
__all__ = [
    "ManagerContext",
    "MessageInfo",
    "provide_liquidity",
    "withdraw_liquidity",
    "handle_swap_confirmation",
    "SwapConfirmation",
    "query_simulation",
    "query_reverse_simulation",
    "simulate_swap_operations",
    "reverse_simulate_swap_operations",
    "swap",
    "__version__",
]
