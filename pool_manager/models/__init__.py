"""Pydantic models for pools, coins and query responses."""

from pool_manager.models.coin import Coin, add_coins, aggregate_coins, coin
from pool_manager.models.pool import (
    ConstantProduct,
    Fee,
    Pool,
    PoolFees,
    PoolType,
    StableSwap,
)
from pool_manager.models.responses import (
    AssetDecimalsResponse,
    PoolInfoResponse,
    PoolsResponse,
    ReverseSimulateSwapOperationsResponse,
    ReverseSimulationResponse,
    SimulateSwapOperationsResponse,
    SimulationResponse,
    SwapOperation,
)
from pool_manager.models.types import Uint128, validate_uint128

__all__ = [
    # Coins
    "Coin",
    "coin",
    "aggregate_coins",
    "add_coins",
    # Pools
    "ConstantProduct",
    "StableSwap",
    "PoolType",
    "Fee",
    "PoolFees",
    "Pool",
    # Responses
    "SwapOperation",
    "SimulationResponse",
    "ReverseSimulationResponse",
    "SimulateSwapOperationsResponse",
    "ReverseSimulateSwapOperationsResponse",
    "PoolInfoResponse",
    "PoolsResponse",
    "AssetDecimalsResponse",
    # Types
    "Uint128",
    "validate_uint128",
]
