"""Read-only query endpoints for the pool manager."""

from functools import lru_cache

import structlog
from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from pool_manager.config import ManagerConfig
from pool_manager.context import ManagerContext
from pool_manager.ledger import build_context_from_snapshots
from pool_manager.models.coin import Coin
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
from pool_manager.models.types import Denom, PoolIdentifier, Uint128
from pool_manager.pools.loader import load_pools_file
from pool_manager.queries import query_asset_decimals, query_pools
from pool_manager.swap.operations import (
    reverse_simulate_swap_operations,
    simulate_swap_operations,
)
from pool_manager.swap.simulation import query_reverse_simulation, query_simulation

logger = structlog.get_logger()

router = APIRouter()


@lru_cache(maxsize=1)
def get_default_context() -> ManagerContext:
    """Process-wide context over in-memory stores, configured from the environment.

    Pools come from the file named by POOL_MANAGER_POOLS_FILE.
    """
    config = ManagerConfig.from_env()
    if config.pools_file is None:
        logger.warning("no_pools_file", hint="set POOL_MANAGER_POOLS_FILE to serve pools")
        snapshots = []
    else:
        snapshots = load_pools_file(config.pools_file)
    return build_context_from_snapshots(snapshots, config=config)


def get_context() -> ManagerContext:
    """Dependency provider for the manager context.

    Override this in tests to serve a prepared context:
        app.dependency_overrides[get_context] = lambda: ctx
    """
    return get_default_context()


class SimulationRequest(BaseModel):
    offer_asset: Coin
    ask_asset_denom: Denom
    pool_identifier: PoolIdentifier


class ReverseSimulationRequest(BaseModel):
    ask_asset: Coin
    offer_asset_denom: Denom
    pool_identifier: PoolIdentifier


class SimulateSwapOperationsRequest(BaseModel):
    offer_amount: Uint128
    operations: list[SwapOperation] = Field(default_factory=list)


class ReverseSimulateSwapOperationsRequest(BaseModel):
    ask_amount: Uint128
    operations: list[SwapOperation] = Field(default_factory=list)


@router.get("/pools")
def list_pools(
    start_after: str | None = None,
    limit: int | None = None,
    ctx: ManagerContext = Depends(get_context),
) -> PoolsResponse:
    """Page of pools in identifier order, each with its LP supply."""
    return query_pools(ctx, start_after=start_after, limit=limit)


@router.get("/pools/{pool_identifier:path}/decimals/{denom:path}")
def get_asset_decimals(
    pool_identifier: str,
    denom: str,
    ctx: ManagerContext = Depends(get_context),
) -> AssetDecimalsResponse:
    return query_asset_decimals(ctx, pool_identifier, denom)


@router.get("/pools/{pool_identifier:path}")
def get_pool(
    pool_identifier: str,
    ctx: ManagerContext = Depends(get_context),
) -> PoolInfoResponse:
    return query_pools(ctx, pool_identifier=pool_identifier).pools[0]


@router.post("/simulate")
def simulate(
    request: SimulationRequest,
    ctx: ManagerContext = Depends(get_context),
) -> SimulationResponse:
    """Simulate a single-hop swap."""
    logger.debug(
        "simulation_requested",
        pool=request.pool_identifier,
        offer=str(request.offer_asset),
        ask_denom=request.ask_asset_denom,
    )
    return query_simulation(
        ctx, request.offer_asset, request.ask_asset_denom, request.pool_identifier
    )


@router.post("/reverse-simulate")
def reverse_simulate(
    request: ReverseSimulationRequest,
    ctx: ManagerContext = Depends(get_context),
) -> ReverseSimulationResponse:
    """Offer needed for a single-hop swap to return the ask asset."""
    return query_reverse_simulation(
        ctx, request.ask_asset, request.offer_asset_denom, request.pool_identifier
    )


@router.post("/simulate-operations")
def simulate_operations(
    request: SimulateSwapOperationsRequest,
    ctx: ManagerContext = Depends(get_context),
) -> SimulateSwapOperationsResponse:
    """Simulate a multi-hop swap."""
    return simulate_swap_operations(ctx, request.offer_amount, request.operations)


@router.post("/reverse-simulate-operations")
def reverse_simulate_operations(
    request: ReverseSimulateSwapOperationsRequest,
    ctx: ManagerContext = Depends(get_context),
) -> ReverseSimulateSwapOperationsResponse:
    """Offer needed at the start of a multi-hop swap to return ask_amount."""
    return reverse_simulate_swap_operations(ctx, request.ask_amount, request.operations)
