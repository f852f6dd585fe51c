"""Read-only pool queries."""

from __future__ import annotations

from pool_manager.config import ManagerConfig
from pool_manager.context import ManagerContext
from pool_manager.models.coin import Coin
from pool_manager.models.pool import Pool
from pool_manager.models.responses import AssetDecimalsResponse, PoolInfoResponse, PoolsResponse


def _pool_info(ctx: ManagerContext, pool: Pool) -> PoolInfoResponse:
    total_share = ctx.supply.total_share(pool.lp_denom)
    return PoolInfoResponse(
        pool_info=pool,
        total_share=Coin(denom=pool.lp_denom, amount=total_share),
    )


def query_pools(
    ctx: ManagerContext,
    pool_identifier: str | None = None,
    start_after: str | None = None,
    limit: int | None = None,
) -> PoolsResponse:
    """One pool by identifier, or a page of pools in identifier order.

    Each pool is returned with its current LP supply.

    Raises:
        UnExistingPool: If pool_identifier is given and unknown
    """
    if pool_identifier is not None:
        pools = [ctx.registry.get(pool_identifier)]
    else:
        pools = ctx.registry.list(start_after=start_after, limit=limit)
    return PoolsResponse(pools=[_pool_info(ctx, pool) for pool in pools])


def query_asset_decimals(
    ctx: ManagerContext, pool_identifier: str, denom: str
) -> AssetDecimalsResponse:
    """Decimal precision of denom in the given pool.

    Raises:
        UnExistingPool: If the pool is unknown
        AssetMismatch: If the denom is not in the pool
    """
    pool = ctx.registry.get(pool_identifier)
    index = pool.asset_index(denom)
    return AssetDecimalsResponse(
        pool_identifier=pool_identifier,
        denom=denom,
        decimals=pool.asset_decimals[index],
    )


def query_config(ctx: ManagerContext) -> ManagerConfig:
    return ctx.config
