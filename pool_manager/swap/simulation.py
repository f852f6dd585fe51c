"""Single-hop swap simulation."""

from __future__ import annotations

from pool_manager.context import ManagerContext
from pool_manager.math.stableswap import SolverSettings
from pool_manager.math.swap import (
    OfferAmountComputation,
    SwapComputation,
    compute_offer_amount,
    compute_stableswap_offer_amount,
    compute_swap,
)
from pool_manager.models.coin import Coin
from pool_manager.models.pool import ConstantProduct, Pool, StableSwap
from pool_manager.models.responses import ReverseSimulationResponse, SimulationResponse
from pool_manager.pools.registry import get_asset_indexes_in_pool


def simulate_pool_swap(
    pool: Pool, offer_asset: Coin, ask_denom: str, settings: SolverSettings
) -> SwapComputation:
    """Price offer_asset against pool, returning ask_denom."""
    pair = get_asset_indexes_in_pool(pool, offer_asset.denom, ask_denom)
    return compute_swap(
        len(pool.assets),
        pair.offer_pool,
        pair.ask_pool,
        offer_asset.amount,
        pool.pool_fees,
        pool.pool_type,
        pair.offer_decimals,
        pair.ask_decimals,
        settings,
    )


def reverse_simulate_pool_swap(
    pool: Pool, ask_asset: Coin, offer_denom: str, settings: SolverSettings
) -> OfferAmountComputation:
    """Offer of offer_denom needed for pool to return ask_asset net of fees."""
    pair = get_asset_indexes_in_pool(pool, offer_denom, ask_asset.denom)
    pool_type = pool.pool_type

    if isinstance(pool_type, ConstantProduct):
        return compute_offer_amount(
            pair.offer_pool,
            pair.ask_pool,
            ask_asset.amount,
            pool.pool_fees,
        )
    elif isinstance(pool_type, StableSwap):
        return compute_stableswap_offer_amount(
            len(pool.assets),
            pair.offer_pool,
            pair.ask_pool,
            ask_asset.amount,
            pool.pool_fees,
            pool_type.amp,
            pair.offer_decimals,
            pair.ask_decimals,
            settings,
        )
    else:
        raise TypeError(f"Unsupported pool type: {type(pool_type).__name__}")


def query_simulation(
    ctx: ManagerContext,
    offer_asset: Coin,
    ask_asset_denom: str,
    pool_identifier: str,
) -> SimulationResponse:
    """Simulate swapping offer_asset for ask_asset_denom in one pool.

    Raises:
        UnExistingPool: If the pool is unknown
        SameAsset: If offer and ask denoms are equal
        AssetMismatch: If a denom is not in the pool
    """
    pool = ctx.registry.get(pool_identifier)
    computation = simulate_pool_swap(
        pool, offer_asset, ask_asset_denom, ctx.config.solver_settings
    )
    return computation.to_simulation_response()


def query_reverse_simulation(
    ctx: ManagerContext,
    ask_asset: Coin,
    offer_asset_denom: str,
    pool_identifier: str,
) -> ReverseSimulationResponse:
    """Offer of offer_asset_denom needed to receive ask_asset from one pool.

    Raises:
        UnExistingPool: If the pool is unknown
        SameAsset: If offer and ask denoms are equal
        AssetMismatch: If a denom is not in the pool
    """
    pool = ctx.registry.get(pool_identifier)
    computation = reverse_simulate_pool_swap(
        pool, ask_asset, offer_asset_denom, ctx.config.solver_settings
    )
    return computation.to_reverse_simulation_response()
