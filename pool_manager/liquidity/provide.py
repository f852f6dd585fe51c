"""Provide liquidity: entry point dispatching to the symmetric and single-sided paths."""

from __future__ import annotations

from pool_manager.context import ManagerContext, MessageInfo
from pool_manager.errors import AssetMismatch, EmptyAssets, OperationDisabled, Unauthorized
from pool_manager.liquidity.single_side import start_single_side_provision
from pool_manager.liquidity.symmetric import provide_symmetric_liquidity
from pool_manager.math.fixed_point import Ratio
from pool_manager.messages import Response
from pool_manager.models.coin import aggregate_coins
from pool_manager.provisions import ProvisionRequest


def provide_liquidity(
    ctx: ManagerContext,
    info: MessageInfo,
    pool_identifier: str,
    slippage_tolerance: Ratio | None = None,
    max_spread: Ratio | None = None,
    receiver: str | None = None,
    unlocking_duration: int | None = None,
    lock_position_identifier: str | None = None,
) -> Response:
    """Deposit the coins sent in info.funds into a pool.

    One denom starts a single-sided deposit (phase 1, see
    liquidity.single_side). Two or more denoms are deposited at once.

    Args:
        ctx: Execution context
        info: Sender and attached funds
        pool_identifier: Target pool
        slippage_tolerance: Largest accepted deviation from the pool ratio
        max_spread: Spread limit for the half-swap of a single-sided deposit
        receiver: Recipient of the LP shares, defaults to the sender
        unlocking_duration: Lock the shares in a position with this duration
        lock_position_identifier: Existing position to expand, or new position id

    Raises:
        OperationDisabled: If deposits are toggled off
        EmptyAssets: If no non-zero coin is sent
        AssetMismatch: If a denom is not in the pool
        Unauthorized: If locking on behalf of another receiver
    """
    if not ctx.config.feature_toggle.deposits_enabled:
        raise OperationDisabled("provide_liquidity")

    pool = ctx.registry.get(pool_identifier)

    deposits = [deposit for deposit in aggregate_coins(info.funds) if deposit.amount > 0]
    if not deposits:
        raise EmptyAssets()

    for deposit in deposits:
        if not pool.has_denom(deposit.denom):
            raise AssetMismatch(f"{deposit.denom} is not in pool {pool_identifier}")

    receiver = receiver or info.sender
    if unlocking_duration is not None and receiver != info.sender:
        raise Unauthorized("Cannot lock liquidity on behalf of another address")

    if len(deposits) == 1:
        request = ProvisionRequest(
            pool_identifier=pool_identifier,
            slippage_tolerance=slippage_tolerance,
            max_spread=max_spread,
            unlocking_duration=unlocking_duration,
            lock_position_identifier=lock_position_identifier,
        )
        return start_single_side_provision(ctx, info, pool, deposits[0], receiver, request)

    return provide_symmetric_liquidity(
        ctx,
        pool,
        deposits,
        sender=info.sender,
        receiver=receiver,
        slippage_tolerance=slippage_tolerance,
        unlocking_duration=unlocking_duration,
        lock_position_identifier=lock_position_identifier,
    )
