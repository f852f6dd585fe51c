"""Single-sided deposits as a two-phase continuation.

Phase 1 (start_single_side_provision): half of the deposit is priced
against the pool, the expected post-swap contract balances are recorded in
a SingleSideProvisionBuffer and a DeferredSwap is emitted.

Phase 2 (handle_swap_confirmation): the outcome of the deferred swap
arrives. On success the realised balances are checked against the
expectations and the buffered deposit is completed as a symmetric deposit.
On failure the deposit is refunded. The buffer is removed either way.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from pool_manager.context import ManagerContext, MessageInfo
from pool_manager.errors import (
    EmptyPoolForSingleSideLiquidityProvision,
    InvalidPoolAssetsForSingleSideLiquidityProvision,
    InvalidSingleSideLiquidityProvisionSwap,
    MaxSpreadAssertion,
    NoPendingProvision,
)
from pool_manager.liquidity.symmetric import provide_symmetric_liquidity
from pool_manager.math.liquidity import aggregate_outgoing_fees
from pool_manager.messages import BankSend, DeferredSwap, Response
from pool_manager.models.coin import Coin
from pool_manager.models.pool import Pool
from pool_manager.provisions import ProvisionRequest, SingleSideProvisionBuffer
from pool_manager.safe_int import S
from pool_manager.swap.simulation import query_simulation

logger = structlog.get_logger()


@dataclass(frozen=True)
class SwapConfirmation:
    """Outcome of a DeferredSwap, correlated by provision_id."""

    provision_id: str
    success: bool
    error: str | None = None


def start_single_side_provision(
    ctx: ManagerContext,
    info: MessageInfo,
    pool: Pool,
    deposit: Coin,
    receiver: str,
    request: ProvisionRequest,
) -> Response:
    """Phase 1 of a single-sided deposit.

    Raises:
        InvalidPoolAssetsForSingleSideLiquidityProvision: Unless the pool holds 2 assets
        EmptyPoolForSingleSideLiquidityProvision: If a pool balance is zero
        MaxSpreadAssertion: If the expected ask balance after the swap is zero
        ProvisionAlreadyPending: If a buffer is pending for info.tx_id
    """
    if len(pool.assets) != 2:
        raise InvalidPoolAssetsForSingleSideLiquidityProvision()
    if any(asset.amount == 0 for asset in pool.assets):
        raise EmptyPoolForSingleSideLiquidityProvision()

    ask_denom = next(asset.denom for asset in pool.assets if asset.denom != deposit.denom)
    offer_half = deposit.amount // 2

    simulation = query_simulation(
        ctx,
        Coin(denom=deposit.denom, amount=offer_half),
        ask_denom,
        pool.pool_identifier,
    )

    # The swap moves funds within the pool manager; only the outgoing fees
    # leave its balance.
    offer_balance = ctx.balances.balance_of(ctx.contract_address, deposit.denom)
    ask_balance = ctx.balances.balance_of(ctx.contract_address, ask_denom)
    expected_ask_balance = S(ask_balance).saturating_sub(aggregate_outgoing_fees(simulation))

    if expected_ask_balance == 0:
        raise MaxSpreadAssertion()

    buffer = SingleSideProvisionBuffer(
        sender=info.sender,
        receiver=receiver,
        offer_denom=deposit.denom,
        ask_denom=ask_denom,
        expected_offer_balance=offer_balance,
        expected_ask_balance=expected_ask_balance.value,
        offer_half=offer_half,
        provide_offer_amount=deposit.amount - offer_half,
        expected_ask_amount=simulation.return_amount,
        request=request,
    )
    ctx.provisions.save(info.tx_id, buffer)

    logger.info(
        "single_side_provision_started",
        provision_id=info.tx_id,
        pool=pool.pool_identifier,
        deposit=str(deposit),
        offer_half=offer_half,
        expected_ask_amount=simulation.return_amount,
    )

    return (
        Response()
        .add_message(
            DeferredSwap(
                provision_id=info.tx_id,
                pool_identifier=pool.pool_identifier,
                offer=Coin(denom=deposit.denom, amount=offer_half),
                ask_denom=ask_denom,
                max_spread=request.max_spread,
            )
        )
        .add_attribute("action", "single_side_liquidity_provision")
        .add_attribute("sender", info.sender)
        .add_attribute("receiver", receiver)
        .add_attribute("pool_identifier", pool.pool_identifier)
        .add_attribute("offer_half", offer_half)
    )


def _check_balance(expected: int, actual: int, tolerance: int) -> None:
    if S(actual).abs_diff(expected) > tolerance:
        raise InvalidSingleSideLiquidityProvisionSwap(expected=expected, actual=actual)


def handle_swap_confirmation(ctx: ManagerContext, confirmation: SwapConfirmation) -> Response:
    """Phase 2 of a single-sided deposit.

    The buffer is consumed before anything else, so a confirmation is acted
    on at most once and no buffer outlives it, whether this call succeeds,
    refunds or raises.

    Raises:
        NoPendingProvision: If no buffer is pending for the provision id
        InvalidSingleSideLiquidityProvisionSwap: If realised balances drift
            from the expected ones beyond config.provision_drift_tolerance
    """
    buffer = ctx.provisions.take(confirmation.provision_id)
    if buffer is None:
        raise NoPendingProvision(confirmation.provision_id)

    request = buffer.request

    if not confirmation.success:
        logger.warning(
            "single_side_provision_rolled_back",
            provision_id=confirmation.provision_id,
            pool=request.pool_identifier,
            error=confirmation.error,
        )
        refund = Coin(
            denom=buffer.offer_denom,
            amount=buffer.offer_half + buffer.provide_offer_amount,
        )
        return (
            Response()
            .add_message(BankSend(to_address=buffer.sender, amount=[refund]))
            .add_attribute("action", "single_side_liquidity_provision_rollback")
            .add_attribute("provision_id", confirmation.provision_id)
            .add_attribute("refund", refund)
        )

    tolerance = ctx.config.provision_drift_tolerance
    _check_balance(
        buffer.expected_offer_balance,
        ctx.balances.balance_of(ctx.contract_address, buffer.offer_denom),
        tolerance,
    )
    _check_balance(
        buffer.expected_ask_balance,
        ctx.balances.balance_of(ctx.contract_address, buffer.ask_denom),
        tolerance,
    )

    pool = ctx.registry.get(request.pool_identifier)
    deposits = [
        Coin(denom=buffer.offer_denom, amount=buffer.provide_offer_amount),
        Coin(denom=buffer.ask_denom, amount=buffer.expected_ask_amount),
    ]

    logger.info(
        "single_side_provision_resumed",
        provision_id=confirmation.provision_id,
        pool=request.pool_identifier,
    )

    return provide_symmetric_liquidity(
        ctx,
        pool,
        deposits,
        sender=buffer.sender,
        receiver=buffer.receiver,
        slippage_tolerance=request.slippage_tolerance,
        unlocking_duration=request.unlocking_duration,
        lock_position_identifier=request.lock_position_identifier,
    ).add_attribute("provision_id", confirmation.provision_id)
