"""Symmetric deposits: LP shares for a deposit of two or more pool assets."""

from __future__ import annotations

import structlog

from pool_manager.constants import MINIMUM_LIQUIDITY_AMOUNT
from pool_manager.context import ManagerContext
from pool_manager.errors import (
    LiquidityShareComputationFailed,
    StableLpMintError,
    Unauthorized,
)
from pool_manager.math.fixed_point import Ratio
from pool_manager.math.liquidity import (
    assert_slippage_tolerance,
    compute_constant_product_share,
    compute_initial_share,
    compute_lp_mint_amount_for_stableswap_deposit,
    normalize_amounts,
)
from pool_manager.messages import ManagePosition, MintLp, PositionAction, Response
from pool_manager.models.coin import Coin
from pool_manager.models.pool import ConstantProduct, Pool, StableSwap
from pool_manager.safe_int import S

logger = structlog.get_logger()


def curve_amounts(pool: Pool, amounts: list[int]) -> tuple[list[int], list[int]]:
    """Deposits and pool balances in the units the pool's curve works in.

    Stableswap sums balances across assets, so both are normalised to a
    common precision. Constant product works on native amounts.
    """
    balances = [asset.amount for asset in pool.assets]
    if isinstance(pool.pool_type, StableSwap):
        return (
            normalize_amounts(amounts, pool.asset_decimals),
            normalize_amounts(balances, pool.asset_decimals),
        )
    return list(amounts), balances


def compute_share(ctx: ManagerContext, pool: Pool, amounts: list[int], total_share: int) -> int:
    """LP shares minted for amounts, aligned with pool.assets.

    Raises:
        InvalidInitialLiquidityAmount: If a first deposit is too small
        StableLpMintError: If a stableswap deposit does not grow the invariant
        LiquidityShareComputationFailed: If the deposit is worth no share
    """
    settings = ctx.config.solver_settings
    pool_type = pool.pool_type
    deposits, balances = curve_amounts(pool, amounts)

    if total_share == 0:
        share = compute_initial_share(pool_type, deposits, settings)
    elif isinstance(pool_type, ConstantProduct):
        share = compute_constant_product_share(deposits, balances, total_share)
    elif isinstance(pool_type, StableSwap):
        new_balances = [b + d for b, d in zip(balances, deposits)]
        minted = compute_lp_mint_amount_for_stableswap_deposit(
            pool_type.amp, balances, new_balances, total_share, settings
        )
        if minted is None:
            raise StableLpMintError()
        share = minted
    else:
        raise TypeError(f"Unsupported pool type: {type(pool_type).__name__}")

    if share == 0:
        raise LiquidityShareComputationFailed()
    return share


def provide_symmetric_liquidity(
    ctx: ManagerContext,
    pool: Pool,
    deposits: list[Coin],
    sender: str,
    receiver: str,
    slippage_tolerance: Ratio | None = None,
    unlocking_duration: int | None = None,
    lock_position_identifier: str | None = None,
) -> Response:
    """Deposit coins already held by the pool manager into pool.

    Callers have checked that every deposit denom belongs to the pool and,
    when locking, that receiver is the sender.

    Raises:
        Unauthorized: If the position to expand belongs to someone else
        MaxSlippageAssertion: If the deposit ratio strays too far
    """
    total_share = ctx.supply.total_share(pool.lp_denom)

    deposited = {deposit.denom: deposit.amount for deposit in deposits}
    amounts = [deposited.get(asset.denom, 0) for asset in pool.assets]

    share = compute_share(ctx, pool, amounts, total_share)

    curve_deposits, curve_balances = curve_amounts(pool, amounts)
    assert_slippage_tolerance(
        slippage_tolerance,
        curve_deposits,
        curve_balances,
        pool.pool_type,
        share,
        total_share,
    )

    response = Response()

    if total_share == 0:
        # Locked forever in the pool manager
        response.add_message(
            MintLp(
                denom=pool.lp_denom,
                amount=MINIMUM_LIQUIDITY_AMOUNT,
                recipient=ctx.contract_address,
            )
        )

    if unlocking_duration is not None:
        position = None
        if lock_position_identifier is not None:
            position = ctx.positions.query_position(lock_position_identifier)

        if position is not None and position.receiver != receiver:
            raise Unauthorized(
                f"Position {lock_position_identifier} does not belong to {receiver}"
            )

        response.add_message(
            MintLp(denom=pool.lp_denom, amount=share, recipient=ctx.contract_address)
        )
        response.add_message(
            ManagePosition(
                contract_addr=ctx.config.farm_manager_addr,
                action=PositionAction.EXPAND if position is not None else PositionAction.CREATE,
                receiver=receiver,
                funds=[Coin(denom=pool.lp_denom, amount=share)],
                identifier=lock_position_identifier,
                unlocking_duration=unlocking_duration,
            )
        )
    else:
        response.add_message(MintLp(denom=pool.lp_denom, amount=share, recipient=receiver))

    new_assets = [
        Coin(denom=asset.denom, amount=S(asset.amount).checked_add_uint128(amount).value)
        for asset, amount in zip(pool.assets, amounts)
    ]
    ctx.registry.save(pool.model_copy(update={"assets": new_assets}))

    logger.info(
        "liquidity_provided",
        pool=pool.pool_identifier,
        sender=sender,
        receiver=receiver,
        deposits=[str(deposit) for deposit in deposits],
        share=share,
        locked=unlocking_duration is not None,
    )

    return (
        response.add_attribute("action", "provide_liquidity")
        .add_attribute("sender", sender)
        .add_attribute("receiver", receiver)
        .add_attribute("pool_identifier", pool.pool_identifier)
        .add_attribute("assets", ", ".join(str(deposit) for deposit in deposits))
        .add_attribute("added_shares", share)
    )
