"""Withdraw liquidity by returning LP shares."""

from __future__ import annotations

import structlog

from pool_manager.context import ManagerContext, MessageInfo
from pool_manager.errors import InvalidLpShareToWithdraw, OperationDisabled
from pool_manager.messages import BankSend, BurnLp, Response
from pool_manager.models.coin import Coin
from pool_manager.safe_int import S

logger = structlog.get_logger()


def withdraw_liquidity(ctx: ManagerContext, info: MessageInfo, pool_identifier: str) -> Response:
    """Burn the LP shares sent in info.funds and refund the pool assets they claim.

    Each refund is floor(balance * burned / total_share). Zero refunds are
    left out.

    Raises:
        OperationDisabled: If withdrawals are toggled off
        UnExistingPool: If the pool is unknown
        InvalidLpShareToWithdraw: Unless exactly one coin of the pool's LP denom
            is sent, non-zero and not above the total share
    """
    if not ctx.config.feature_toggle.withdrawals_enabled:
        raise OperationDisabled("withdraw_liquidity")

    pool = ctx.registry.get(pool_identifier)

    if len(info.funds) != 1 or info.funds[0].denom != pool.lp_denom:
        raise InvalidLpShareToWithdraw()
    amount = info.funds[0].amount

    total_share = ctx.supply.total_share(pool.lp_denom)
    if amount == 0 or amount > total_share:
        raise InvalidLpShareToWithdraw()

    refunds: list[Coin] = []
    new_assets: list[Coin] = []
    for asset in pool.assets:
        refund = S(asset.amount).multiply_ratio(amount, total_share)
        new_assets.append(Coin(denom=asset.denom, amount=(S(asset.amount) - refund).value))
        if refund > 0:
            refunds.append(Coin(denom=asset.denom, amount=refund.value))

    response = Response()
    if refunds:
        response.add_message(BankSend(to_address=info.sender, amount=refunds))
    response.add_message(BurnLp(denom=pool.lp_denom, amount=amount))

    ctx.registry.save(pool.model_copy(update={"assets": new_assets}))

    logger.info(
        "liquidity_withdrawn",
        pool=pool_identifier,
        sender=info.sender,
        burned=amount,
        refunds=[str(refund) for refund in refunds],
    )

    return (
        response.add_attribute("action", "withdraw_liquidity")
        .add_attribute("sender", info.sender)
        .add_attribute("pool_identifier", pool_identifier)
        .add_attribute("withdrawn_share", amount)
        .add_attribute("refund_assets", ", ".join(str(refund) for refund in refunds))
    )
