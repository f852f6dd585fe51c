"""Swap execution against a single pool."""

from __future__ import annotations

import structlog

from pool_manager.context import ManagerContext, MessageInfo
from pool_manager.errors import InvalidFunds, OperationDisabled
from pool_manager.math.fixed_point import Ratio
from pool_manager.math.liquidity import aggregate_outgoing_fees, assert_max_spread
from pool_manager.messages import BankSend, Burn, Response
from pool_manager.models.coin import Coin
from pool_manager.pools.registry import get_asset_indexes_in_pool
from pool_manager.safe_int import S
from pool_manager.swap.simulation import simulate_pool_swap

logger = structlog.get_logger()


def swap(
    ctx: ManagerContext,
    info: MessageInfo,
    ask_asset_denom: str,
    pool_identifier: str,
    belief_price: Ratio | None = None,
    max_spread: Ratio | None = None,
    receiver: str | None = None,
) -> Response:
    """Swap the single coin sent in info.funds for ask_asset_denom.

    The offer is added to the pool. The return and the outgoing fees
    (protocol, burn, extra) leave the pool; the swap fee stays in it.

    Raises:
        OperationDisabled: If swaps are toggled off
        InvalidFunds: Unless exactly one non-zero coin is sent
        UnExistingPool, SameAsset, AssetMismatch: On bad pool or denoms
        MaxSpreadAssertion: If the spread exceeds max_spread
    """
    if not ctx.config.feature_toggle.swaps_enabled:
        raise OperationDisabled("swap")

    if len(info.funds) != 1 or info.funds[0].amount == 0:
        raise InvalidFunds("A swap takes exactly one non-zero offer coin")
    offer_asset = info.funds[0]
    receiver = receiver or info.sender

    pool = ctx.registry.get(pool_identifier)
    pair = get_asset_indexes_in_pool(pool, offer_asset.denom, ask_asset_denom)

    computation = simulate_pool_swap(
        pool, offer_asset, ask_asset_denom, ctx.config.solver_settings
    )
    assert_max_spread(
        belief_price,
        max_spread,
        offer_asset.amount,
        computation.return_amount,
        computation.spread_amount,
    )

    outgoing_fees = aggregate_outgoing_fees(computation)
    new_assets = list(pool.assets)
    new_assets[pair.offer_index] = Coin(
        denom=offer_asset.denom,
        amount=S(pair.offer_pool).checked_add_uint128(offer_asset.amount).value,
    )
    new_assets[pair.ask_index] = Coin(
        denom=ask_asset_denom,
        amount=(S(pair.ask_pool) - computation.return_amount - outgoing_fees).value,
    )

    response = Response()
    if computation.return_amount > 0:
        response.add_message(
            BankSend(
                to_address=receiver,
                amount=[Coin(denom=ask_asset_denom, amount=computation.return_amount)],
            )
        )
    fee_collector_amount = computation.protocol_fee_amount + computation.extra_fees_amount
    if fee_collector_amount > 0:
        response.add_message(
            BankSend(
                to_address=ctx.config.fee_collector_addr,
                amount=[Coin(denom=ask_asset_denom, amount=fee_collector_amount)],
            )
        )
    if computation.burn_fee_amount > 0:
        response.add_message(
            Burn(amount=[Coin(denom=ask_asset_denom, amount=computation.burn_fee_amount)])
        )

    ctx.registry.save(pool.model_copy(update={"assets": new_assets}))

    logger.info(
        "swap_executed",
        pool=pool_identifier,
        offer=str(offer_asset),
        ask_denom=ask_asset_denom,
        return_amount=computation.return_amount,
        spread_amount=computation.spread_amount,
    )

    return (
        response.add_attribute("action", "swap")
        .add_attribute("sender", info.sender)
        .add_attribute("receiver", receiver)
        .add_attribute("pool_identifier", pool_identifier)
        .add_attribute("offer_denom", offer_asset.denom)
        .add_attribute("ask_denom", ask_asset_denom)
        .add_attribute("offer_amount", offer_asset.amount)
        .add_attribute("return_amount", computation.return_amount)
        .add_attribute("spread_amount", computation.spread_amount)
        .add_attribute("swap_fee_amount", computation.swap_fee_amount)
        .add_attribute("protocol_fee_amount", computation.protocol_fee_amount)
        .add_attribute("burn_fee_amount", computation.burn_fee_amount)
        .add_attribute("extra_fees_amount", computation.extra_fees_amount)
    )
