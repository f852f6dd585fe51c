"""Multi-hop simulation through a chain of pools.

Forward chains thread each hop's return into the next hop's offer. Reverse
chains walk the hops back to front, threading each hop's required offer
into the previous hop's ask. Spreads and fees are collected per hop in the
hop's ask denom and aggregated by denom at the end.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

import structlog

from pool_manager.context import ManagerContext
from pool_manager.errors import NoSwapOperationsProvided
from pool_manager.models.coin import Coin, aggregate_coins
from pool_manager.models.responses import (
    ReverseSimulateSwapOperationsResponse,
    ReverseSimulationResponse,
    SimulateSwapOperationsResponse,
    SimulationResponse,
    SwapOperation,
)
from pool_manager.swap.simulation import query_reverse_simulation, query_simulation

logger = structlog.get_logger()


@dataclass
class _HopCosts:
    """Per-denom spreads and fees accumulated along a chain."""

    spreads: list[Coin] = field(default_factory=list)
    swap_fees: list[Coin] = field(default_factory=list)
    protocol_fees: list[Coin] = field(default_factory=list)
    burn_fees: list[Coin] = field(default_factory=list)
    extra_fees: list[Coin] = field(default_factory=list)

    def record(
        self, denom: str, simulation: SimulationResponse | ReverseSimulationResponse
    ) -> None:
        for target, amount in (
            (self.spreads, simulation.spread_amount),
            (self.swap_fees, simulation.swap_fee_amount),
            (self.protocol_fees, simulation.protocol_fee_amount),
            (self.burn_fees, simulation.burn_fee_amount),
            (self.extra_fees, simulation.extra_fees_amount),
        ):
            if amount > 0:
                target.append(Coin(denom=denom, amount=amount))

    def aggregated(self) -> dict[str, list[Coin]]:
        return {
            "spreads": aggregate_coins(self.spreads),
            "swap_fees": aggregate_coins(self.swap_fees),
            "protocol_fees": aggregate_coins(self.protocol_fees),
            "burn_fees": aggregate_coins(self.burn_fees),
            "extra_fees": aggregate_coins(self.extra_fees),
        }


def simulate_swap_operations(
    ctx: ManagerContext,
    offer_amount: int,
    operations: Sequence[SwapOperation],
) -> SimulateSwapOperationsResponse:
    """Simulate a chain of swaps starting from offer_amount.

    Raises:
        NoSwapOperationsProvided: If operations is empty
    """
    if not operations:
        raise NoSwapOperationsProvided()

    costs = _HopCosts()
    amount = offer_amount

    for operation in operations:
        simulation = query_simulation(
            ctx,
            Coin(denom=operation.token_in_denom, amount=amount),
            operation.token_out_denom,
            operation.pool_identifier,
        )
        costs.record(operation.token_out_denom, simulation)
        amount = simulation.return_amount

    logger.debug(
        "swap_operations_simulated",
        hops=len(operations),
        offer_amount=offer_amount,
        return_amount=amount,
    )
    return SimulateSwapOperationsResponse(return_amount=amount, **costs.aggregated())


def reverse_simulate_swap_operations(
    ctx: ManagerContext,
    ask_amount: int,
    operations: Sequence[SwapOperation],
) -> ReverseSimulateSwapOperationsResponse:
    """Offer needed at the start of a chain to receive ask_amount at its end.

    Raises:
        NoSwapOperationsProvided: If operations is empty
    """
    if not operations:
        raise NoSwapOperationsProvided()

    costs = _HopCosts()
    amount = ask_amount

    for operation in reversed(operations):
        simulation = query_reverse_simulation(
            ctx,
            Coin(denom=operation.token_out_denom, amount=amount),
            operation.token_in_denom,
            operation.pool_identifier,
        )
        costs.record(operation.token_out_denom, simulation)
        amount = simulation.offer_amount

    logger.debug(
        "swap_operations_reverse_simulated",
        hops=len(operations),
        ask_amount=ask_amount,
        offer_amount=amount,
    )
    return ReverseSimulateSwapOperationsResponse(offer_amount=amount, **costs.aggregated())
