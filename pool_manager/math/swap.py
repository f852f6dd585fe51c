"""Swap and offer computations for both curve models.

Forward (compute_swap): given an offer amount, how much of the ask asset
the pool returns, and what spread and fees that swap carries.

Reverse (compute_offer_amount, compute_stableswap_offer_amount): given a
desired ask amount net of fees, how much must be offered.

Rounding always favours the pool:
- Return amounts and fees are rounded down
- Offer amounts are rounded up
- Stableswap returns give up one extra unit at the normalised precision
"""

from __future__ import annotations

from dataclasses import dataclass

from pool_manager.math.fixed_point import Ratio
from pool_manager.math.stableswap import (
    DEFAULT_SOLVER_SETTINGS,
    SolverSettings,
    StableSwapDirection,
    calculate_stableswap_y,
)
from pool_manager.models.pool import ConstantProduct, PoolFees, PoolType, StableSwap
from pool_manager.models.responses import ReverseSimulationResponse, SimulationResponse
from pool_manager.safe_int import S


@dataclass(frozen=True)
class FeeAmounts:
    """Fees charged on a gross return, each rounded down."""

    swap_fee_amount: int
    protocol_fee_amount: int
    burn_fee_amount: int
    extra_fees_amount: int

    @property
    def total(self) -> int:
        return (
            self.swap_fee_amount
            + self.protocol_fee_amount
            + self.burn_fee_amount
            + self.extra_fees_amount
        )


@dataclass(frozen=True)
class SwapComputation:
    """Result of pricing a swap from its offer amount.

    All amounts are in the ask asset's native precision.
    """

    return_amount: int
    spread_amount: int
    swap_fee_amount: int
    protocol_fee_amount: int
    burn_fee_amount: int
    extra_fees_amount: int

    @property
    def total_fees(self) -> int:
        return (
            self.swap_fee_amount
            + self.protocol_fee_amount
            + self.burn_fee_amount
            + self.extra_fees_amount
        )

    def to_simulation_response(self) -> SimulationResponse:
        return SimulationResponse(
            return_amount=self.return_amount,
            spread_amount=self.spread_amount,
            swap_fee_amount=self.swap_fee_amount,
            protocol_fee_amount=self.protocol_fee_amount,
            burn_fee_amount=self.burn_fee_amount,
            extra_fees_amount=self.extra_fees_amount,
        )


@dataclass(frozen=True)
class OfferAmountComputation:
    """Result of pricing a swap from its desired ask amount.

    offer_amount is in the offer asset's precision; spread and fees are in
    the ask asset's precision.
    """

    offer_amount: int
    spread_amount: int
    swap_fee_amount: int
    protocol_fee_amount: int
    burn_fee_amount: int
    extra_fees_amount: int

    def to_reverse_simulation_response(self) -> ReverseSimulationResponse:
        return ReverseSimulationResponse(
            offer_amount=self.offer_amount,
            spread_amount=self.spread_amount,
            swap_fee_amount=self.swap_fee_amount,
            protocol_fee_amount=self.protocol_fee_amount,
            burn_fee_amount=self.burn_fee_amount,
            extra_fees_amount=self.extra_fees_amount,
        )


# =============================================================================
# Precision helpers
# =============================================================================


def scale_up(amount: int, from_decimals: int, to_decimals: int) -> int:
    """Express amount with more decimals. Exact."""
    if to_decimals < from_decimals:
        raise ValueError(f"Cannot scale up from {from_decimals} to {to_decimals} decimals")
    return amount * 10 ** (to_decimals - from_decimals)


def scale_down(amount: int, from_decimals: int, to_decimals: int) -> int:
    """Express amount with fewer decimals, rounding down."""
    if to_decimals > from_decimals:
        raise ValueError(f"Cannot scale down from {from_decimals} to {to_decimals} decimals")
    return amount // 10 ** (from_decimals - to_decimals)


def scale_down_ceil(amount: int, from_decimals: int, to_decimals: int) -> int:
    """Express amount with fewer decimals, rounding up."""
    if to_decimals > from_decimals:
        raise ValueError(f"Cannot scale down from {from_decimals} to {to_decimals} decimals")
    return S(amount).ceiling_div(10 ** (from_decimals - to_decimals)).value


# =============================================================================
# Fees
# =============================================================================


def compute_fees(pool_fees: PoolFees, amount: int) -> FeeAmounts:
    """Apply every fee of the pool to amount, each rounded down."""
    extra_fees_amount = 0
    for extra_fee in pool_fees.extra_fees:
        extra_fees_amount += extra_fee.compute(amount)

    return FeeAmounts(
        swap_fee_amount=pool_fees.swap_fee.compute(amount),
        protocol_fee_amount=pool_fees.protocol_fee.compute(amount),
        burn_fee_amount=pool_fees.burn_fee.compute(amount),
        extra_fees_amount=extra_fees_amount,
    )


# =============================================================================
# Forward
# =============================================================================


def _constant_product_return(
    offer_pool: int, ask_pool: int, offer_amount: int
) -> tuple[int, int]:
    """Gross return and spread for x * y = k, before fees.

    return = ask - ceil(offer_pool * ask / (offer_pool + amount))
    spread = floor(amount * ask / offer_pool) - return
    """
    cp = S(offer_pool) * ask_pool
    remaining_ask = cp.ceiling_div(S(offer_pool) + offer_amount)
    gross_return = S(ask_pool) - remaining_ask

    ideal_return = S(offer_amount).multiply_ratio(ask_pool, offer_pool)
    spread = ideal_return.saturating_sub(gross_return)

    return gross_return.value, spread.value


def _stableswap_return(
    n_coins: int,
    offer_pool: int,
    ask_pool: int,
    offer_amount: int,
    amp: int,
    offer_decimals: int,
    ask_decimals: int,
    settings: SolverSettings,
) -> tuple[int, int]:
    """Gross return and spread on the stableswap curve, before fees.

    Balances are normalised to the larger of the two precisions so the
    invariant compares like with like.
    """
    precision = max(offer_decimals, ask_decimals)

    offer_pool_p = scale_up(offer_pool, offer_decimals, precision)
    ask_pool_p = scale_up(ask_pool, ask_decimals, precision)
    offer_amount_p = scale_up(offer_amount, offer_decimals, precision)

    new_ask_pool = calculate_stableswap_y(
        n_coins,
        offer_pool_p,
        ask_pool_p,
        offer_amount_p,
        amp,
        StableSwapDirection.SIMULATE,
        settings,
    )

    # One unit withheld against the rounding of y
    gross_return_p = S(ask_pool_p).saturating_sub(S(new_ask_pool) + 1)
    gross_return = scale_down(gross_return_p.value, precision, ask_decimals)

    offer_at_ask_precision = scale_down(offer_amount_p, precision, ask_decimals)
    spread = S(offer_at_ask_precision).saturating_sub(gross_return)

    return gross_return, spread.value


def compute_swap(
    n_coins: int,
    offer_pool: int,
    ask_pool: int,
    offer_amount: int,
    pool_fees: PoolFees,
    pool_type: PoolType,
    offer_decimals: int,
    ask_decimals: int,
    settings: SolverSettings = DEFAULT_SOLVER_SETTINGS,
) -> SwapComputation:
    """Price a swap of offer_amount against the pool.

    Args:
        n_coins: Number of assets in the pool
        offer_pool: Offer asset balance
        ask_pool: Ask asset balance
        offer_amount: Amount offered, in the offer asset's precision
        pool_fees: Fees charged on the gross return
        pool_type: Curve model
        offer_decimals: Precision of the offer asset
        ask_decimals: Precision of the ask asset
        settings: Newton solver bounds (stableswap only)

    Returns:
        SwapComputation in the ask asset's precision

    Raises:
        ConvergeError: If the stableswap solver does not converge
        DivisionByZero: If the offer pool is empty
        Underflow: If the fees exceed the gross return
        ConversionOverflow: If the return does not fit a Uint128
    """
    if isinstance(pool_type, ConstantProduct):
        gross_return, spread_amount = _constant_product_return(
            offer_pool, ask_pool, offer_amount
        )
    elif isinstance(pool_type, StableSwap):
        gross_return, spread_amount = _stableswap_return(
            n_coins,
            offer_pool,
            ask_pool,
            offer_amount,
            pool_type.amp,
            offer_decimals,
            ask_decimals,
            settings,
        )
    else:
        raise TypeError(f"Unsupported pool type: {type(pool_type).__name__}")

    fees = compute_fees(pool_fees, gross_return)
    return_amount = S(gross_return) - fees.total

    return SwapComputation(
        return_amount=return_amount.to_uint128(),
        spread_amount=spread_amount,
        swap_fee_amount=fees.swap_fee_amount,
        protocol_fee_amount=fees.protocol_fee_amount,
        burn_fee_amount=fees.burn_fee_amount,
        extra_fees_amount=fees.extra_fees_amount,
    )


# =============================================================================
# Reverse
# =============================================================================


def _gross_ask_amount(ask_amount: int, pool_fees: PoolFees) -> int:
    """Ask amount before fees: ceil(ask_amount / (1 - total_fee_share))."""
    return pool_fees.total_share().complement().div_ceil(ask_amount)


def compute_offer_amount(
    offer_pool: int,
    ask_pool: int,
    ask_amount: int,
    pool_fees: PoolFees,
) -> OfferAmountComputation:
    """Offer needed on a constant product pool to receive ask_amount net of fees.

    gross = ceil(ask_amount / (1 - fees))
    offer = ceil(offer_pool * ask_pool / (ask_pool - gross)) - offer_pool

    Raises:
        Underflow: If the gross ask amount exceeds the ask pool
        DivisionByZero: If the gross ask amount drains the ask pool exactly
        ConversionOverflow: If the offer amount does not fit a Uint128
    """
    gross_ask = _gross_ask_amount(ask_amount, pool_fees)

    cp = S(offer_pool) * ask_pool
    offer_amount = cp.ceiling_div(S(ask_pool) - gross_ask) - offer_pool

    ideal_return = offer_amount.multiply_ratio(ask_pool, offer_pool)
    spread = ideal_return.saturating_sub(gross_ask)

    fees = compute_fees(pool_fees, gross_ask)

    return OfferAmountComputation(
        offer_amount=offer_amount.to_uint128(),
        spread_amount=spread.value,
        swap_fee_amount=fees.swap_fee_amount,
        protocol_fee_amount=fees.protocol_fee_amount,
        burn_fee_amount=fees.burn_fee_amount,
        extra_fees_amount=fees.extra_fees_amount,
    )


def compute_stableswap_offer_amount(
    n_coins: int,
    offer_pool: int,
    ask_pool: int,
    ask_amount: int,
    pool_fees: PoolFees,
    amp: int,
    offer_decimals: int,
    ask_decimals: int,
    settings: SolverSettings = DEFAULT_SOLVER_SETTINGS,
) -> OfferAmountComputation:
    """Offer needed on a stableswap pool to receive ask_amount net of fees.

    Solves the invariant for the offer balance after the gross ask amount
    leaves the pool, then converts back to the offer precision rounding up.

    Raises:
        ConvergeError: If the solver does not converge
        Underflow: If the gross ask amount is not below the ask pool
    """
    precision = max(offer_decimals, ask_decimals)

    gross_ask = _gross_ask_amount(ask_amount, pool_fees)

    offer_pool_p = scale_up(offer_pool, offer_decimals, precision)
    ask_pool_p = scale_up(ask_pool, ask_decimals, precision)
    gross_ask_p = scale_up(gross_ask, ask_decimals, precision)

    new_offer_pool = calculate_stableswap_y(
        n_coins,
        offer_pool_p,
        ask_pool_p,
        gross_ask_p,
        amp,
        StableSwapDirection.REVERSE_SIMULATE,
        settings,
    )

    # One unit added against the rounding of y
    offer_amount_p = S(new_offer_pool) - offer_pool_p + 1
    offer_amount = S(scale_down_ceil(offer_amount_p.value, precision, offer_decimals))

    offer_at_ask_precision = scale_down(offer_amount_p.value, precision, ask_decimals)
    spread = S(offer_at_ask_precision).saturating_sub(gross_ask)

    fees = compute_fees(pool_fees, gross_ask)

    return OfferAmountComputation(
        offer_amount=offer_amount.to_uint128(),
        spread_amount=spread.value,
        swap_fee_amount=fees.swap_fee_amount,
        protocol_fee_amount=fees.protocol_fee_amount,
        burn_fee_amount=fees.burn_fee_amount,
        extra_fees_amount=fees.extra_fees_amount,
    )
