"""LP share math and the economic guardrails applied to deposits and swaps."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from pool_manager.constants import (
    DEFAULT_MAX_SPREAD,
    MAX_ALLOWED_SPREAD,
    MINIMUM_LIQUIDITY_AMOUNT,
)
from pool_manager.errors import (
    InvalidBeliefPrice,
    InvalidInitialLiquidityAmount,
    InvalidPoolAssetsLength,
    InvalidSlippageTolerance,
    MaxSlippageAssertion,
    MaxSpreadAssertion,
    StableInvariantError,
)
from pool_manager.math.fixed_point import Ratio
from pool_manager.math.stableswap import DEFAULT_SOLVER_SETTINGS, SolverSettings, compute_d
from pool_manager.math.swap import scale_up
from pool_manager.models.pool import ConstantProduct, PoolType, StableSwap
from pool_manager.safe_int import S


class FeeBreakdown(Protocol):
    """Anything carrying the fee amounts of a priced swap."""

    protocol_fee_amount: int
    burn_fee_amount: int
    extra_fees_amount: int


def normalize_amounts(amounts: Sequence[int], decimals: Sequence[int]) -> list[int]:
    """Scale each amount to the largest precision among decimals."""
    if len(amounts) != len(decimals):
        raise InvalidPoolAssetsLength(expected=len(decimals), actual=len(amounts))
    precision = max(decimals)
    return [scale_up(amount, d, precision) for amount, d in zip(amounts, decimals)]


def compute_lp_mint_amount_for_stableswap_deposit(
    amp: int,
    old_balances: Sequence[int],
    new_balances: Sequence[int],
    total_share: int,
    settings: SolverSettings = DEFAULT_SOLVER_SETTINGS,
) -> int | None:
    """LP shares minted for a deposit into a stableswap pool.

    minted = floor(total_share * (D_after - D_before) / D_before)

    Balances must be normalised to a common precision.

    Returns:
        The amount to mint, or None if the deposit does not grow the invariant
    """
    d_before = compute_d(amp, old_balances, settings)
    d_after = compute_d(amp, new_balances, settings)

    if d_after <= d_before:
        return None

    return S(total_share).multiply_ratio(S(d_after) - d_before, d_before).to_uint128()


def compute_constant_product_share(
    deposits: Sequence[int],
    pool_balances: Sequence[int],
    total_share: int,
) -> int:
    """Shares for a deposit into a non-empty constant product pool.

    The smallest of deposit_i * total_share / pool_i, so an unbalanced
    deposit is priced at its scarcest asset.
    """
    if len(deposits) != len(pool_balances):
        raise InvalidPoolAssetsLength(expected=len(pool_balances), actual=len(deposits))

    shares = [
        S(deposit).multiply_ratio(total_share, pool_balance)
        for deposit, pool_balance in zip(deposits, pool_balances)
    ]
    return min(shares).to_uint128()


def compute_initial_share(
    pool_type: PoolType,
    deposits: Sequence[int],
    settings: SolverSettings = DEFAULT_SOLVER_SETTINGS,
) -> int:
    """Shares for the first deposit into a pool, net of the locked minimum.

    Constant product uses sqrt(x * y), stableswap uses D of the deposit
    (normalised). MINIMUM_LIQUIDITY_AMOUNT is withheld from the depositor.

    Raises:
        InvalidInitialLiquidityAmount: If the share does not exceed the minimum
        StableInvariantError: If a stableswap deposit leaves an asset out
    """
    if isinstance(pool_type, ConstantProduct):
        if len(deposits) != 2:
            raise InvalidPoolAssetsLength(expected=2, actual=len(deposits))
        share = (S(deposits[0]) * deposits[1]).isqrt()
    elif isinstance(pool_type, StableSwap):
        if any(deposit == 0 for deposit in deposits):
            raise StableInvariantError()
        share = S(compute_d(pool_type.amp, deposits, settings))
    else:
        raise TypeError(f"Unsupported pool type: {type(pool_type).__name__}")

    if share <= MINIMUM_LIQUIDITY_AMOUNT:
        raise InvalidInitialLiquidityAmount(MINIMUM_LIQUIDITY_AMOUNT)

    return (share - MINIMUM_LIQUIDITY_AMOUNT).to_uint128()


def assert_slippage_tolerance(
    slippage_tolerance: Ratio | None,
    deposits: Sequence[int],
    pool_balances: Sequence[int],
    pool_type: PoolType,
    share: int,
    total_share: int,
) -> None:
    """Reject deposits whose ratio strays from the pool ratio beyond the tolerance.

    Constant product compares both cross ratios of the two assets. Stableswap
    compares the pool's value per share with the deposit's value per minted
    share. Ratios are compared by cross multiplication, so no rounding is
    involved.

    Does nothing when no tolerance is given or the pool has no shares yet.

    Raises:
        InvalidSlippageTolerance: If the tolerance is above 1
        InvalidPoolAssetsLength: For constant product deposits of other than 2 assets
        MaxSlippageAssertion: If the tolerance is exceeded
    """
    if slippage_tolerance is None or total_share == 0:
        return

    if slippage_tolerance > Ratio.one():
        raise InvalidSlippageTolerance()

    one = Ratio.ONE
    keep = slippage_tolerance.complement().value

    if isinstance(pool_type, ConstantProduct):
        if len(deposits) != 2 or len(pool_balances) != 2:
            raise InvalidPoolAssetsLength(expected=2, actual=len(deposits))

        d0, d1 = deposits
        p0, p1 = pool_balances
        # d0/d1 * keep > p0/p1  or  d1/d0 * keep > p1/p0
        if d0 * keep * p1 > p0 * d1 * one or d1 * keep * p0 > p1 * d0 * one:
            raise MaxSlippageAssertion()
    elif isinstance(pool_type, StableSwap):
        pools_total = sum(pool_balances)
        deposits_total = sum(deposits)
        # pools_total/total_share * keep > deposits_total/share
        if pools_total * keep * share > deposits_total * total_share * one:
            raise MaxSlippageAssertion()
    else:
        raise TypeError(f"Unsupported pool type: {type(pool_type).__name__}")


def assert_max_spread(
    belief_price: Ratio | None,
    max_spread: Ratio | None,
    offer_amount: int,
    return_amount: int,
    spread_amount: int,
) -> None:
    """Reject swaps whose spread exceeds max_spread.

    max_spread defaults to DEFAULT_MAX_SPREAD and is capped at
    MAX_ALLOWED_SPREAD. With a belief price (offer units per ask unit) the
    return is compared against offer_amount / belief_price, otherwise the
    computed spread is compared against return + spread.

    Raises:
        InvalidBeliefPrice: If belief_price is zero
        MaxSpreadAssertion: If the spread is too large
    """
    if max_spread is None:
        max_spread = Ratio.from_str(DEFAULT_MAX_SPREAD)
    allowed = min(max_spread, Ratio.from_str(MAX_ALLOWED_SPREAD)).value
    one = Ratio.ONE

    if belief_price is not None:
        if belief_price.is_zero():
            raise InvalidBeliefPrice()
        expected_return = belief_price.div_floor(offer_amount)
        belief_spread = S(expected_return).saturating_sub(return_amount).value
        if return_amount < expected_return and belief_spread * one > allowed * expected_return:
            raise MaxSpreadAssertion()
    elif spread_amount * one > allowed * (return_amount + spread_amount):
        raise MaxSpreadAssertion()


def aggregate_outgoing_fees(simulation: FeeBreakdown) -> int:
    """Fees that leave the pool: protocol, burn and extra fees.

    The swap fee stays in the pool and is not counted.
    """
    return (
        simulation.protocol_fee_amount
        + simulation.burn_fee_amount
        + simulation.extra_fees_amount
    )
