"""Stableswap invariant math.

Newton-Raphson solvers for the Curve-style invariant

    Ann * S + D = Ann * D + D^(n+1) / (n^n * prod(x))

with Ann = A * n^n and S = sum(x). All arithmetic is integer, rounded
down at every division, so results are reproducible bit for bit.

IMPORTANT: Both solvers stop after SolverSettings.max_iterations and raise
ConvergeError instead of returning a partially converged value.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

import structlog

from pool_manager.errors import ConvergeError
from pool_manager.safe_int import S, SafeInt, Underflow

logger = structlog.get_logger()


@dataclass(frozen=True)
class SolverSettings:
    """Iteration bound and convergence tolerance for Newton's method.

    Attributes:
        max_iterations: Iterations before giving up with ConvergeError
        tolerance: Successive iterates within this many units are converged
    """

    max_iterations: int = 64
    tolerance: int = 1


DEFAULT_SOLVER_SETTINGS = SolverSettings()


class StableSwapDirection(Enum):
    """Which side of the pair the y solver moves first."""

    # Offer side grows by the amount, solve for the ask side
    SIMULATE = "simulate"
    # Ask side shrinks by the amount, solve for the offer side
    REVERSE_SIMULATE = "reverse_simulate"


def _ann(amp: int, n_coins: int) -> SafeInt:
    """A * n^n."""
    return S(amp) * S(n_coins) ** n_coins


def _newton_d(
    amp: int,
    balances: Sequence[int],
    n_coins: int,
    settings: SolverSettings,
) -> int:
    sum_x = S(sum(balances))
    if sum_x == 0:
        return 0

    ann = _ann(amp, n_coins)
    d = sum_x

    for _ in range(settings.max_iterations):
        # d_p = D^(k+1) / (n^k * prod(x)), one division per balance
        d_p = d
        for balance in balances:
            d_p = (d_p * d) // (S(balance) * n_coins)

        d_prev = d

        numerator = (ann * sum_x + d_p * n_coins) * d
        # (Ann - 1) * D goes negative when amp is 0, keep it signed
        denominator = (ann.value - 1) * d.value + (n_coins + 1) * d_p.value
        if denominator <= 0:
            logger.warning(
                "stableswap_d_non_positive_denominator",
                amp=amp,
                n_coins=n_coins,
                d=d.value,
            )
            raise ConvergeError(f"Invariant iteration diverged for amp={amp}")

        d = numerator // denominator

        if d.abs_diff(d_prev) <= settings.tolerance:
            return d.value

    logger.warning(
        "stableswap_d_did_not_converge",
        amp=amp,
        n_coins=n_coins,
        iterations=settings.max_iterations,
    )
    raise ConvergeError(
        f"Stableswap invariant did not converge after {settings.max_iterations} iterations"
    )


def compute_d(
    amp: int,
    balances: Sequence[int],
    settings: SolverSettings = DEFAULT_SOLVER_SETTINGS,
) -> int:
    """Calculate the stableswap invariant D using Newton-Raphson iteration.

    Algorithm:
        1. Initial guess: D = sum(balances)
        2. D = (Ann*S + n*D_P) * D / ((Ann - 1)*D + (n + 1)*D_P)
        3. Stop when |D_new - D_old| <= tolerance

    Args:
        amp: Amplification factor A
        balances: Pool balances, already normalised to a common precision
        settings: Iteration bound and tolerance

    Returns:
        The invariant D (0 for an empty pool)

    Raises:
        ConvergeError: If the iteration does not settle within the bound or
            diverges (possible with amp 0 on skewed balances)
        DivisionByZero: If a balance is zero while the sum is not
    """
    return _newton_d(amp, balances, len(balances), settings)


def calculate_stableswap_d(
    n_coins: int,
    offer_pool: int,
    ask_pool: int,
    amp: int,
    settings: SolverSettings = DEFAULT_SOLVER_SETTINGS,
) -> int:
    """Invariant over the two balances of a swap, in a pool of n_coins assets."""
    return _newton_d(amp, (offer_pool, ask_pool), n_coins, settings)


def calculate_stableswap_y(
    n_coins: int,
    offer_pool: int,
    ask_pool: int,
    amount: int,
    amp: int,
    direction: StableSwapDirection,
    settings: SolverSettings = DEFAULT_SOLVER_SETTINGS,
) -> int:
    """Solve the counterpart balance that keeps the invariant unchanged.

    With y the unknown balance and x the other, updated one:

        c = D^(k+1) / (n^k * x * Ann),  b = x + D / Ann
        y = (y^2 + c) / (2y + b - D)

    iterated from y = D.

    Args:
        n_coins: Number of assets in the pool
        offer_pool: Offer-side balance before the swap
        ask_pool: Ask-side balance before the swap
        amount: Offer amount (SIMULATE) or ask amount (REVERSE_SIMULATE)
        amp: Amplification factor A
        direction: Which side moves by amount
        settings: Iteration bound and tolerance

    Returns:
        New ask balance (SIMULATE) or new offer balance (REVERSE_SIMULATE)

    Raises:
        ConvergeError: If the iteration does not settle within the bound
        Underflow: If a reverse simulation asks for the whole ask balance or more
    """
    d = S(calculate_stableswap_d(n_coins, offer_pool, ask_pool, amp, settings))

    if direction is StableSwapDirection.SIMULATE:
        pool_sum = S(offer_pool) + amount
    else:
        if amount >= ask_pool:
            raise Underflow(f"Cannot take {amount} out of an ask balance of {ask_pool}")
        pool_sum = S(ask_pool) - amount

    ann = _ann(amp, n_coins)

    c = (d * d) // (pool_sum * n_coins)
    c = (c * d) // (ann * n_coins)
    b = pool_sum + d // ann

    y = d
    for _ in range(settings.max_iterations):
        previous_y = y

        denominator = 2 * y.value + b.value - d.value
        if denominator <= 0:
            raise ConvergeError("Stableswap y iteration reached a non-positive denominator")

        y = (y * y + c) // denominator

        if y.abs_diff(previous_y) <= settings.tolerance:
            return y.value

    logger.warning(
        "stableswap_y_did_not_converge",
        amp=amp,
        n_coins=n_coins,
        direction=direction.value,
        iterations=settings.max_iterations,
    )
    raise ConvergeError(
        f"Stableswap balance did not converge after {settings.max_iterations} iterations"
    )
