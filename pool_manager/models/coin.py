"""Coin model and helpers for lists of coins."""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel

from pool_manager.models.types import Denom, Uint128
from pool_manager.safe_int import S


class Coin(BaseModel):
    """An amount of a single denom."""

    denom: Denom
    amount: Uint128

    def __str__(self) -> str:
        return f"{self.amount}{self.denom}"


def coin(amount: int, denom: str) -> Coin:
    """Shorthand constructor."""
    return Coin(denom=denom, amount=amount)


def aggregate_coins(coins: Iterable[Coin]) -> list[Coin]:
    """Merge coins of the same denom, summing their amounts.

    Returns:
        Coins sorted by denom, one entry per denom. Zero amounts are kept,
        callers decide whether they matter.

    Raises:
        Overflow: If a summed amount leaves the Uint128 range
    """
    totals: dict[str, S] = {}
    for c in coins:
        totals[c.denom] = totals.get(c.denom, S(0)).checked_add_uint128(c.amount)
    return [Coin(denom=denom, amount=total.value) for denom, total in sorted(totals.items())]


def add_coins(base: Iterable[Coin], extra: Iterable[Coin]) -> list[Coin]:
    """Add the amounts of extra to base, preserving the order of base.

    Denoms only present in extra are appended in the order they appear.
    """
    result = [c.model_copy() for c in base]
    index = {c.denom: i for i, c in enumerate(result)}
    for c in extra:
        if c.denom in index:
            i = index[c.denom]
            result[i] = Coin(
                denom=c.denom,
                amount=S(result[i].amount).checked_add_uint128(c.amount).value,
            )
        else:
            index[c.denom] = len(result)
            result.append(c.model_copy())
    return result
