"""Pool configuration and state models.

A Pool is owned by the pool registry. Its pool type is a closed tagged
variant: every computation that depends on the curve dispatches over
ConstantProduct and StableSwap explicitly and rejects anything else.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, Field, field_validator, model_validator

from pool_manager.constants import MAX_AMP, MAX_ASSETS_PER_POOL
from pool_manager.errors import AssetMismatch, InvalidPoolFees
from pool_manager.math.fixed_point import Ratio
from pool_manager.models.coin import Coin
from pool_manager.models.types import Denom, PoolIdentifier


class ConstantProduct(BaseModel):
    """x * y = k curve."""

    kind: Literal["constant_product"] = "constant_product"

    model_config = {"frozen": True}


class StableSwap(BaseModel):
    """Curve-style stableswap invariant with amplification factor."""

    kind: Literal["stable_swap"] = "stable_swap"
    amp: int = Field(ge=1, le=MAX_AMP)

    model_config = {"frozen": True}


PoolType = Annotated[ConstantProduct | StableSwap, Field(discriminator="kind")]


class Fee(BaseModel):
    """A fee expressed as a share of an amount, in [0, 1]."""

    share: Ratio = Field(default_factory=Ratio.zero)

    model_config = {"frozen": True}

    @field_validator("share")
    @classmethod
    def _share_at_most_one(cls, share: Ratio) -> Ratio:
        if share > Ratio.one():
            raise InvalidPoolFees(f"Fee share must be at most 1, got {share}")
        return share

    def compute(self, amount: int) -> int:
        """Fee owed on amount, rounded down."""
        return self.share.mul_floor(amount)


class PoolFees(BaseModel):
    """Fees charged on every swap through a pool.

    Attributes:
        swap_fee: Stays in the pool, accruing to liquidity providers
        protocol_fee: Sent to the fee collector
        burn_fee: Burned
        extra_fees: Additional fees, each sent to the fee collector
    """

    swap_fee: Fee = Field(default_factory=Fee)
    protocol_fee: Fee = Field(default_factory=Fee)
    burn_fee: Fee = Field(default_factory=Fee)
    extra_fees: list[Fee] = Field(default_factory=list)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _total_below_one(self) -> PoolFees:
        total = self.total_share()
        if total >= Ratio.one():
            raise InvalidPoolFees(f"Sum of all fees must be below 1, got {total}")
        return self

    def total_share(self) -> Ratio:
        """Sum of every fee share."""
        total = self.swap_fee.share.add(self.protocol_fee.share).add(self.burn_fee.share)
        for extra_fee in self.extra_fees:
            total = total.add(extra_fee.share)
        return total


class Pool(BaseModel):
    """A liquidity pool as stored in the registry.

    Attributes:
        pool_identifier: Unique key of the pool
        assets: Pool balances, in a stable order, one entry per denom
        pool_type: Curve model
        lp_denom: Denom of the pool's LP share token
        pool_fees: Swap fees
        asset_decimals: Decimal precision of each asset, aligned with assets
    """

    pool_identifier: PoolIdentifier
    assets: list[Coin]
    pool_type: PoolType
    lp_denom: Denom
    pool_fees: PoolFees = Field(default_factory=PoolFees)
    asset_decimals: list[Annotated[int, Field(ge=0, le=38)]]

    @model_validator(mode="after")
    def _check_assets(self) -> Pool:
        n_assets = len(self.assets)
        if n_assets < 2 or n_assets > MAX_ASSETS_PER_POOL:
            raise ValueError(
                f"A pool holds between 2 and {MAX_ASSETS_PER_POOL} assets, got {n_assets}"
            )
        if len(set(self.asset_denoms)) != n_assets:
            raise ValueError(f"Pool asset denoms must be unique: {self.asset_denoms}")
        if len(self.asset_decimals) != n_assets:
            raise ValueError(
                f"Expected {n_assets} asset decimals, got {len(self.asset_decimals)}"
            )
        return self

    @property
    def asset_denoms(self) -> list[str]:
        return [asset.denom for asset in self.assets]

    def asset_index(self, denom: str) -> int:
        """Position of denom in the pool.

        Raises:
            AssetMismatch: If the denom is not part of the pool
        """
        for i, asset in enumerate(self.assets):
            if asset.denom == denom:
                return i
        raise AssetMismatch(f"{denom} is not in pool {self.pool_identifier}")

    def has_denom(self, denom: Denom) -> bool:
        return any(asset.denom == denom for asset in self.assets)
