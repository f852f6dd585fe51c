"""Query request and response models.

These are the shapes returned by the simulation and pool queries, shared by
the Python API and the HTTP layer.
"""

from pydantic import BaseModel, Field

from pool_manager.models.coin import Coin
from pool_manager.models.pool import Pool
from pool_manager.models.types import Denom, PoolIdentifier, Uint128


class SwapOperation(BaseModel):
    """One hop of a swap route."""

    token_in_denom: Denom
    token_out_denom: Denom
    pool_identifier: PoolIdentifier


class SimulationResponse(BaseModel):
    """Outcome of simulating a single swap with a given offer."""

    return_amount: Uint128
    spread_amount: Uint128
    swap_fee_amount: Uint128
    protocol_fee_amount: Uint128
    burn_fee_amount: Uint128
    extra_fees_amount: Uint128


class ReverseSimulationResponse(BaseModel):
    """Offer required for a single swap to return a given ask amount."""

    offer_amount: Uint128
    spread_amount: Uint128
    swap_fee_amount: Uint128
    protocol_fee_amount: Uint128
    burn_fee_amount: Uint128
    extra_fees_amount: Uint128


class SimulateSwapOperationsResponse(BaseModel):
    """Outcome of a forward multi-hop simulation.

    Spread and fee lists hold one coin per denom, sorted by denom.
    """

    return_amount: Uint128
    spreads: list[Coin] = Field(default_factory=list)
    swap_fees: list[Coin] = Field(default_factory=list)
    protocol_fees: list[Coin] = Field(default_factory=list)
    burn_fees: list[Coin] = Field(default_factory=list)
    extra_fees: list[Coin] = Field(default_factory=list)


class ReverseSimulateSwapOperationsResponse(BaseModel):
    """Outcome of a reverse multi-hop simulation."""

    offer_amount: Uint128
    spreads: list[Coin] = Field(default_factory=list)
    swap_fees: list[Coin] = Field(default_factory=list)
    protocol_fees: list[Coin] = Field(default_factory=list)
    burn_fees: list[Coin] = Field(default_factory=list)
    extra_fees: list[Coin] = Field(default_factory=list)


class PoolInfoResponse(BaseModel):
    """A pool together with its current LP supply."""

    pool_info: Pool
    total_share: Coin


class PoolsResponse(BaseModel):
    pools: list[PoolInfoResponse]


class AssetDecimalsResponse(BaseModel):
    pool_identifier: PoolIdentifier
    denom: Denom
    decimals: int
