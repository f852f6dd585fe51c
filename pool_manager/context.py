"""Execution context threaded through every operation.

No operation reads global state: the pool registry, the external oracles
and the provision buffers all come from the ManagerContext handed in by the
caller. Tests build one over in-memory fakes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from pool_manager.config import DEFAULT_MANAGER_CONFIG, ManagerConfig
from pool_manager.models.coin import Coin
from pool_manager.pools.registry import PoolRegistry
from pool_manager.provisions import ProvisionBufferStore


class TokenSupply(Protocol):
    """Fungible-token authority for LP denoms."""

    def total_share(self, denom: str) -> int:
        """Current supply of denom."""
        ...


class BalanceOracle(Protocol):
    """Bank balances."""

    def balance_of(self, address: str, denom: str) -> int:
        ...


@dataclass(frozen=True)
class Position:
    """A locked LP position held by the position-lock service."""

    identifier: str
    receiver: str
    lp_asset: Coin
    unlocking_duration: int


class PositionLocker(Protocol):
    """Read side of the position-lock service."""

    def query_position(self, identifier: str) -> Position | None:
        """The position with the given identifier, if any."""
        ...


@dataclass(frozen=True)
class MessageInfo:
    """Caller of an operation and the funds attached to the call.

    Attributes:
        sender: Address invoking the operation
        funds: Coins transferred to the pool manager with the call
        tx_id: Identifier of the transaction, keys pending provisions
    """

    sender: str
    funds: list[Coin] = field(default_factory=list)
    tx_id: str = ""


@dataclass
class ManagerContext:
    """Handles to everything an operation reads or writes.

    Attributes:
        contract_address: Address of the pool manager holding pool funds
        registry: Pool registry
        supply: LP token supply oracle
        balances: Bank balance oracle
        positions: Position-lock service
        provisions: Pending single-sided provisions
        config: Manager configuration
    """

    contract_address: str
    registry: PoolRegistry
    supply: TokenSupply
    balances: BalanceOracle
    positions: PositionLocker
    provisions: ProvisionBufferStore
    config: ManagerConfig = DEFAULT_MANAGER_CONFIG
