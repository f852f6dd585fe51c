"""In-memory bank, LP supply and position-lock service.

InMemoryLedger implements the TokenSupply, BalanceOracle and
PositionLocker ports over plain dicts. It backs the default context of the
query API and the test harness.
"""

from __future__ import annotations

from collections import defaultdict

from pool_manager.config import DEFAULT_MANAGER_CONFIG, ManagerConfig
from pool_manager.context import ManagerContext, Position
from pool_manager.models.coin import Coin
from pool_manager.models.pool import Pool
from pool_manager.pools.loader import PoolSnapshot
from pool_manager.pools.registry import PoolRegistry
from pool_manager.pools.store import InMemoryPoolStore
from pool_manager.provisions import InMemoryProvisionBufferStore
from pool_manager.safe_int import S

DEFAULT_CONTRACT_ADDRESS = "pool_manager"


class InMemoryLedger:
    """Balances per address and denom, supply per denom and locked positions."""

    def __init__(self) -> None:
        self._balances: dict[str, dict[str, int]] = defaultdict(dict)
        self._supply: dict[str, int] = {}
        self._positions: dict[str, Position] = {}

    # --- Ports ---

    def balance_of(self, address: str, denom: str) -> int:
        return self._balances[address].get(denom, 0)

    def total_share(self, denom: str) -> int:
        return self._supply.get(denom, 0)

    def query_position(self, identifier: str) -> Position | None:
        return self._positions.get(identifier)

    # --- Mutations ---

    def mint(self, address: str, denom: str, amount: int) -> None:
        self._supply[denom] = S(self.total_share(denom)).checked_add_uint128(amount).value
        self._credit(address, denom, amount)

    def burn(self, address: str, denom: str, amount: int) -> None:
        self._debit(address, denom, amount)
        self._supply[denom] = (S(self.total_share(denom)) - amount).value

    def transfer(self, from_address: str, to_address: str, coins: list[Coin]) -> None:
        """Move coins between addresses.

        Raises:
            Underflow: If from_address holds too little of a denom
        """
        for c in coins:
            self._debit(from_address, c.denom, c.amount)
            self._credit(to_address, c.denom, c.amount)

    def lock_position(
        self,
        identifier: str,
        receiver: str,
        lp_asset: Coin,
        unlocking_duration: int,
    ) -> Position:
        """Create a position, or add lp_asset to an existing one."""
        existing = self._positions.get(identifier)
        if existing is not None:
            lp_asset = Coin(
                denom=lp_asset.denom,
                amount=S(existing.lp_asset.amount).checked_add_uint128(lp_asset.amount).value,
            )
        position = Position(
            identifier=identifier,
            receiver=receiver,
            lp_asset=lp_asset,
            unlocking_duration=unlocking_duration,
        )
        self._positions[identifier] = position
        return position

    def seed_pool(self, holder: str, pool: Pool, total_share: int) -> None:
        """Credit a pool's balances and LP supply to holder.

        Individual LP holders are not known from a pool snapshot, so the
        whole supply is minted to holder.
        """
        for asset in pool.assets:
            if asset.amount > 0:
                self.mint(holder, asset.denom, asset.amount)
        if total_share > 0:
            self.mint(holder, pool.lp_denom, total_share)

    def snapshot(self) -> tuple[dict[str, dict[str, int]], dict[str, int], dict[str, Position]]:
        return (
            {address: dict(balances) for address, balances in self._balances.items()},
            dict(self._supply),
            dict(self._positions),
        )

    def restore(
        self, snapshot: tuple[dict[str, dict[str, int]], dict[str, int], dict[str, Position]]
    ) -> None:
        balances, supply, positions = snapshot
        self._balances = defaultdict(dict, {a: dict(b) for a, b in balances.items()})
        self._supply = dict(supply)
        self._positions = dict(positions)

    def _credit(self, address: str, denom: str, amount: int) -> None:
        current = self._balances[address].get(denom, 0)
        self._balances[address][denom] = S(current).checked_add_uint128(amount).value

    def _debit(self, address: str, denom: str, amount: int) -> None:
        current = self._balances[address].get(denom, 0)
        self._balances[address][denom] = (S(current) - amount).value


def build_in_memory_context(
    config: ManagerConfig = DEFAULT_MANAGER_CONFIG,
    pools: list[Pool] | None = None,
    ledger: InMemoryLedger | None = None,
    contract_address: str = DEFAULT_CONTRACT_ADDRESS,
) -> ManagerContext:
    """Context over an in-memory pool store, ledger and provision buffers."""
    if ledger is None:
        ledger = InMemoryLedger()
    return ManagerContext(
        contract_address=contract_address,
        registry=PoolRegistry(InMemoryPoolStore(pools)),
        supply=ledger,
        balances=ledger,
        positions=ledger,
        provisions=InMemoryProvisionBufferStore(),
        config=config,
    )


def build_context_from_snapshots(
    snapshots: list[PoolSnapshot],
    config: ManagerConfig = DEFAULT_MANAGER_CONFIG,
    contract_address: str = DEFAULT_CONTRACT_ADDRESS,
) -> ManagerContext:
    """In-memory context serving the given pools.

    The pool manager holds every pool balance, so balance reads agree with
    the registry.
    """
    ledger = InMemoryLedger()
    for snapshot in snapshots:
        ledger.seed_pool(contract_address, snapshot.pool, snapshot.total_share)
    return build_in_memory_context(
        config=config,
        pools=[snapshot.pool for snapshot in snapshots],
        ledger=ledger,
        contract_address=contract_address,
    )
