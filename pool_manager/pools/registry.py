"""Pool registry: keyed lookup and update of pools on top of a PoolStore."""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from pool_manager.constants import DEFAULT_LIMIT, MAX_LIMIT
from pool_manager.errors import SameAsset, UnExistingPool
from pool_manager.models.pool import Pool
from pool_manager.pools.store import PoolStore

logger = structlog.get_logger()


@dataclass(frozen=True)
class AssetPair:
    """Offer and ask side of a pool, as seen by a single swap.

    Attributes:
        offer_index: Position of the offer asset in the pool
        ask_index: Position of the ask asset in the pool
        offer_pool: Offer asset balance
        ask_pool: Ask asset balance
        offer_decimals: Precision of the offer asset
        ask_decimals: Precision of the ask asset
    """

    offer_index: int
    ask_index: int
    offer_pool: int
    ask_pool: int
    offer_decimals: int
    ask_decimals: int


def get_asset_indexes_in_pool(pool: Pool, offer_denom: str, ask_denom: str) -> AssetPair:
    """Locate the offer and ask assets in the pool.

    Raises:
        SameAsset: If offer and ask denoms are equal
        AssetMismatch: If either denom is not part of the pool
    """
    if offer_denom == ask_denom:
        raise SameAsset()

    offer_index = pool.asset_index(offer_denom)
    ask_index = pool.asset_index(ask_denom)

    return AssetPair(
        offer_index=offer_index,
        ask_index=ask_index,
        offer_pool=pool.assets[offer_index].amount,
        ask_pool=pool.assets[ask_index].amount,
        offer_decimals=pool.asset_decimals[offer_index],
        ask_decimals=pool.asset_decimals[ask_index],
    )


class PoolRegistry:
    """Registry of pools keyed by identifier.

    Every read returns a snapshot. Operations compute on the snapshot and
    persist it with a single save() once all checks have passed.
    """

    def __init__(self, store: PoolStore) -> None:
        self._store = store

    def get(self, pool_identifier: str) -> Pool:
        """Fetch a pool by identifier.

        Raises:
            UnExistingPool: If no pool is stored under the identifier
        """
        pool = self._store.get(pool_identifier)
        if pool is None:
            raise UnExistingPool(pool_identifier)
        return pool

    def save(self, pool: Pool) -> None:
        self._store.save(pool.pool_identifier, pool)
        logger.debug(
            "pool_saved",
            pool=pool.pool_identifier,
            assets=[str(asset) for asset in pool.assets],
        )

    def list(self, start_after: str | None = None, limit: int | None = None) -> list[Pool]:
        """Pools in ascending identifier order.

        limit defaults to DEFAULT_LIMIT and is capped at MAX_LIMIT.
        """
        effective_limit = min(limit if limit is not None else DEFAULT_LIMIT, MAX_LIMIT)
        return self._store.list(start_after, effective_limit)
