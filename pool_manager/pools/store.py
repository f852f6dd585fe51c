"""Pool storage port and its in-memory implementation."""

from __future__ import annotations

from typing import Protocol

from pool_manager.models.pool import Pool


class PoolStore(Protocol):
    """Keyed storage of pool records."""

    def get(self, pool_identifier: str) -> Pool | None:
        """Return the pool stored under pool_identifier, or None."""
        ...

    def save(self, pool_identifier: str, pool: Pool) -> None:
        """Insert or replace the pool stored under pool_identifier."""
        ...

    def list(self, start_after: str | None, limit: int) -> list[Pool]:
        """Pools in ascending identifier order, strictly after start_after."""
        ...


class InMemoryPoolStore:
    """Dict-backed PoolStore.

    Pools are copied on the way in and out, so callers mutate snapshots and
    only save() changes what is stored.
    """

    def __init__(self, pools: list[Pool] | None = None) -> None:
        self._pools: dict[str, Pool] = {}
        for pool in pools or []:
            self.save(pool.pool_identifier, pool)

    def __len__(self) -> int:
        return len(self._pools)

    def __contains__(self, pool_identifier: object) -> bool:
        return pool_identifier in self._pools

    def get(self, pool_identifier: str) -> Pool | None:
        pool = self._pools.get(pool_identifier)
        if pool is None:
            return None
        return pool.model_copy(deep=True)

    def save(self, pool_identifier: str, pool: Pool) -> None:
        self._pools[pool_identifier] = pool.model_copy(deep=True)

    def list(self, start_after: str | None, limit: int) -> list[Pool]:
        identifiers = sorted(self._pools)
        if start_after is not None:
            identifiers = [i for i in identifiers if i > start_after]
        return [self._pools[i].model_copy(deep=True) for i in identifiers[:limit]]
